"""Configuration management for crawl imports."""

from .loader import Config, load_config, resolve_database_url, save_config
from .models import (
    ConfigModel,
    DatabaseConfig,
    FileErrorPolicy,
    ImportConfig,
    ImportDefaults,
)

__all__ = [
    "Config",
    "ConfigModel",
    "DatabaseConfig",
    "FileErrorPolicy",
    "ImportConfig",
    "ImportDefaults",
    "load_config",
    "resolve_database_url",
    "save_config",
]
