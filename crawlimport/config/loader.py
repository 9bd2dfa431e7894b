"""Configuration loader."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from ..ingestion.dialects import get_dialect
from .models import ConfigModel, DatabaseConfig, FileErrorPolicy, ImportConfig

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "crawlimport" / "config.yaml"


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        self.explicit = config_path is not None
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config; a missing default file means built-in defaults."""
        if self._config is None:
            if not self.explicit and not self.config_path.exists():
                self._config = ConfigModel()
            else:
                self._config = load_config(self.config_path)
        return self._config

    def get_database_url(self) -> str:
        """Resolve the connection string, failing fast when absent."""
        return resolve_database_url(self.config.database)

    def build_import_config(
        self,
        source_path: Path,
        platform_id: Optional[int] = None,
        dialect: Optional[str] = None,
        chunk_size: Optional[int] = None,
        file_extension: Optional[str] = None,
        on_file_error: Optional[FileErrorPolicy] = None,
        collect_all: bool = False,
    ) -> ImportConfig:
        """Merge command line options over file defaults into one ImportConfig."""
        defaults = self.config.defaults

        if platform_id is None:
            platform_id = defaults.platform_id
        if platform_id is None:
            raise ConfigurationError(
                "A platform id is required (--platform-id or defaults.platform_id)"
            )

        if not source_path.exists():
            raise ConfigurationError(f"Source path not found: {source_path}")

        resolved_dialect = get_dialect(dialect or defaults.dialect, self.config.dialects)

        try:
            return ImportConfig(
                database_url=self.get_database_url(),
                platform_id=platform_id,
                source_path=source_path,
                dialect=resolved_dialect,
                chunk_size=chunk_size if chunk_size is not None else defaults.chunk_size,
                file_extension=file_extension or defaults.file_extension,
                on_file_error=on_file_error or defaults.on_file_error,
                collect_all=collect_all,
                connect_timeout=self.config.database.connect_timeout,
                statement_timeout_ms=self.config.database.statement_timeout_ms,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid import options: {e}") from e


def resolve_database_url(database: DatabaseConfig) -> str:
    """Return the connection string from the environment or the config file."""
    url = os.environ.get(database.url_env) or database.url
    if not url:
        raise ConfigurationError(f"{database.url_env} is required")
    return url


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)
