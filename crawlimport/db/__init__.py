"""Database access for crawl imports."""

from .articles import ArticleStorage
from .connection import close_connection_pools, get_connection, get_connection_pool
from .init import init_database, validate_connection
from .platforms import PlatformManager

__all__ = [
    "ArticleStorage",
    "PlatformManager",
    "close_connection_pools",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "validate_connection",
]
