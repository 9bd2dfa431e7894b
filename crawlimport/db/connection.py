"""Database connection management."""

from contextlib import contextmanager
from typing import Dict, Generator, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

_connection_pools: Dict[str, ConnectionPool] = {}


def get_connection_pool(database_url: str, connect_timeout: int = 10) -> ConnectionPool:
    """Get or create the connection pool for a connection string."""
    pool = _connection_pools.get(database_url)
    if pool is None:
        pool = ConnectionPool(
            database_url,
            min_size=1,
            max_size=2,
            timeout=float(connect_timeout),
            kwargs={"row_factory": dict_row, "connect_timeout": connect_timeout},
            open=True,
        )
        _connection_pools[database_url] = pool
    return pool


@contextmanager
def get_connection(
    database_url: str, connect_timeout: int = 10
) -> Generator[psycopg.Connection, None, None]:
    """Get a database connection from the pool."""
    pool = get_connection_pool(database_url, connect_timeout)
    with pool.connection() as conn:
        yield conn


def close_connection_pools(database_url: Optional[str] = None) -> None:
    """Close one pool, or all of them."""
    urls = [database_url] if database_url else list(_connection_pools)
    for url in urls:
        pool = _connection_pools.pop(url, None)
        if pool is not None:
            pool.close()
