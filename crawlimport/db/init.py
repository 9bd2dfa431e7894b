"""Database initialization and schema bootstrap."""

from psycopg.errors import DatabaseError
from rich.console import Console

from ..errors import StorageError
from .connection import get_connection

console = Console()


SCHEMA_SQL = """
-- Platforms table
CREATE TABLE IF NOT EXISTS platforms (
    id BIGINT GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
    name TEXT NOT NULL
);

-- Articles table
CREATE TABLE IF NOT EXISTS articles (
    id BIGINT GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
    crawl_timestamp TIMESTAMP,
    article_date DATE NOT NULL,
    url TEXT NOT NULL UNIQUE,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    platform_id BIGINT NOT NULL REFERENCES platforms(id),
    author TEXT
);

CREATE INDEX IF NOT EXISTS idx_articles_platform_id ON articles(platform_id);
"""


def validate_connection(database_url: str, connect_timeout: int = 10) -> bool:
    """Validate database connection."""
    try:
        with get_connection(database_url, connect_timeout) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 AS ok")
                result = cur.fetchone()
                return result is not None and result["ok"] == 1
    except DatabaseError as e:
        console.print(f"Database connection failed: {e}", style="red", markup=False)
        return False


def init_database(database_url: str, connect_timeout: int = 10) -> None:
    """Create the platforms and articles tables if they do not exist."""
    try:
        with get_connection(database_url, connect_timeout) as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
            conn.commit()
    except DatabaseError as e:
        raise StorageError(f"failed to initialize database schema: {e}") from e
