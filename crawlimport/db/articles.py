"""Article storage: chunked upsert keyed by URL."""

from typing import List, Optional, Sequence

import psycopg
from psycopg import Connection, sql

from ..errors import StorageError
from ..ingestion.models import ArticleRecord
from ..models import Article

ARTICLE_COLUMNS = (
    "crawl_timestamp",
    "article_date",
    "url",
    "title",
    "content",
    "platform_id",
    "author",
)

# Overwritten on conflict; id is never touched.
UPDATE_COLUMNS = (
    "crawl_timestamp",
    "article_date",
    "title",
    "content",
    "author",
    "platform_id",
)


def build_upsert_query(row_count: int) -> sql.Composed:
    """Build a multi-row INSERT ... ON CONFLICT (url) DO UPDATE statement."""
    row_placeholder = sql.SQL("({})").format(
        sql.SQL(", ").join(sql.Placeholder() for _ in ARTICLE_COLUMNS)
    )
    return sql.SQL(
        "INSERT INTO articles ({columns}) VALUES {values} "
        "ON CONFLICT (url) DO UPDATE SET {updates}"
    ).format(
        columns=sql.SQL(", ").join(sql.Identifier(c) for c in ARTICLE_COLUMNS),
        values=sql.SQL(", ").join(row_placeholder for _ in range(row_count)),
        updates=sql.SQL(", ").join(
            sql.SQL("{col} = EXCLUDED.{col}").format(col=sql.Identifier(c))
            for c in UPDATE_COLUMNS
        ),
    )


def record_params(record: ArticleRecord, platform_id: int) -> tuple:
    """Bind values for one record, in ARTICLE_COLUMNS order."""
    return (
        record.crawl_timestamp,
        record.article_date,
        record.url,
        record.title,
        record.content,
        platform_id,
        record.author,
    )


def chunked(records: Sequence[ArticleRecord], size: int) -> List[Sequence[ArticleRecord]]:
    """Split records into consecutive chunks of at most ``size``."""
    if size < 1:
        raise ValueError("chunk size must be at least 1")
    return [records[i : i + size] for i in range(0, len(records), size)]


class ArticleStorage:
    """Write validated articles to the articles table."""

    def __init__(
        self,
        chunk_size: int = 1000,
        statement_timeout_ms: Optional[int] = None,
    ) -> None:
        """Initialize article storage."""
        if chunk_size < 1:
            raise ValueError("chunk size must be at least 1")
        self.chunk_size = chunk_size
        self.statement_timeout_ms = statement_timeout_ms

    def upsert_articles(
        self,
        conn: Connection,
        records: Sequence[ArticleRecord],
        platform_id: int,
    ) -> int:
        """
        Upsert records in one transaction, one statement per chunk.

        Records must already be unique by URL; a repeated URL inside one
        statement is rejected by Postgres.

        Returns:
            Number of records written
        """
        if not records:
            return 0

        try:
            with conn.transaction():
                with conn.cursor() as cur:
                    if self.statement_timeout_ms:
                        cur.execute(
                            sql.SQL("SET LOCAL statement_timeout = {}").format(
                                sql.Literal(self.statement_timeout_ms)
                            )
                        )
                    for chunk in chunked(records, self.chunk_size):
                        params = [
                            value
                            for record in chunk
                            for value in record_params(record, platform_id)
                        ]
                        cur.execute(build_upsert_query(len(chunk)), params)
        except psycopg.Error as e:
            raise StorageError(str(e), record_count=len(records)) from e

        return len(records)

    def count_articles(self, conn: Connection, platform_id: Optional[int] = None) -> int:
        """Count stored articles, optionally for one platform."""
        with conn.cursor() as cur:
            if platform_id is None:
                cur.execute("SELECT COUNT(*) AS n FROM articles")
            else:
                cur.execute(
                    "SELECT COUNT(*) AS n FROM articles WHERE platform_id = %s",
                    (platform_id,),
                )
            return cur.fetchone()["n"]

    def get_article_by_url(self, conn: Connection, url: str) -> Optional[Article]:
        """Get a stored article by its URL."""
        with conn.cursor() as cur:
            cur.execute("SELECT * FROM articles WHERE url = %s", (url,))
            row = cur.fetchone()
        return Article(**row) if row else None
