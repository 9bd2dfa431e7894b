"""Shared fixtures for crawlimport tests."""

import csv
from contextlib import nullcontext
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

from crawlimport.config import ImportConfig
from crawlimport.db.articles import chunked
from crawlimport.errors import StorageError
from crawlimport.ingestion import BUILTIN_DIALECTS, ArticleRecord
from crawlimport.models import Platform

CANONICAL_HEADER = ["url", "title", "content", "author", "article_date", "crawl_timestamp"]


def fixture_path(relative_path: str) -> Path:
    """Resolve a path under tests/fixtures."""
    return Path(__file__).resolve().parent / "fixtures" / relative_path


def write_csv(path: Path, header: Optional[List[str]], rows: Sequence[Sequence[str]]) -> Path:
    """Write a CSV file with an optional header row."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        if header is not None:
            writer.writerow(header)
        writer.writerows(rows)
    return path


def article_row(n: int, **overrides: str) -> List[str]:
    """A valid canonical row whose url is derived from ``n``."""
    values = {
        "url": f"https://example.com/articles/{n}",
        "title": f"Title {n}",
        "content": f"Body of article {n}",
        "author": f"Author {n}",
        "article_date": "2024-08-17",
        "crawl_timestamp": "2024-08-17T20:35:19Z",
    }
    values.update(overrides)
    return [values[name] for name in CANONICAL_HEADER]


class InMemoryArticleStore:
    """Storage double with upsert-by-url and all-or-nothing commits."""

    def __init__(self, chunk_size: int = 1000, fail_on_url: Optional[str] = None) -> None:
        self.chunk_size = chunk_size
        self.fail_on_url = fail_on_url
        self.rows: Dict[str, Dict] = {}
        self.statements = 0
        self._next_id = 1

    def upsert_articles(self, conn, records: Sequence[ArticleRecord], platform_id: int) -> int:
        if not records:
            return 0

        staged = {url: dict(row) for url, row in self.rows.items()}
        next_id = self._next_id
        for chunk in chunked(records, self.chunk_size):
            self.statements += 1
            for record in chunk:
                if record.url == self.fail_on_url:
                    raise StorageError("simulated failure", record_count=len(records))
                values = {
                    "title": record.title,
                    "content": record.content,
                    "author": record.author,
                    "article_date": record.article_date,
                    "crawl_timestamp": record.crawl_timestamp,
                    "platform_id": platform_id,
                }
                if record.url in staged:
                    staged[record.url].update(values)
                else:
                    staged[record.url] = {"id": next_id, "url": record.url, **values}
                    next_id += 1

        self.rows = staged
        self._next_id = next_id
        return len(records)


class FakePlatforms:
    """Platform lookup double."""

    def __init__(self, known=(1, 2)) -> None:
        self.known = set(known)

    def get_platform(self, conn, platform_id: int) -> Optional[Platform]:
        if platform_id in self.known:
            return Platform(id=platform_id, name=f"platform-{platform_id}")
        return None


@pytest.fixture
def make_import_config():
    """Build an ImportConfig with test defaults."""

    def _make(source_path: Path, **overrides) -> ImportConfig:
        values = {
            "database_url": "postgresql://test@localhost/test",
            "platform_id": 1,
            "source_path": source_path,
            "dialect": BUILTIN_DIALECTS["canonical"],
        }
        values.update(overrides)
        return ImportConfig(**values)

    return _make


@pytest.fixture
def fake_connect():
    """Connection factory yielding a placeholder connection."""
    return lambda: nullcontext(object())
