"""Data models for ingestion."""

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import pendulum
from pydantic import BaseModel, Field, field_validator

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIMESTAMP_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:\d{2})?$"
)


class ArticleRecord(BaseModel):
    """Validated article row in canonical form."""

    url: str = Field(..., description="Absolute article URL (natural key)")
    title: str = Field(..., description="Article title", min_length=1)
    content: str = Field(..., description="Article body text", min_length=1)
    author: Optional[str] = Field(None, description="Article author")
    article_date: date = Field(..., description="Publication date")
    crawl_timestamp: Optional[datetime] = Field(None, description="When the page was fetched (UTC)")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute URL; the string itself is kept as-is."""
        if not v or any(ch.isspace() for ch in v):
            raise ValueError("URL must be non-empty and contain no whitespace")
        parsed = urlparse(v)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("URL must be absolute (scheme and host)")
        return v

    @field_validator("author", mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        """An empty CSV cell means no author."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("article_date", mode="before")
    @classmethod
    def parse_article_date(cls, v: Any) -> Any:
        """Accept exactly YYYY-MM-DD."""
        if not isinstance(v, str):
            return v
        if not _DATE_PATTERN.match(v):
            raise ValueError("article date must be formatted YYYY-MM-DD")
        parsed = pendulum.parse(v, exact=True)
        return date(parsed.year, parsed.month, parsed.day)

    @field_validator("crawl_timestamp", mode="before")
    @classmethod
    def parse_crawl_timestamp(cls, v: Any) -> Any:
        """Accept a full ISO 8601 date-time, normalized to naive UTC."""
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not v:
            return None
        if _DATE_PATTERN.match(v):
            raise ValueError("crawl timestamp must include a time of day")
        if not _TIMESTAMP_PATTERN.match(v):
            raise ValueError("crawl timestamp must be formatted YYYY-MM-DDTHH:MM[:SS][Z|+HH:MM]")
        parsed = pendulum.parse(v, exact=True)
        utc = parsed.in_timezone("UTC")
        return datetime(
            utc.year, utc.month, utc.day, utc.hour, utc.minute, utc.second, utc.microsecond
        )


class RowFailure(BaseModel):
    """A source row rejected by the record schema."""

    row_index: int = Field(..., description="1-based data row number")
    row: Dict[str, Any] = Field(..., description="Offending row as read from the file")
    errors: List[str] = Field(..., description="Field level messages")
    validated_count: int = Field(..., description="Rows that validated before this one")


class ValidationOutcome(BaseModel):
    """Result of validating every row of one file."""

    records: List[ArticleRecord] = Field(default_factory=list)
    failures: List[RowFailure] = Field(default_factory=list)
    rows_seen: int = Field(0, description="Rows examined")

    @property
    def ok(self) -> bool:
        """True when no row was rejected."""
        return not self.failures


class DedupResult(BaseModel):
    """Records left after collapsing duplicate URLs."""

    records: List[ArticleRecord] = Field(default_factory=list)
    duplicates: int = Field(0, description="Rows replaced by a later row with the same URL")
