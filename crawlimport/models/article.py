"""Article model for stored articles."""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from .base import DBModel


class Article(DBModel):
    """Row of the articles table."""

    url: str = Field(..., description="Article URL, unique across articles")
    title: str = Field(..., description="Article title")
    content: str = Field(..., description="Article body text")
    author: Optional[str] = Field(None, description="Article author")
    article_date: date = Field(..., description="Publication date")
    crawl_timestamp: Optional[datetime] = Field(None, description="When the page was fetched")
    platform_id: int = Field(..., description="Foreign key to platforms table")
