"""Data models for stored rows."""

from .article import Article
from .platform import Platform

__all__ = ["Article", "Platform"]
