"""CSV ingestion: dialects, reading, validation and deduplication."""

from .dedup import deduplicate_by_url
from .dialects import BUILTIN_DIALECTS, Dialect, available_dialects, get_dialect
from .models import ArticleRecord, DedupResult, RowFailure, ValidationOutcome
from .reader import list_source_files, read_rows
from .validation import validate_rows

__all__ = [
    "ArticleRecord",
    "BUILTIN_DIALECTS",
    "DedupResult",
    "Dialect",
    "RowFailure",
    "ValidationOutcome",
    "available_dialects",
    "deduplicate_by_url",
    "get_dialect",
    "list_source_files",
    "read_rows",
    "validate_rows",
]
