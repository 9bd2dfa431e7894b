"""Exception hierarchy for crawl imports."""

from pathlib import Path
from typing import Any, Dict, List, Optional


class CrawlImportError(Exception):
    """Base exception for all import failures."""


class ConfigurationError(CrawlImportError):
    """Raised when required configuration is missing or invalid."""


class CsvParseError(CrawlImportError):
    """Raised when a source file cannot be decoded as CSV."""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        line: Optional[int] = None,
    ) -> None:
        self.path = path
        self.line = line
        location = ""
        if path is not None:
            location = f"{path}"
            if line is not None:
                location += f":{line}"
            location += ": "
        super().__init__(f"{location}{message}")


class RecordValidationError(CrawlImportError):
    """Raised when a row fails the article record schema."""

    def __init__(
        self,
        path: Optional[Path],
        row_index: int,
        row: Dict[str, Any],
        errors: List[str],
        validated_count: int,
    ) -> None:
        self.path = path
        self.row_index = row_index
        self.row = row
        self.errors = errors
        self.validated_count = validated_count
        source = f"{path}: " if path is not None else ""
        super().__init__(
            f"{source}invalid record at row {row_index} "
            f"({validated_count} rows validated before it): "
            f"{'; '.join(errors)} | row={row!r}"
        )


class StorageError(CrawlImportError):
    """Raised when the upsert transaction fails."""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        record_count: int = 0,
    ) -> None:
        self.reason = message
        self.path = path
        self.record_count = record_count
        source = f"{path}: " if path is not None else ""
        super().__init__(
            f"{source}storage failed after preparing {record_count} records: {message}"
        )
