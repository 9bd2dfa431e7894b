"""Configuration models."""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..ingestion.dialects import Dialect

DEFAULT_CHUNK_SIZE = 1000

# Postgres caps bind parameters at 65535 per statement; seven per article.
MAX_CHUNK_SIZE = 9000


def normalize_extension(value: str) -> str:
    """Return a file suffix as a lowercase dotted string, e.g. ``.csv``."""
    value = value.strip().lower()
    if not value or value == ".":
        raise ValueError("file_extension must not be empty")
    if not value.startswith("."):
        value = f".{value}"
    return value


class FileErrorPolicy(str, Enum):
    """What a directory import does when one file fails."""

    HALT = "halt"
    SKIP = "skip"


class DatabaseConfig(BaseModel):
    """Postgres configuration."""

    url_env: str = Field(
        "POSTGRES_CONNECTION_STRING",
        description="Environment variable holding the connection string",
    )
    url: Optional[str] = Field(None, description="Connection string (prefer url_env)")
    connect_timeout: int = Field(10, description="Connection timeout in seconds", ge=1)
    statement_timeout_ms: Optional[int] = Field(
        None, description="Per-statement timeout applied to import transactions", ge=1
    )


class ImportDefaults(BaseModel):
    """Default import parameters."""

    platform_id: Optional[int] = Field(None, description="Platform id for imported articles", ge=1)
    dialect: str = Field("canonical", description="CSV dialect name")
    chunk_size: int = Field(
        DEFAULT_CHUNK_SIZE, description="Rows per upsert statement", ge=1, le=MAX_CHUNK_SIZE
    )
    file_extension: str = Field(".csv", description="File suffix selected in directory mode")
    on_file_error: FileErrorPolicy = Field(
        FileErrorPolicy.HALT, description="Directory failure policy (halt, skip)"
    )

    @field_validator("file_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Normalize the extension to a lowercase dotted suffix."""
        return normalize_extension(v)


class ConfigModel(BaseModel):
    """Main configuration file model."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    defaults: ImportDefaults = Field(default_factory=ImportDefaults)
    dialects: List[Dialect] = Field(default_factory=list, description="Custom CSV dialects")


class ImportConfig(BaseModel):
    """Resolved settings for one import invocation."""

    database_url: str = Field(..., description="Postgres connection string", min_length=1)
    platform_id: int = Field(..., description="Platform id for imported articles", ge=1)
    source_path: Path = Field(..., description="CSV file or directory of CSV files")
    dialect: Dialect = Field(..., description="Resolved CSV dialect")
    chunk_size: int = Field(DEFAULT_CHUNK_SIZE, ge=1, le=MAX_CHUNK_SIZE)
    file_extension: str = Field(".csv")
    on_file_error: FileErrorPolicy = Field(FileErrorPolicy.HALT)
    collect_all: bool = Field(False, description="Report every invalid row, not just the first")
    connect_timeout: int = Field(10, ge=1)
    statement_timeout_ms: Optional[int] = Field(None, ge=1)

    @field_validator("file_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Normalize the extension to a lowercase dotted suffix."""
        return normalize_extension(v)
