"""CSV dialects mapping source columns onto canonical article fields."""

from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, Field, model_validator

from ..errors import ConfigurationError

CANONICAL_FIELDS = (
    "url",
    "title",
    "content",
    "author",
    "article_date",
    "crawl_timestamp",
)
REQUIRED_FIELDS = ("url", "title", "content", "article_date")


class Dialect(BaseModel):
    """
    Declarative column layout of one crawler's CSV output.

    ``columns`` maps canonical field name to the column read from the file.
    Any other header column must be listed in ``ignored`` or the file is
    rejected.
    When ``header`` is set it replaces the file's own header; ``skip_header``
    drops the first line of the file in that case.
    """

    name: str = Field(..., description="Dialect identifier", min_length=1)
    description: str = Field("", description="Human readable description")
    columns: Dict[str, str] = Field(..., description="Canonical field -> source column")
    header: Optional[List[str]] = Field(None, description="Explicit header list")
    skip_header: bool = Field(False, description="Skip the file's header line")
    ignored: List[str] = Field(
        default_factory=list, description="Columns present in the file but not imported"
    )

    @model_validator(mode="after")
    def validate_layout(self) -> "Dialect":
        """Check the mapping covers the canonical schema."""
        unknown = sorted(set(self.columns) - set(CANONICAL_FIELDS))
        if unknown:
            raise ValueError(f"unknown canonical fields: {', '.join(unknown)}")

        missing = [f for f in REQUIRED_FIELDS if f not in self.columns]
        if missing:
            raise ValueError(f"required fields not mapped: {', '.join(missing)}")

        overlap = sorted(set(self.ignored) & set(self.columns.values()))
        if overlap:
            raise ValueError(f"columns both mapped and ignored: {', '.join(overlap)}")

        if self.skip_header and not self.header:
            raise ValueError("skip_header requires an explicit header list")

        if self.header is not None:
            absent = self.missing_columns(self.header, required_only=False)
            if absent:
                raise ValueError(f"header lacks mapped columns: {', '.join(absent)}")
            extra = self.unexpected_columns(self.header)
            if extra:
                raise ValueError(f"header columns neither mapped nor ignored: {', '.join(extra)}")
        return self

    def missing_columns(self, header: Iterable[str], required_only: bool = True) -> List[str]:
        """Return mapped source columns absent from a header.

        Optional fields whose column is missing are read as empty.
        """
        present = set(header)
        return [
            column
            for field, column in self.columns.items()
            if column not in present and (field in REQUIRED_FIELDS or not required_only)
        ]

    def unexpected_columns(self, header: Iterable[str]) -> List[str]:
        """Return header columns that are neither mapped nor listed as ignored."""
        known = set(self.columns.values()) | set(self.ignored)
        return [column for column in header if column not in known]

    def adapt(self, row: Mapping[str, Optional[str]]) -> Dict[str, Optional[str]]:
        """Translate a source row into canonical field names."""
        return {field: row.get(column) for field, column in self.columns.items()}


BUILTIN_DIALECTS: Dict[str, Dialect] = {
    d.name: d
    for d in (
        Dialect(
            name="canonical",
            description="Header row already uses canonical field names",
            columns={field: field for field in CANONICAL_FIELDS},
        ),
        Dialect(
            name="bisnis",
            description="bisnis.com crawler output; platform column ignored",
            columns={
                "crawl_timestamp": "crawl_timestamp",
                "url": "url",
                "title": "title",
                "content": "article",
                "author": "author",
                "article_date": "date",
            },
            ignored=["platform"],
        ),
        Dialect(
            name="bisnis-positional",
            description="bisnis.com column order with the file header replaced",
            columns={
                "crawl_timestamp": "crawl_timestamp",
                "url": "url",
                "title": "title",
                "content": "article",
                "author": "author",
                "article_date": "date",
            },
            header=["crawl_timestamp", "platform", "url", "title", "article", "author", "date"],
            skip_header=True,
            ignored=["platform"],
        ),
    )
}


def available_dialects(custom: Iterable[Dialect] = ()) -> Dict[str, Dialect]:
    """Built-in dialects merged with custom ones; custom names take precedence."""
    dialects = dict(BUILTIN_DIALECTS)
    for dialect in custom:
        dialects[dialect.name] = dialect
    return dialects


def get_dialect(name: str, custom: Iterable[Dialect] = ()) -> Dialect:
    """Look up a dialect by name."""
    dialects = available_dialects(custom)
    try:
        return dialects[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown dialect '{name}'. Available: {', '.join(sorted(dialects))}"
        ) from None
