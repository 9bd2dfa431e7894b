"""Row validation against the article record schema."""

from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from .dialects import Dialect
from .models import ArticleRecord, RowFailure, ValidationOutcome


def format_errors(error: ValidationError) -> List[str]:
    """Flatten pydantic errors into 'field: message' strings."""
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "row"
        messages.append(f"{field}: {item['msg']}")
    return messages


def validate_rows(
    rows: Iterable[Dict[str, Optional[str]]],
    dialect: Optional[Dialect] = None,
    collect_all: bool = False,
) -> ValidationOutcome:
    """
    Validate source rows, adapting them through a dialect first.

    Bad data never raises here; failures are returned on the outcome.
    Unless ``collect_all`` is set, validation stops at the first failure.

    Args:
        rows: Raw rows keyed by source column
        dialect: Dialect mapping source columns to canonical fields
        collect_all: Keep validating after a failure

    Returns:
        Validated records and any row failures
    """
    outcome = ValidationOutcome()

    for index, row in enumerate(rows, start=1):
        outcome.rows_seen = index
        canonical = dialect.adapt(row) if dialect is not None else row
        try:
            outcome.records.append(ArticleRecord(**canonical))
        except ValidationError as e:
            outcome.failures.append(
                RowFailure(
                    row_index=index,
                    row=dict(row),
                    errors=format_errors(e),
                    validated_count=len(outcome.records),
                )
            )
            if not collect_all:
                break

    return outcome
