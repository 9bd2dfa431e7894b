"""Unit tests for CSV dialect mappings."""

import pytest
from pydantic import ValidationError

from crawlimport.errors import ConfigurationError
from crawlimport.ingestion import BUILTIN_DIALECTS, Dialect, available_dialects, get_dialect


def test_canonical_dialect_passes_fields_through() -> None:
    """Canonical dialect should map every field to itself."""
    row = {
        "url": "https://example.com/a",
        "title": "T",
        "content": "C",
        "author": "A",
        "article_date": "2024-01-01",
        "crawl_timestamp": "",
    }

    assert BUILTIN_DIALECTS["canonical"].adapt(row) == row


def test_bisnis_dialect_renames_and_drops_platform() -> None:
    """The platform column is ignored; article and date are renamed."""
    row = {
        "crawl_timestamp": "2024-08-17T20:35:19Z",
        "platform": "bisnis.com",
        "url": "https://bisnis.com/a",
        "title": "T",
        "article": "Body",
        "author": "",
        "date": "2024-08-16",
    }

    adapted = BUILTIN_DIALECTS["bisnis"].adapt(row)

    assert adapted["content"] == "Body"
    assert adapted["article_date"] == "2024-08-16"
    assert "platform" not in adapted
    assert set(adapted) == {
        "url", "title", "content", "author", "article_date", "crawl_timestamp"
    }


def test_positional_dialect_overrides_header() -> None:
    """Positional dialect should carry its own header and skip the file's."""
    dialect = BUILTIN_DIALECTS["bisnis-positional"]

    assert dialect.skip_header is True
    assert dialect.header[2] == "url"


def test_dialect_must_map_required_fields() -> None:
    """A dialect without a url mapping is invalid."""
    with pytest.raises(ValidationError):
        Dialect(name="broken", columns={"title": "t", "content": "c", "article_date": "d"})


def test_dialect_rejects_unknown_canonical_field() -> None:
    """Only canonical fields can be mapped."""
    with pytest.raises(ValidationError):
        Dialect(
            name="broken",
            columns={
                "url": "u", "title": "t", "content": "c", "article_date": "d", "site": "s"
            },
        )


def test_dialect_header_must_contain_mapped_columns() -> None:
    """An explicit header has to provide every mapped column."""
    with pytest.raises(ValidationError):
        Dialect(
            name="broken",
            columns={"url": "u", "title": "t", "content": "c", "article_date": "d"},
            header=["u", "t", "c"],
        )


def test_skip_header_requires_explicit_header() -> None:
    """Skipping the file header without a replacement is invalid."""
    with pytest.raises(ValidationError):
        Dialect(
            name="broken",
            columns={"url": "u", "title": "t", "content": "c", "article_date": "d"},
            skip_header=True,
        )


def test_custom_dialect_overrides_builtin_name() -> None:
    """Custom dialects replace built-ins with the same name."""
    custom = Dialect(
        name="bisnis",
        columns={"url": "link", "title": "t", "content": "c", "article_date": "d"},
    )

    assert available_dialects([custom])["bisnis"].columns["url"] == "link"
    assert get_dialect("canonical", [custom]).name == "canonical"


def test_unknown_dialect_is_configuration_error() -> None:
    """Dialects are never guessed."""
    with pytest.raises(ConfigurationError):
        get_dialect("no-such-dialect")


def test_explicit_header_columns_must_be_mapped_or_ignored() -> None:
    """Every column of an explicit header is accounted for."""
    with pytest.raises(ValidationError, match="neither mapped nor ignored"):
        Dialect(
            name="broken",
            columns={"url": "u", "title": "t", "content": "c", "article_date": "d"},
            header=["u", "t", "c", "d", "extra"],
        )
