"""Unit tests for row validation."""

from crawlimport.ingestion import BUILTIN_DIALECTS, validate_rows


def _rows(n: int):
    return [
        {
            "url": f"https://example.com/{i}",
            "title": f"T{i}",
            "content": f"C{i}",
            "author": "",
            "article_date": "2024-01-01",
            "crawl_timestamp": "",
        }
        for i in range(1, n + 1)
    ]


def test_all_valid_rows_produce_records() -> None:
    """Every valid row becomes a record."""
    outcome = validate_rows(_rows(3), BUILTIN_DIALECTS["canonical"])

    assert outcome.ok
    assert len(outcome.records) == 3
    assert outcome.rows_seen == 3


def test_first_failure_stops_validation() -> None:
    """By default validation stops at the first bad row."""
    rows = _rows(5)
    rows[1]["url"] = "not a url"
    rows[3]["title"] = ""

    outcome = validate_rows(rows, BUILTIN_DIALECTS["canonical"])

    assert not outcome.ok
    assert len(outcome.failures) == 1
    failure = outcome.failures[0]
    assert failure.row_index == 2
    assert failure.validated_count == 1
    assert failure.row["url"] == "not a url"
    assert any(message.startswith("url:") for message in failure.errors)
    assert outcome.rows_seen == 2


def test_collect_all_reports_every_failure() -> None:
    """collect_all keeps going and reports each bad row."""
    rows = _rows(5)
    rows[1]["url"] = "not a url"
    rows[3]["article_date"] = "01/01/2024"

    outcome = validate_rows(rows, BUILTIN_DIALECTS["canonical"], collect_all=True)

    assert [f.row_index for f in outcome.failures] == [2, 4]
    assert [f.validated_count for f in outcome.failures] == [1, 2]
    assert len(outcome.records) == 3


def test_failure_keeps_source_column_names() -> None:
    """The reported row is the raw row, before dialect mapping."""
    row = {
        "crawl_timestamp": "",
        "platform": "bisnis.com",
        "url": "https://bisnis.com/a",
        "title": "T",
        "article": "",
        "author": "",
        "date": "2024-01-01",
    }

    outcome = validate_rows([row], BUILTIN_DIALECTS["bisnis"])

    assert outcome.failures[0].row["platform"] == "bisnis.com"
    assert outcome.failures[0].errors[0].startswith("content:")


def test_empty_input_is_ok() -> None:
    """No rows is a valid, empty outcome."""
    outcome = validate_rows([], BUILTIN_DIALECTS["canonical"])

    assert outcome.ok and outcome.records == [] and outcome.rows_seen == 0
