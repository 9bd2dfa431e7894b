"""Unit tests for URL deduplication."""

from datetime import date

from crawlimport.ingestion import ArticleRecord, deduplicate_by_url


def _record(url: str, title: str, **extra) -> ArticleRecord:
    values = {"url": url, "title": title, "content": f"body {title}", "article_date": "2024-01-01"}
    values.update(extra)
    return ArticleRecord(**values)


def test_last_occurrence_wins_on_every_field() -> None:
    """The later duplicate replaces the earlier one entirely."""
    records = [
        _record("https://example.com/a", "first", author="Ann", article_date="2024-01-01"),
        _record("https://example.com/b", "other"),
        _record("https://example.com/a", "second", article_date="2024-01-02"),
    ]

    result = deduplicate_by_url(records)

    by_url = {r.url: r for r in result.records}
    assert len(result.records) == 2
    assert result.duplicates == 1
    assert by_url["https://example.com/a"].title == "second"
    assert by_url["https://example.com/a"].author is None
    assert by_url["https://example.com/a"].article_date == date(2024, 1, 2)


def test_output_order_is_first_appearance() -> None:
    """Output order follows where each url first appeared."""
    records = [
        _record("https://example.com/c", "c1"),
        _record("https://example.com/a", "a1"),
        _record("https://example.com/c", "c2"),
        _record("https://example.com/b", "b1"),
    ]

    result = deduplicate_by_url(records)

    assert [r.url for r in result.records] == [
        "https://example.com/c",
        "https://example.com/a",
        "https://example.com/b",
    ]
    assert deduplicate_by_url(records).records == result.records


def test_distinct_urls_pass_through() -> None:
    """Without duplicates nothing changes."""
    records = [_record(f"https://example.com/{i}", str(i)) for i in range(10)]

    result = deduplicate_by_url(records)

    assert result.records == records
    assert result.duplicates == 0


def test_empty_input() -> None:
    """Deduplicating nothing gives nothing."""
    result = deduplicate_by_url([])

    assert result.records == [] and result.duplicates == 0
