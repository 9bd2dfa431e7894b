"""URL deduplication for validated records."""

from typing import Dict, Iterable

from .models import ArticleRecord, DedupResult


def deduplicate_by_url(records: Iterable[ArticleRecord]) -> DedupResult:
    """
    Keep one record per URL, the last one seen.

    The later record replaces the earlier one on every field. Output keeps
    the position where each URL first appeared.
    """
    by_url: Dict[str, ArticleRecord] = {}
    duplicates = 0

    for record in records:
        if record.url in by_url:
            duplicates += 1
        by_url[record.url] = record

    return DedupResult(records=list(by_url.values()), duplicates=duplicates)
