"""Result classifier: partitions records by source network."""

from collections.abc import Iterable

from personfinder.contracts.person_search_v1 import ResultBuckets, SearchRecord


def partition(records: Iterable[SearchRecord]) -> ResultBuckets:
    """Single pass, order-preserving. Every record lands in exactly one bucket."""
    buckets = ResultBuckets()
    for record in records:
        buckets[record.source].append(record)
    return buckets
