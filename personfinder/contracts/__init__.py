"""Person search contract v1: request, record, bucket and view-state types."""

from personfinder.contracts.person_search_v1 import (
    ErrorKind,
    ResultBuckets,
    SearchQuery,
    SearchRecord,
    SourceNetwork,
    ViewState,
    ViewStatus,
)

__all__ = [
    "ErrorKind",
    "ResultBuckets",
    "SearchQuery",
    "SearchRecord",
    "SourceNetwork",
    "ViewState",
    "ViewStatus",
]
