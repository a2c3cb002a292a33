"""Response normalizer: flattens the upstream JSON shapes into a record list.

Accepted shapes, first match wins:
  1. {"results": [...]}
  2. [...]
  3. {"data": [...]}
  4. {...}  (a single record)
Anything else (string, number, null) is rejected as malformed.
"""

from typing import Any

from personfinder.contracts.person_search_v1 import SearchRecord
from personfinder.orchestrators.search.errors import MalformedResponse, UpstreamLimitReached


def extract_records(raw: Any) -> list[Any]:
    """Return the record list contained in `raw`, verbatim."""
    if isinstance(raw, dict) and isinstance(raw.get("results"), list):
        return raw["results"]
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("data"), list):
        return raw["data"]
    if isinstance(raw, dict):
        return [raw]
    raise MalformedResponse(f"Unexpected response shape: {type(raw).__name__}")


def check_upstream_message(raw: Any) -> None:
    """Raise if a successful response carries an API-limit message."""
    if not isinstance(raw, dict):
        return
    message = raw.get("message")
    if isinstance(message, str) and "limit" in message.lower():
        raise UpstreamLimitReached(message)


def coerce_record(item: Any) -> SearchRecord:
    if not isinstance(item, dict):
        raise MalformedResponse(f"Record is not an object: {type(item).__name__}")
    return SearchRecord.model_validate(item)


def normalize(raw: Any) -> list[SearchRecord]:
    check_upstream_message(raw)
    return [coerce_record(item) for item in extract_records(raw)]
