"""Failure types raised by the search pipeline and their classification into ErrorKind."""

import json
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from personfinder.contracts.person_search_v1 import ErrorKind
from personfinder.orchestrators.search.constants import (
    GENERIC_ERROR_MESSAGE,
    NETWORK_FAILURE_MARKERS,
    RATE_LIMIT_MARKERS,
    RATE_LIMIT_MESSAGE,
)


class PersonSearchError(Exception):
    """Base for failures raised by this package (as opposed to httpx/pydantic)."""


class SearchTimeout(PersonSearchError):
    def __init__(self, timeout_ms: int):
        super().__init__(f"Search timed out after {timeout_ms} ms")
        self.timeout_ms = timeout_ms


class MalformedResponse(PersonSearchError):
    """Upstream body could not be decoded or matches no known response shape."""


class UpstreamLimitReached(PersonSearchError):
    """Upstream answered 2xx but its message reports an exhausted API limit."""


DETAILED_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.TIMEOUT: "The search took too long to respond. Please try again.",
    ErrorKind.NETWORK_UNAVAILABLE: "Could not reach the search service. Please check your connection.",
    ErrorKind.NOT_FOUND: "The search service endpoint was not found.",
    ErrorKind.SERVICE_UNAVAILABLE: "The search service is temporarily unavailable. Please try again later.",
    ErrorKind.MALFORMED: "The search service returned a response we could not read.",
    ErrorKind.RATE_LIMITED: RATE_LIMIT_MESSAGE,
    ErrorKind.UNKNOWN: GENERIC_ERROR_MESSAGE,
}


def failure_message(exc: BaseException) -> str:
    """Diagnostic text of a failure. HTTP errors carry status, reason and raw body."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        body = response.text.strip() if response.content else ""
        head = f"{response.status_code} {response.reason_phrase}".strip()
        return f"{head}: {body}" if body else head
    return str(exc) or type(exc).__name__


def _mentions(message: str, markers: tuple[str, ...]) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in markers)


def classify(exc: BaseException) -> ErrorKind:
    """Map a failure to exactly one ErrorKind.

    Order: timeout, network layer, HTTP status, undecodable body, rate-limit
    markers in the message, then UNKNOWN.
    """
    if isinstance(exc, (SearchTimeout, httpx.TimeoutException, TimeoutError)):
        return ErrorKind.TIMEOUT

    message = failure_message(exc)

    if isinstance(exc, httpx.TransportError):
        return ErrorKind.NETWORK_UNAVAILABLE
    if not isinstance(exc, httpx.HTTPStatusError) and _mentions(message, NETWORK_FAILURE_MARKERS):
        return ErrorKind.NETWORK_UNAVAILABLE

    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status == 404:
            return ErrorKind.NOT_FOUND
        if status >= 500:
            return ErrorKind.SERVICE_UNAVAILABLE
        if status == 429:
            return ErrorKind.RATE_LIMITED
        if 400 <= status <= 499:
            return ErrorKind.MALFORMED

    if isinstance(exc, (MalformedResponse, json.JSONDecodeError, ValidationError)):
        return ErrorKind.MALFORMED

    if _mentions(message, RATE_LIMIT_MARKERS):
        return ErrorKind.RATE_LIMITED
    return ErrorKind.UNKNOWN


@dataclass(frozen=True)
class FailureDescription:
    kind: ErrorKind
    message: str  # user-visible
    reason: str  # diagnostic


def describe_failure(exc: BaseException, detailed: bool = False) -> FailureDescription:
    """Classify a failure and pick the user-visible message.

    Any failure whose text mentions "limit" is reported as RATE_LIMITED,
    whatever the classifier decided.
    """
    reason = failure_message(exc)
    kind = classify(exc)
    if "limit" in reason.lower():
        kind = ErrorKind.RATE_LIMITED
    return FailureDescription(kind=kind, message=user_message(kind, detailed), reason=reason)


def user_message(kind: ErrorKind, detailed: bool = False) -> str:
    if kind is ErrorKind.RATE_LIMITED:
        return RATE_LIMIT_MESSAGE
    if detailed:
        return DETAILED_MESSAGES[kind]
    return GENERIC_ERROR_MESSAGE
