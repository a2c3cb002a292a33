"""Person search contract v1.

Defines the canonical types for:
  - The outbound search request (SearchQuery)
  - Records returned by the upstream aggregation service (SearchRecord, SourceNetwork)
  - Per-network partitioning of a result set (ResultBuckets)
  - What the presentation layer renders (ViewState, ErrorKind)

The upstream webhook receives the query under the key `query`, which is the
name the search form has always posted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Source networks
# ---------------------------------------------------------------------------


class SourceNetwork(StrEnum):
    LINKEDIN = "LinkedIn"
    FACEBOOK = "Facebook"
    TWITTER = "Twitter"
    UNKNOWN = "Unknown"

    @classmethod
    def from_value(cls, value: Any) -> "SourceNetwork":
        """Exact, case-sensitive match; anything else is UNKNOWN."""
        if isinstance(value, SourceNetwork):
            return value
        if isinstance(value, str):
            for network in RENDERED_NETWORKS:
                if value == network.value:
                    return network
        return cls.UNKNOWN


RENDERED_NETWORKS: tuple[SourceNetwork, ...] = (
    SourceNetwork.LINKEDIN,
    SourceNetwork.FACEBOOK,
    SourceNetwork.TWITTER,
)


# ---------------------------------------------------------------------------
# Error taxonomy
# ---------------------------------------------------------------------------


class ErrorKind(StrEnum):
    TIMEOUT = "timeout"
    NETWORK_UNAVAILABLE = "network_unavailable"
    NOT_FOUND = "not_found"
    SERVICE_UNAVAILABLE = "service_unavailable"
    MALFORMED = "malformed"
    RATE_LIMITED = "rate_limited"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class SearchQuery(BaseModel):
    """One submission from the search form. Immutable once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(default="", alias="query", description="Name to look up")
    location: str | None = Field(default=None, description="City / region hint")
    university: str | None = Field(default=None, description="School hint")
    company: str | None = Field(default=None, description="Employer hint")

    @field_validator("text", mode="before")
    @classmethod
    def _strip_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("location", "university", "company", mode="before")
    @classmethod
    def _blank_hint_is_absent(cls, v: Any) -> str | None:
        if v is None:
            return None
        s = str(v).strip()
        return s or None

    @property
    def is_empty(self) -> bool:
        return not self.text

    def to_payload(self) -> dict[str, str]:
        """JSON body for the webhook; absent hints are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class SearchRecord(BaseModel):
    """A single public profile as reported by the upstream service.

    Every field is optional: the upstream object is taken as-is, and a field
    with the wrong type reads as absent rather than rejecting the record.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, description="Display name")
    link: str | None = Field(default=None, description="Absolute profile URL (not validated)")
    title: str | None = Field(default=None, description="Headline / handle")
    description: str | None = Field(default=None)
    location: str | None = Field(default=None)
    source: SourceNetwork = Field(default=SourceNetwork.UNKNOWN)

    @field_validator("name", "link", "title", "description", "location", mode="before")
    @classmethod
    def _non_string_is_absent(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @field_validator("source", mode="before")
    @classmethod
    def _map_source(cls, v: Any) -> SourceNetwork:
        return SourceNetwork.from_value(v)


def _empty_buckets() -> dict[SourceNetwork, list[SearchRecord]]:
    return {network: [] for network in SourceNetwork}


@dataclass
class ResultBuckets:
    """Records grouped by source network. All four keys are always present."""

    by_source: dict[SourceNetwork, list[SearchRecord]] = field(
        default_factory=_empty_buckets
    )

    def __getitem__(self, network: SourceNetwork) -> list[SearchRecord]:
        return self.by_source[network]

    def visible(self) -> dict[SourceNetwork, list[SearchRecord]]:
        # UNKNOWN records are kept for diagnostics but never rendered.
        return {network: self.by_source[network] for network in RENDERED_NETWORKS}

    def counts(self) -> dict[str, int]:
        return {network.value: len(records) for network, records in self.by_source.items()}

    @property
    def total(self) -> int:
        return sum(len(records) for records in self.by_source.values())


# ---------------------------------------------------------------------------
# View state
# ---------------------------------------------------------------------------


class ViewStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class ViewState:
    status: ViewStatus
    buckets: ResultBuckets | None = None
    error_kind: ErrorKind | None = None
    message: str | None = None

    @classmethod
    def idle(cls) -> "ViewState":
        return cls(status=ViewStatus.IDLE)

    @classmethod
    def loading(cls) -> "ViewState":
        return cls(status=ViewStatus.LOADING)

    @classmethod
    def success(cls, buckets: ResultBuckets) -> "ViewState":
        return cls(status=ViewStatus.SUCCESS, buckets=buckets)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "ViewState":
        return cls(status=ViewStatus.FAILURE, error_kind=kind, message=message)
