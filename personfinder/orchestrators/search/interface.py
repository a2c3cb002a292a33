"""Standard interface for search transports used by the orchestrator.

A transport performs exactly one outbound call per `send` and hands back the
parsed JSON body (object or array). It never retries.
"""

from abc import ABC, abstractmethod
from typing import Any

from personfinder.contracts.person_search_v1 import SearchQuery
from personfinder.orchestrators.search.constants import DEFAULT_TIMEOUT_MS


class SearchTransport(ABC):
    """Base class for all search transports."""

    @abstractmethod
    async def send(self, query: SearchQuery, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        """Issue the search and return the raw parsed response.

        Raises SearchTimeout when `timeout_ms` elapses first; the in-flight
        operation is cancelled before the exception propagates.
        """

    @abstractmethod
    def get_source_name(self) -> str:
        """Short identifier used in logs."""

    async def close(self) -> None:
        return None
