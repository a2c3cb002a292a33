"""Person search: transport, failure classification, normalization and partitioning."""

from personfinder.orchestrators.search.interface import SearchTransport
from personfinder.orchestrators.search.orchestrator import SearchOrchestrator

__all__ = [
    "SearchOrchestrator",
    "SearchTransport",
]
