"""Orchestrators: the search request lifecycle."""

from personfinder.orchestrators.search import SearchOrchestrator, SearchTransport

__all__ = [
    "SearchOrchestrator",
    "SearchTransport",
]
