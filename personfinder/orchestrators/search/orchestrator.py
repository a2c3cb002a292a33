"""Search orchestrator: query -> transport -> normalize -> partition -> ViewState."""

import asyncio
from collections.abc import Callable

from personfinder.contracts.person_search_v1 import ErrorKind, SearchQuery, ViewState
from personfinder.core.logger import logger
from personfinder.orchestrators.search.classifier import partition
from personfinder.orchestrators.search.constants import DEFAULT_TIMEOUT_MS
from personfinder.orchestrators.search.errors import describe_failure
from personfinder.orchestrators.search.interface import SearchTransport
from personfinder.orchestrators.search.normalizer import normalize


class SearchOrchestrator:
    """Owns the single live ViewState and runs one search per submit().

    Each submit gets a new generation number. Starting a submit cancels the
    call still in flight for the previous generation, and any outcome that
    settles under a stale generation is dropped instead of overwriting the
    newer state.
    """

    def __init__(
        self,
        transport: SearchTransport,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        detailed_errors: bool = False,
        on_change: Callable[[ViewState], None] | None = None,
    ):
        self._transport = transport
        self._timeout_ms = timeout_ms
        self._detailed_errors = detailed_errors
        self._on_change = on_change
        self._state = ViewState.idle()
        self._generation = 0
        self._inflight: asyncio.Future | None = None

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def _transition(self, state: ViewState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

    def _cancel_inflight(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None

    def _is_stale(self, generation: int) -> bool:
        if generation == self._generation:
            return False
        logger.search_superseded(generation, self._generation)
        return True

    async def submit(self, query: SearchQuery) -> ViewState:
        if query.is_empty:
            return self._state

        self._cancel_inflight()
        self._generation += 1
        generation = self._generation
        logger.search_submitted(generation, query.to_payload())
        self._transition(ViewState.loading())

        call = asyncio.ensure_future(self._transport.send(query, self._timeout_ms))
        self._inflight = call
        try:
            raw = await call
            buckets = partition(normalize(raw))
        except asyncio.CancelledError:
            if self._is_stale(generation):
                return self._state
            raise
        except Exception as e:
            if self._is_stale(generation):
                return self._state
            failure = describe_failure(e, detailed=self._detailed_errors)
            if failure.kind is ErrorKind.UNKNOWN:
                logger.unexpected_failure(generation, e)
            logger.search_failed(generation, failure.kind, failure.reason)
            self._transition(ViewState.failure(failure.kind, failure.message))
            return self._state
        finally:
            if self._inflight is call:
                self._inflight = None

        if self._is_stale(generation):
            return self._state
        logger.search_settled(generation, buckets.counts())
        self._transition(ViewState.success(buckets))
        return self._state

    async def close(self) -> None:
        self._cancel_inflight()
        await self._transport.close()
