"""Webhook transport: POSTs the query to the upstream aggregation service."""

import asyncio
from typing import Any

import httpx

from personfinder.contracts.person_search_v1 import SearchQuery
from personfinder.core.config import config
from personfinder.core.logger import logger
from personfinder.orchestrators.search.constants import DEFAULT_TIMEOUT_MS
from personfinder.orchestrators.search.errors import MalformedResponse, SearchTimeout
from personfinder.orchestrators.search.interface import SearchTransport


class WebhookTransport(SearchTransport):
    def __init__(self, endpoint_url: str | None = None, client: httpx.AsyncClient | None = None):
        url = endpoint_url if endpoint_url is not None else config.endpoint_url
        self._endpoint_url = (url or "").strip()
        if not self._endpoint_url:
            raise ValueError("WebhookTransport requires an endpoint URL")
        # Deadline is enforced by send(); httpx's own timeouts are disabled.
        self._client = client or httpx.AsyncClient(timeout=None)
        self._owns_client = client is None

    async def send(self, query: SearchQuery, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        logger.search_request(self._endpoint_url, timeout_ms)
        try:
            async with asyncio.timeout(timeout_ms / 1000):
                response = await self._client.post(
                    self._endpoint_url,
                    json=query.to_payload(),
                    headers={"Content-Type": "application/json"},
                )
        except TimeoutError as e:
            raise SearchTimeout(timeout_ms) from e

        response.raise_for_status()
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"Response body is not valid JSON: {e}") from e

    def get_source_name(self) -> str:
        return "webhook"

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
