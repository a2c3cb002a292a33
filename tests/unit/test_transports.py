from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from personfinder.contracts.person_search_v1 import SearchQuery
from personfinder.orchestrators.search.backends import FixtureTransport, WebhookTransport
from personfinder.orchestrators.search.errors import MalformedResponse, SearchTimeout

URL = "https://hooks.example.test/webhook/person-finder"


def _webhook(handler) -> WebhookTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WebhookTransport(endpoint_url=URL, client=client)


@pytest.mark.asyncio
async def test_webhook_posts_query_as_json_and_returns_parsed_body():
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"results": []})

    transport = _webhook(handler)
    raw = await transport.send(SearchQuery(text="John Doe", company="Acme"))

    assert raw == {"results": []}
    assert len(captured) == 1
    request = captured[0]
    assert request.method == "POST"
    assert str(request.url) == URL
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {"query": "John Doe", "company": "Acme"}


@pytest.mark.asyncio
async def test_webhook_non_2xx_raises_without_parsing_body():
    transport = _webhook(lambda request: httpx.Response(503, text="not json at all"))
    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        await transport.send(SearchQuery(text="John"))
    assert exc_info.value.response.status_code == 503


@pytest.mark.asyncio
async def test_webhook_invalid_json_is_malformed():
    transport = _webhook(lambda request: httpx.Response(200, text="<html>ok</html>"))
    with pytest.raises(MalformedResponse):
        await transport.send(SearchQuery(text="John"))


@pytest.mark.asyncio
async def test_webhook_transport_failure_propagates():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("fetch failed", request=request)

    transport = _webhook(handler)
    with pytest.raises(httpx.ConnectError):
        await transport.send(SearchQuery(text="John"))


@pytest.mark.asyncio
async def test_webhook_timeout_cancels_in_flight_request():
    events: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        events.append("started")
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            events.append("cancelled")
            raise
        events.append("completed")
        return httpx.Response(200, json=[])

    transport = _webhook(handler)
    with pytest.raises(SearchTimeout) as exc_info:
        await transport.send(SearchQuery(text="John"), timeout_ms=50)

    assert exc_info.value.timeout_ms == 50
    await asyncio.sleep(0.1)
    assert events == ["started", "cancelled"]


@pytest.mark.asyncio
async def test_webhook_timer_is_disarmed_after_settling():
    transport = _webhook(lambda request: httpx.Response(200, json=[]))
    assert await transport.send(SearchQuery(text="John"), timeout_ms=50) == []
    # A leaked timer would cancel this task during the sleep.
    await asyncio.sleep(0.1)


@pytest.mark.asyncio
async def test_webhook_timer_is_disarmed_after_http_error():
    transport = _webhook(lambda request: httpx.Response(503, text="busy"))
    with pytest.raises(httpx.HTTPStatusError):
        await transport.send(SearchQuery(text="John"), timeout_ms=50)
    await asyncio.sleep(0.1)


@pytest.mark.asyncio
async def test_webhook_timer_is_disarmed_after_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("fetch failed", request=request)

    transport = _webhook(handler)
    with pytest.raises(httpx.ConnectError):
        await transport.send(SearchQuery(text="John"), timeout_ms=50)
    await asyncio.sleep(0.1)


def test_webhook_requires_endpoint():
    with pytest.raises(ValueError):
        WebhookTransport(endpoint_url="  ")


@pytest.mark.asyncio
async def test_fixture_echoes_query_text_and_location():
    raw = await FixtureTransport(delay_ms=0).send(SearchQuery(text="Jane Roe", location="Karachi"))

    assert len(raw) == 5
    assert [r["source"] for r in raw] == ["LinkedIn", "LinkedIn", "Facebook", "Twitter", "Twitter"]
    assert raw[0]["name"] == "Jane Roe"
    assert raw[0]["location"] == "Karachi"
    assert raw[3]["name"] == "Jane Roe D."
    assert raw[4]["name"] == "JD Dev"


@pytest.mark.asyncio
async def test_fixture_waits_for_its_delay():
    loop = asyncio.get_running_loop()
    start = loop.time()
    await FixtureTransport(delay_ms=200).send(SearchQuery(text="John"))
    assert loop.time() - start >= 0.19


@pytest.mark.asyncio
async def test_fixture_delay_is_bounded_by_timeout():
    with pytest.raises(SearchTimeout):
        await FixtureTransport(delay_ms=1000).send(SearchQuery(text="John"), timeout_ms=20)
