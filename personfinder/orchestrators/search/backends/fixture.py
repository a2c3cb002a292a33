"""Fixture transport: canned records for working without a live backend."""

import asyncio
from typing import Any

from personfinder.contracts.person_search_v1 import SearchQuery
from personfinder.core.logger import logger
from personfinder.orchestrators.search.constants import (
    DEFAULT_FIXTURE_DELAY_MS,
    DEFAULT_TIMEOUT_MS,
)
from personfinder.orchestrators.search.errors import SearchTimeout
from personfinder.orchestrators.search.interface import SearchTransport


def fixture_records(query: SearchQuery) -> list[dict[str, Any]]:
    """Two LinkedIn, one Facebook and two Twitter profiles, in that order."""
    name = query.text or "John Doe"
    return [
        {
            "name": name,
            "title": "Senior Software Engineer at Google",
            "link": "https://linkedin.com/in/johndoe",
            "source": "LinkedIn",
            "description": (
                "Passionate engineer with 10+ years of experience in distributed "
                "systems and AI. Alumnus of Stanford University."
            ),
            "location": query.location or "San Francisco, CA",
        },
        {
            "name": name,
            "title": "Product Manager",
            "link": "https://linkedin.com/in/johndoe2",
            "source": "LinkedIn",
            "description": "Building the future of fintech. Previously at Stripe and PayPal.",
            "location": "New York, NY",
        },
        {
            "name": name,
            "title": "Profile",
            "link": "https://facebook.com/johndoe",
            "source": "Facebook",
            "description": "Lives in San Francisco. Studied at Stanford.",
            "location": "San Francisco, CA",
        },
        {
            "name": f"{query.text or 'John'} D.",
            "title": "@johndoe",
            "link": "https://twitter.com/johndoe",
            "source": "Twitter",
            "description": "Tech enthusiast. Python lover. Views are my own. #coding #life",
            "location": "Global",
        },
        {
            "name": "JD Dev",
            "title": "@jd_dev",
            "link": "https://twitter.com/jd_dev",
            "source": "Twitter",
            "description": "Building cool stuff 24/7.",
            "location": "Remote",
        },
    ]


class FixtureTransport(SearchTransport):
    def __init__(self, delay_ms: int = DEFAULT_FIXTURE_DELAY_MS):
        self._delay_ms = max(0, delay_ms)

    async def send(self, query: SearchQuery, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        logger.fixture_used(self._delay_ms)
        try:
            async with asyncio.timeout(timeout_ms / 1000):
                await asyncio.sleep(self._delay_ms / 1000)
        except TimeoutError as e:
            raise SearchTimeout(timeout_ms) from e
        return fixture_records(query)

    def get_source_name(self) -> str:
        return "fixture"
