from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from personfinder.core.bootstrap import create_orchestrator
from personfinder.core.config import config
from personfinder.orchestrators.search.orchestrator import SearchOrchestrator


@pytest_asyncio.fixture
async def orchestrator() -> AsyncIterator[SearchOrchestrator]:
    """Orchestrator wired to the configured webhook, for e2e/integration suites only."""
    if not config.uses_real_backend:
        pytest.skip("PERSONFINDER_ENDPOINT_URL is not configured")
    instance = create_orchestrator(config)
    try:
        yield instance
    finally:
        await instance.close()
