"""Transport selection and orchestrator wiring at startup."""

from collections.abc import Callable

from personfinder.contracts.person_search_v1 import ViewState
from personfinder.core.config import Config, config
from personfinder.core.logger import logger
from personfinder.orchestrators.search.backends import FixtureTransport, WebhookTransport
from personfinder.orchestrators.search.interface import SearchTransport
from personfinder.orchestrators.search.orchestrator import SearchOrchestrator


def create_transport(cfg: Config | None = None) -> SearchTransport:
    """Webhook when the real backend is switched on and an endpoint is set, fixture otherwise."""
    cfg = cfg or config
    for problem in cfg.validate():
        logger.warning(problem)
    if cfg.uses_real_backend:
        return WebhookTransport(endpoint_url=cfg.endpoint_url)
    return FixtureTransport(delay_ms=cfg.fixture_delay_ms)


def create_orchestrator(
    cfg: Config | None = None,
    on_change: Callable[[ViewState], None] | None = None,
) -> SearchOrchestrator:
    cfg = cfg or config
    transport = create_transport(cfg)
    logger.info(f"Search transport: {transport.get_source_name()}")
    return SearchOrchestrator(
        transport=transport,
        timeout_ms=cfg.timeout_ms,
        detailed_errors=cfg.detailed_errors,
        on_change=on_change,
    )
