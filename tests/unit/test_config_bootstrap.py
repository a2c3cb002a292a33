from pathlib import Path

import pytest

from personfinder.core.bootstrap import create_orchestrator, create_transport
from personfinder.core.config import Config
from personfinder.orchestrators.search.backends import FixtureTransport, WebhookTransport


def _config(**overrides) -> Config:
    values = dict(
        project_root=Path("."),
        logs_dir=Path("logs"),
        endpoint_url="",
        use_real_backend=True,
        timeout_ms=60_000,
        fixture_delay_ms=1_000,
        detailed_errors=False,
    )
    values.update(overrides)
    return Config(**values)


def test_env_overrides_are_read(monkeypatch):
    monkeypatch.setenv("PERSONFINDER_ENDPOINT_URL", " https://hooks.example.test/person ")
    monkeypatch.setenv("PERSONFINDER_USE_REAL_BACKEND", "false")
    monkeypatch.setenv("PERSONFINDER_TIMEOUT_MS", "1500")
    monkeypatch.setenv("PERSONFINDER_DETAILED_ERRORS", "yes")

    cfg = Config.load()

    assert cfg.endpoint_url == "https://hooks.example.test/person"
    assert cfg.use_real_backend is False
    assert cfg.uses_real_backend is False
    assert cfg.timeout_ms == 1500
    assert cfg.detailed_errors is True


def test_real_backend_needs_an_endpoint():
    cfg = _config()
    assert cfg.uses_real_backend is False
    assert any("ENDPOINT_URL is empty" in problem for problem in cfg.validate())


def test_validate_flags_bad_values():
    problems = _config(endpoint_url="hooks.example.test", timeout_ms=0, fixture_delay_ms=-1).validate()
    assert len(problems) == 3


def test_create_transport_falls_back_to_fixture():
    assert isinstance(create_transport(_config()), FixtureTransport)
    assert isinstance(create_transport(_config(endpoint_url="https://x.test", use_real_backend=False)), FixtureTransport)


@pytest.mark.asyncio
async def test_create_transport_uses_webhook_when_configured():
    transport = create_transport(_config(endpoint_url="https://hooks.example.test/person"))
    try:
        assert isinstance(transport, WebhookTransport)
    finally:
        await transport.close()


def test_create_orchestrator_uses_configured_timeout():
    orchestrator = create_orchestrator(_config(timeout_ms=1234))
    assert orchestrator._timeout_ms == 1234
