from personfinder.orchestrators.search.backends.fixture import FixtureTransport
from personfinder.orchestrators.search.backends.webhook import WebhookTransport

__all__ = [
    "FixtureTransport",
    "WebhookTransport",
]
