"""Shared constants for the person search pipeline."""

DEFAULT_TIMEOUT_MS = 60_000
DEFAULT_FIXTURE_DELAY_MS = 1_000

RATE_LIMIT_MESSAGE = "We are using a free API which has hit its limit. Please try again tomorrow."
GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please check your connection."

# Lower-case substrings, matched against the lower-cased failure text.
RATE_LIMIT_MARKERS: tuple[str, ...] = ("limit", "429", "quota")
NETWORK_FAILURE_MARKERS: tuple[str, ...] = ("fetch failed", "failed to fetch", "networkerror")
