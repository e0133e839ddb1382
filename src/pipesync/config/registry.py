"""Pipeline registry configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int, env_str
from .errors import ConfigurationError
from .http_resilience import NO_RETRY, RateLimit, ResilienceConfig

DEFAULT_REGISTRY_URL = "http://localhost:8111"
REGISTRY_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Where and how the pipeline registry is reached."""

    base_url: str
    resilience: ResilienceConfig


def get_registry_config(*, resilience: ResilienceConfig | None = None) -> RegistryConfig:
    base_url = env_str("REGISTRY_URL", DEFAULT_REGISTRY_URL).rstrip("/")
    return RegistryConfig(
        base_url=base_url,
        resilience=resilience
        or ResilienceConfig(
            name="registry",
            base_url=base_url,
            timeout_seconds=REGISTRY_TIMEOUT_SECONDS,
            # A failed call is only logged; the next snapshot that touches the pipeline retries it.
            retry=NO_RETRY,
            ratelimit=_registry_ratelimit(),
            default_headers={"Content-Type": "application/json"},
        ),
    )


def _registry_ratelimit() -> RateLimit | None:
    # Unset or 0 leaves registry calls unthrottled.
    max_calls = env_int("REGISTRY_MAX_CALLS_PER_SECOND", 0)
    if max_calls < 0:
        raise ConfigurationError("REGISTRY_MAX_CALLS_PER_SECOND must not be negative")
    if max_calls == 0:
        return None
    return RateLimit(max_calls=max_calls, per_seconds=1.0)
