"""Source-of-truth workspace configuration backend values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_str, require_env_vars
from .errors import ConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy

DEFAULT_CONFIG_BACKEND_URL = "https://api.rudderlabs.com"
DEFAULT_POLL_INTERVAL_SECONDS = 5.0
WORKSPACE_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    """Holds the workspace configuration backend settings."""

    backend_url: str
    workspace_token: str
    poll_interval_seconds: float
    resilience: ResilienceConfig


def get_workspace_config(*, resilience: ResilienceConfig | None = None) -> WorkspaceConfig:
    values = require_env_vars(("WORKSPACE_TOKEN",))
    backend_url = env_str("CONFIG_BACKEND_URL", DEFAULT_CONFIG_BACKEND_URL).rstrip("/")
    poll_interval = env_float("CONFIG_POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS)
    if poll_interval <= 0:
        raise ConfigurationError("CONFIG_POLL_INTERVAL_SECONDS must be positive")

    return WorkspaceConfig(
        backend_url=backend_url,
        workspace_token=values["WORKSPACE_TOKEN"],
        poll_interval_seconds=poll_interval,
        resilience=resilience
        or ResilienceConfig(
            name="workspace-config",
            base_url=backend_url,
            timeout_seconds=WORKSPACE_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=2),
        ),
    )
