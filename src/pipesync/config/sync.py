"""Reconciliation defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int, env_str
from .errors import ConfigurationError

DEFAULT_ELIGIBLE_CATEGORY = "cloud"
DEFAULT_ACTION_CONCURRENCY = 1


@dataclass(frozen=True, slots=True)
class SyncConfig:
    eligible_category: str = DEFAULT_ELIGIBLE_CATEGORY
    action_concurrency: int = DEFAULT_ACTION_CONCURRENCY


def get_sync_config() -> SyncConfig:
    concurrency = env_int("PIPESYNC_ACTION_CONCURRENCY", DEFAULT_ACTION_CONCURRENCY)
    if concurrency < 1:
        raise ConfigurationError("PIPESYNC_ACTION_CONCURRENCY must be at least 1")
    return SyncConfig(
        eligible_category=env_str("PIPESYNC_ELIGIBLE_CATEGORY", DEFAULT_ELIGIBLE_CATEGORY),
        action_concurrency=concurrency,
    )
