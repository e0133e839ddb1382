"""Application configuration helpers."""

from __future__ import annotations

from .env import env_float, env_int, env_str, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import NO_RETRY, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .registry import RegistryConfig, get_registry_config
from .sync import SyncConfig, get_sync_config
from .workspace import WorkspaceConfig, get_workspace_config

__all__ = [
    "NO_RETRY",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "RegistryConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "SyncConfig",
    "WorkspaceConfig",
    "configure_logging",
    "env_float",
    "env_int",
    "env_str",
    "get_registry_config",
    "get_sync_config",
    "get_workspace_config",
    "require_env_vars",
]
