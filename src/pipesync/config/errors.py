"""Errors raised while loading pipesync settings from the environment."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A pipesync setting is present but cannot be used, e.g. a non-numeric interval."""


class MissingConfigurationError(ConfigurationError):
    """A required pipesync setting such as ``WORKSPACE_TOKEN`` is unset or blank."""
