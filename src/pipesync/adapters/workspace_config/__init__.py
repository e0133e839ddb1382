"""Public interface for the workspace configuration adapter."""

from __future__ import annotations

from .poller import WorkspaceConfigPoller
from .schema import DestinationPayload, SourcePayload, WorkspaceConfigResponse
from .translator import WorkspaceConfigError, parse_snapshot

__all__ = [
    "DestinationPayload",
    "SourcePayload",
    "WorkspaceConfigError",
    "WorkspaceConfigPoller",
    "WorkspaceConfigResponse",
    "parse_snapshot",
]
