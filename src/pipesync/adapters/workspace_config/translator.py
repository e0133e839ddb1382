"""Translate workspace configuration payloads into domain snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from pipesync.domain.model import Destination, Snapshot, Source

from .schema import DestinationPayload, SourcePayload, WorkspaceConfigResponse

if TYPE_CHECKING:
    from collections.abc import Mapping


class WorkspaceConfigError(ValueError):
    """Raised when a workspace configuration payload cannot be interpreted."""


def parse_snapshot(payload: Mapping[str, Any] | WorkspaceConfigResponse) -> Snapshot:
    """Validate ``payload`` and return the corresponding snapshot."""

    if isinstance(payload, WorkspaceConfigResponse):
        response = payload
    else:
        try:
            response = WorkspaceConfigResponse.model_validate(payload)
        except ValidationError as exc:
            raise WorkspaceConfigError(f"Invalid workspace config: {exc}") from exc
    return Snapshot(sources=tuple(_source(source) for source in response.sources))


def _source(payload: SourcePayload) -> Source:
    return Source(
        id=payload.id,
        name=payload.name,
        definition_name=payload.definition.name,
        category=payload.definition.category or "",
        deleted=payload.deleted,
        enabled=payload.enabled,
        config=payload.config,
        destinations=tuple(_destination(destination) for destination in payload.destinations),
    )


def _destination(payload: DestinationPayload) -> Destination:
    return Destination(
        id=payload.id,
        name=payload.name,
        definition_name=payload.definition.name,
        deleted=payload.deleted,
        enabled=payload.enabled,
        is_connection_enabled=payload.is_connection_enabled,
        is_processor_enabled=payload.is_processor_enabled,
        config=payload.config,
    )
