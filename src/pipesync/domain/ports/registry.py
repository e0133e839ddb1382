"""Port for the external pipeline registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pipesync.domain.reconciliation.actions import PipelineConfig


@runtime_checkable
class PipelineRegistry(Protocol):
    """Write-only view of the registry.

    Both calls are idempotent and report success as a boolean; they never raise
    for transport or status failures.
    """

    async def apply(self, pipeline_id: str, config: PipelineConfig) -> bool: ...

    async def remove(self, pipeline_id: str) -> bool: ...


__all__ = ["PipelineRegistry"]
