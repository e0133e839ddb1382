"""Port for the producer of workspace snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import asyncio

    from pipesync.domain.model import Snapshot


@runtime_checkable
class SnapshotFeed(Protocol):
    """Publishes full snapshots, in order, onto ``queue`` until cancelled."""

    async def run(self, queue: asyncio.Queue[Snapshot]) -> None: ...


__all__ = ["SnapshotFeed"]
