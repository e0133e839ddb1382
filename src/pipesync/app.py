"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
import json
from logging import getLogger
from typing import TYPE_CHECKING

from pipesync.adapters.registry import HttpPipelineRegistry
from pipesync.adapters.workspace_config import WorkspaceConfigPoller, parse_snapshot
from pipesync.config import get_sync_config
from pipesync.domain.model import Snapshot
from pipesync.domain.reconciliation import ReconciliationLoop, plan_reconciliation

if TYPE_CHECKING:
    from pathlib import Path

    from pipesync.config import SyncConfig
    from pipesync.domain.ports import PipelineRegistry, SnapshotFeed
    from pipesync.domain.reconciliation import ReconciliationPlan


log = getLogger(__name__)


async def run_registry_sync(
    *,
    feed: SnapshotFeed | None = None,
    registry: PipelineRegistry | None = None,
    sync_config: SyncConfig | None = None,
) -> None:
    """Run the snapshot feed and the reconciliation loop until cancelled."""

    effective_sync = sync_config or get_sync_config()
    effective_feed = feed or WorkspaceConfigPoller()
    owned_registry: HttpPipelineRegistry | None = None
    if registry is None:
        owned_registry = HttpPipelineRegistry()
        registry = owned_registry

    loop = ReconciliationLoop(
        registry=registry,
        eligible_category=effective_sync.eligible_category,
        concurrency=effective_sync.action_concurrency,
    )
    log.info(
        "Starting registry sync: eligible_category=%s, concurrency=%s",
        effective_sync.eligible_category,
        effective_sync.action_concurrency,
    )
    try:
        async with asyncio.TaskGroup() as group:
            group.create_task(effective_feed.run(loop.queue), name="snapshot-feed")
            group.create_task(loop.run(), name="reconciliation-loop")
    finally:
        if owned_registry is not None:
            await owned_registry.aclose()
        log.info("Registry sync stopped")


def sync_registry(*, sync_config: SyncConfig | None = None) -> None:
    """Blocking entry point for the long-running service."""

    asyncio.run(run_registry_sync(sync_config=sync_config))


def load_snapshot(path: Path) -> Snapshot:
    """Read a workspace configuration JSON document from ``path``."""

    with path.open(encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{path} does not contain a workspace config object")
    return parse_snapshot(payload)


def plan_snapshot_files(
    *,
    current: Path,
    previous: Path | None = None,
    sync_config: SyncConfig | None = None,
) -> ReconciliationPlan:
    """Compute, without executing, the actions between two workspace config files."""

    effective_sync = sync_config or get_sync_config()
    previous_snapshot = load_snapshot(previous) if previous is not None else Snapshot.unset()
    return plan_reconciliation(
        previous_snapshot,
        load_snapshot(current),
        eligible_category=effective_sync.eligible_category,
    )
