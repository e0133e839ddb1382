"""Background loop that reconciles each incoming snapshot against the registry."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .actions import ApplyPipeline, ReconciliationAction
from .diff import DEFAULT_ELIGIBLE_CATEGORY, plan_reconciliation
from .store import SnapshotStore

if TYPE_CHECKING:
    from pipesync.domain.model import Snapshot
    from pipesync.domain.ports.registry import PipelineRegistry

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationReport:
    """Outcome of reconciling one snapshot."""

    planned: int = 0
    applied: int = 0
    removed: int = 0
    failed: list[str] = field(default_factory=list[str])
    mapping_warnings: int = 0
    integrity_warnings: int = 0

    @property
    def attempted(self) -> int:
        return self.applied + self.removed + len(self.failed)


@dataclass(slots=True)
class ReconciliationLoop:
    """Sole owner of the snapshot store and consumer of the snapshot queue.

    Snapshots are handled strictly one at a time and in delivery order. Within
    one snapshot the registry calls run sequentially unless ``concurrency`` is
    raised; either way the snapshot is committed only after every action has
    been attempted. A registry call that raises counts as a failed action.
    """

    registry: PipelineRegistry
    store: SnapshotStore = field(default_factory=SnapshotStore)
    queue: asyncio.Queue[Snapshot] = field(default_factory=asyncio.Queue["Snapshot"])
    eligible_category: str = DEFAULT_ELIGIBLE_CATEGORY
    concurrency: int = 1

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")

    async def run(self) -> None:
        """Consume snapshots until cancelled."""

        while True:
            snapshot = await self.queue.get()
            try:
                await self.process(snapshot)
            except asyncio.CancelledError:
                raise
            except Exception:
                log.exception("Reconciliation pass failed; snapshot not committed")
            finally:
                self.queue.task_done()

    async def process(self, snapshot: Snapshot) -> ReconciliationReport:
        """Reconcile ``snapshot`` against the stored one, then commit it."""

        plan = plan_reconciliation(
            self.store.current,
            snapshot,
            eligible_category=self.eligible_category,
        )
        report = ReconciliationReport(
            planned=len(plan.actions),
            integrity_warnings=len(plan.integrity_warnings),
        )

        try:
            await self._execute_all(plan.actions, report)
        except asyncio.CancelledError:
            log.warning(
                "Reconciliation cancelled: %s of %s actions not attempted; snapshot not committed",
                report.planned - report.attempted,
                report.planned,
            )
            raise

        self.store.commit(snapshot)
        log.info(
            "Reconciled snapshot: planned=%s, applied=%s, removed=%s, failed=%s, "
            "mapping_warnings=%s",
            report.planned,
            report.applied,
            report.removed,
            len(report.failed),
            report.mapping_warnings,
        )
        return report

    async def _execute_all(
        self,
        actions: list[ReconciliationAction],
        report: ReconciliationReport,
    ) -> None:
        if self.concurrency == 1:
            for action in actions:
                await self._execute(action, report)
            return

        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(action: ReconciliationAction) -> None:
            async with semaphore:
                await self._execute(action, report)

        await asyncio.gather(*(bounded(action) for action in actions))

    async def _execute(self, action: ReconciliationAction, report: ReconciliationReport) -> None:
        if isinstance(action, ApplyPipeline):
            for warning in action.config.warnings:
                log.warning("Pipeline %s mapping: %s", action.pipeline_id, warning)
            report.mapping_warnings += len(action.config.warnings)
        try:
            ok = await self._send(action)
        except Exception:
            log.exception("Registry call for pipeline %s raised", action.pipeline_id)
            ok = False

        if not ok:
            report.failed.append(action.pipeline_id)
        elif isinstance(action, ApplyPipeline):
            report.applied += 1
        else:
            report.removed += 1

    async def _send(self, action: ReconciliationAction) -> bool:
        if isinstance(action, ApplyPipeline):
            return await self.registry.apply(action.pipeline_id, action.config)
        return await self.registry.remove(action.pipeline_id)
