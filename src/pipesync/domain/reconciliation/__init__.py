"""Reconciliation of workspace snapshots against the pipeline registry.

Layered flow for one snapshot:
1) diff the stored snapshot with the incoming one into apply/remove actions
2) map every changed pair into the registry's pipeline configuration
3) execute the actions through the registry port
4) commit the incoming snapshot to the store
"""

from __future__ import annotations

from .actions import (
    ApplyPipeline,
    Endpoint,
    PipelineConfig,
    ReconciliationAction,
    RemovePipeline,
    Schedule,
    pipeline_id,
)
from .diff import DEFAULT_ELIGIBLE_CATEGORY, ReconciliationPlan, plan_reconciliation, reconcile
from .loop import ReconciliationLoop, ReconciliationReport
from .mapping import SINK_ROLES, map_pipeline_config
from .store import SnapshotStore

__all__ = [
    "DEFAULT_ELIGIBLE_CATEGORY",
    "SINK_ROLES",
    "ApplyPipeline",
    "Endpoint",
    "PipelineConfig",
    "ReconciliationAction",
    "ReconciliationLoop",
    "ReconciliationPlan",
    "ReconciliationReport",
    "RemovePipeline",
    "Schedule",
    "SnapshotStore",
    "map_pipeline_config",
    "pipeline_id",
    "plan_reconciliation",
    "reconcile",
]
