"""Domain port definitions for adapters."""

from __future__ import annotations

from .feed import SnapshotFeed
from .registry import PipelineRegistry

__all__ = ["PipelineRegistry", "SnapshotFeed"]
