"""Reconciliation actions and the registry-facing pipeline configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pipesync.domain.values import ConfigMapping


def pipeline_id(source_id: str, destination_id: str) -> str:
    """Registry identity of the pipeline pairing ``source_id`` with ``destination_id``."""

    return f"{source_id}_{destination_id}"


@dataclass(frozen=True, slots=True)
class Schedule:
    type: str = "once_per_hour"
    times: str = ""
    hour: int = 0
    minute: int = 0
    second: int = 0


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Role plus options for either end of a pipeline."""

    role: str
    options: ConfigMapping


@dataclass(frozen=True, slots=True, kw_only=True)
class PipelineConfig:
    """Pipeline configuration in the registry's vocabulary.

    ``warnings`` collects fields that could not be mapped; they are reported but
    never sent to the registry.
    """

    source: Endpoint
    sink: Endpoint
    schedule: Schedule = field(default_factory=Schedule)
    resources: tuple[str, ...] | None = None
    paused: bool = False
    warnings: tuple[str, ...] = field(default=(), compare=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplyPipeline:
    """Create or update a pipeline in the registry."""

    pipeline_id: str
    source_id: str
    destination_id: str
    config: PipelineConfig


@dataclass(frozen=True, slots=True, kw_only=True)
class RemovePipeline:
    """Delete a pipeline from the registry; removing an absent pipeline is a no-op."""

    pipeline_id: str
    source_id: str
    destination_id: str


type ReconciliationAction = ApplyPipeline | RemovePipeline
