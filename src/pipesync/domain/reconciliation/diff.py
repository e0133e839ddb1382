"""Diff two workspace snapshots into registry actions.

Only sources of the eligible category take part; every other source is
invisible to both the previous and the current snapshot.

The plan is produced in two passes:

1) orphan removal: pipelines whose source or destination vanished from the
   configuration altogether (rather than being flagged deleted)
2) transitions: every pair of the current snapshot is compared with its
   previous state and applied, removed, or left alone

A pair that did not change in any relevant way produces no action, so an
unchanged snapshot never causes registry traffic.

Unlike the baseline transition policy, a config or flag change on a pair whose
source or destination is still deleted yields no Apply; re-applying would put
a removed pipeline back into the registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pipesync.domain.values import configs_equal

from .actions import ApplyPipeline, ReconciliationAction, RemovePipeline, pipeline_id
from .mapping import map_pipeline_config

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pipesync.domain.model import Destination, Snapshot, Source

log = getLogger(__name__)

DEFAULT_ELIGIBLE_CATEGORY = "cloud"


@dataclass(slots=True)
class ReconciliationPlan:
    """Ordered actions for one snapshot transition plus data-integrity findings."""

    actions: list[ReconciliationAction] = field(default_factory=list["ReconciliationAction"])
    integrity_warnings: list[str] = field(default_factory=list[str])

    def __len__(self) -> int:
        return len(self.actions)

    @property
    def applies(self) -> list[ApplyPipeline]:
        return [action for action in self.actions if isinstance(action, ApplyPipeline)]

    @property
    def removals(self) -> list[RemovePipeline]:
        return [action for action in self.actions if isinstance(action, RemovePipeline)]


def reconcile(
    previous: Snapshot,
    current: Snapshot,
    *,
    eligible_category: str = DEFAULT_ELIGIBLE_CATEGORY,
) -> list[ReconciliationAction]:
    """Return the actions that bring the registry from ``previous`` to ``current``."""

    return plan_reconciliation(previous, current, eligible_category=eligible_category).actions


def plan_reconciliation(
    previous: Snapshot,
    current: Snapshot,
    *,
    eligible_category: str = DEFAULT_ELIGIBLE_CATEGORY,
) -> ReconciliationPlan:
    plan = ReconciliationPlan(integrity_warnings=current.integrity_issues())
    for issue in plan.integrity_warnings:
        log.warning("Snapshot integrity: %s; first occurrence wins", issue)

    current_sources = _index_sources(current.eligible_sources(eligible_category))
    if not previous.has_ever_been_set:
        for source in current_sources.values():
            plan.actions.extend(_new_source_actions(source))
        return plan

    previous_sources = _index_sources(previous.eligible_sources(eligible_category))
    plan.actions.extend(_orphan_removals(previous_sources, current_sources))
    for source in current_sources.values():
        previous_source = previous_sources.get(source.id)
        if previous_source is None:
            plan.actions.extend(_new_source_actions(source))
        else:
            plan.actions.extend(_source_transition_actions(previous_source, source))
    return plan


def _orphan_removals(
    previous_sources: dict[str, Source],
    current_sources: dict[str, Source],
) -> Iterable[ReconciliationAction]:
    for previous_source in previous_sources.values():
        source = current_sources.get(previous_source.id)
        if source is None:
            for destination in _index_destinations(previous_source).values():
                yield _remove(previous_source, destination)
            continue
        current_destination_ids = _index_destinations(source).keys()
        for destination in _index_destinations(previous_source).values():
            if destination.id not in current_destination_ids:
                yield _remove(previous_source, destination)


def _new_source_actions(source: Source) -> Iterable[ReconciliationAction]:
    for destination in _index_destinations(source).values():
        yield _new_pair_action(source, destination)


def _source_transition_actions(
    previous_source: Source,
    source: Source,
) -> Iterable[ReconciliationAction]:
    destinations = _index_destinations(source).values()

    if source.deleted != previous_source.deleted:
        if source.deleted:
            for destination in destinations:
                yield _remove(source, destination)
        else:
            # Restored source: every live pair goes back into the registry.
            for destination in destinations:
                yield _new_pair_action(source, destination)
        return

    previous_destinations = _index_destinations(previous_source)
    source_config_changed = not configs_equal(source.config, previous_source.config)
    for destination in destinations:
        previous_destination = previous_destinations.get(destination.id)
        if previous_destination is None:
            yield _new_pair_action(source, destination)
            continue
        action = _destination_transition_action(
            source,
            destination,
            previous_destination,
            source_config_changed=source_config_changed,
        )
        if action is not None:
            yield action


def _destination_transition_action(
    source: Source,
    destination: Destination,
    previous: Destination,
    *,
    source_config_changed: bool,
) -> ReconciliationAction | None:
    connection_flipped = destination.is_connection_enabled != previous.is_connection_enabled
    connection_disabled = connection_flipped and not destination.is_connection_enabled

    if destination.deleted != previous.deleted:
        if destination.deleted or connection_disabled:
            return _remove(source, destination)
        # Restored destination.
        return _new_pair_action(source, destination)
    if connection_disabled:
        return _remove(source, destination)

    changed = (
        destination.is_processor_enabled != previous.is_processor_enabled
        or connection_flipped
        or source_config_changed
        or not configs_equal(destination.config, previous.config)
    )
    if not changed or source.deleted or destination.deleted:
        return None
    return _apply(source, destination)


def _new_pair_action(source: Source, destination: Destination) -> ReconciliationAction:
    if source.deleted or destination.deleted:
        return _remove(source, destination)
    return _apply(source, destination)


def _apply(source: Source, destination: Destination) -> ApplyPipeline:
    return ApplyPipeline(
        pipeline_id=pipeline_id(source.id, destination.id),
        source_id=source.id,
        destination_id=destination.id,
        config=map_pipeline_config(source, destination),
    )


def _remove(source: Source, destination: Destination) -> RemovePipeline:
    return RemovePipeline(
        pipeline_id=pipeline_id(source.id, destination.id),
        source_id=source.id,
        destination_id=destination.id,
    )


def _index_sources(sources: Iterable[Source]) -> dict[str, Source]:
    indexed: dict[str, Source] = {}
    for source in sources:
        indexed.setdefault(source.id, source)
    return indexed


def _index_destinations(source: Source) -> dict[str, Destination]:
    indexed: dict[str, Destination] = {}
    for destination in source.destinations:
        indexed.setdefault(destination.id, destination)
    return indexed
