from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from pipesync.domain.model import Snapshot
from pipesync.domain.reconciliation import (
    ApplyPipeline,
    ReconciliationAction,
    RemovePipeline,
    plan_reconciliation,
    reconcile,
)
from tests.support.snapshots import (
    make_destination,
    make_snapshot,
    make_source,
    with_destinations,
)


def _summary(actions: list[ReconciliationAction]) -> list[tuple[str, str]]:
    return [
        ("apply" if isinstance(action, ApplyPipeline) else "remove", action.pipeline_id)
        for action in actions
    ]


@pytest.fixture
def baseline() -> Snapshot:
    return make_snapshot(
        make_source("s1", make_destination("d1"), make_destination("d2")),
        make_source("s2", make_destination("d3")),
    )


# first snapshot


def test_first_snapshot_applies_every_live_pair(baseline: Snapshot) -> None:
    actions = reconcile(Snapshot.unset(), baseline)

    assert _summary(actions) == [("apply", "s1_d1"), ("apply", "s1_d2"), ("apply", "s2_d3")]


def test_first_snapshot_removes_deleted_pairs() -> None:
    current = make_snapshot(
        make_source("s1", make_destination("d1", deleted=True), make_destination("d2")),
        make_source("s2", make_destination("d3"), deleted=True),
    )

    actions = reconcile(Snapshot.unset(), current)

    assert _summary(actions) == [("remove", "s1_d1"), ("apply", "s1_d2"), ("remove", "s2_d3")]


def test_first_snapshot_ignores_previous_contents() -> None:
    stale = Snapshot(
        sources=(make_source("gone", make_destination("d9")),),
        has_ever_been_set=False,
    )
    current = make_snapshot(make_source("s1", make_destination("d1")))

    actions = reconcile(stale, current)

    assert _summary(actions) == [("apply", "s1_d1")]


def test_first_snapshot_decides_only_on_deletion_flags() -> None:
    current = make_snapshot(
        make_source(
            "s1",
            make_destination("d1", connection_enabled=False),
            make_destination("d2", processor_enabled=False),
        )
    )

    actions = reconcile(Snapshot.unset(), current)

    assert _summary(actions) == [("apply", "s1_d1"), ("apply", "s1_d2")]


# steady state


def test_unchanged_snapshot_yields_no_actions(baseline: Snapshot) -> None:
    assert reconcile(baseline, baseline) == []


def test_equal_but_rebuilt_snapshot_yields_no_actions(baseline: Snapshot) -> None:
    rebuilt = make_snapshot(
        make_source("s1", make_destination("d1"), make_destination("d2")),
        make_source("s2", make_destination("d3")),
    )

    assert reconcile(baseline, rebuilt) == []


def test_config_key_order_is_not_a_change() -> None:
    previous = make_snapshot(
        make_source("s1", make_destination("d1", config={"host": "h", "port": "1"}))
    )
    current = make_snapshot(
        make_source("s1", make_destination("d1", config={"port": "1", "host": "h"}))
    )

    assert reconcile(previous, current) == []


def test_ineligible_sources_are_invisible() -> None:
    previous = make_snapshot(
        make_source("web", make_destination("d1"), category=""),
    )
    current = make_snapshot(
        make_source(
            "web",
            make_destination("d1", deleted=True, config={"host": "other"}),
            make_destination("d2"),
            category="",
            config={"changed": True},
        ),
    )

    assert reconcile(previous, current) == []
    assert reconcile(Snapshot.unset(), current) == []


def test_custom_eligible_category() -> None:
    current = make_snapshot(
        make_source("s1", make_destination("d1"), category="warehouse"),
        make_source("s2", make_destination("d2")),
    )

    actions = reconcile(Snapshot.unset(), current, eligible_category="warehouse")

    assert _summary(actions) == [("apply", "s1_d1")]


# vanished sources and destinations


def test_vanished_source_removes_all_of_its_pipelines(baseline: Snapshot) -> None:
    current = make_snapshot(make_source("s2", make_destination("d3")))

    actions = reconcile(baseline, current)

    assert _summary(actions) == [("remove", "s1_d1"), ("remove", "s1_d2")]


def test_vanished_destination_removes_only_that_pipeline(baseline: Snapshot) -> None:
    current = make_snapshot(
        make_source("s1", make_destination("d2")),
        make_source("s2", make_destination("d3")),
    )

    actions = reconcile(baseline, current)

    assert _summary(actions) == [("remove", "s1_d1")]


def test_source_leaving_eligible_category_is_removed(baseline: Snapshot) -> None:
    current = make_snapshot(
        make_source("s1", make_destination("d1"), make_destination("d2"), category="event"),
        make_source("s2", make_destination("d3")),
    )

    actions = reconcile(baseline, current)

    assert _summary(actions) == [("remove", "s1_d1"), ("remove", "s1_d2")]


def test_source_entering_eligible_category_is_applied() -> None:
    previous = make_snapshot(make_source("s1", make_destination("d1"), category="event"))
    current = make_snapshot(make_source("s1", make_destination("d1")))

    actions = reconcile(previous, current)

    assert _summary(actions) == [("apply", "s1_d1")]


# new sources and destinations


def test_new_source_applies_live_and_removes_deleted(baseline: Snapshot) -> None:
    current = make_snapshot(
        *baseline.sources,
        make_source("s3", make_destination("d4"), make_destination("d5", deleted=True)),
    )

    actions = reconcile(baseline, current)

    assert _summary(actions) == [("apply", "s3_d4"), ("remove", "s3_d5")]


def test_new_deleted_source_removes_everything(baseline: Snapshot) -> None:
    current = make_snapshot(
        *baseline.sources,
        make_source("s3", make_destination("d4"), deleted=True),
    )

    assert _summary(reconcile(baseline, current)) == [("remove", "s3_d4")]


def test_new_destination_on_existing_source(baseline: Snapshot) -> None:
    s1, s2 = baseline.sources
    current = make_snapshot(
        with_destinations(s1, *s1.destinations, make_destination("d6")),
        s2,
    )

    assert _summary(reconcile(baseline, current)) == [("apply", "s1_d6")]


# source deletion flag


def test_source_becoming_deleted_removes_every_destination(baseline: Snapshot) -> None:
    s1, s2 = baseline.sources
    current = make_snapshot(replace(s1, deleted=True, config={"changed": 1}), s2)

    actions = reconcile(baseline, current)

    assert _summary(actions) == [("remove", "s1_d1"), ("remove", "s1_d2")]
    assert all(isinstance(action, RemovePipeline) for action in actions)


def test_restored_source_reapplies_live_destinations() -> None:
    previous = make_snapshot(
        make_source(
            "s1",
            make_destination("d1"),
            make_destination("d2", deleted=True),
            deleted=True,
        )
    )
    current = make_snapshot(
        make_source("s1", make_destination("d1"), make_destination("d2", deleted=True))
    )

    actions = reconcile(previous, current)

    assert _summary(actions) == [("apply", "s1_d1"), ("remove", "s1_d2")]


# destination flags


def test_destination_becoming_deleted_is_removed(baseline: Snapshot) -> None:
    s1, s2 = baseline.sources
    current = make_snapshot(
        with_destinations(s1, make_destination("d1", deleted=True), s1.destinations[1]),
        s2,
    )

    assert _summary(reconcile(baseline, current)) == [("remove", "s1_d1")]


def test_restored_destination_is_applied() -> None:
    previous = make_snapshot(make_source("s1", make_destination("d1", deleted=True)))
    current = make_snapshot(make_source("s1", make_destination("d1")))

    assert _summary(reconcile(previous, current)) == [("apply", "s1_d1")]


def test_restored_destination_with_connection_disabled_is_removed() -> None:
    previous = make_snapshot(make_source("s1", make_destination("d1", deleted=True)))
    current = make_snapshot(make_source("s1", make_destination("d1", connection_enabled=False)))

    assert _summary(reconcile(previous, current)) == [("remove", "s1_d1")]


def test_restored_destination_under_deleted_source_is_removed() -> None:
    previous = make_snapshot(
        make_source("s1", make_destination("d1", deleted=True), deleted=True)
    )
    current = make_snapshot(make_source("s1", make_destination("d1"), deleted=True))

    assert _summary(reconcile(previous, current)) == [("remove", "s1_d1")]


def test_connection_disabled_removes_pipeline() -> None:
    previous = make_snapshot(make_source("s1", make_destination("d1")))
    current = make_snapshot(make_source("s1", make_destination("d1", connection_enabled=False)))

    assert _summary(reconcile(previous, current)) == [("remove", "s1_d1")]


def test_connection_enabled_applies_pipeline() -> None:
    previous = make_snapshot(make_source("s1", make_destination("d1", connection_enabled=False)))
    current = make_snapshot(make_source("s1", make_destination("d1")))

    assert _summary(reconcile(previous, current)) == [("apply", "s1_d1")]


def test_processor_disabled_applies_paused_pipeline() -> None:
    previous = make_snapshot(make_source("S1", make_destination("D1", processor_enabled=True)))
    current = make_snapshot(make_source("S1", make_destination("D1", processor_enabled=False)))

    actions = reconcile(previous, current)

    assert len(actions) == 1
    action = actions[0]
    assert isinstance(action, ApplyPipeline)
    assert action.pipeline_id == "S1_D1"
    assert action.config.paused is True


def test_processor_enabled_applies_unpaused_pipeline() -> None:
    previous = make_snapshot(make_source("s1", make_destination("d1", processor_enabled=False)))
    current = make_snapshot(make_source("s1", make_destination("d1")))

    actions = reconcile(previous, current)

    assert len(actions) == 1
    assert isinstance(actions[0], ApplyPipeline)
    assert actions[0].config.paused is False


# configuration payloads


def test_destination_config_change_applies_only_that_pipeline(baseline: Snapshot) -> None:
    s1, s2 = baseline.sources
    changed = replace(s1.destinations[0], config={"host": "db.internal", "port": "6543"})
    current = make_snapshot(with_destinations(s1, changed, s1.destinations[1]), s2)

    actions = reconcile(baseline, current)

    assert _summary(actions) == [("apply", "s1_d1")]
    action = actions[0]
    assert isinstance(action, ApplyPipeline)
    assert action.config.sink.options["port"] == 6543


def test_source_config_change_applies_every_destination(baseline: Snapshot) -> None:
    s1, s2 = baseline.sources
    current = make_snapshot(replace(s1, config={"accountId": "acct_2"}), s2)

    actions = reconcile(baseline, current)

    assert _summary(actions) == [("apply", "s1_d1"), ("apply", "s1_d2")]


def test_boolean_and_number_are_different_config_values() -> None:
    previous = make_snapshot(make_source("s1", make_destination("d1", config={"ssl": 1})))
    current = make_snapshot(make_source("s1", make_destination("d1", config={"ssl": True})))

    assert _summary(reconcile(previous, current)) == [("apply", "s1_d1")]


def test_nested_config_change_is_detected() -> None:
    previous = make_snapshot(
        make_source("s1", make_destination("d1"), config={"filters": {"tables": ["a", "b"]}})
    )
    current = make_snapshot(
        make_source("s1", make_destination("d1"), config={"filters": {"tables": ["b", "a"]}})
    )

    assert _summary(reconcile(previous, current)) == [("apply", "s1_d1")]


def test_config_change_on_deleted_destination_is_not_applied() -> None:
    previous = make_snapshot(make_source("s1", make_destination("d1", deleted=True)))
    current = make_snapshot(
        make_source("s1", make_destination("d1", deleted=True, config={"host": "new"}))
    )

    assert reconcile(previous, current) == []


def test_config_change_on_deleted_source_is_not_applied() -> None:
    previous = make_snapshot(make_source("s1", make_destination("d1"), deleted=True))
    current = make_snapshot(
        make_source("s1", make_destination("d1"), deleted=True, config={"accountId": "x"})
    )

    assert reconcile(previous, current) == []


# ordering and integrity


def test_orphan_removals_precede_transitions(baseline: Snapshot) -> None:
    current = make_snapshot(
        make_source("s2", make_destination("d3", config={"host": "moved"})),
        make_source("s0", make_destination("d0")),
    )

    actions = reconcile(baseline, current)

    assert _summary(actions) == [
        ("remove", "s1_d1"),
        ("remove", "s1_d2"),
        ("apply", "s2_d3"),
        ("apply", "s0_d0"),
    ]


def test_duplicate_destination_ids_warn_and_keep_first(
    caplog: pytest.LogCaptureFixture,
) -> None:
    current = make_snapshot(
        make_source(
            "s1",
            make_destination("d1"),
            make_destination("d1", deleted=True),
        )
    )

    with caplog.at_level(logging.WARNING):
        plan = plan_reconciliation(Snapshot.unset(), current)

    assert _summary(plan.actions) == [("apply", "s1_d1")]
    assert plan.integrity_warnings == ["destination id 'd1' appears 2 times in source 's1'"]
    assert "Snapshot integrity" in caplog.text


def test_duplicate_source_ids_warn_and_keep_first() -> None:
    current = make_snapshot(
        make_source("s1", make_destination("d1")),
        make_source("s1", make_destination("d2")),
    )

    plan = plan_reconciliation(Snapshot.unset(), current)

    assert _summary(plan.actions) == [("apply", "s1_d1")]
    assert plan.integrity_warnings == ["source id 's1' appears 2 times"]


def test_plan_splits_applies_and_removals(baseline: Snapshot) -> None:
    current = make_snapshot(
        make_source("s1", make_destination("d1", deleted=True), make_destination("d2")),
        make_source("s2", make_destination("d3", config={"host": "other"})),
    )

    plan = plan_reconciliation(baseline, current)

    assert len(plan) == 2
    assert [action.pipeline_id for action in plan.removals] == ["s1_d1"]
    assert [action.pipeline_id for action in plan.applies] == ["s2_d3"]
