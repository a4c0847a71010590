from __future__ import annotations

from imagetrigger.domain.triggers import (
    ChangeSet,
    InertTrigger,
    NotReadyTrigger,
    PreviouslyFiredTrigger,
    ResolvedTrigger,
    TriggerChange,
)
from imagetrigger.domain.triggers.apply import apply_changes
from imagetrigger.domain.triggers.gate import blocking_triggers, is_ready
from imagetrigger.domain.triggers.plan import plan_changes
from tests.helpers.workloads import make_trigger, make_workload


def test_gate_blocks_on_not_ready_only() -> None:
    resolutions = (
        InertTrigger(index=0),
        PreviouslyFiredTrigger(index=1),
        NotReadyTrigger(index=2),
        ResolvedTrigger(index=3, reference="image"),
        NotReadyTrigger(index=4),
    )

    assert blocking_triggers(resolutions) == (2, 4)
    assert not is_ready(resolutions)


def test_gate_is_open_for_empty_and_ready_sets() -> None:
    assert is_ready(())
    assert is_ready((InertTrigger(index=0), PreviouslyFiredTrigger(index=1)))


def test_plan_changes_skips_unchanged_and_unresolved_triggers() -> None:
    workload = make_workload(
        [
            make_trigger(last_triggered_image="same"),
            make_trigger("stream-2:1", last_triggered_image="old-image"),
            make_trigger("stream-3:1"),
            make_trigger("stream-4:1", automatic=False),
        ]
    )
    resolutions = (
        ResolvedTrigger(index=0, reference="same"),
        PreviouslyFiredTrigger(index=1),
        ResolvedTrigger(index=2, reference="new-image"),
        InertTrigger(index=3),
    )

    change_set = plan_changes(workload, resolutions)

    assert change_set == ChangeSet((TriggerChange(index=2, reference="new-image"),))
    assert change_set.indices == (2,)
    assert change_set


def test_plan_changes_empty_when_everything_current() -> None:
    workload = make_workload([make_trigger(last_triggered_image="same")])

    change_set = plan_changes(workload, (ResolvedTrigger(index=0, reference="same"),))

    assert not change_set


def test_apply_changes_skips_missing_containers() -> None:
    workload = make_workload(
        [make_trigger(containers=("test", "absent"))],
        {"test": "old", "sidecar": "untouched"},
    )

    candidate = apply_changes(workload, ChangeSet((TriggerChange(index=0, reference="new"),)))

    assert candidate.containers == {"sidecar": "untouched", "test": "new"}
    assert "absent" not in candidate.containers
    assert candidate.triggers[0].last_triggered_image == "new"
    assert workload.containers == {"sidecar": "untouched", "test": "old"}
    assert workload.triggers[0].last_triggered_image == ""


def test_apply_changes_preserves_container_order() -> None:
    workload = make_workload([make_trigger(containers=("b",))], {"a": "1", "b": "2", "c": "3"})

    candidate = apply_changes(workload, ChangeSet((TriggerChange(index=0, reference="new"),)))

    assert list(candidate.containers) == ["a", "b", "c"]
    assert candidate.resource_version == workload.resource_version


def test_plan_changes_carries_tag_version() -> None:
    workload = make_workload([make_trigger()])

    change_set = plan_changes(
        workload,
        (ResolvedTrigger(index=0, reference="new-image", resource_version=9),),
    )

    assert change_set.changes == (
        TriggerChange(index=0, reference="new-image", resource_version=9),
    )
