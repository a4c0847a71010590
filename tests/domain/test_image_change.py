from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest

from imagetrigger.adapters.memory import AsyncInMemoryTagResolver, InMemoryTagResolver
from imagetrigger.domain.image_change import (
    react_to_image_change,
    react_to_image_change_async,
    write_candidate,
)
from imagetrigger.domain.model import Workload
from imagetrigger.domain.ports.persistence import WorkloadConflictError
from tests.helpers.workloads import make_trigger, make_workload


class _RecordingUpdater:
    def __init__(self) -> None:
        self.calls: list[Workload] = []

    def __call__(self, workload: Workload) -> Workload:
        self.calls.append(workload)
        return replace(workload, resource_version=workload.resource_version + 1)


def test_react_updates_once_when_trigger_advanced(resolver: InMemoryTagResolver) -> None:
    workload = make_workload([make_trigger()], {"test": ""}, resource_version=4)
    update = _RecordingUpdater()

    result = react_to_image_change(workload, resolver=resolver, update=update)

    assert result.updated
    assert len(update.calls) == 1
    assert update.calls[0].containers == {"test": "image-lookup-1"}
    assert result.workload.resource_version == 5


def test_react_skips_update_without_change(resolver: InMemoryTagResolver) -> None:
    workload = make_workload(
        [make_trigger(last_triggered_image="image-lookup-1")],
        {"test": "image-lookup-1"},
    )
    update = _RecordingUpdater()

    result = react_to_image_change(workload, resolver=resolver, update=update)

    assert not result.updated
    assert result.workload is workload
    assert update.calls == []


def test_react_skips_update_when_gate_closed() -> None:
    workload = make_workload([make_trigger()], {"test": ""})
    update = _RecordingUpdater()

    result = react_to_image_change(workload, resolver=InMemoryTagResolver(), update=update)

    assert not result.updated
    assert update.calls == []


def test_react_propagates_update_errors(resolver: InMemoryTagResolver) -> None:
    workload = make_workload([make_trigger()], {"test": ""})

    def _conflicting_update(candidate: Workload) -> Workload:
        raise WorkloadConflictError(candidate.namespace, candidate.name, expected_version=0)

    with pytest.raises(WorkloadConflictError):
        react_to_image_change(workload, resolver=resolver, update=_conflicting_update)

    assert workload.containers == {"test": ""}


def test_react_async_updates_once(resolver: InMemoryTagResolver) -> None:
    workload = make_workload(
        [make_trigger(containers=("test", "test2"))],
        {"test": "", "test2": ""},
    )
    update = _RecordingUpdater()

    result = asyncio.run(
        react_to_image_change_async(
            workload,
            resolver=AsyncInMemoryTagResolver(resolver),
            update=update,
        )
    )

    assert result.updated
    assert len(update.calls) == 1
    assert result.workload.containers == {"test": "image-lookup-1", "test2": "image-lookup-1"}


def test_write_candidate_writes_precomputed_candidate() -> None:
    workload = make_workload([make_trigger()], {"test": ""})
    candidate = replace(workload, containers={"test": "image-lookup-1"})
    update = _RecordingUpdater()

    written = write_candidate(workload, candidate, update=update)
    skipped = write_candidate(workload, None, update=update)

    assert written.updated
    assert update.calls == [candidate]
    assert not skipped.updated
    assert skipped.workload is workload
