from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

import pytest

from imagetrigger.adapters.sqlalchemy import SqlAlchemyWorkloadRepository
from imagetrigger.domain.model import OpaqueTrigger
from imagetrigger.domain.ports.persistence import (
    WorkloadConflictError,
    WorkloadNotFoundError,
    WorkloadRepository,
)
from tests.helpers.workloads import make_trigger, make_workload

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


@pytest.fixture
def repository(sqlite_session: Session) -> SqlAlchemyWorkloadRepository:
    return SqlAlchemyWorkloadRepository(sqlite_session)


def test_repository_satisfies_port(repository: SqlAlchemyWorkloadRepository) -> None:
    assert isinstance(repository, WorkloadRepository)


def test_add_and_get_preserves_triggers_and_container_order(
    repository: SqlAlchemyWorkloadRepository,
) -> None:
    workload = make_workload(
        [
            make_trigger(containers=("zeta",)),
            make_trigger("stream-2:1", namespace="", automatic=False, containers=("alpha",)),
        ],
        {"alpha": "a", "zeta": ""},
    )

    stored = repository.add(workload)
    loaded = repository.get("default", "test")

    assert stored.resource_version == 1
    assert loaded == stored
    assert loaded is not None
    assert list(loaded.containers) == ["alpha", "zeta"]
    assert loaded.triggers == workload.triggers


def test_get_missing_returns_none(repository: SqlAlchemyWorkloadRepository) -> None:
    assert repository.get("default", "absent") is None


def test_update_bumps_version(repository: SqlAlchemyWorkloadRepository) -> None:
    stored = repository.add(make_workload([make_trigger()], {"test": ""}))

    updated = repository.update(stored.with_containers({"test": "image-lookup-1"}))

    assert updated.resource_version == 2
    assert repository.get("default", "test") == updated


def test_update_with_stale_version_conflicts(repository: SqlAlchemyWorkloadRepository) -> None:
    stored = repository.add(make_workload([make_trigger()], {"test": ""}))
    repository.update(stored.with_containers({"test": "newer"}))

    with pytest.raises(WorkloadConflictError) as exc_info:
        repository.update(stored.with_containers({"test": "stale"}))

    assert exc_info.value.expected_version == 1
    loaded = repository.get("default", "test")
    assert loaded is not None
    assert loaded.containers == {"test": "newer"}


def test_update_missing_workload_raises(repository: SqlAlchemyWorkloadRepository) -> None:
    with pytest.raises(WorkloadNotFoundError):
        repository.update(make_workload(resource_version=1))


def test_save_inserts_then_replaces(repository: SqlAlchemyWorkloadRepository) -> None:
    first = repository.save(make_workload([make_trigger()], {"test": ""}))
    second = repository.save(make_workload([], {"test": "pinned"}, resource_version=0))

    assert first.resource_version == 1
    assert second.resource_version == 2
    loaded = repository.get("default", "test")
    assert loaded is not None
    assert loaded.triggers == ()
    assert loaded.containers == {"test": "pinned"}


def test_query_orders_and_filters_by_namespace(repository: SqlAlchemyWorkloadRepository) -> None:
    repository.add(make_workload(namespace="b", name="one"))
    repository.add(make_workload(namespace="a", name="two"))
    repository.add(make_workload(namespace="a", name="one"))

    assert [workload.key for workload in repository.query()] == [
        ("a", "one"),
        ("a", "two"),
        ("b", "one"),
    ]
    assert [workload.key for workload in repository.query(namespace="b")] == [("b", "one")]


def test_other_trigger_policies_survive_storage(repository: SqlAlchemyWorkloadRepository) -> None:
    config_change = OpaqueTrigger(position=0, payload={"type": "ConfigChange"})
    workload = replace(
        make_workload([make_trigger()], {"test": ""}),
        opaque_triggers=(config_change,),
    )

    stored = repository.add(workload)
    updated = repository.update(stored.with_containers({"test": "image-lookup-1"}))
    loaded = repository.get("default", "test")

    assert loaded == updated
    assert loaded is not None
    assert loaded.opaque_triggers == (config_change,)
    assert loaded.triggers == workload.triggers
