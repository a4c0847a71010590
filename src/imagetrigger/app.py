"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from imagetrigger.adapters.manifest import parse_tag_fixtures, parse_workload
from imagetrigger.adapters.memory import InMemoryTagResolver
from imagetrigger.adapters.registry import RegistryTagResolver
from imagetrigger.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    is_started,
    startup,
)
from imagetrigger.domain.image_change import write_candidate
from imagetrigger.domain.ports.persistence import WorkloadConflictError, WorkloadNotFoundError
from imagetrigger.domain.ports.unit_of_work import WorkloadUnitOfWork
from imagetrigger.domain.triggers import TriggerEngine, evaluate

if TYPE_CHECKING:
    from imagetrigger.domain.model import Workload
    from imagetrigger.domain.ports.persistence import WorkloadRepository
    from imagetrigger.domain.ports.resolving import AsyncTagResolver

UnitOfWorkFactory = Callable[[], WorkloadUnitOfWork]


log = getLogger(__name__)


@dataclass(slots=True)
class ReconcileSummary:
    """Outcome of one reconciliation pass over stored workloads."""

    evaluated: int = 0
    updated: list[tuple[str, str]] = field(default_factory=list[tuple[str, str]])
    conflicts: list[tuple[str, str]] = field(default_factory=list[tuple[str, str]])


def evaluate_manifest(manifest: object, tags: object) -> Workload | None:
    """Evaluate a manifest payload against a fixed tag table, offline."""

    workload = parse_workload(manifest)
    resolver = InMemoryTagResolver.from_entries(parse_tag_fixtures(tags))
    return evaluate(workload, resolver)


def register_workload(
    manifest: object,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Workload:
    """Store the workload described by ``manifest``, replacing any stored copy."""

    workload = parse_workload(manifest)
    with _unit_of_work_factory(unit_of_work_factory)() as uow:
        stored = uow.repositories.workloads.save(workload)
        uow.commit()
    log.info(
        "Stored workload %s/%s at version %s",
        stored.namespace,
        stored.name,
        stored.resource_version,
    )
    return stored


def reconcile_workloads(
    *,
    namespace: str | None = None,
    name: str | None = None,
    resolver: AsyncTagResolver | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ReconcileSummary:
    """Run one reconciliation pass over the selected stored workloads.

    Without an explicit ``resolver`` the HTTP registry resolver configured from
    the environment is used. Resolver faults abort the pass; a conditional
    write that loses against a concurrent writer is recorded in ``conflicts``
    and left for the next pass.
    """

    factory = _unit_of_work_factory(unit_of_work_factory)
    log.info("Starting reconciliation: namespace=%s, name=%s", namespace, name)
    summary = asyncio.run(
        _reconcile(namespace=namespace, name=name, resolver=resolver, factory=factory)
    )
    log.info(
        f"Finished reconciliation: evaluated={summary.evaluated}, "
        f"updated={len(summary.updated)}, conflicts={len(summary.conflicts)}"
    )
    return summary


async def _reconcile(
    *,
    namespace: str | None,
    name: str | None,
    resolver: AsyncTagResolver | None,
    factory: UnitOfWorkFactory,
) -> ReconcileSummary:
    if resolver is not None:
        return await _reconcile_with(resolver, namespace=namespace, name=name, factory=factory)
    async with RegistryTagResolver().session() as session:
        return await _reconcile_with(session, namespace=namespace, name=name, factory=factory)


async def _reconcile_with(
    resolver: AsyncTagResolver,
    *,
    namespace: str | None,
    name: str | None,
    factory: UnitOfWorkFactory,
) -> ReconcileSummary:
    """Resolve every selected workload first, then write the candidates.

    Lookups for all workloads run concurrently and finish before the first
    write, so a resolver fault leaves the store untouched. The writes are
    blocking and run one workload at a time, each in its own unit of work.
    """

    with factory() as uow:
        workloads = _select_workloads(uow.repositories.workloads, namespace=namespace, name=name)

    engine = TriggerEngine()
    candidates = await asyncio.gather(
        *(engine.evaluate_async(workload, resolver) for workload in workloads)
    )

    summary = ReconcileSummary(evaluated=len(workloads))
    for workload, candidate in zip(workloads, candidates, strict=True):
        with factory() as uow:
            try:
                result = write_candidate(
                    workload,
                    candidate,
                    update=uow.repositories.workloads.update,
                )
            except WorkloadConflictError as exc:
                log.warning("Skipping workload: %s", exc)
                summary.conflicts.append(workload.key)
                continue
            uow.commit()
        if result.updated:
            summary.updated.append(workload.key)
    return summary


def _select_workloads(
    repository: WorkloadRepository,
    *,
    namespace: str | None,
    name: str | None,
) -> list[Workload]:
    if name is None:
        return list(repository.query(namespace=namespace))
    if namespace is None:
        raise ValueError("A workload name requires a namespace")
    workload = repository.get(namespace, name)
    if workload is None:
        raise WorkloadNotFoundError(namespace, name)
    return [workload]


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork
