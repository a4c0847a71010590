"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from sqlalchemy import and_, func, select

from imagetrigger.adapters.sqlalchemy.mappings import (
    workload_from_row,
    workload_table,
    workload_values,
)
from imagetrigger.domain.ports.persistence import WorkloadConflictError, WorkloadNotFoundError

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import Session

    from imagetrigger.domain.model import Workload


def _identity(namespace: str, name: str) -> ColumnElement[bool]:
    return and_(workload_table.c.namespace == namespace, workload_table.c.name == name)


class SqlAlchemyWorkloadRepository:
    """Workload store with optimistic concurrency on ``resource_version``."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, namespace: str, name: str) -> Workload | None:
        stmt = select(workload_table).where(_identity(namespace, name))
        row = self.session.execute(stmt).mappings().one_or_none()
        return None if row is None else workload_from_row(row)

    def query(self, *, namespace: str | None = None) -> list[Workload]:
        stmt = select(workload_table).order_by(workload_table.c.namespace, workload_table.c.name)
        if namespace is not None:
            stmt = stmt.where(workload_table.c.namespace == namespace)
        return [workload_from_row(row) for row in self.session.execute(stmt).mappings()]

    def add(self, workload: Workload) -> Workload:
        stored = replace(workload, resource_version=1)
        self.session.execute(workload_table.insert().values(**workload_values(stored)))
        return stored

    def update(self, workload: Workload) -> Workload:
        """Write ``workload`` only if the stored version equals its ``resource_version``."""

        stored = replace(workload, resource_version=workload.resource_version + 1)
        stmt = (
            workload_table.update()
            .where(_identity(workload.namespace, workload.name))
            .where(workload_table.c.resource_version == workload.resource_version)
            .values(**workload_values(stored))
        )
        result = self.session.execute(stmt)
        if result.rowcount == 1:
            return stored
        if not self._exists(workload.namespace, workload.name):
            raise WorkloadNotFoundError(workload.namespace, workload.name)
        raise WorkloadConflictError(
            workload.namespace,
            workload.name,
            expected_version=workload.resource_version,
        )

    def save(self, workload: Workload) -> Workload:
        """Insert ``workload`` or replace the stored one regardless of its version."""

        existing = self.get(workload.namespace, workload.name)
        if existing is None:
            return self.add(workload)
        return self.update(replace(workload, resource_version=existing.resource_version))

    def _exists(self, namespace: str, name: str) -> bool:
        stmt = select(func.count()).select_from(workload_table).where(_identity(namespace, name))
        return bool(self.session.execute(stmt).scalar_one())


if TYPE_CHECKING:
    from imagetrigger.domain.ports.persistence import WorkloadRepository

    def _repository_check(session: Session) -> WorkloadRepository:
        return SqlAlchemyWorkloadRepository(session)
