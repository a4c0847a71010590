"""Unit-of-work port: one transactional view of the workload store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from imagetrigger.domain.ports.persistence import WorkloadRepository


@dataclass(slots=True)
class WorkloadRepositories:
    """Repositories bound to the open unit of work."""

    workloads: WorkloadRepository


@runtime_checkable
class WorkloadUnitOfWork(Protocol):
    """Context manager; writes become visible only after ``commit()``."""

    @property
    def repositories(self) -> WorkloadRepositories: ...

    def __enter__(self) -> WorkloadUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
