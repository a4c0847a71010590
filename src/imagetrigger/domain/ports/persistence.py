"""Ports for persisting workloads."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable, TypeAlias

from imagetrigger.domain.model import Workload

if TYPE_CHECKING:
    from collections.abc import Sequence


class WorkloadNotFoundError(RuntimeError):
    """Raised when a workload does not exist in the store."""

    def __init__(self, namespace: str, name: str) -> None:
        super().__init__(f"Workload {namespace}/{name} not found")
        self.namespace = namespace
        self.name = name


class WorkloadConflictError(RuntimeError):
    """Raised when a conditional write finds a newer stored workload."""

    def __init__(self, namespace: str, name: str, *, expected_version: int) -> None:
        super().__init__(
            f"Workload {namespace}/{name} changed since version {expected_version}"
        )
        self.namespace = namespace
        self.name = name
        self.expected_version = expected_version


WorkloadUpdater: TypeAlias = Callable[[Workload], Workload]


@runtime_checkable
class WorkloadRepository(Protocol):
    """Persistence contract for workloads."""

    def get(self, namespace: str, name: str) -> Workload | None: ...

    def query(self, *, namespace: str | None = None) -> Sequence[Workload]: ...

    def add(self, workload: Workload) -> Workload: ...

    def update(self, workload: Workload) -> Workload:
        """Write ``workload`` if the stored version matches its ``resource_version``."""
        ...

    def save(self, workload: Workload) -> Workload:
        """Insert ``workload`` or replace the stored one regardless of its version."""
        ...
