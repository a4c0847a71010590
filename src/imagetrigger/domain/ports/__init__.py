"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    WorkloadConflictError,
    WorkloadNotFoundError,
    WorkloadRepository,
    WorkloadUpdater,
)
from .resolving import AsyncTagResolver, ResolverError, TagResolver
from .unit_of_work import WorkloadRepositories, WorkloadUnitOfWork

__all__ = [
    "AsyncTagResolver",
    "ResolverError",
    "TagResolver",
    "WorkloadConflictError",
    "WorkloadNotFoundError",
    "WorkloadRepositories",
    "WorkloadRepository",
    "WorkloadUnitOfWork",
    "WorkloadUpdater",
]
