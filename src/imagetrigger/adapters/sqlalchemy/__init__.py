"""SQLAlchemy adapter package."""

from __future__ import annotations

from .mappings import create_all_tables, metadata, workload_table
from .repositories import SqlAlchemyWorkloadRepository
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyWorkloadRepository",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
    "workload_table",
]
