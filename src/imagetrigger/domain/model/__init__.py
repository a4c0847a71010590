"""Public domain model surface."""

from __future__ import annotations

from imagetrigger.domain.model.enums import SourceKind
from imagetrigger.domain.model.tags import ResolvedTag
from imagetrigger.domain.model.workload import (
    ImageChangeTrigger,
    OpaqueTrigger,
    TagReference,
    Workload,
)

__all__ = [
    "ImageChangeTrigger",
    "OpaqueTrigger",
    "ResolvedTag",
    "SourceKind",
    "TagReference",
    "Workload",
]
