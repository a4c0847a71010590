"""Trigger resolution engine.

Decides whether a workload's image-change triggers advanced and, if every
automatic trigger is ready, produces the updated workload snapshot.
"""

from __future__ import annotations

from .contracts import (
    InertTrigger,
    NotReadyTrigger,
    PreviouslyFiredTrigger,
    ResolvedTrigger,
    TriggerResolution,
    TriggerResolutions,
    TriggerStatus,
)
from .engine import TriggerEngine, evaluate, evaluate_async
from .plan import ChangeSet, TriggerChange

__all__ = [
    "ChangeSet",
    "InertTrigger",
    "NotReadyTrigger",
    "PreviouslyFiredTrigger",
    "ResolvedTrigger",
    "TriggerChange",
    "TriggerEngine",
    "TriggerResolution",
    "TriggerResolutions",
    "TriggerStatus",
    "evaluate",
    "evaluate_async",
]
