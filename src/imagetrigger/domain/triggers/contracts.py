"""Per-trigger resolution outcomes shared by the engine phases.

Each trigger of a workload yields exactly one resolution, keyed by its
position in the trigger sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeAlias


class TriggerStatus(StrEnum):
    """Readiness of one trigger after the resolve phase."""

    INERT = "inert"
    RESOLVED = "resolved"
    PREVIOUSLY_FIRED = "previously_fired"
    NOT_READY = "not_ready"


@dataclass(frozen=True, slots=True, kw_only=True)
class InertTrigger:
    """Trigger is manual or follows an unsupported source; never looked up."""

    index: int
    status: Literal[TriggerStatus.INERT] = TriggerStatus.INERT


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolvedTrigger:
    """Resolver knows a current reference for the trigger's tag."""

    index: int
    reference: str
    resource_version: int = 0
    status: Literal[TriggerStatus.RESOLVED] = TriggerStatus.RESOLVED


@dataclass(frozen=True, slots=True, kw_only=True)
class PreviouslyFiredTrigger:
    """Tag is unknown right now, but the trigger fired in an earlier pass."""

    index: int
    status: Literal[TriggerStatus.PREVIOUSLY_FIRED] = TriggerStatus.PREVIOUSLY_FIRED


@dataclass(frozen=True, slots=True, kw_only=True)
class NotReadyTrigger:
    """Tag is unknown and the trigger has never fired."""

    index: int
    status: Literal[TriggerStatus.NOT_READY] = TriggerStatus.NOT_READY


TriggerResolution: TypeAlias = InertTrigger | ResolvedTrigger | PreviouslyFiredTrigger | NotReadyTrigger
TriggerResolutions: TypeAlias = tuple[TriggerResolution, ...]
