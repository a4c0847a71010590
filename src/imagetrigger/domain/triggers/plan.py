"""Change set computed from resolutions once the gate is open."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from .contracts import TriggerStatus

if TYPE_CHECKING:
    from imagetrigger.domain.model import Workload

    from .contracts import TriggerResolutions


@dataclass(frozen=True, slots=True)
class TriggerChange:
    """One trigger whose tag advanced past its last triggered image.

    ``resource_version`` is the tag's version at lookup time, for logging.
    """

    index: int
    reference: str
    resource_version: int = 0


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Ordered trigger changes for one evaluation."""

    changes: tuple[TriggerChange, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.changes)

    @property
    def indices(self) -> tuple[int, ...]:
        return tuple(change.index for change in self.changes)


class PlanChanges(Protocol):
    def __call__(self, workload: Workload, resolutions: TriggerResolutions) -> ChangeSet: ...


def plan_changes(workload: Workload, resolutions: TriggerResolutions) -> ChangeSet:
    """Collect resolved triggers whose reference differs from the last one applied.

    Previously fired triggers without a current reference have no candidate
    and never appear in the change set.
    """

    changes: list[TriggerChange] = []
    for resolution in resolutions:
        if resolution.status is not TriggerStatus.RESOLVED:
            continue
        trigger = workload.triggers[resolution.index]
        if resolution.reference == trigger.last_triggered_image:
            continue
        changes.append(
            TriggerChange(
                index=resolution.index,
                reference=resolution.reference,
                resource_version=resolution.resource_version,
            )
        )
    changes.sort(key=lambda change: change.index)
    return ChangeSet(tuple(changes))
