"""Apply phase: build the candidate workload from a change set.

The input workload is never modified; the candidate owns fresh trigger and
container collections.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from imagetrigger.domain.model import Workload

    from .plan import ChangeSet


class ApplyChanges(Protocol):
    def __call__(self, workload: Workload, change_set: ChangeSet) -> Workload: ...


def apply_changes(workload: Workload, change_set: ChangeSet) -> Workload:
    triggers = list(workload.triggers)
    containers = dict(workload.containers)
    for change in change_set.changes:
        trigger = triggers[change.index]
        triggers[change.index] = trigger.fired(change.reference)
        # containers that do not exist (yet) are skipped
        for container_name in trigger.container_names:
            if container_name in containers:
                containers[container_name] = change.reference
    return replace(workload, triggers=tuple(triggers), containers=containers)
