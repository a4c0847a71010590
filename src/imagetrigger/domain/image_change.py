"""React to image changes by evaluating a workload and writing the candidate."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from imagetrigger.domain.triggers import TriggerEngine

if TYPE_CHECKING:
    from imagetrigger.domain.model import Workload
    from imagetrigger.domain.ports.persistence import WorkloadUpdater
    from imagetrigger.domain.ports.resolving import AsyncTagResolver, TagResolver

log = getLogger(__name__)


@dataclass(slots=True)
class ReactionResult:
    """Outcome of one reaction to an image change.

    ``workload`` is the stored workload returned by the update call when
    ``updated`` is true, otherwise the unchanged input.
    """

    updated: bool
    workload: Workload


def react_to_image_change(
    workload: Workload,
    *,
    resolver: TagResolver,
    update: WorkloadUpdater,
    engine: TriggerEngine | None = None,
) -> ReactionResult:
    """Evaluate ``workload`` and issue exactly one update if it changed."""

    candidate = (engine or TriggerEngine()).evaluate(workload, resolver)
    return write_candidate(workload, candidate, update=update)


async def react_to_image_change_async(
    workload: Workload,
    *,
    resolver: AsyncTagResolver,
    update: WorkloadUpdater,
    engine: TriggerEngine | None = None,
) -> ReactionResult:
    candidate = await (engine or TriggerEngine()).evaluate_async(workload, resolver)
    return write_candidate(workload, candidate, update=update)


def write_candidate(
    workload: Workload,
    candidate: Workload | None,
    *,
    update: WorkloadUpdater,
) -> ReactionResult:
    """Hand ``candidate`` to ``update`` once; ``None`` means nothing is written."""

    if candidate is None:
        return ReactionResult(updated=False, workload=workload)
    stored = update(candidate)
    log.info(
        "Updated workload %s/%s to version %s",
        stored.namespace,
        stored.name,
        stored.resource_version,
    )
    return ReactionResult(updated=True, workload=stored)
