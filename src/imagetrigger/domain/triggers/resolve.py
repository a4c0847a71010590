"""Resolve phase: look up every automatic trigger's tag.

Responsibilities of this stage:
- skip inert triggers without consulting the resolver
- call the resolver once per automatic trigger, in sequence order
- classify each trigger as RESOLVED, PREVIOUSLY_FIRED or NOT_READY

Out of scope for this stage:
- readiness gating
- building the candidate workload

Resolver exceptions are not caught here; they abort the evaluation.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Protocol

from .contracts import InertTrigger, NotReadyTrigger, PreviouslyFiredTrigger, ResolvedTrigger

if TYPE_CHECKING:
    from imagetrigger.domain.model import ImageChangeTrigger, ResolvedTag, Workload
    from imagetrigger.domain.ports.resolving import AsyncTagResolver, TagResolver

    from .contracts import TriggerResolution, TriggerResolutions


class ResolveTriggers(Protocol):
    """Resolve all triggers of a workload against a synchronous resolver."""

    def __call__(self, workload: Workload, *, resolver: TagResolver) -> TriggerResolutions: ...


class ResolveTriggersAsync(Protocol):
    """Resolve all triggers of a workload against an awaitable resolver."""

    async def __call__(
        self,
        workload: Workload,
        *,
        resolver: AsyncTagResolver,
    ) -> TriggerResolutions: ...


def resolve_triggers(workload: Workload, *, resolver: TagResolver) -> TriggerResolutions:
    resolutions: list[TriggerResolution] = []
    for index, trigger in enumerate(workload.triggers):
        if trigger.is_inert:
            resolutions.append(InertTrigger(index=index))
            continue
        namespace, name = _lookup_key(workload, trigger)
        tag = resolver.lookup(namespace, name)
        resolutions.append(classify_trigger(index, trigger, tag))
    return tuple(resolutions)


async def resolve_triggers_async(
    workload: Workload,
    *,
    resolver: AsyncTagResolver,
) -> TriggerResolutions:
    """Resolve like ``resolve_triggers`` but run all lookups concurrently.

    Every lookup completes before any classification is returned, so the gate
    always sees the full set.
    """

    active = [
        (index, trigger)
        for index, trigger in enumerate(workload.triggers)
        if not trigger.is_inert
    ]
    tags = await asyncio.gather(
        *(resolver.lookup(*_lookup_key(workload, trigger)) for _, trigger in active)
    )
    tags_by_index = {index: tag for (index, _), tag in zip(active, tags, strict=True)}

    resolutions: list[TriggerResolution] = []
    for index, trigger in enumerate(workload.triggers):
        tag = tags_by_index.get(index)
        if tag is None:
            resolutions.append(InertTrigger(index=index))
            continue
        resolutions.append(classify_trigger(index, trigger, tag))
    return tuple(resolutions)


def classify_trigger(
    index: int,
    trigger: ImageChangeTrigger,
    tag: ResolvedTag,
) -> TriggerResolution:
    if tag.found:
        return ResolvedTrigger(
            index=index,
            reference=tag.reference,
            resource_version=tag.resource_version,
        )
    if trigger.has_fired:
        return PreviouslyFiredTrigger(index=index)
    return NotReadyTrigger(index=index)


def _lookup_key(workload: Workload, trigger: ImageChangeTrigger) -> tuple[str, str]:
    source = trigger.source
    return source.namespace_for(workload.namespace), source.name
