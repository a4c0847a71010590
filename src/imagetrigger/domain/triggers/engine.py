"""Evaluate a workload's image-change triggers.

The engine runs three phases over one workload snapshot:

1) resolve every automatic trigger
2) gate on the readiness of the whole set
3) plan and apply the change set to a copy

Nothing is built before the gate has opened, so a closed gate or a resolver
fault can never leak a partially updated workload.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .apply import apply_changes
from .gate import blocking_triggers
from .plan import plan_changes
from .resolve import resolve_triggers, resolve_triggers_async

if TYPE_CHECKING:
    from imagetrigger.domain.model import Workload
    from imagetrigger.domain.ports.resolving import AsyncTagResolver, TagResolver

    from .apply import ApplyChanges
    from .contracts import TriggerResolutions
    from .plan import PlanChanges
    from .resolve import ResolveTriggers, ResolveTriggersAsync

log = getLogger(__name__)


@dataclass(slots=True)
class TriggerEngine:
    """Compose the resolve, plan and apply phases."""

    resolve: ResolveTriggers = resolve_triggers
    resolve_async: ResolveTriggersAsync = resolve_triggers_async
    plan: PlanChanges = plan_changes
    apply: ApplyChanges = apply_changes

    def evaluate(self, workload: Workload, resolver: TagResolver) -> Workload | None:
        """Return the candidate workload, or ``None`` when no update is required."""

        if not workload.triggers:
            return None
        resolutions = self.resolve(workload, resolver=resolver)
        return self.decide(workload, resolutions)

    async def evaluate_async(
        self,
        workload: Workload,
        resolver: AsyncTagResolver,
    ) -> Workload | None:
        if not workload.triggers:
            return None
        resolutions = await self.resolve_async(workload, resolver=resolver)
        return self.decide(workload, resolutions)

    def decide(self, workload: Workload, resolutions: TriggerResolutions) -> Workload | None:
        blocking = blocking_triggers(resolutions)
        if blocking:
            log.debug(
                "Workload %s/%s waits for unresolved triggers at positions %s",
                workload.namespace,
                workload.name,
                list(blocking),
            )
            return None

        change_set = self.plan(workload, resolutions)
        if not change_set:
            log.debug("Workload %s/%s is up to date", workload.namespace, workload.name)
            return None

        candidate = self.apply(workload, change_set)
        log.info(
            "Workload %s/%s: triggers advanced: %s",
            workload.namespace,
            workload.name,
            ", ".join(
                f"#{change.index} -> {change.reference} (tag version {change.resource_version})"
                for change in change_set.changes
            ),
        )
        return candidate


_DEFAULT_ENGINE = TriggerEngine()


def evaluate(workload: Workload, resolver: TagResolver) -> Workload | None:
    """Evaluate ``workload`` with the default engine."""

    return _DEFAULT_ENGINE.evaluate(workload, resolver)


async def evaluate_async(workload: Workload, resolver: AsyncTagResolver) -> Workload | None:
    return await _DEFAULT_ENGINE.evaluate_async(workload, resolver)
