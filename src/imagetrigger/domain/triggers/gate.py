"""Readiness gate over the full set of trigger resolutions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .contracts import TriggerStatus

if TYPE_CHECKING:
    from .contracts import TriggerResolutions


def blocking_triggers(resolutions: TriggerResolutions) -> tuple[int, ...]:
    """Return positions of automatic triggers that keep the gate closed."""

    return tuple(
        resolution.index
        for resolution in resolutions
        if resolution.status is TriggerStatus.NOT_READY
    )


def is_ready(resolutions: TriggerResolutions) -> bool:
    return not blocking_triggers(resolutions)
