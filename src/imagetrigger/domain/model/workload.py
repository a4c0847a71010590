"""Workload aggregate: identity, image-change triggers and container images.

Values are frozen. Code that needs a changed workload builds a new one with
``dataclasses.replace`` or ``with_containers``; the container mapping
is copied on every such step so two workloads never share a mutable dict.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from imagetrigger.domain.model.enums import SourceKind

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True, kw_only=True)
class TagReference:
    """Identity of the image tag a trigger follows.

    An empty ``namespace`` refers to the namespace of the owning workload.
    """

    name: str
    namespace: str = ""
    kind: str = SourceKind.IMAGE_STREAM_TAG

    @property
    def is_resolvable(self) -> bool:
        return self.kind == SourceKind.IMAGE_STREAM_TAG and bool(self.name)

    def namespace_for(self, workload_namespace: str) -> str:
        return self.namespace or workload_namespace


@dataclass(frozen=True, slots=True, kw_only=True)
class ImageChangeTrigger:
    """Binds one image tag to a set of containers of the owning workload."""

    source: TagReference
    automatic: bool = False
    container_names: tuple[str, ...] = ()
    last_triggered_image: str = ""

    @property
    def has_fired(self) -> bool:
        return bool(self.last_triggered_image)

    @property
    def is_inert(self) -> bool:
        """Inert triggers are never resolved and never gate an evaluation."""
        return not self.automatic or not self.source.is_resolvable

    def fired(self, reference: str) -> ImageChangeTrigger:
        return replace(self, last_triggered_image=reference)


@dataclass(frozen=True, slots=True, kw_only=True)
class OpaqueTrigger:
    """A trigger policy of another type, carried through unchanged.

    ``position`` is its index in the workload's full trigger list, image-change
    triggers included.
    """

    position: int
    payload: Mapping[str, object]


@dataclass(frozen=True, slots=True, kw_only=True)
class Workload:
    """A deployable workload identified by ``namespace`` and ``name``.

    The engine reads and rewrites ``triggers`` only; ``opaque_triggers`` ride
    along on every copy.
    """

    namespace: str
    name: str
    triggers: tuple[ImageChangeTrigger, ...] = ()
    opaque_triggers: tuple[OpaqueTrigger, ...] = ()
    containers: dict[str, str] = field(default_factory=dict[str, str])
    resource_version: int = 0

    @property
    def key(self) -> tuple[str, str]:
        return self.namespace, self.name

    def with_containers(self, containers: Mapping[str, str]) -> Workload:
        return replace(self, containers=dict(containers))
