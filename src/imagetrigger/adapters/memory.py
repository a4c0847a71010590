"""In-memory tag resolver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from imagetrigger.domain.model import ResolvedTag

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(slots=True)
class InMemoryTagResolver:
    """Resolve tags from a fixed table of ``(namespace, name)`` entries.

    Unknown tags resolve to ``ResolvedTag.missing()``. Every lookup is
    recorded in ``lookups`` in call order.
    """

    tags: dict[tuple[str, str], ResolvedTag] = field(
        default_factory=dict[tuple[str, str], ResolvedTag]
    )
    lookups: list[tuple[str, str]] = field(default_factory=list[tuple[str, str]])

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[tuple[str, str, str, int]],
    ) -> InMemoryTagResolver:
        """Build a resolver from ``(namespace, name, reference, resource_version)`` rows."""

        resolver = cls()
        for namespace, name, reference, resource_version in entries:
            resolver.set(namespace, name, reference, resource_version=resource_version)
        return resolver

    def set(self, namespace: str, name: str, reference: str, *, resource_version: int = 0) -> None:
        self.tags[(namespace, name)] = ResolvedTag.of(reference, resource_version)

    def forget(self, namespace: str, name: str) -> None:
        self.tags.pop((namespace, name), None)

    def lookup(self, namespace: str, name: str) -> ResolvedTag:
        self.lookups.append((namespace, name))
        return self.tags.get((namespace, name), ResolvedTag.missing())


@dataclass(slots=True)
class AsyncInMemoryTagResolver:
    """Awaitable view over an ``InMemoryTagResolver``."""

    resolver: InMemoryTagResolver = field(default_factory=InMemoryTagResolver)

    async def lookup(self, namespace: str, name: str) -> ResolvedTag:
        return self.resolver.lookup(namespace, name)


if TYPE_CHECKING:
    from imagetrigger.domain.ports.resolving import AsyncTagResolver, TagResolver

    _resolver_check: TagResolver = InMemoryTagResolver()
    _async_resolver_check: AsyncTagResolver = AsyncInMemoryTagResolver()
