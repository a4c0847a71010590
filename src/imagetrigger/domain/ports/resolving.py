"""Ports for resolving image tags to their current reference."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from imagetrigger.domain.model import ResolvedTag


class ResolverError(RuntimeError):
    """Raised by resolvers when a lookup could not be answered at all.

    Distinct from a tag that is simply unknown, which resolvers report as
    ``ResolvedTag.missing()``.
    """


@runtime_checkable
class TagResolver(Protocol):
    """Synchronous lookup of a tag's current reference."""

    def lookup(self, namespace: str, name: str) -> ResolvedTag: ...


@runtime_checkable
class AsyncTagResolver(Protocol):
    """Awaitable lookup of a tag's current reference."""

    async def lookup(self, namespace: str, name: str) -> ResolvedTag: ...


__all__ = ["AsyncTagResolver", "ResolverError", "TagResolver"]
