"""Resolved tag values produced by resolvers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResolvedTag:
    """Current reference of an image tag as seen by a resolver.

    ``found=False`` means no resolved value is currently known; it is not an
    error and carries no reference.
    """

    reference: str = ""
    resource_version: int = 0
    found: bool = False

    @classmethod
    def missing(cls) -> ResolvedTag:
        return cls()

    @classmethod
    def of(cls, reference: str, resource_version: int = 0) -> ResolvedTag:
        return cls(reference=reference, resource_version=resource_version, found=True)
