"""HTTP tag resolver backed by an image stream tag API."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from imagetrigger.adapters.http_resilience import ResilienceConfig, ResilientClient
from imagetrigger.config.registry import RegistryConfig, get_registry_config
from imagetrigger.domain.model import ResolvedTag
from imagetrigger.domain.ports.resolving import ResolverError

from .translator import parse_resolved_tag

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

log = getLogger(__name__)


class TagLookupError(ResolverError):
    """Raised when the tag API cannot answer a lookup."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def tag_path(namespace: str, name: str) -> str:
    return f"namespaces/{quote(namespace, safe='')}/imagestreamtags/{quote(name, safe=':')}"


@dataclass(slots=True)
class RegistryTagSession:
    """Resolver bound to one open HTTP client; use for awaitable lookups."""

    client: ResilientClient

    async def lookup(self, namespace: str, name: str) -> ResolvedTag:
        try:
            response = await self.client.get(tag_path(namespace, name))
        except httpx.HTTPError as exc:
            raise TagLookupError(f"Lookup of {namespace}/{name} failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            log.debug("Tag %s/%s not found", namespace, name)
            return ResolvedTag.missing()
        if response.is_error:
            raise TagLookupError(
                f"Lookup of {namespace}/{name} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return parse_resolved_tag(response.json())
        except (ValueError, ValidationError) as exc:
            raise TagLookupError(f"Unexpected payload for tag {namespace}/{name}") from exc


@dataclass(slots=True)
class RegistryTagResolver:
    config: RegistryConfig = field(default_factory=get_registry_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def lookup(self, namespace: str, name: str) -> ResolvedTag:
        return asyncio.run(self._lookup_once(namespace, name))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[RegistryTagSession]:
        async with self.client_factory(self.config.resilience) as client:
            yield RegistryTagSession(client=client)

    async def _lookup_once(self, namespace: str, name: str) -> ResolvedTag:
        async with self.session() as session:
            return await session.lookup(namespace, name)


if TYPE_CHECKING:
    from imagetrigger.domain.ports.resolving import AsyncTagResolver, TagResolver

    _resolver_check: TagResolver = RegistryTagResolver()
    _session_check: AsyncTagResolver = RegistryTagSession(
        client=ResilientClient(ResilienceConfig(name="check"))
    )
