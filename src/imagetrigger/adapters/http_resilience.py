from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

from imagetrigger.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

__all__ = [
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        allowed_methods=("GET",),
        status_forcelist=tuple(sorted(policy.status_forcelist)),
        retry_on_exceptions=policy.retry_on_exceptions,
    )


class ResilientClient:
    """Async GET client with retries, a connection cap and an optional rate limit.

    Concurrent lookups share one connection pool; the limiter, when configured,
    spaces requests across all of them.
    """

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit is not None
            else None
        )
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            headers=dict(config.default_headers or {}),
            timeout=config.timeout_seconds,
            transport=RetryTransport(
                transport=httpx.AsyncHTTPTransport(
                    limits=httpx.Limits(max_connections=config.max_connections),
                ),
                retry=build_retry(config.retry),
            ),
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, *, params: Mapping[str, str] | None = None) -> httpx.Response:
        if self._limiter is None:
            return await self._client.get(path, params=params)
        async with self._limiter:
            return await self._client.get(path, params=params)
