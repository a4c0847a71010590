"""Image registry (tag API) configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from .env import optional_env_var, require_env_var
from .errors import InvalidConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

REGISTRY_URL_VAR = "IMAGETRIGGER_REGISTRY_URL"
REGISTRY_TOKEN_VAR = "IMAGETRIGGER_REGISTRY_TOKEN"  # noqa: S105
REGISTRY_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Holds the tag API location and credentials."""

    base_url: str
    resilience: ResilienceConfig
    token: str | None = None


def get_registry_config(*, resilience: ResilienceConfig | None = None) -> RegistryConfig:
    base_url = require_env_var(REGISTRY_URL_VAR).rstrip("/")
    parts = urlsplit(base_url)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise InvalidConfigurationError(REGISTRY_URL_VAR, base_url, "expected an http(s) URL")

    token = optional_env_var(REGISTRY_TOKEN_VAR)
    headers = {"Accept": "application/json"}
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"

    return RegistryConfig(
        base_url=base_url,
        token=token,
        resilience=resilience
        or ResilienceConfig(
            name="registry",
            base_url=base_url,
            timeout_seconds=REGISTRY_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            default_headers=headers,
        ),
    )
