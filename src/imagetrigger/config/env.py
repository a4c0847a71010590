"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable


def optional_env_var(name: str) -> str | None:
    """Return the stripped value of ``name``; unset and blank both read as ``None``."""

    value = os.getenv(name, "").strip()
    return value or None


def require_env_vars(names: Iterable[str]) -> dict[str, str]:
    """Return every named variable, or raise one error naming all that are missing."""

    values = {name: optional_env_var(name) for name in names}
    missing = sorted(name for name, value in values.items() if value is None)
    if missing:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")
    return {name: value for name, value in values.items() if value is not None}


def require_env_var(name: str) -> str:
    return require_env_vars((name,))[name]
