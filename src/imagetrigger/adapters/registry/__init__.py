"""Public interface for the image registry adapter."""

from __future__ import annotations

from .client import RegistryTagResolver, RegistryTagSession, TagLookupError, tag_path
from .schema import ImageStreamTagPayload
from .translator import parse_resolved_tag

__all__ = [
    "ImageStreamTagPayload",
    "RegistryTagResolver",
    "RegistryTagSession",
    "TagLookupError",
    "parse_resolved_tag",
    "tag_path",
]
