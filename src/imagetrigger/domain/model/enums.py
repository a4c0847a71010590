"""Enumerations shared across the domain model."""

from __future__ import annotations

from enum import StrEnum


class SourceKind(StrEnum):
    """Kinds of image sources a trigger can follow."""

    IMAGE_STREAM_TAG = "ImageStreamTag"
