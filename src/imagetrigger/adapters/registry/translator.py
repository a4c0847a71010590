"""Translate image stream tag payloads into resolved tags."""

from __future__ import annotations

from imagetrigger.domain.model import ResolvedTag

from .schema import ImageStreamTagPayload


def parse_resolved_tag(payload: object) -> ResolvedTag:
    """Validate ``payload`` and return the tag it describes.

    A tag without an image reference has not been imported yet and counts as
    not found. Raises ``pydantic.ValidationError`` for malformed payloads.
    """

    model = ImageStreamTagPayload.model_validate(payload)
    if model.image is None or model.image.docker_image_reference is None:
        return ResolvedTag.missing()
    return ResolvedTag.of(
        model.image.docker_image_reference,
        model.metadata.resource_version,
    )
