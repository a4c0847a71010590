"""Pydantic models describing image stream tag API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class RegistryBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectMetaPayload(RegistryBaseModel):
    name: str | None = None
    namespace: str | None = None
    resource_version: int = Field(default=0, alias="resourceVersion")

    @field_validator("resource_version", mode="before")
    @classmethod
    def _parse_resource_version(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        return value


class ImagePayload(RegistryBaseModel):
    docker_image_reference: str | None = Field(default=None, alias="dockerImageReference")

    _normalize_reference = field_validator("docker_image_reference", mode="before")(
        _blank_to_none
    )


class ImageStreamTagPayload(RegistryBaseModel):
    metadata: ObjectMetaPayload = Field(default_factory=ObjectMetaPayload)
    image: ImagePayload | None = None
