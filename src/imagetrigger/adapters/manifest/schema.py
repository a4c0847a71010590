"""Pydantic models for workload manifests and tag fixture files.

Only image-change triggers are modelled. Trigger policies of other types are
kept as raw mappings so they can be written back unchanged.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from imagetrigger.domain.model import SourceKind


class ManifestBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectReferencePayload(ManifestBaseModel):
    kind: str = SourceKind.IMAGE_STREAM_TAG
    namespace: str = ""
    name: str = ""


class ImageChangeParamsPayload(ManifestBaseModel):
    automatic: bool = False
    from_: ObjectReferencePayload = Field(alias="from")
    container_names: list[str] = Field(default_factory=list[str], alias="containerNames")
    last_triggered_image: str = Field(default="", alias="lastTriggeredImage")


IMAGE_CHANGE = "ImageChange"


class TriggerTypePayload(ManifestBaseModel):
    type: str

    @property
    def is_image_change(self) -> bool:
        return self.type == IMAGE_CHANGE


class TriggerPolicyPayload(TriggerTypePayload):
    image_change_params: ImageChangeParamsPayload = Field(alias="imageChangeParams")


class ContainerPayload(ManifestBaseModel):
    name: str
    image: str = ""


class MetadataPayload(ManifestBaseModel):
    namespace: str
    name: str
    resource_version: int = Field(default=0, alias="resourceVersion")


class WorkloadSpecPayload(ManifestBaseModel):
    # validated one by one in the translator; non-image policies stay verbatim
    triggers: list[dict[str, Any]] = Field(default_factory=list[dict[str, Any]])
    containers: list[ContainerPayload] = Field(default_factory=list[ContainerPayload])

    @model_validator(mode="after")
    def _unique_container_names(self) -> Self:
        seen: set[str] = set()
        for container in self.containers:
            if container.name in seen:
                raise ValueError(f"Duplicate container name: {container.name}")
            seen.add(container.name)
        return self


class WorkloadManifest(ManifestBaseModel):
    metadata: MetadataPayload
    spec: WorkloadSpecPayload = Field(default_factory=WorkloadSpecPayload)


class TagFixturePayload(ManifestBaseModel):
    namespace: str
    name: str
    reference: str
    resource_version: int = Field(default=0, alias="resourceVersion")


TAG_FIXTURES = TypeAdapter(list[TagFixturePayload])
