"""Translate between manifest payloads and domain workloads."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from imagetrigger.domain.model import ImageChangeTrigger, OpaqueTrigger, TagReference, Workload

from .schema import (
    IMAGE_CHANGE,
    TAG_FIXTURES,
    ContainerPayload,
    ImageChangeParamsPayload,
    MetadataPayload,
    ObjectReferencePayload,
    TriggerPolicyPayload,
    TriggerTypePayload,
    WorkloadManifest,
    WorkloadSpecPayload,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

ParsedTriggers: TypeAlias = tuple[tuple[ImageChangeTrigger, ...], tuple[OpaqueTrigger, ...]]


def parse_workload(payload: object) -> Workload:
    """Validate a manifest payload and build the workload it describes."""

    manifest = WorkloadManifest.model_validate(payload)
    triggers, opaque_triggers = parse_triggers(manifest.spec.triggers)
    return Workload(
        namespace=manifest.metadata.namespace,
        name=manifest.metadata.name,
        resource_version=manifest.metadata.resource_version,
        triggers=triggers,
        opaque_triggers=opaque_triggers,
        containers={container.name: container.image for container in manifest.spec.containers},
    )


def parse_triggers(policies: Iterable[Mapping[str, object]]) -> ParsedTriggers:
    """Split trigger policies into image-change triggers and opaque policies.

    Policies whose ``type`` is not ``ImageChange`` are kept verbatim together
    with their position, even if they carry ``imageChangeParams``.
    """

    triggers: list[ImageChangeTrigger] = []
    opaque: list[OpaqueTrigger] = []
    for position, policy in enumerate(policies):
        if not TriggerTypePayload.model_validate(policy).is_image_change:
            opaque.append(OpaqueTrigger(position=position, payload=dict(policy)))
            continue
        params = TriggerPolicyPayload.model_validate(policy).image_change_params
        triggers.append(
            ImageChangeTrigger(
                automatic=params.automatic,
                source=TagReference(
                    kind=params.from_.kind,
                    namespace=params.from_.namespace,
                    name=params.from_.name,
                ),
                container_names=tuple(params.container_names),
                last_triggered_image=params.last_triggered_image,
            )
        )
    return tuple(triggers), tuple(opaque)


def dump_workload(workload: Workload) -> dict[str, object]:
    """Return the manifest payload for ``workload`` (JSON-compatible)."""

    manifest = WorkloadManifest(
        metadata=MetadataPayload(
            namespace=workload.namespace,
            name=workload.name,
            resource_version=workload.resource_version,
        ),
        spec=WorkloadSpecPayload(
            triggers=dump_triggers(workload.triggers, workload.opaque_triggers),
            containers=[
                ContainerPayload(name=name, image=image)
                for name, image in workload.containers.items()
            ],
        ),
    )
    return manifest.model_dump(mode="json", by_alias=True)


def dump_triggers(
    triggers: Iterable[ImageChangeTrigger],
    opaque_triggers: Iterable[OpaqueTrigger] = (),
) -> list[dict[str, object]]:
    """Return the full trigger policy list, opaque policies back at their positions."""

    policies: list[dict[str, object]] = [
        _trigger_policy(trigger).model_dump(mode="json", by_alias=True) for trigger in triggers
    ]
    for opaque in sorted(opaque_triggers, key=lambda item: item.position):
        policies.insert(opaque.position, dict(opaque.payload))
    return policies


def dump_containers(containers: Mapping[str, str]) -> list[dict[str, str]]:
    return [{"name": name, "image": image} for name, image in containers.items()]


def parse_containers(payload: Iterable[object]) -> dict[str, str]:
    containers = [ContainerPayload.model_validate(item) for item in payload]
    return {container.name: container.image for container in containers}


def parse_tag_fixtures(payload: object) -> list[tuple[str, str, str, int]]:
    """Validate a tag fixture list into ``(namespace, name, reference, version)`` rows."""

    return [
        (fixture.namespace, fixture.name, fixture.reference, fixture.resource_version)
        for fixture in TAG_FIXTURES.validate_python(payload)
    ]


def _trigger_policy(trigger: ImageChangeTrigger) -> TriggerPolicyPayload:
    return TriggerPolicyPayload(
        type=IMAGE_CHANGE,
        image_change_params=ImageChangeParamsPayload(
            automatic=trigger.automatic,
            from_=ObjectReferencePayload(
                kind=trigger.source.kind,
                namespace=trigger.source.namespace,
                name=trigger.source.name,
            ),
            container_names=list(trigger.container_names),
            last_triggered_image=trigger.last_triggered_image,
        )
    )
