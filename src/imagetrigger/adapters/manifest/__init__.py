"""Workload manifest (JSON) adapter."""

from __future__ import annotations

from .schema import TagFixturePayload, WorkloadManifest
from .translator import (
    dump_containers,
    dump_triggers,
    dump_workload,
    parse_containers,
    parse_tag_fixtures,
    parse_triggers,
    parse_workload,
)

__all__ = [
    "TagFixturePayload",
    "WorkloadManifest",
    "dump_containers",
    "dump_triggers",
    "dump_workload",
    "parse_containers",
    "parse_tag_fixtures",
    "parse_triggers",
    "parse_workload",
]
