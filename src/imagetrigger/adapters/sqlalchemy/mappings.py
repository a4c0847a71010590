"""SQLAlchemy table metadata for stored workloads.

Triggers (policies of every type) and containers are stored as JSON lists in
manifest form so their order survives a round trip.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
)

from imagetrigger.adapters.manifest import (
    dump_containers,
    dump_triggers,
    parse_containers,
    parse_triggers,
)
from imagetrigger.domain.model import Workload

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.engine import Engine


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

workload_table = Table(
    "workload",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("namespace", String(253), nullable=False),
    Column("name", String(253), nullable=False),
    Column("resource_version", Integer, nullable=False),
    Column("triggers", JSON, nullable=False),
    Column("containers", JSON, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False),
    UniqueConstraint("namespace", "name"),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)


def workload_values(workload: Workload) -> dict[str, object]:
    return {
        "namespace": workload.namespace,
        "name": workload.name,
        "resource_version": workload.resource_version,
        "triggers": dump_triggers(workload.triggers, workload.opaque_triggers),
        "containers": dump_containers(workload.containers),
        "updated_at": datetime.now(UTC),
    }


def workload_from_row(row: Mapping[str, Any]) -> Workload:
    triggers, opaque_triggers = parse_triggers(cast(list[dict[str, object]], row["triggers"]))
    return Workload(
        namespace=row["namespace"],
        name=row["name"],
        resource_version=row["resource_version"],
        triggers=triggers,
        opaque_triggers=opaque_triggers,
        containers=parse_containers(cast(list[object], row["containers"])),
    )
