"""SQLAlchemy-backed unit of work for workloads.

``startup()`` binds the adapter to one engine per process and creates the
schema; every ``SqlAlchemyUnitOfWork`` then opens its own session on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from imagetrigger.adapters.sqlalchemy.mappings import create_all_tables
from imagetrigger.adapters.sqlalchemy.repositories import SqlAlchemyWorkloadRepository
from imagetrigger.config.storage import get_database_config
from imagetrigger.domain.ports.unit_of_work import WorkloadRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the workload store is used before ``startup()`` or started twice."""


@dataclass(slots=True)
class _StoreState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            None if engine is None else sessionmaker(bind=engine, expire_on_commit=False)
        )

    def open_session(self) -> Session:
        if self.sessions is None:
            raise StartupError(
                "Workload store not initialised; call "
                "imagetrigger.adapters.sqlalchemy.startup() first."
            )
        return self.sessions()


_STATE = _StoreState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the workload store to ``engine`` (or a new one) and create its tables."""

    if _STATE.engine is not None and not force:
        raise StartupError("Workload store already initialised; pass force=True to rebind.")

    if engine is None:
        config = get_database_config()
        engine = create_engine(database_uri or config.uri, echo=config.echo, future=True)
    create_all_tables(engine)
    if _STATE.engine is not None and _STATE.engine is not engine:
        _STATE.engine.dispose()
    _STATE.bind(engine)
    log.debug("Workload store bound to %s", engine.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the engine and unbind the store."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.bind(None)


class SqlAlchemyUnitOfWork:
    """One session, with the workload repository bound to it, per ``with`` block.

    Leaving the block without ``commit()`` discards pending writes; leaving it
    through an exception rolls back explicitly and re-raises.
    """

    def __init__(self) -> None:
        if not is_started():
            raise StartupError(
                "Workload store not initialised; call "
                "imagetrigger.adapters.sqlalchemy.startup() first."
            )
        self._session: Session | None = None
        self._repositories: WorkloadRepositories | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        self._session = _STATE.open_session()
        self._repositories = WorkloadRepositories(
            workloads=SqlAlchemyWorkloadRepository(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        if exc_type is not None:
            session.rollback()
        session.close()
        self._session = None
        self._repositories = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> WorkloadRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not open")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not open")
        return self._session


if TYPE_CHECKING:
    from imagetrigger.domain.ports.unit_of_work import WorkloadUnitOfWork

    def _uow_check() -> WorkloadUnitOfWork:
        return SqlAlchemyUnitOfWork()
