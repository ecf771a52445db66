"""SQLAlchemy-backed unit of work for notice imports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from noticeingest.adapters.sqlalchemy.mappings import start_mappers
from noticeingest.adapters.sqlalchemy.migrations import upgrade_head
from noticeingest.adapters.sqlalchemy.repositories import (
    SqlAlchemyEntityRepository,
    SqlAlchemyNoticeRepository,
    SqlAlchemyTopicRepository,
)
from noticeingest.config import get_database_uri
from noticeingest.domain.ingest_pipeline.errors import PersistenceRejection
from noticeingest.domain.ports.unit_of_work import NoticeRepositories, RepositoryCollection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call noticeingest.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            # rows are assembled in memory and flushed once, on commit
            self._session_factory = sessionmaker(
                bind=self._engine, expire_on_commit=False, autoflush=False
            )
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, schema, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_engine(database_uri or get_database_uri(), future=True)
    start_mappers()
    upgrade_head(engine=resolved_engine)
    log.info("Database ready at %s", resolved_engine.url.render_as_string(hide_password=True))

    _STATE.engine = resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        # anything not committed by now is discarded
        self.rollback()
        self.session.close()
        self.session = None
        if isinstance(exc_value, SQLAlchemyError):
            # queries inside the row surface the same way a refused commit does
            raise _rejection(exc_value) from exc_value
        return False

    def commit(self) -> None:
        """Flush and commit; a refusal by the database becomes ``PersistenceRejection``."""

        try:
            self.session.commit()
        except (SQLAlchemyError, OverflowError) as exc:
            # sqlite raises a bare OverflowError for integers past 64 bits
            self.session.rollback()
            raise _rejection(exc) from exc

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


def _rejection(exc: BaseException) -> PersistenceRejection:
    return PersistenceRejection(f"Database rejected the notice: {type(exc).__name__}: {exc}")


class SqlAlchemyNoticeUnitOfWork(BaseSqlAlchemyUnitOfWork[NoticeRepositories]):
    """Unit of work scoped to one imported row."""

    def _build_repositories(self, session: Session) -> NoticeRepositories:
        return NoticeRepositories(
            notices=SqlAlchemyNoticeRepository(session),
            entities=SqlAlchemyEntityRepository(session),
            topics=SqlAlchemyTopicRepository(session),
        )
