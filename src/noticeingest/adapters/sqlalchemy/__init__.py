"""SQLAlchemy adapter package for notice storage."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyEntityRepository,
    SqlAlchemyNoticeRepository,
    SqlAlchemyTopicRepository,
)
from .unit_of_work import (
    SqlAlchemyNoticeUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyEntityRepository",
    "SqlAlchemyNoticeRepository",
    "SqlAlchemyNoticeUnitOfWork",
    "SqlAlchemyTopicRepository",
    "StartupError",
    "configured_engine",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
