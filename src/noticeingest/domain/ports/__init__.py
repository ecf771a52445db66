"""Domain port definitions for adapters."""

from __future__ import annotations

from .documents import DocumentFetcher, DocumentRetrievalError, RetrievedDocument
from .persistence import EntityRepository, NoticeRepository, Repository, TopicRepository
from .quarantine import ErrorQuarantine
from .records import RawRecord, RecordSource
from .unit_of_work import NoticeRepositories, NoticeUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "DocumentFetcher",
    "DocumentRetrievalError",
    "EntityRepository",
    "ErrorQuarantine",
    "NoticeRepositories",
    "NoticeRepository",
    "NoticeUnitOfWork",
    "RawRecord",
    "RecordSource",
    "Repository",
    "RepositoryCollection",
    "RetrievedDocument",
    "TopicRepository",
    "UnitOfWork",
]
