"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from noticeingest.domain.model import Entity, Notice, Topic


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class NoticeRepository(Repository[Notice], Protocol):
    """Persistence contract for notices."""

    def exists_with_original_id(self, original_notice_id: str) -> bool: ...

    def get_by_original_id(self, original_notice_id: str) -> Notice | None: ...

    def count(self) -> int: ...


@runtime_checkable
class NamedRepository[TEntity](Repository[TEntity], Protocol):
    """Repositories for shared records looked up by exact name."""

    def get_by_name(self, name: str) -> TEntity | None: ...


@runtime_checkable
class EntityRepository(NamedRepository[Entity], Protocol):
    """Repository contract for parties."""


@runtime_checkable
class TopicRepository(NamedRepository[Topic], Protocol):
    """Repository contract for topics."""
