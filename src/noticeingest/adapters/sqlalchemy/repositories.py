"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from noticeingest.adapters.sqlalchemy.mappings import entity_table, notice_table, topic_table
from noticeingest.domain.model import Entity, Notice, Topic

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.orm import Session

    from noticeingest.domain.model import NoticeType


class SqlAlchemyNoticeRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Notice) -> None:
        self.session.add(entity)

    def exists_with_original_id(self, original_notice_id: str) -> bool:
        stmt = (
            select(notice_table.c.id)
            .where(notice_table.c.original_notice_id == original_notice_id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none() is not None

    def get_by_original_id(self, original_notice_id: str) -> Notice | None:
        stmt = select(Notice).where(notice_table.c.original_notice_id == original_notice_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def count(self, notice_type: NoticeType | None = None) -> int:
        stmt = select(func.count()).select_from(notice_table)
        if notice_type is not None:
            stmt = stmt.where(notice_table.c._notice_type == notice_type.value)  # noqa: SLF001
        return self.session.execute(stmt).scalar_one()

    def list_all(self) -> list[Notice]:
        stmt = select(Notice).order_by(notice_table.c.created_at, notice_table.c.title)
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyNamedRepository[TEntity: Entity | Topic]:
    """Shared lookups for records that are unique by exact name."""

    def __init__(self, session: Session, entity_cls: type[TEntity], table: Table) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = table

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def get_by_name(self, name: str) -> TEntity | None:
        stmt = select(self._entity_cls).where(self._table.c.name == name).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def count(self) -> int:
        stmt = select(func.count()).select_from(self._table)
        return self.session.execute(stmt).scalar_one()


class SqlAlchemyEntityRepository(SqlAlchemyNamedRepository[Entity]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Entity, entity_table)


class SqlAlchemyTopicRepository(SqlAlchemyNamedRepository[Topic]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Topic, topic_table)
