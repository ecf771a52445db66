"""SQLAlchemy mapping metadata for the notice domain model."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import Any, Final, cast

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    func,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from noticeingest.domain.model import (
    DMCA,
    Attachment,
    AttachmentKind,
    Counterfeit,
    Defamation,
    Entity,
    EntityKind,
    EntityNoticeRole,
    InfringingUrl,
    Notice,
    Other,
    RoleKind,
    Topic,
    Trademark,
    Work,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


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


class TagListType(TypeDecorator[list[str]]):
    """Ordered tag list stored as a JSON array."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[str]:
        _ = dialect
        if value is None:
            return []
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return []
        items = cast(list[Any], loaded)
        return [item for item in items if isinstance(item, str)]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Notice aggregate ------------------------------------------------------------

notice_table = Table(
    "notice",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("type", String(32), key="_notice_type", nullable=False),
    Column("title", String, nullable=False),
    Column("action_taken", String, nullable=False, default=""),
    Column("original_notice_id", String, nullable=True),
    Column("submission_id", Integer, nullable=True),
    Column("date_received", UTCDateTime(), nullable=True),
    Column("tag_list", TagListType(), nullable=False),
    Column("mark_registration_number", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    UniqueConstraint("original_notice_id"),
)

work_table = Table(
    "work",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "notice_id", UUIDColumnType, ForeignKey("notice.id", ondelete="CASCADE"), nullable=False
    ),
    Column("title", String, nullable=False),
    Column("position", Integer, nullable=False, default=0),
)

infringing_url_table = Table(
    "infringing_url",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("work_id", UUIDColumnType, ForeignKey("work.id", ondelete="CASCADE"), nullable=False),
    Column("url", String, nullable=False),
    Column("position", Integer, nullable=False, default=0),
)

attachment_table = Table(
    "attachment",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "notice_id", UUIDColumnType, ForeignKey("notice.id", ondelete="CASCADE"), nullable=False
    ),
    Column("kind", Enum(AttachmentKind, native_enum=False), nullable=False),
    Column("location", String, nullable=False),
    Column("filename", String, nullable=False),
    Column("content_type", String, nullable=True),
    Column("content", LargeBinary, nullable=False),
)

# Shared records --------------------------------------------------------------

entity_table = Table(
    "entity",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("kind", Enum(EntityKind, native_enum=False), nullable=True),
    Column("address", String, nullable=True),
    Column("email", String, nullable=True),
    Column("country_code", String(3), nullable=True),
    UniqueConstraint("name"),
)

entity_notice_role_table = Table(
    "entity_notice_role",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "notice_id", UUIDColumnType, ForeignKey("notice.id", ondelete="CASCADE"), nullable=False
    ),
    Column("entity_id", UUIDColumnType, ForeignKey("entity.id"), nullable=False),
    Column("role", Enum(RoleKind, native_enum=False), nullable=False),
    UniqueConstraint("notice_id", "role"),
)

topic_table = Table(
    "topic",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    UniqueConstraint("name"),
)

notice_topic_table = Table(
    "notice_topic",
    mapper_registry.metadata,
    Column(
        "notice_id", UUIDColumnType, ForeignKey("notice.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "topic_id", UUIDColumnType, ForeignKey("topic.id", ondelete="CASCADE"), primary_key=True
    ),
)

NOTICE_VARIANTS: Final[tuple[type[Notice], ...]] = (DMCA, Trademark, Counterfeit, Defamation, Other)
_VARIANTS_WITH_MARK: Final[frozenset[type[Notice]]] = frozenset({Trademark, Counterfeit})


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Entity, entity_table)

    mapper_registry.map_imperatively(Topic, topic_table)

    mapper_registry.map_imperatively(
        Notice,
        notice_table,
        polymorphic_on=notice_table.c._notice_type,  # noqa: SLF001
        properties={
            "_works": relationship(
                Work,
                back_populates="_notice",
                cascade="all, delete-orphan",
                order_by=work_table.c.position,
            ),
            "_roles": relationship(
                EntityNoticeRole,
                back_populates="_notice",
                cascade="all, delete-orphan",
            ),
            "_attachments": relationship(
                Attachment,
                back_populates="_notice",
                cascade="all, delete-orphan",
            ),
            "_topics": relationship(
                Topic,
                secondary=notice_topic_table,
            ),
        },
        exclude_properties={"mark_registration_number"},
    )

    # single-table inheritance; the variant tag is the stored discriminator
    for variant in NOTICE_VARIANTS:
        properties = (
            {"mark_registration_number": notice_table.c.mark_registration_number}
            if variant in _VARIANTS_WITH_MARK
            else {}
        )
        mapper_registry.map_imperatively(
            variant,
            inherits=Notice,
            polymorphic_identity=variant.NOTICE_TYPE.value,
            properties=properties,
        )

    mapper_registry.map_imperatively(
        Work,
        work_table,
        properties={
            "_notice": relationship(
                Notice,
                back_populates="_works",
            ),
            "_infringing_urls": relationship(
                InfringingUrl,
                cascade="all, delete-orphan",
                order_by=infringing_url_table.c.position,
            ),
        },
    )

    mapper_registry.map_imperatively(InfringingUrl, infringing_url_table)

    mapper_registry.map_imperatively(
        EntityNoticeRole,
        entity_notice_role_table,
        properties={
            "_notice": relationship(
                Notice,
                back_populates="_roles",
            ),
            "_entity": relationship(Entity),
        },
    )

    mapper_registry.map_imperatively(
        Attachment,
        attachment_table,
        properties={
            "_notice": relationship(
                Notice,
                back_populates="_attachments",
            ),
        },
    )

    configure_mappers()
    return mapper_registry
