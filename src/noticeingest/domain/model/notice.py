"""Notice aggregate and its category variants.

Aggregate root here:
- Notice owns Works (and their InfringingUrls), EntityNoticeRoles and Attachments
- Topics and Entities are shared and only linked from the notice
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Final

from noticeingest.domain.model.entity import IdentifiedEntity
from noticeingest.domain.model.enums import AttachmentKind, EntityType, NoticeType, RoleKind
from noticeingest.domain.model.parties import EntityNoticeRole

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from noticeingest.domain.model.attachments import Attachment
    from noticeingest.domain.model.parties import Entity
    from noticeingest.domain.model.works import Work

UNTITLED: Final[str] = "Untitled"


@dataclass(eq=False, kw_only=True)
class Topic(IdentifiedEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.TOPIC

    name: str


@dataclass(eq=False, kw_only=True)
class Notice(IdentifiedEntity):
    """Shared contract of every notice variant.

    The variant is the concrete class; it is picked once at construction time and
    there is no way to change it afterwards.
    """

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.NOTICE
    NOTICE_TYPE: ClassVar[NoticeType]

    title: str = UNTITLED
    action_taken: str = ""
    original_notice_id: str | None = None
    submission_id: int | None = None
    date_received: datetime | None = None
    tag_list: list[str] = field(default_factory=list[str])

    # Owned children
    _works: list[Work] = field(default_factory=list["Work"], repr=False)
    _roles: list[EntityNoticeRole] = field(default_factory=list[EntityNoticeRole], repr=False)
    _attachments: list[Attachment] = field(default_factory=list["Attachment"], repr=False)
    # Shared links
    _topics: list[Topic] = field(default_factory=list[Topic], repr=False)

    @property
    def notice_type(self) -> NoticeType:
        return self.NOTICE_TYPE

    # Views ------------------------------------------------------------------

    @property
    def works(self) -> tuple[Work, ...]:
        return tuple(self._works)

    @property
    def infringing_urls(self) -> tuple[str, ...]:
        return tuple(url for work in self._works for url in work.urls)

    @property
    def roles(self) -> tuple[EntityNoticeRole, ...]:
        return tuple(self._roles)

    @property
    def entities(self) -> tuple[Entity, ...]:
        seen: list[Entity] = []
        for role in self._roles:
            if all(role.entity is not other for other in seen):
                seen.append(role.entity)
        return tuple(seen)

    @property
    def topics(self) -> tuple[Topic, ...]:
        return tuple(self._topics)

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return tuple(self._attachments)

    @property
    def original_documents(self) -> tuple[Attachment, ...]:
        return tuple(a for a in self._attachments if a.kind == AttachmentKind.ORIGINAL)

    @property
    def supporting_documents(self) -> tuple[Attachment, ...]:
        return tuple(a for a in self._attachments if a.kind == AttachmentKind.SUPPORTING)

    def entity_for(self, role: RoleKind) -> Entity | None:
        for existing in self._roles:
            if existing.role == role:
                return existing.entity
        return None

    def _name_for(self, role: RoleKind) -> str | None:
        entity = self.entity_for(role)
        return entity.name if entity is not None else None

    @property
    def sender_name(self) -> str | None:
        return self._name_for(RoleKind.SENDER)

    @property
    def principal_name(self) -> str | None:
        return self._name_for(RoleKind.PRINCIPAL)

    @property
    def attorney_name(self) -> str | None:
        return self._name_for(RoleKind.ATTORNEY)

    @property
    def recipient_name(self) -> str | None:
        return self._name_for(RoleKind.RECIPIENT)

    # Commands ---------------------------------------------------------------

    def add_work(self, work: Work) -> Work:
        work.position = len(self._works)
        work._notice = self  # noqa: SLF001
        _append_once(self._works, work)
        return work

    def add_role(self, entity: Entity, role: RoleKind) -> EntityNoticeRole:
        if self.entity_for(role) is not None:
            raise ValueError(f"notice already has a {role} role")
        link = EntityNoticeRole(role=role, _entity=entity, _notice=self)
        _append_once(self._roles, link)
        return link

    def add_attachment(self, attachment: Attachment) -> Attachment:
        attachment._notice = self  # noqa: SLF001
        _append_once(self._attachments, attachment)
        return attachment

    def add_topic(self, topic: Topic) -> None:
        if any(existing is topic or existing.name == topic.name for existing in self._topics):
            return
        self._topics.append(topic)

    def add_tags(self, tags: Iterable[str]) -> None:
        merged = list(self.tag_list)
        for tag in tags:
            cleaned = tag.strip()
            if cleaned and cleaned not in merged:
                merged.append(cleaned)
        self.tag_list = merged


@dataclass(eq=False, kw_only=True)
class DMCA(Notice):
    NOTICE_TYPE: ClassVar[NoticeType] = NoticeType.DMCA


@dataclass(eq=False, kw_only=True)
class Trademark(Notice):
    NOTICE_TYPE: ClassVar[NoticeType] = NoticeType.TRADEMARK

    mark_registration_number: str | None = None


@dataclass(eq=False, kw_only=True)
class Counterfeit(Notice):
    NOTICE_TYPE: ClassVar[NoticeType] = NoticeType.COUNTERFEIT

    mark_registration_number: str | None = None


@dataclass(eq=False, kw_only=True)
class Defamation(Notice):
    NOTICE_TYPE: ClassVar[NoticeType] = NoticeType.DEFAMATION


@dataclass(eq=False, kw_only=True)
class Other(Notice):
    NOTICE_TYPE: ClassVar[NoticeType] = NoticeType.OTHER


NOTICE_CLASSES: Final[dict[NoticeType, type[Notice]]] = {
    cls.NOTICE_TYPE: cls for cls in (DMCA, Trademark, Counterfeit, Defamation, Other)
}


def notice_class_for(notice_type: NoticeType) -> type[Notice]:
    return NOTICE_CLASSES[notice_type]


def _append_once[T](items: list[T], item: T) -> None:
    # a mapped back-reference may already have appended the child
    if not any(existing is item for existing in items):
        items.append(item)
