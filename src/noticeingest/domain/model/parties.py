"""Parties on a notice: shared entities and the per-notice role join."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from noticeingest.domain.model.entity import IdentifiedEntity
from noticeingest.domain.model.enums import EntityType

if TYPE_CHECKING:
    from noticeingest.domain.model.enums import EntityKind, RoleKind
    from noticeingest.domain.model.notice import Notice


@dataclass(eq=False, kw_only=True)
class Entity(IdentifiedEntity):
    """A named person or organization. May take part in many notices."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ENTITY

    name: str
    kind: EntityKind | None = None
    address: str | None = None
    email: str | None = None
    country_code: str | None = None


@dataclass(eq=False, kw_only=True)
class EntityNoticeRole(IdentifiedEntity):
    """Join record owned by the notice; deleting it never touches the entity."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ENTITY_NOTICE_ROLE

    role: RoleKind
    _entity: Entity = field(repr=False)
    _notice: Notice = field(repr=False)

    @property
    def entity(self) -> Entity:
        return self._entity

    @property
    def notice(self) -> Notice:
        return self._notice
