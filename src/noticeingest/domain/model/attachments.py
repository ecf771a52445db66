"""Source documents attached to a notice."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from noticeingest.domain.model.entity import IdentifiedEntity
from noticeingest.domain.model.enums import AttachmentKind, EntityType

if TYPE_CHECKING:
    from noticeingest.domain.model.notice import Notice


@dataclass(eq=False, kw_only=True)
class Attachment(IdentifiedEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ATTACHMENT

    kind: AttachmentKind
    location: str
    filename: str
    content: bytes = field(repr=False)
    content_type: str | None = None
    _notice: Notice | None = field(default=None, repr=False)

    @property
    def notice(self) -> Notice | None:
        return self._notice

    @property
    def size(self) -> int:
        return len(self.content)

    def text(self, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding, errors="replace")
