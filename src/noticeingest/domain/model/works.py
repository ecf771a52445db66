"""Works and their infringing locations. Both are owned by a single notice."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Final

from noticeingest.domain.model.entity import IdentifiedEntity
from noticeingest.domain.model.enums import EntityType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from noticeingest.domain.model.notice import Notice

UNKNOWN_WORK_TITLE: Final[str] = "Unknown work"


@dataclass(eq=False, kw_only=True)
class InfringingUrl(IdentifiedEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.INFRINGING_URL

    url: str
    position: int = 0


@dataclass(eq=False, kw_only=True)
class Work(IdentifiedEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.WORK

    title: str
    position: int = 0
    _notice: Notice | None = field(default=None, repr=False)
    _infringing_urls: list[InfringingUrl] = field(
        default_factory=list["InfringingUrl"], repr=False
    )

    @property
    def notice(self) -> Notice | None:
        return self._notice

    @property
    def infringing_urls(self) -> tuple[InfringingUrl, ...]:
        return tuple(self._infringing_urls)

    @property
    def urls(self) -> tuple[str, ...]:
        return tuple(item.url for item in self._infringing_urls)

    def add_infringing_urls(self, urls: Iterable[str]) -> None:
        """Append urls in order; repeats are kept."""
        for url in urls:
            position = len(self._infringing_urls)
            self._infringing_urls.append(InfringingUrl(url=url, position=position))

    @classmethod
    def unknown(cls) -> Work:
        return cls(title=UNKNOWN_WORK_TITLE)
