"""Port for setting failed rows aside."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from noticeingest.domain.ports.records import RawRecord


@runtime_checkable
class ErrorQuarantine(Protocol):
    """Captures failing rows. ``capture`` must never raise."""

    @property
    def captured(self) -> int: ...

    def capture(self, record: RawRecord, cause: BaseException | str) -> None: ...

    def close(self) -> None: ...
