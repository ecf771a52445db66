"""Ports for reading raw rows out of a delivered export."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


@dataclass(frozen=True, slots=True)
class RawRecord:
    """An untransformed row, kept verbatim for quarantine reporting."""

    values: Mapping[str, str]
    line_number: int
    columns: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        if not self.columns:
            object.__setattr__(self, "columns", tuple(self.values))

    def get(self, column: str) -> str | None:
        return self.values.get(column)


@runtime_checkable
class RecordSource(Protocol):
    """Lazy, forward-only sequence of raw records.

    Implementations raise ``SourceOpenError`` when the underlying resource cannot be
    opened; that failure is never row-scoped.
    """

    @property
    def name(self) -> str: ...

    def records(self) -> Iterator[RawRecord]: ...
