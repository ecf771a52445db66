"""Ports for retrieving source documents referenced by a row."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType


@dataclass(frozen=True, slots=True)
class RetrievedDocument:
    location: str
    filename: str
    content: bytes = field(repr=False)
    content_type: str | None = None


class DocumentRetrievalError(RuntimeError):
    """Raised by fetchers when a document cannot be retrieved at all."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"Could not retrieve {location}: {reason}")
        self.location = location
        self.reason = reason


@runtime_checkable
class DocumentFetcher(Protocol):
    """Blocking retrieval of one document; scoped to a batch via ``with``."""

    def fetch(self, location: str) -> RetrievedDocument: ...

    def __enter__(self) -> DocumentFetcher: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool | None: ...
