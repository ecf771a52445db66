"""Canonical, layout-independent shape every legacy row is mapped into."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from noticeingest.domain.model import UNTITLED, AttachmentKind, RoleKind

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime

    from noticeingest.domain.ingest_pipeline.documents import DocumentExtractor, RecoveredData
    from noticeingest.domain.model import NoticeType


@dataclass(frozen=True, slots=True)
class PartyNames:
    sender: str | None = None
    principal: str | None = None
    attorney: str | None = None
    recipient: str | None = None

    def items(self) -> Iterator[tuple[RoleKind, str]]:
        """Yield populated roles in a stable order."""
        for role, name in (
            (RoleKind.SENDER, self.sender),
            (RoleKind.PRINCIPAL, self.principal),
            (RoleKind.ATTORNEY, self.attorney),
            (RoleKind.RECIPIENT, self.recipient),
        ):
            if name and name.strip():
                yield role, name.strip()

    @property
    def has_submitter(self) -> bool:
        return any(role is not RoleKind.RECIPIENT for role, _ in self.items())

    def fill_from(self, other: PartyNames) -> PartyNames:
        """Return a copy where blank slots take ``other``'s values."""
        return PartyNames(
            sender=self.sender or other.sender,
            principal=self.principal or other.principal,
            attorney=self.attorney or other.attorney,
            recipient=self.recipient or other.recipient,
        )


@dataclass(frozen=True, slots=True)
class WorkDescriptor:
    """One work; its urls may be spread over several cells of stacked urls."""

    title: str | None = None
    url_chunks: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DocumentReference:
    kind: AttachmentKind
    location: str


@dataclass(frozen=True, slots=True)
class NormalizedFields:
    notice_type: NoticeType
    source_format: str
    title: str = UNTITLED
    parties: PartyNames = field(default_factory=PartyNames)
    action_taken: str = ""
    original_notice_id: str | None = None
    submission_id: int | None = None
    date_received: datetime | None = None
    works: tuple[WorkDescriptor, ...] = ()
    documents: tuple[DocumentReference, ...] = ()
    tags: tuple[str, ...] = ()
    topics: tuple[str, ...] = ()
    mark_registration_number: str | None = None
    extractor: DocumentExtractor | None = field(default=None, compare=False, repr=False)

    @property
    def original_documents(self) -> tuple[DocumentReference, ...]:
        return tuple(doc for doc in self.documents if doc.kind is AttachmentKind.ORIGINAL)

    @property
    def needs_recovery(self) -> bool:
        """Row has no usable party/work data but points at an original document."""
        return not self.works and not self.parties.has_submitter and bool(self.original_documents)

    def with_recovered(self, data: RecoveredData) -> NormalizedFields:
        title = self.title
        if data.title and title == UNTITLED:
            title = data.title
        return replace(
            self,
            title=title,
            parties=self.parties.fill_from(data.parties),
            works=self.works or data.works,
        )
