"""Attach referenced source documents and recover row data from them.

Retrieval is delegated to a ``DocumentFetcher``; this module only decides where a
reference points, how a failed retrieval is treated and how extracted content is
merged back into the normalized fields. Extraction itself is a pluggable
``DocumentExtractor`` chosen by the row's layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from urllib.parse import urlparse

from noticeingest.domain.ingest_pipeline.errors import AttachmentError, MappingError
from noticeingest.domain.ingest_pipeline.fields import PartyNames, WorkDescriptor
from noticeingest.domain.model import Attachment, AttachmentKind
from noticeingest.domain.ports.documents import DocumentRetrievalError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from noticeingest.domain.ingest_pipeline.context import ImportRunContext
    from noticeingest.domain.ingest_pipeline.fields import DocumentReference, NormalizedFields
    from noticeingest.domain.model import Notice
    from noticeingest.domain.ports.documents import DocumentFetcher

log = getLogger(__name__)

_REMOTE_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True, slots=True)
class RecoveredData:
    title: str | None = None
    parties: PartyNames = PartyNames()
    works: tuple[WorkDescriptor, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.works or any(self.parties.items()))

    def merged(self, other: RecoveredData) -> RecoveredData:
        """Keep values already found; fill the rest from ``other``."""
        return RecoveredData(
            title=self.title or other.title,
            parties=self.parties.fill_from(other.parties),
            works=self.works or other.works,
        )


@runtime_checkable
class DocumentExtractor(Protocol):
    """Best-effort extraction of notice data from unstructured document content."""

    name: str

    def extract(self, content: bytes) -> RecoveredData: ...


def resolve_location(location: str, documents_dir: Path | None) -> str:
    """Return ``location`` as an absolute path or an untouched remote URL."""

    if urlparse(location).scheme.lower() in _REMOTE_SCHEMES:
        return location
    path = Path(location).expanduser()
    if not path.is_absolute() and documents_dir is not None:
        path = documents_dir / path
    return str(path)


class DocumentAttacher:
    def __init__(self, fetcher: DocumentFetcher) -> None:
        self._fetcher = fetcher

    def attach(
        self,
        notice: Notice,
        references: Iterable[DocumentReference],
        *,
        context: ImportRunContext | None = None,
        tolerate_missing_supporting: bool = False,
    ) -> list[Attachment]:
        documents_dir = context.documents_dir if context is not None else None
        attached: list[Attachment] = []
        for reference in references:
            location = resolve_location(reference.location, documents_dir)
            try:
                document = self._fetcher.fetch(location)
            except DocumentRetrievalError as exc:
                if tolerate_missing_supporting and reference.kind == AttachmentKind.SUPPORTING:
                    log.warning("Skipping supporting document during recovery: %s", exc)
                    continue
                raise AttachmentError(str(exc), location=reference.location) from exc

            attachment = Attachment(
                kind=reference.kind,
                location=reference.location,
                filename=document.filename,
                content=document.content,
                content_type=document.content_type,
            )
            attached.append(notice.add_attachment(attachment))
        return attached

    def recover(
        self, fields: NormalizedFields, attachments: Sequence[Attachment]
    ) -> NormalizedFields:
        """Fill missing title, parties and works from the original documents."""

        extractor = fields.extractor
        if extractor is None:
            raise MappingError(
                f"{fields.source_format} row has no usable data and no document extractor"
            )

        recovered = RecoveredData()
        for attachment in attachments:
            if attachment.kind != AttachmentKind.ORIGINAL:
                continue
            try:
                data = extractor.extract(attachment.content)
            except (ValueError, UnicodeError) as exc:
                log.warning(
                    "Extractor %s failed on %s: %s", extractor.name, attachment.location, exc
                )
                continue
            recovered = recovered.merged(data)

        if recovered.is_empty:
            raise MappingError("Nothing could be recovered from the original documents")

        log.info(
            "Recovered notice data from documents with %s: title=%r, works=%d",
            extractor.name,
            recovered.title,
            len(recovered.works),
        )
        return fields.with_recovered(recovered)
