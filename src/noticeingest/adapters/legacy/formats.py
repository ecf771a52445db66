"""Layout strategies for the legacy export.

Each delivered export mixes several historical layouts. A strategy recognizes
its layout from diagnostic columns and normalizes the row into
``NormalizedFields``. Strategies are tried in ``DEFAULT_FORMATS`` order and the
first match wins, so the more specific layouts come first.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Final

from noticeingest.adapters.legacy.extraction import PlainTextNoticeExtractor
from noticeingest.domain.ingest_pipeline.fields import (
    DocumentReference,
    NormalizedFields,
    PartyNames,
    WorkDescriptor,
)
from noticeingest.domain.ingest_pipeline.works import split_urls
from noticeingest.domain.model import UNTITLED, AttachmentKind, NoticeType

if TYPE_CHECKING:
    from noticeingest.adapters.legacy.schema import LegacyRow
    from noticeingest.domain.ingest_pipeline.documents import DocumentExtractor

GOOGLE: Final[str] = "Google, Inc."
TWITTER: Final[str] = "Twitter, Inc."

_LIST_SEPARATOR = re.compile(r",")
_PATH_SEPARATOR = re.compile(r"[,\r\n]+")


def _same(value: str | None, expected: str) -> bool:
    return value is not None and value.strip().casefold() == expected.casefold()


def _join(*parts: str | None) -> str | None:
    return ", ".join(part for part in parts if part) or None


def _split(value: str | None, separator: re.Pattern[str]) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in separator.split(value) if item.strip())


class LegacyFormat(ABC):
    name: ClassVar[str]
    notice_type: ClassVar[NoticeType]
    default_recipient: ClassVar[str] = GOOGLE
    format_tags: ClassVar[tuple[str, ...]] = ()
    extractor: ClassVar[DocumentExtractor | None] = None

    @abstractmethod
    def matches(self, row: LegacyRow) -> bool: ...

    @abstractmethod
    def parties(self, row: LegacyRow) -> PartyNames: ...

    @abstractmethod
    def works(self, row: LegacyRow) -> tuple[WorkDescriptor, ...]: ...

    def title(self, row: LegacyRow) -> str:
        return row.subject or UNTITLED

    def mark_registration_number(self, row: LegacyRow) -> str | None:
        _ = row
        return None

    def variant(self, row: LegacyRow) -> NoticeType:
        _ = row
        return self.notice_type

    def recipient(self, row: LegacyRow) -> str:
        return row.recipient or self.default_recipient

    def normalize(self, row: LegacyRow) -> NormalizedFields:
        return NormalizedFields(
            notice_type=self.variant(row),
            source_format=self.name,
            title=self.title(row),
            parties=self.parties(row),
            action_taken=row.action_taken or "",
            original_notice_id=row.notice_id,
            submission_id=row.submission_id,
            date_received=row.date,
            works=self.works(row),
            documents=self.documents(row),
            tags=(*_split(row.tags, _LIST_SEPARATOR), *self.format_tags),
            topics=_split(row.category_name, _LIST_SEPARATOR),
            mark_registration_number=self.mark_registration_number(row),
            extractor=self.extractor,
        )

    def documents(self, row: LegacyRow) -> tuple[DocumentReference, ...]:
        originals = _split(row.original_file_path, _PATH_SEPARATOR)
        supporting = _split(row.supporting_file_path, _PATH_SEPARATOR)
        return (
            *(DocumentReference(AttachmentKind.ORIGINAL, location) for location in originals),
            *(DocumentReference(AttachmentKind.SUPPORTING, location) for location in supporting),
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


# YouTube web forms ---------------------------------------------------------------


class _YoutubeFormat(LegacyFormat):
    complaint_type: ClassVar[str]
    format_tags = ("youtube",)

    def matches(self, row: LegacyRow) -> bool:
        return _same(row.complaint_type, self.complaint_type)

    def title(self, row: LegacyRow) -> str:
        _ = row
        return f"Takedown Request regarding {self.complaint_type} Complaint to YouTube"

    def sender(self, row: LegacyRow) -> str | None:
        return row.complainant_name

    def parties(self, row: LegacyRow) -> PartyNames:
        return PartyNames(
            sender=self.sender(row),
            principal=row.rights_owner,
            recipient=self.recipient(row),
        )

    def works(self, row: LegacyRow) -> tuple[WorkDescriptor, ...]:
        if not (row.work_title or row.stacked_urls):
            return ()
        return (WorkDescriptor(title=row.work_title, url_chunks=row.stacked_urls),)


class YoutubeOtherLegalFormat(_YoutubeFormat):
    name = "youtube_other_legal"
    notice_type = NoticeType.OTHER
    complaint_type = "Other Legal"


class YoutubeCounterfeitFormat(_YoutubeFormat):
    name = "youtube_counterfeit"
    # filed as a trademark notice carrying the registration number
    notice_type = NoticeType.TRADEMARK
    complaint_type = "Counterfeit"

    def sender(self, row: LegacyRow) -> str | None:
        return _join(row.complainant_name, row.complainant_relationship, row.complainant_company)

    def mark_registration_number(self, row: LegacyRow) -> str | None:
        return row.mark_registration_number


class YoutubeTrademarkDFormat(_YoutubeFormat):
    name = "youtube_trademark_d"
    notice_type = NoticeType.TRADEMARK
    complaint_type = "Trademark"

    def matches(self, row: LegacyRow) -> bool:
        return super().matches(row) and row.attorney_for is not None

    def sender(self, row: LegacyRow) -> str | None:
        if row.complainant_name is None:
            return None
        return f"{row.complainant_name}, Attorney for {row.attorney_for}"

    def mark_registration_number(self, row: LegacyRow) -> str | None:
        return row.mark_registration_number


class YoutubeTrademarkBFormat(_YoutubeFormat):
    name = "youtube_trademark_b"
    notice_type = NoticeType.TRADEMARK
    complaint_type = "Trademark"

    def matches(self, row: LegacyRow) -> bool:
        return super().matches(row) and row.attorney_for is None

    def sender(self, row: LegacyRow) -> str | None:
        return _join(row.complainant_name, row.complainant_relationship)

    def mark_registration_number(self, row: LegacyRow) -> str | None:
        return row.mark_registration_number


class YoutubeDefamationFormat(_YoutubeFormat):
    name = "youtube_defamation"
    notice_type = NoticeType.DEFAMATION
    complaint_type = "Defamation"


# Twitter and the secondary DMCA export -------------------------------------------


class TwitterFormat(LegacyFormat):
    name = "twitter"
    notice_type = NoticeType.DMCA
    default_recipient = TWITTER
    format_tags = ("twitter",)

    def matches(self, row: LegacyRow) -> bool:
        return row.recipient is not None and "twitter" in row.recipient.casefold()

    def parties(self, row: LegacyRow) -> PartyNames:
        return PartyNames(
            sender=row.sender_name,
            principal=row.principal_name,
            recipient=self.recipient(row),
        )

    def works(self, row: LegacyRow) -> tuple[WorkDescriptor, ...]:
        # one work per infringing url, all sharing the description
        return tuple(
            WorkDescriptor(title=row.works_description, url_chunks=(url,))
            for url in split_urls(row.stacked_urls)
        )


# the secondary export files defamation complaints under "Other"
SECONDARY_VARIANTS: Final[dict[str, NoticeType]] = {
    "dmca": NoticeType.DMCA,
    "other": NoticeType.DEFAMATION,
    "defamation": NoticeType.DEFAMATION,
    "trademark": NoticeType.TRADEMARK,
    "counterfeit": NoticeType.COUNTERFEIT,
}


class SecondaryFormat(LegacyFormat):
    """Google's secondary report; the variant is read from ``Notice_Type``."""

    name = "secondary"
    notice_type = NoticeType.DMCA

    def matches(self, row: LegacyRow) -> bool:
        return _secondary_key(row) in SECONDARY_VARIANTS

    def variant(self, row: LegacyRow) -> NoticeType:
        return SECONDARY_VARIANTS.get(_secondary_key(row), self.notice_type)

    def parties(self, row: LegacyRow) -> PartyNames:
        return PartyNames(
            sender=row.sender_name,
            principal=row.principal_name,
            recipient=self.recipient(row),
        )

    def works(self, row: LegacyRow) -> tuple[WorkDescriptor, ...]:
        if not (row.works_description or row.stacked_urls):
            return ()
        return (WorkDescriptor(title=row.works_description, url_chunks=row.stacked_urls),)

    def mark_registration_number(self, row: LegacyRow) -> str | None:
        return row.mark_registration_number


def _secondary_key(row: LegacyRow) -> str:
    return (row.notice_type or "").strip().casefold()


# Primary web form ----------------------------------------------------------------


class PrimaryFormat(LegacyFormat):
    """The Google web form export; rows may carry nothing but a text dump of the form."""

    name = "primary"
    notice_type = NoticeType.DMCA
    extractor = PlainTextNoticeExtractor()

    def matches(self, row: LegacyRow) -> bool:
        if row.sender_law_firm or row.sender_principal or row.sender_attorney:
            return True
        if row.populated_numbered_works:
            return True
        return any(
            location.lower().endswith(".txt")
            for location in _split(row.original_file_path, _PATH_SEPARATOR)
        )

    def parties(self, row: LegacyRow) -> PartyNames:
        return PartyNames(
            sender=row.sender_law_firm,
            principal=row.sender_principal,
            attorney=row.sender_attorney,
            recipient=self.recipient(row),
        )

    def works(self, row: LegacyRow) -> tuple[WorkDescriptor, ...]:
        return tuple(
            WorkDescriptor(
                title=work.description,
                url_chunks=(work.urls,) if work.urls else (),
            )
            for work in row.populated_numbered_works
        )


DEFAULT_FORMATS: Final[tuple[LegacyFormat, ...]] = (
    YoutubeOtherLegalFormat(),
    YoutubeCounterfeitFormat(),
    YoutubeTrademarkDFormat(),
    YoutubeTrademarkBFormat(),
    YoutubeDefamationFormat(),
    TwitterFormat(),
    SecondaryFormat(),
    PrimaryFormat(),
)
