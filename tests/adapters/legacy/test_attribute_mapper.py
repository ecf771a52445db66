from __future__ import annotations

from datetime import UTC, datetime

import pytest

from noticeingest.adapters.legacy import (
    AttributeMapper,
    PlainTextNoticeExtractor,
    PrimaryFormat,
    SecondaryFormat,
    TwitterFormat,
    YoutubeTrademarkBFormat,
    YoutubeTrademarkDFormat,
)
from noticeingest.domain.ingest_pipeline import (
    DocumentReference,
    MappingError,
    PartyNames,
    WorkDescriptor,
)
from noticeingest.domain.model import UNTITLED, AttachmentKind, NoticeType
from tests.helpers.legacy_rows import (
    primary_row,
    raw_record,
    secondary_row,
    twitter_row,
    youtube_row,
)


@pytest.fixture
def mapper() -> AttributeMapper:
    return AttributeMapper()


# Exclusion -------------------------------------------------------------------------


def test_blank_row_is_excluded(mapper: AttributeMapper) -> None:
    assert mapper.exclude(raw_record({"NoticeID": "", "Subject": "   ", "Date": ""}))


def test_header_continuation_row_is_excluded(mapper: AttributeMapper) -> None:
    assert mapper.exclude(
        raw_record({"NoticeID": "NoticeID", "Subject": "Subject", "Recipient": ""})
    )


def test_regular_row_is_not_excluded(mapper: AttributeMapper) -> None:
    assert not mapper.exclude(raw_record(primary_row()))


# Classification --------------------------------------------------------------------


@pytest.mark.parametrize(
    ("complaint_type", "expected"),
    [
        ("Other Legal", NoticeType.OTHER),
        ("counterfeit", NoticeType.TRADEMARK),
        ("TRADEMARK", NoticeType.TRADEMARK),
        ("Defamation", NoticeType.DEFAMATION),
    ],
)
def test_youtube_complaint_types(
    mapper: AttributeMapper, complaint_type: str, expected: NoticeType
) -> None:
    assert mapper.notice_type(raw_record(youtube_row(complaint_type))) is expected


def test_trademark_layout_depends_on_attorney_for(mapper: AttributeMapper) -> None:
    with_attorney = raw_record(youtube_row("Trademark", Attorney_For="Best Example Pest Defense"))
    without_attorney = raw_record(youtube_row("Trademark"))

    assert isinstance(mapper.format_for(with_attorney), YoutubeTrademarkDFormat)
    assert isinstance(mapper.format_for(without_attorney), YoutubeTrademarkBFormat)


def test_other_layouts_are_detected(mapper: AttributeMapper) -> None:
    assert isinstance(mapper.format_for(raw_record(twitter_row())), TwitterFormat)
    assert isinstance(mapper.format_for(raw_record(secondary_row())), SecondaryFormat)
    assert isinstance(mapper.format_for(raw_record(primary_row())), PrimaryFormat)
    assert mapper.notice_type(raw_record(secondary_row("other"))) is NoticeType.DEFAMATION


def test_unknown_layout_is_a_mapping_error(mapper: AttributeMapper) -> None:
    with pytest.raises(MappingError, match="Line 7 matches no known layout"):
        mapper.mapped(raw_record({"NoticeID": "1", "Subject": "?"}, line_number=7))


def test_malformed_cell_is_a_mapping_error(mapper: AttributeMapper) -> None:
    with pytest.raises(MappingError, match="Date"):
        mapper.mapped(raw_record(primary_row(Date="not a date")))


# Per-layout fidelity ---------------------------------------------------------------


def test_primary_row(mapper: AttributeMapper) -> None:
    fields = mapper.mapped(raw_record(primary_row(SupportingFilePath="a.pdf,\nb.pdf")))

    assert fields.notice_type is NoticeType.DMCA
    assert fields.source_format == "primary"
    assert fields.title == "Infringement Notification via Blogger Complaint"
    assert fields.original_notice_id == "1001"
    assert fields.submission_id == 5001
    assert fields.date_received == datetime(2013, 2, 14, 10, 30, tzinfo=UTC)
    assert fields.action_taken == ""
    assert fields.parties == PartyNames(
        sender="JG Wentworth Associates",
        principal="Kundan Singh",
        attorney="John Wentworth",
        recipient="Google, Inc.",
    )
    assert fields.works == (
        WorkDescriptor(
            title="My Book of Poems",
            url_chunks=(
                "http://infringing.example.com/poems\nhttp://infringing.example.com/more-poems",
            ),
        ),
        WorkDescriptor(
            title="My Photographs", url_chunks=("http://infringing.example.com/photos",)
        ),
    )
    assert fields.documents == (
        DocumentReference(AttachmentKind.SUPPORTING, "a.pdf"),
        DocumentReference(AttachmentKind.SUPPORTING, "b.pdf"),
    )
    assert fields.tags == ("blogger", "copyright")
    assert fields.topics == ("Copyright",)
    assert isinstance(fields.extractor, PlainTextNoticeExtractor)


def test_primary_row_without_data_needs_recovery(mapper: AttributeMapper) -> None:
    fields = mapper.mapped(
        raw_record(
            {
                "NoticeID": "1002",
                "OriginalFilePath": "originals/notice.txt",
                "SupportingFilePath": "supporting/exhibit.pdf",
            }
        )
    )

    assert fields.source_format == "primary"
    assert fields.title == UNTITLED
    assert fields.works == ()
    assert fields.parties == PartyNames(recipient="Google, Inc.")
    assert fields.needs_recovery


def test_secondary_row_concatenates_stacked_urls(mapper: AttributeMapper) -> None:
    fields = mapper.mapped(raw_record(secondary_row(ActionTaken="Yes")))

    assert fields.notice_type is NoticeType.DMCA
    assert fields.title == "DMCA (Copyright) Complaint to Google"
    assert fields.action_taken == "Yes"
    assert fields.parties == PartyNames(
        sender="Copyright Enforcement Bureau",
        principal="Acme Records",
        recipient="Google, Inc.",
    )
    assert fields.works == (
        WorkDescriptor(
            title="Acme Records back catalogue",
            url_chunks=(
                "http://a.example.com/1 http://a.example.com/2",
                "http://a.example.com/3\nhttp://a.example.com/4",
            ),
        ),
    )
    assert fields.extractor is None


def test_secondary_other_row(mapper: AttributeMapper) -> None:
    fields = mapper.mapped(
        raw_record(secondary_row("Other", Sender_Name="PeterDancer", Principal_Name="Peter Dancer"))
    )

    assert fields.notice_type is NoticeType.DEFAMATION
    assert fields.source_format == "secondary"
    assert fields.parties.sender == "PeterDancer"
    assert fields.parties.principal == "Peter Dancer"


@pytest.mark.parametrize(
    ("notice_type", "expected"),
    [
        ("DMCA", NoticeType.DMCA),
        (" defamation ", NoticeType.DEFAMATION),
        ("Trademark", NoticeType.TRADEMARK),
        ("Counterfeit", NoticeType.COUNTERFEIT),
    ],
)
def test_secondary_variant_follows_notice_type_column(
    mapper: AttributeMapper, notice_type: str, expected: NoticeType
) -> None:
    fields = mapper.mapped(raw_record(secondary_row(notice_type, Mark_Registration_Number="R-9")))

    assert fields.notice_type is expected
    assert fields.mark_registration_number == "R-9"


def test_secondary_row_with_unknown_notice_type_matches_nothing(mapper: AttributeMapper) -> None:
    with pytest.raises(MappingError, match="matches no known layout"):
        mapper.mapped(raw_record(secondary_row("Patent")))


def test_twitter_row_has_one_work_per_url(mapper: AttributeMapper) -> None:
    fields = mapper.mapped(raw_record(twitter_row(Tags="photo")))

    assert fields.notice_type is NoticeType.DMCA
    assert fields.parties == PartyNames(
        sender="Rights Agency", principal="Famous Photographer", recipient="Twitter"
    )
    assert fields.works == (
        WorkDescriptor(title="Portrait series", url_chunks=("https://twitter.com/a/status/1",)),
        WorkDescriptor(title="Portrait series", url_chunks=("https://twitter.com/b/status/2",)),
    )
    assert fields.tags == ("photo", "twitter")
    assert fields.submission_id is None


def test_youtube_other_legal_row(mapper: AttributeMapper) -> None:
    fields = mapper.mapped(raw_record(youtube_row("Other Legal", Complainant_Name="PeterDancer")))

    assert fields.title == "Takedown Request regarding Other Legal Complaint to YouTube"
    assert fields.parties == PartyNames(
        sender="PeterDancer", principal="Rights Owner Ltd.", recipient="Google, Inc."
    )
    assert fields.tags == ("youtube",)
    assert fields.works == (
        WorkDescriptor(
            title="A video about something",
            url_chunks=(
                "https://www.youtube.com/watch?v=abc\nhttps://www.youtube.com/watch?v=def",
            ),
        ),
    )


def test_youtube_counterfeit_row(mapper: AttributeMapper) -> None:
    fields = mapper.mapped(
        raw_record(
            youtube_row(
                "Counterfeit",
                Complainant_Name="Adelaid Bourbou",
                Complainant_Relationship="Internet Unit",
                Complainant_Company="The Federation",
                RightsOwner="Humboldt SA, Genève",
                Mark_Registration_Number="12345",
            )
        )
    )

    assert fields.notice_type is NoticeType.TRADEMARK
    assert fields.title == "Takedown Request regarding Counterfeit Complaint to YouTube"
    assert fields.parties.sender == "Adelaid Bourbou, Internet Unit, The Federation"
    assert fields.parties.principal == "Humboldt SA, Genève"
    assert fields.mark_registration_number == "12345"


def test_youtube_trademark_rows(mapper: AttributeMapper) -> None:
    represented = mapper.mapped(
        raw_record(
            youtube_row(
                "Trademark",
                Complainant_Name="Jonathan Clucker Rebar",
                Attorney_For="Best Example Pest Defense, Inc.",
                Mark_Registration_Number="TM-1",
            )
        )
    )
    direct = mapper.mapped(
        raw_record(
            youtube_row(
                "Trademark",
                Complainant_Name="Tracy Papagallo",
                Complainant_Relationship="outside counsel",
            )
        )
    )

    assert represented.parties.sender == (
        "Jonathan Clucker Rebar, Attorney for Best Example Pest Defense, Inc."
    )
    assert represented.mark_registration_number == "TM-1"
    assert direct.parties.sender == "Tracy Papagallo, outside counsel"
    assert direct.title == "Takedown Request regarding Trademark Complaint to YouTube"


def test_youtube_defamation_row(mapper: AttributeMapper) -> None:
    fields = mapper.mapped(
        raw_record(youtube_row("Defamation", Complainant_Name="REDACTED", RightsOwner="REDACTED"))
    )

    assert fields.notice_type is NoticeType.DEFAMATION
    assert fields.parties.sender == fields.parties.principal == "REDACTED"
    assert fields.mark_registration_number is None


def test_explicit_recipient_overrides_layout_default(mapper: AttributeMapper) -> None:
    fields = mapper.mapped(raw_record(secondary_row(Recipient="YouTube, LLC")))

    assert fields.parties.recipient == "YouTube, LLC"


def test_missing_recipient_uses_layout_default(mapper: AttributeMapper) -> None:
    fields = mapper.mapped(raw_record(secondary_row(Recipient="")))

    assert fields.parties.recipient == "Google, Inc."
