"""Builders for legacy export rows and CSV files used across tests."""

from __future__ import annotations

import csv
from typing import TYPE_CHECKING

from noticeingest.domain.ports.records import RawRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from pathlib import Path

COMMON_COLUMNS: tuple[str, ...] = (
    "NoticeID",
    "SubmissionID",
    "Subject",
    "Date",
    "Recipient",
    "ActionTaken",
    "Tags",
    "CategoryName",
    "OriginalFilePath",
    "SupportingFilePath",
)


def primary_row(**overrides: str) -> dict[str, str]:
    row = {
        "NoticeID": "1001",
        "SubmissionID": "5001",
        "Subject": "Infringement Notification via Blogger Complaint",
        "Date": "2013-02-14 10:30:00",
        "Recipient": "Google, Inc.",
        "Sender_LawFirm": "JG Wentworth Associates",
        "Sender_Attorney": "John Wentworth",
        "Sender_Principal": "Kundan Singh",
        "Work_1_Description": "My Book of Poems",
        "Work_1_URLs": (
            "http://infringing.example.com/poems\nhttp://infringing.example.com/more-poems"
        ),
        "Work_2_Description": "My Photographs",
        "Work_2_URLs": "http://infringing.example.com/photos",
        "Tags": "blogger, copyright",
        "CategoryName": "Copyright",
    }
    row.update(overrides)
    return row


def secondary_row(notice_type: str = "DMCA", **overrides: str) -> dict[str, str]:
    row = {
        "NoticeID": "2001",
        "Notice_Type": notice_type,
        "Subject": "DMCA (Copyright) Complaint to Google",
        "Date": "03/15/2013 14:05",
        "Recipient": "Google, Inc.",
        "Sender_Name": "Copyright Enforcement Bureau",
        "Principal_Name": "Acme Records",
        "Works_Description": "Acme Records back catalogue",
        "Infringing_URLs": "http://a.example.com/1 http://a.example.com/2",
        "Infringing_URLs_Continued": "http://a.example.com/3\nhttp://a.example.com/4",
    }
    row.update(overrides)
    return row


def twitter_row(**overrides: str) -> dict[str, str]:
    row = {
        "NoticeID": "3001",
        "Subject": "DMCA notice to Twitter",
        "Date": "2014-06-01",
        "Recipient": "Twitter",
        "Sender_Name": "Rights Agency",
        "Principal_Name": "Famous Photographer",
        "Works_Description": "Portrait series",
        "Infringing_URLs": "https://twitter.com/a/status/1\nhttps://twitter.com/b/status/2",
    }
    row.update(overrides)
    return row


def youtube_row(complaint_type: str, **overrides: str) -> dict[str, str]:
    row = {
        "NoticeID": "4001",
        "ComplaintType": complaint_type,
        "Date": "2015-09-09 08:00:00",
        "Complainant_Name": "Jane Complainant",
        "RightsOwner": "Rights Owner Ltd.",
        "Work_Description": "A video about something",
        "Infringing_URLs": (
            "https://www.youtube.com/watch?v=abc\nhttps://www.youtube.com/watch?v=def"
        ),
    }
    row.update(overrides)
    return row


def raw_record(values: Mapping[str, str], *, line_number: int = 2) -> RawRecord:
    return RawRecord(values=dict(values), line_number=line_number)


def write_csv(
    path: Path,
    rows: Iterable[Mapping[str, str]],
    *,
    columns: Sequence[str] | None = None,
) -> Path:
    """Write rows under a header that is the union of their keys."""

    materialized = list(rows)
    header: list[str] = list(columns or ())
    if not header:
        for row in materialized:
            for key in row:
                if key not in header:
                    header.append(key)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=header, restval="")
        writer.writeheader()
        for row in materialized:
            writer.writerow(row)
    return path
