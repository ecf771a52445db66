"""Pydantic model of one row of a legacy notice export."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Final, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
)

# largest value the signed 64-bit submission_id column holds
MAX_SUBMISSION_ID: Final = 2**63 - 1

_NUMBERED_WORK_COLUMN = re.compile(
    r"^Work_(?P<index>\d+)_(?P<part>Description|URLs)$", re.IGNORECASE
)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def parse_legacy_date(value: str) -> datetime:
    """Parse the date notations seen across exports; naive values are taken as UTC."""

    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)  # noqa: DTZ007
        except ValueError:
            continue
        return parsed.replace(tzinfo=UTC)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValueError(f"unrecognized date {value!r}") from None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class LegacyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NumberedWork(LegacyBaseModel):
    index: int
    description: str | None = None
    urls: str | None = None

    _normalize_text = field_validator("description", "urls", mode="before")(_blank_to_none)


class LegacyRow(LegacyBaseModel):
    # common
    notice_id: str | None = Field(default=None, alias="NoticeID")
    submission_id: int | None = Field(
        default=None, alias="SubmissionID", ge=0, le=MAX_SUBMISSION_ID
    )
    subject: str | None = Field(default=None, alias="Subject")
    date: datetime | None = Field(default=None, alias="Date")
    recipient: str | None = Field(default=None, alias="Recipient")
    action_taken: str | None = Field(default=None, alias="ActionTaken")
    tags: str | None = Field(default=None, alias="Tags")
    category_name: str | None = Field(default=None, alias="CategoryName")
    original_file_path: str | None = Field(default=None, alias="OriginalFilePath")
    supporting_file_path: str | None = Field(default=None, alias="SupportingFilePath")

    # primary web form
    sender_law_firm: str | None = Field(default=None, alias="Sender_LawFirm")
    sender_attorney: str | None = Field(default=None, alias="Sender_Attorney")
    sender_principal: str | None = Field(default=None, alias="Sender_Principal")
    numbered_works: list[NumberedWork] = Field(default_factory=list["NumberedWork"])

    # secondary and twitter
    notice_type: str | None = Field(default=None, alias="Notice_Type")
    sender_name: str | None = Field(default=None, alias="Sender_Name")
    principal_name: str | None = Field(default=None, alias="Principal_Name")
    works_description: str | None = Field(default=None, alias="Works_Description")
    infringing_urls: str | None = Field(default=None, alias="Infringing_URLs")
    infringing_urls_continued: str | None = Field(default=None, alias="Infringing_URLs_Continued")

    # youtube
    complaint_type: str | None = Field(default=None, alias="ComplaintType")
    complainant_name: str | None = Field(default=None, alias="Complainant_Name")
    complainant_relationship: str | None = Field(default=None, alias="Complainant_Relationship")
    complainant_company: str | None = Field(default=None, alias="Complainant_Company")
    rights_owner: str | None = Field(default=None, alias="RightsOwner")
    attorney_for: str | None = Field(default=None, alias="Attorney_For")
    mark_registration_number: str | None = Field(default=None, alias="Mark_Registration_Number")
    work_description: str | None = Field(default=None, alias="Work_Description")

    @model_validator(mode="before")
    @classmethod
    def _collect_numbered_works(cls, value: object) -> object:
        if not isinstance(value, Mapping):
            return value
        mapping_value = cast(Mapping[str, object], value)
        collected: dict[int, dict[str, object]] = {}
        for key, cell in mapping_value.items():
            match = _NUMBERED_WORK_COLUMN.match(key)
            if match is None:
                continue
            index = int(match["index"])
            part = "description" if match["part"].lower() == "description" else "urls"
            collected.setdefault(index, {"index": index})[part] = cell
        if not collected:
            return mapping_value
        data: dict[str, object] = dict(mapping_value)
        data["numbered_works"] = [collected[index] for index in sorted(collected)]
        return data

    _normalize_text = field_validator(
        "notice_id",
        "subject",
        "recipient",
        "action_taken",
        "tags",
        "category_name",
        "original_file_path",
        "supporting_file_path",
        "sender_law_firm",
        "sender_attorney",
        "sender_principal",
        "notice_type",
        "sender_name",
        "principal_name",
        "works_description",
        "infringing_urls",
        "infringing_urls_continued",
        "complaint_type",
        "complainant_name",
        "complainant_relationship",
        "complainant_company",
        "rights_owner",
        "attorney_for",
        "mark_registration_number",
        "work_description",
        mode="before",
    )(_blank_to_none)

    @field_validator("submission_id", mode="before")
    @classmethod
    def _parse_submission_id(cls, value: object) -> object:
        value = _blank_to_none(value)
        if isinstance(value, str):
            return int(value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: object) -> object:
        value = _blank_to_none(value)
        if isinstance(value, str):
            return parse_legacy_date(value)
        return value

    @property
    def populated_numbered_works(self) -> list[NumberedWork]:
        return [work for work in self.numbered_works if work.description or work.urls]

    @property
    def stacked_urls(self) -> tuple[str, ...]:
        return tuple(
            chunk for chunk in (self.infringing_urls, self.infringing_urls_continued) if chunk
        )

    @property
    def work_title(self) -> str | None:
        return self.works_description or self.work_description
