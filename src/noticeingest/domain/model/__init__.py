"""Public domain model surface."""

from __future__ import annotations

from noticeingest.domain.model.attachments import Attachment
from noticeingest.domain.model.entity import IdentifiedEntity
from noticeingest.domain.model.enums import (
    AttachmentKind,
    EntityKind,
    EntityType,
    NoticeType,
    RoleKind,
)
from noticeingest.domain.model.notice import (
    DMCA,
    NOTICE_CLASSES,
    UNTITLED,
    Counterfeit,
    Defamation,
    Notice,
    Other,
    Topic,
    Trademark,
    notice_class_for,
)
from noticeingest.domain.model.parties import Entity, EntityNoticeRole
from noticeingest.domain.model.works import UNKNOWN_WORK_TITLE, InfringingUrl, Work

__all__ = [  # noqa: RUF022
    # base
    "IdentifiedEntity",
    # notices
    "Notice",
    "DMCA",
    "Trademark",
    "Counterfeit",
    "Defamation",
    "Other",
    "NOTICE_CLASSES",
    "UNTITLED",
    "notice_class_for",
    "Topic",
    # parties
    "Entity",
    "EntityNoticeRole",
    # works
    "Work",
    "InfringingUrl",
    "UNKNOWN_WORK_TITLE",
    # attachments
    "Attachment",
    # enums
    "AttachmentKind",
    "EntityKind",
    "EntityType",
    "NoticeType",
    "RoleKind",
]
