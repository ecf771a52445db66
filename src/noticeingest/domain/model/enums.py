"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    NOTICE = "notice"
    WORK = "work"
    INFRINGING_URL = "infringing_url"
    ENTITY = "entity"
    ENTITY_NOTICE_ROLE = "entity_notice_role"
    TOPIC = "topic"
    ATTACHMENT = "attachment"


class NoticeType(StrEnum):
    """Variant tag of a notice; stored as the polymorphic discriminator."""

    DMCA = "DMCA"
    TRADEMARK = "Trademark"
    DEFAMATION = "Defamation"
    COUNTERFEIT = "Counterfeit"
    OTHER = "Other"


class RoleKind(StrEnum):
    SENDER = "sender"
    PRINCIPAL = "principal"
    ATTORNEY = "attorney"
    RECIPIENT = "recipient"


class AttachmentKind(StrEnum):
    ORIGINAL = "original_document"
    SUPPORTING = "supporting_document"


class EntityKind(StrEnum):
    INDIVIDUAL = "individual"
    ORGANIZATION = "organization"
