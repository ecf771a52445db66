from __future__ import annotations

import pytest

from noticeingest.domain.model import (
    DMCA,
    UNKNOWN_WORK_TITLE,
    UNTITLED,
    Attachment,
    AttachmentKind,
    Counterfeit,
    Entity,
    EntityType,
    NoticeType,
    RoleKind,
    Topic,
    Trademark,
    Work,
    notice_class_for,
)


def test_notice_defaults() -> None:
    notice = DMCA()

    assert notice.title == UNTITLED
    assert notice.action_taken == ""
    assert notice.notice_type is NoticeType.DMCA
    assert notice.entity_type is EntityType.NOTICE
    assert notice.works == ()
    assert notice.roles == ()
    assert notice.tag_list == []


def test_notice_class_for_every_variant() -> None:
    assert notice_class_for(NoticeType.TRADEMARK) is Trademark
    assert notice_class_for(NoticeType.COUNTERFEIT) is Counterfeit
    assert {notice_class_for(kind).NOTICE_TYPE for kind in NoticeType} == set(NoticeType)


def test_add_work_assigns_positions_and_owner() -> None:
    notice = DMCA(title="Example")
    first = notice.add_work(Work(title="First"))
    second = notice.add_work(Work(title="Second"))

    assert notice.works == (first, second)
    assert (first.position, second.position) == (0, 1)
    assert first.notice is notice


def test_work_keeps_repeated_urls_in_order() -> None:
    work = Work(title="Stacked")
    work.add_infringing_urls(["http://a", "http://b", "http://a"])

    assert work.urls == ("http://a", "http://b", "http://a")
    assert [item.position for item in work.infringing_urls] == [0, 1, 2]


def test_unknown_work_placeholder() -> None:
    assert Work.unknown().title == UNKNOWN_WORK_TITLE


def test_one_entity_may_hold_several_roles() -> None:
    notice = DMCA()
    entity = Entity(name="Peter Dancer")

    notice.add_role(entity, RoleKind.SENDER)
    notice.add_role(entity, RoleKind.PRINCIPAL)

    assert len(notice.roles) == 2
    assert notice.entities == (entity,)
    assert notice.sender_name == "Peter Dancer"
    assert notice.principal_name == "Peter Dancer"
    assert notice.attorney_name is None


def test_role_kind_is_unique_per_notice() -> None:
    notice = DMCA()
    notice.add_role(Entity(name="First Sender"), RoleKind.SENDER)

    with pytest.raises(ValueError, match="sender"):
        notice.add_role(Entity(name="Second Sender"), RoleKind.SENDER)

    assert notice.sender_name == "First Sender"


def test_attachments_are_split_by_kind() -> None:
    notice = DMCA()
    original = notice.add_attachment(
        Attachment(
            kind=AttachmentKind.ORIGINAL,
            location="notice.txt",
            filename="notice.txt",
            content=b"Subject: hello",
        )
    )
    supporting = notice.add_attachment(
        Attachment(
            kind=AttachmentKind.SUPPORTING,
            location="evidence.pdf",
            filename="evidence.pdf",
            content=b"%PDF",
        )
    )

    assert notice.original_documents == (original,)
    assert notice.supporting_documents == (supporting,)
    assert original.notice is notice
    assert original.size == len(b"Subject: hello")
    assert original.text() == "Subject: hello"


def test_topics_and_tags_are_deduplicated() -> None:
    notice = DMCA()
    copyright_topic = Topic(name="Copyright")

    notice.add_topic(copyright_topic)
    notice.add_topic(Topic(name="Copyright"))
    notice.add_tags(["youtube", " blogger ", "youtube", ""])
    notice.add_tags(["blogger", "twitter"])

    assert notice.topics == (copyright_topic,)
    assert notice.tag_list == ["youtube", "blogger", "twitter"]


def test_mark_variants_carry_registration_number() -> None:
    trademark = Trademark(mark_registration_number="TM-123")
    counterfeit = Counterfeit(mark_registration_number="CF-9")

    assert trademark.mark_registration_number == "TM-123"
    assert counterfeit.mark_registration_number == "CF-9"
