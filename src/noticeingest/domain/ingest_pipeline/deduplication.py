"""Cross-run deduplication on the external notice identifier."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from noticeingest.domain.ports.persistence import NoticeRepository


class DedupGate:
    """Answers whether a notice with a given ``original_notice_id`` is already stored."""

    def __init__(self, notices: NoticeRepository) -> None:
        self._notices = notices

    def exists(self, original_notice_id: str | None) -> bool:
        # rows without an identifier are never deduplicated
        if original_notice_id is None or not original_notice_id.strip():
            return False
        return self._notices.exists_with_original_id(original_notice_id.strip())
