"""Recover notice data from the plain-text dump of the web notice form."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from logging import getLogger
from typing import Final

from noticeingest.domain.ingest_pipeline.documents import RecoveredData
from noticeingest.domain.ingest_pipeline.fields import PartyNames, WorkDescriptor

log = getLogger(__name__)

_LABELS: Final[tuple[tuple[str, re.Pattern[str]], ...]] = (
    ("title", re.compile(r"^\s*subject\s*:\s*(?P<value>.*)$", re.IGNORECASE)),
    (
        "sender",
        re.compile(r"^\s*(?:your full legal name|sender)\s*:\s*(?P<value>.*)$", re.IGNORECASE),
    ),
    (
        "principal",
        re.compile(
            r"^\s*(?:name of copyright owner|copyright owner)\s*:\s*(?P<value>.*)$", re.IGNORECASE
        ),
    ),
    ("attorney", re.compile(r"^\s*(?:attorney|law firm)\s*:\s*(?P<value>.*)$", re.IGNORECASE)),
    ("recipient", re.compile(r"^\s*recipient\s*:\s*(?P<value>.*)$", re.IGNORECASE)),
    (
        "work",
        re.compile(r"^\s*description of copyrighted work\s*:\s*(?P<value>.*)$", re.IGNORECASE),
    ),
    ("urls", re.compile(r"^\s*infringing urls?\s*:\s*(?P<value>.*)$", re.IGNORECASE)),
)
_URL_LINE = re.compile(r"^\s*(?:https?://|www\.)\S+", re.IGNORECASE)


@dataclass
class _WorkBuffer:
    title: str | None = None
    urls: list[str] = field(default_factory=list[str])

    def freeze(self) -> WorkDescriptor:
        return WorkDescriptor(title=self.title, url_chunks=tuple(self.urls))


class PlainTextNoticeExtractor:
    """Scan labelled ``Label: value`` lines; the first value for each label wins."""

    name = "plain-text notice form"

    def extract(self, content: bytes) -> RecoveredData:
        text = content.decode("utf-8-sig", errors="replace")
        scalars: dict[str, str] = {}
        works: list[_WorkBuffer] = []
        collecting_urls = False

        for line in text.splitlines():
            label, value = _match_label(line)
            if label is None:
                if collecting_urls and _URL_LINE.match(line):
                    if not works:
                        works.append(_WorkBuffer())
                    works[-1].urls.extend(line.split())
                continue

            collecting_urls = label == "urls"
            if label == "work":
                works.append(_WorkBuffer(title=value or None))
            elif label == "urls":
                if value:
                    if not works:
                        works.append(_WorkBuffer())
                    works[-1].urls.extend(value.split())
            elif value and label not in scalars:
                scalars[label] = value

        recovered = RecoveredData(
            title=scalars.get("title"),
            parties=PartyNames(
                sender=scalars.get("sender"),
                principal=scalars.get("principal"),
                attorney=scalars.get("attorney"),
                recipient=scalars.get("recipient"),
            ),
            works=tuple(work.freeze() for work in works if work.title or work.urls),
        )
        log.debug("Extracted %s", recovered)
        return recovered


def _match_label(line: str) -> tuple[str | None, str]:
    for label, pattern in _LABELS:
        match = pattern.match(line)
        if match is not None:
            return label, match["value"].strip()
    return None, ""
