"""Assemble a notice's works from normalized descriptors."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING, Final

from noticeingest.domain.ingest_pipeline.errors import MappingError
from noticeingest.domain.model import UNKNOWN_WORK_TITLE, Work

if TYPE_CHECKING:
    from collections.abc import Iterable

    from noticeingest.domain.ingest_pipeline.fields import WorkDescriptor
    from noticeingest.domain.model import Notice

log = getLogger(__name__)

_URL_SEPARATOR: Final[re.Pattern[str]] = re.compile(r"\s+")


def split_urls(chunks: Iterable[str]) -> list[str]:
    """Split stacked-url cells and concatenate them in order, keeping repeats."""

    urls: list[str] = []
    for chunk in chunks:
        urls.extend(part for part in _URL_SEPARATOR.split(chunk) if part)
    return urls


class WorkAssembler:
    def assemble(
        self,
        notice: Notice,
        descriptors: Iterable[WorkDescriptor],
        *,
        recovery: bool = False,
    ) -> list[Work]:
        works: list[Work] = []
        for descriptor in descriptors:
            urls = split_urls(descriptor.url_chunks)
            title = (descriptor.title or "").strip()
            if not title and not urls:
                continue
            work = Work(title=title or UNKNOWN_WORK_TITLE)
            work.add_infringing_urls(urls)
            works.append(notice.add_work(work))

        if works:
            return works
        if not recovery:
            raise MappingError("Row yields no works")

        log.warning("No works recovered for %r; attaching placeholder work", notice.title)
        return [notice.add_work(Work.unknown())]
