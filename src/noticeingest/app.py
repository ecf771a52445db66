"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from noticeingest.adapters.documents import LocalAndHttpDocumentFetcher
from noticeingest.adapters.legacy import AttributeMapper, CsvRecordSource
from noticeingest.adapters.quarantine import CsvErrorQuarantine
from noticeingest.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyNoticeUnitOfWork,
    is_started,
    startup,
)
from noticeingest.config import get_import_config
from noticeingest.domain.ingest_pipeline import Importer
from noticeingest.domain.ports.unit_of_work import NoticeUnitOfWork

if TYPE_CHECKING:
    from noticeingest.config import ImportConfig
    from noticeingest.domain.ingest_pipeline import ImportSummary, RowMapper
    from noticeingest.domain.ports.documents import DocumentFetcher

UnitOfWorkFactory = Callable[[], NoticeUnitOfWork]

log = getLogger(__name__)


def open_csv(
    path: Path | str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    fetcher: DocumentFetcher | None = None,
    mapper: RowMapper | None = None,
    config: ImportConfig | None = None,
) -> Importer:
    """Wire an ``Importer`` for a legacy CSV export with the configured adapters."""

    source_path = Path(path)
    import_config = config or get_import_config()

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyNoticeUnitOfWork

    effective_fetcher = fetcher or LocalAndHttpDocumentFetcher(
        timeout_seconds=import_config.document_timeout_seconds,
        user_agent=import_config.user_agent,
    )
    failures_dir = import_config.failures_dir_for(source_path)

    def quarantine_factory(run_id: str) -> CsvErrorQuarantine:
        return CsvErrorQuarantine(failures_dir, run_id)

    return Importer(
        CsvRecordSource(source_path),
        mapper=mapper or AttributeMapper(),
        unit_of_work_factory=unit_of_work_factory,
        fetcher=effective_fetcher,
        quarantine_factory=quarantine_factory,
        documents_dir=import_config.documents_dir_for(source_path),
    )


def import_legacy_csv(
    path: Path | str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    fetcher: DocumentFetcher | None = None,
    config: ImportConfig | None = None,
) -> ImportSummary:
    """Import every notice of a legacy CSV export and return the run summary."""

    importer = open_csv(
        path,
        unit_of_work_factory=unit_of_work_factory,
        fetcher=fetcher,
        config=config,
    )
    log.info("Importing legacy notices from %s", importer.record_source.name)
    return importer.run()
