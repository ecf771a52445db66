"""Row-by-row orchestration of a legacy notice import.

Per row: ``Classified -> Skipped | Excluded | BuildingGraph -> Committed | Quarantined``.
Every row gets its own unit of work, so a failure discards only that row's graph
and rows committed earlier are never rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import fields as dataclass_fields
from typing import TYPE_CHECKING, Protocol

from noticeingest.domain.ingest_pipeline.context import (
    ImportRunContext,
    ImportSummary,
    RowOutcome,
    new_run_id,
)
from noticeingest.domain.ingest_pipeline.deduplication import DedupGate
from noticeingest.domain.ingest_pipeline.documents import DocumentAttacher
from noticeingest.domain.ingest_pipeline.entity_resolution import EntityResolver
from noticeingest.domain.ingest_pipeline.errors import MappingError, RowError
from noticeingest.domain.ingest_pipeline.works import WorkAssembler
from noticeingest.domain.model import Topic, notice_class_for

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from noticeingest.domain.ingest_pipeline.fields import NormalizedFields
    from noticeingest.domain.model import Notice, NoticeType
    from noticeingest.domain.ports.documents import DocumentFetcher
    from noticeingest.domain.ports.persistence import TopicRepository
    from noticeingest.domain.ports.quarantine import ErrorQuarantine
    from noticeingest.domain.ports.records import RawRecord, RecordSource
    from noticeingest.domain.ports.unit_of_work import NoticeUnitOfWork

    type UnitOfWorkFactory = Callable[[], NoticeUnitOfWork]
    type QuarantineFactory = Callable[[str], ErrorQuarantine]


class RowMapper(Protocol):
    """Classifier and normalizer for one raw row."""

    def exclude(self, record: RawRecord) -> bool: ...

    def notice_type(self, record: RawRecord) -> NoticeType: ...

    def mapped(self, record: RawRecord) -> NormalizedFields: ...


class Importer:
    """Pull rows from a source and turn each into at most one persisted notice."""

    def __init__(
        self,
        record_source: RecordSource,
        *,
        mapper: RowMapper,
        unit_of_work_factory: UnitOfWorkFactory,
        fetcher: DocumentFetcher,
        quarantine_factory: QuarantineFactory,
        documents_dir: Path | None = None,
        work_assembler: WorkAssembler | None = None,
        entity_resolver: EntityResolver | None = None,
    ) -> None:
        self.record_source = record_source
        self.mapper = mapper
        self.logger = logging.getLogger(__name__)
        self._unit_of_work_factory = unit_of_work_factory
        self._fetcher = fetcher
        self._quarantine_factory = quarantine_factory
        self._documents_dir = documents_dir
        self._attacher = DocumentAttacher(fetcher)
        self._works = work_assembler or WorkAssembler()
        self._resolver = entity_resolver or EntityResolver()

    def run(self) -> ImportSummary:
        """Import every row of the source and return the run summary.

        Only a failure to read the source itself escapes; row failures end up in
        quarantine and are counted.
        """

        run_id = new_run_id()
        context = ImportRunContext(
            run_id=run_id,
            source_name=self.record_source.name,
            quarantine=self._quarantine_factory(run_id),
            documents_dir=self._documents_dir,
        )
        self.logger.info("Starting import of %s (run %s)", context.source_name, run_id)

        try:
            with self._fetcher:
                for record in self.record_source.records():
                    outcome = self.process(record, context=context)
                    context.summary.record(outcome)
        finally:
            context.quarantine.close()

        summary = context.summary
        self.logger.info(
            "Finished import of %s: created=%s, skipped=%s, excluded=%s, quarantined=%s",
            context.source_name,
            summary.created,
            summary.skipped,
            summary.excluded,
            summary.quarantined,
        )
        return summary

    def process(self, record: RawRecord, *, context: ImportRunContext) -> RowOutcome:
        """Run one row through the state machine; row-scoped errors never escape."""

        try:
            return self._import_record(record, context)
        except RowError as exc:
            cause: RowError = exc
        except (ValueError, TypeError, KeyError) as exc:
            cause = MappingError(f"{type(exc).__name__}: {exc}")
            cause.__cause__ = exc
        context.quarantine.capture(record, cause)
        return RowOutcome.QUARANTINED

    def _import_record(self, record: RawRecord, context: ImportRunContext) -> RowOutcome:
        if self.mapper.exclude(record):
            self.logger.debug("Excluding line %s", record.line_number)
            return RowOutcome.EXCLUDED

        fields = self.mapper.mapped(record)

        with self._unit_of_work_factory() as uow:
            repositories = uow.repositories
            if DedupGate(repositories.notices).exists(fields.original_notice_id):
                self.logger.info(
                    "Skipping line %s: notice %s already imported",
                    record.line_number,
                    fields.original_notice_id,
                )
                return RowOutcome.SKIPPED

            notice = self._build_notice(fields, uow, context)
            repositories.notices.add(notice)
            uow.commit()

        self.logger.info(
            "Imported line %s as %s %r (%s)",
            record.line_number,
            notice.notice_type,
            notice.title,
            fields.source_format,
        )
        return RowOutcome.CREATED

    def _build_notice(
        self, fields: NormalizedFields, uow: NoticeUnitOfWork, context: ImportRunContext
    ) -> Notice:
        notice = self._new_notice(fields)
        recovering = fields.needs_recovery

        attachments = self._attacher.attach(
            notice,
            fields.documents,
            context=context,
            tolerate_missing_supporting=recovering,
        )
        if recovering:
            fields = self._attacher.recover(fields, attachments)
            notice.title = fields.title

        self._works.assemble(notice, fields.works, recovery=recovering)
        self._resolver.resolve(
            notice,
            fields.parties,
            entities=uow.repositories.entities,
            context=context,
        )
        notice.add_tags(fields.tags)
        _apply_topics(notice, fields.topics, uow.repositories.topics)
        return notice

    @staticmethod
    def _new_notice(fields: NormalizedFields) -> Notice:
        notice_cls = notice_class_for(fields.notice_type)
        extra: dict[str, object] = {}
        # category-specific attributes only exist on the variants that declare them
        declared = {f.name for f in dataclass_fields(notice_cls)}
        if fields.mark_registration_number and "mark_registration_number" in declared:
            extra["mark_registration_number"] = fields.mark_registration_number
        return notice_cls(
            title=fields.title,
            action_taken=fields.action_taken,
            original_notice_id=fields.original_notice_id,
            submission_id=fields.submission_id,
            date_received=fields.date_received,
            **extra,
        )


def _apply_topics(notice: Notice, names: Iterable[str], topics: TopicRepository) -> None:
    seen: set[str] = set()
    for raw_name in names:
        name = raw_name.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        topic = topics.get_by_name(name)
        if topic is None:
            topic = Topic(name=name)
            topics.add(topic)
        notice.add_topic(topic)
