"""Classify and normalize raw legacy rows."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from noticeingest.adapters.legacy.formats import DEFAULT_FORMATS
from noticeingest.adapters.legacy.schema import LegacyRow
from noticeingest.adapters.legacy.source import EXTRA_COLUMN
from noticeingest.domain.ingest_pipeline.errors import MappingError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from noticeingest.adapters.legacy.formats import LegacyFormat
    from noticeingest.domain.ingest_pipeline.fields import NormalizedFields
    from noticeingest.domain.model import NoticeType
    from noticeingest.domain.ports.records import RawRecord

log = getLogger(__name__)


class AttributeMapper:
    """Pick the layout of a row and translate it into ``NormalizedFields``."""

    def __init__(self, formats: Sequence[LegacyFormat] = DEFAULT_FORMATS) -> None:
        self.formats = tuple(formats)

    def exclude(self, record: RawRecord) -> bool:
        """Blank rows and repeated header rows carry no notice."""

        populated = {
            column: value.strip()
            for column, value in record.values.items()
            if column != EXTRA_COLUMN and value and value.strip()
        }
        if not populated:
            return True
        return all(value == column for column, value in populated.items())

    def notice_type(self, record: RawRecord) -> NoticeType:
        row = self._parse(record)
        return self._match(row, record).variant(row)

    def format_for(self, record: RawRecord) -> LegacyFormat:
        return self._match(self._parse(record), record)

    def mapped(self, record: RawRecord) -> NormalizedFields:
        row = self._parse(record)
        legacy_format = self._match(row, record)
        log.debug("Line %s matches %r", record.line_number, legacy_format)
        return legacy_format.normalize(row)

    def _match(self, row: LegacyRow, record: RawRecord) -> LegacyFormat:
        for legacy_format in self.formats:
            if legacy_format.matches(row):
                return legacy_format
        raise MappingError(f"Line {record.line_number} matches no known layout")

    @staticmethod
    def _parse(record: RawRecord) -> LegacyRow:
        try:
            return LegacyRow.model_validate(dict(record.values))
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            )
            raise MappingError(f"Line {record.line_number} is malformed: {problems}") from exc
