"""Stream raw rows out of a legacy CSV export."""

from __future__ import annotations

import csv
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from noticeingest.domain.ingest_pipeline.errors import SourceOpenError
from noticeingest.domain.ports.records import RawRecord

if TYPE_CHECKING:
    from collections.abc import Iterator

log = getLogger(__name__)

EXTRA_COLUMN: Final[str] = "_extra"


class CsvRecordSource:
    """Lazy reader over a CSV file with a header row.

    The file is opened when iteration starts and closed when the generator is
    exhausted, closed or garbage collected.
    """

    def __init__(self, path: Path | str, *, encoding: str = "utf-8-sig") -> None:
        self.path = Path(path)
        self.encoding = encoding

    @property
    def name(self) -> str:
        return self.path.name

    def records(self) -> Iterator[RawRecord]:
        try:
            handle = self.path.open(newline="", encoding=self.encoding)
        except OSError as exc:
            raise SourceOpenError(f"Cannot open {self.path}: {exc}") from exc

        with handle:
            reader = csv.reader(handle)
            try:
                columns = _header(reader)
                log.debug("Reading %s with columns %s", self.path, columns)
                while True:
                    # a quoted cell may span lines; report the line the row starts on
                    first_line = reader.line_num + 1
                    cells = next(reader, None)
                    if cells is None:
                        return
                    if not cells:
                        continue
                    yield RawRecord(
                        values=_as_values(columns, cells),
                        line_number=first_line,
                        columns=columns,
                    )
            except (UnicodeDecodeError, csv.Error) as exc:
                raise SourceOpenError(f"Cannot read {self.path}: {exc}") from exc

    def __repr__(self) -> str:
        return f"CsvRecordSource({str(self.path)!r})"


def _header(reader: Iterator[list[str]]) -> tuple[str, ...]:
    for cells in reader:
        if cells:
            return tuple(cells)
    return ()


def _as_values(columns: tuple[str, ...], cells: list[str]) -> dict[str, str]:
    """Short rows are padded with empty cells; cells past the header land in ``_extra``."""

    values = dict.fromkeys(columns, "")
    values.update(zip(columns, cells, strict=False))
    if len(cells) > len(columns):
        values[EXTRA_COLUMN] = ",".join(cells[len(columns) :])
    return values
