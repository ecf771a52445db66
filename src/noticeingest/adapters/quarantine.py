"""CSV artifact for rows that could not be imported."""

from __future__ import annotations

import csv
from logging import getLogger
from typing import TYPE_CHECKING, Final, TextIO

from noticeingest.adapters.legacy.source import EXTRA_COLUMN

if TYPE_CHECKING:
    from pathlib import Path

    from noticeingest.domain.ports.records import RawRecord

log = getLogger(__name__)

FAILURE_COLUMNS: Final[tuple[str, str]] = ("line_number", "failure_cause")


def describe_failure(cause: BaseException | str) -> str:
    if isinstance(cause, str):
        return cause
    return f"{type(cause).__name__}: {cause}"


class CsvErrorQuarantine:
    """Append failed rows to ``<directory>/<run_id>.csv``.

    The file is only created once the first row fails. Writing problems never
    interrupt the import: the quarantine degrades to logging only.
    """

    def __init__(self, directory: Path, run_id: str) -> None:
        self.directory = directory
        self.run_id = run_id
        self.degraded = False
        self._captured = 0
        self._handle: TextIO | None = None
        self._writer: csv.DictWriter[str] | None = None

    @property
    def path(self) -> Path:
        return self.directory / f"{self.run_id}.csv"

    @property
    def captured(self) -> int:
        return self._captured

    def capture(self, record: RawRecord, cause: BaseException | str) -> None:
        message = describe_failure(cause)
        self._captured += 1
        log.error("Quarantined line %s: %s", record.line_number, message)
        if self.degraded:
            return

        row: dict[str, object] = dict(record.values)
        row["line_number"] = record.line_number
        row["failure_cause"] = message
        try:
            writer = self._writer or self._open(record)
            writer.writerow(row)
            if self._handle is not None:
                self._handle.flush()
        except (OSError, csv.Error) as exc:
            self.degraded = True
            log.error(
                "Cannot write quarantine file %s (%s); failed rows are only logged from now on",
                self.path,
                exc,
            )

    def close(self) -> None:
        if self._handle is None:
            return
        try:
            self._handle.close()
        except OSError as exc:
            log.error("Cannot close quarantine file %s: %s", self.path, exc)
        finally:
            self._handle = None
            self._writer = None
        log.info("Wrote %d quarantined row(s) to %s", self._captured, self.path)

    def _open(self, record: RawRecord) -> csv.DictWriter[str]:
        self.directory.mkdir(parents=True, exist_ok=True)
        reserved = {*FAILURE_COLUMNS, EXTRA_COLUMN}
        columns = [column for column in record.columns if column not in reserved]
        handle = self.path.open("w", newline="", encoding="utf-8")
        writer = csv.DictWriter(
            handle,
            # overflow cells of any later row still have a place to go
            fieldnames=[*FAILURE_COLUMNS, *columns, EXTRA_COLUMN],
            extrasaction="ignore",
            restval="",
        )
        writer.writeheader()
        self._handle = handle
        self._writer = writer
        return writer
