"""Run-scoped state shared by the importer and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from noticeingest.domain.ports.quarantine import ErrorQuarantine


def new_run_id(now: datetime | None = None) -> str:
    moment = now or datetime.now(UTC)
    return moment.astimezone(UTC).strftime("%Y%m%dT%H%M%SZ")


class RowOutcome(StrEnum):
    CREATED = "created"
    SKIPPED = "skipped"
    EXCLUDED = "excluded"
    QUARANTINED = "quarantined"


@dataclass(slots=True)
class ImportSummary:
    """Counts reported to the caller after every run, failed rows included."""

    created: int = 0
    skipped: int = 0
    excluded: int = 0
    quarantined: int = 0

    @property
    def processed(self) -> int:
        return self.created + self.skipped + self.excluded + self.quarantined

    def record(self, outcome: RowOutcome) -> None:
        match outcome:
            case RowOutcome.CREATED:
                self.created += 1
            case RowOutcome.SKIPPED:
                self.skipped += 1
            case RowOutcome.EXCLUDED:
                self.excluded += 1
            case RowOutcome.QUARANTINED:
                self.quarantined += 1

    def as_dict(self) -> dict[str, int]:
        return {
            "created": self.created,
            "skipped": self.skipped,
            "excluded": self.excluded,
            "quarantined": self.quarantined,
            "processed": self.processed,
        }


@dataclass(slots=True)
class ImportRunContext:
    """Mutable context passed explicitly to every pipeline component."""

    run_id: str
    source_name: str
    quarantine: ErrorQuarantine
    documents_dir: Path | None = None
    summary: ImportSummary = field(default_factory=ImportSummary)
    entities_created: int = 0
