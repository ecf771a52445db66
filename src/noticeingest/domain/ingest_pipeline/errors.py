"""Error taxonomy for legacy imports.

Only ``SourceOpenError`` is fatal; every ``RowError`` is caught at the importer's
per-row boundary and routed to quarantine.
"""

from __future__ import annotations


class IngestError(Exception):
    """Base class for import failures."""


class SourceOpenError(IngestError, OSError):
    """The batch cannot begin because the source could not be opened or read."""


class RowError(IngestError):
    """A failure scoped to one row."""


class MappingError(RowError):
    """Row matches no known layout or lacks data its layout requires."""


class AttachmentError(RowError):
    """A referenced document could not be retrieved."""

    def __init__(self, message: str, *, location: str | None = None) -> None:
        super().__init__(message)
        self.location = location


class PersistenceRejection(RowError):
    """The store refused the assembled notice graph."""
