"""Legacy notice ingestion pipeline.

The importer classifies each raw row, short-circuits duplicates and builds the
notice graph with small, separately testable collaborators (works, entities,
documents). All of them receive the explicit ``ImportRunContext`` instead of
sharing module-level state.
"""

from __future__ import annotations

from .context import ImportRunContext, ImportSummary, RowOutcome, new_run_id
from .deduplication import DedupGate
from .documents import DocumentAttacher, DocumentExtractor, RecoveredData
from .entity_resolution import EntityResolver
from .errors import (
    AttachmentError,
    IngestError,
    MappingError,
    PersistenceRejection,
    RowError,
    SourceOpenError,
)
from .fields import DocumentReference, NormalizedFields, PartyNames, WorkDescriptor
from .importer import Importer, RowMapper
from .works import WorkAssembler, split_urls

__all__ = [
    "AttachmentError",
    "DedupGate",
    "DocumentAttacher",
    "DocumentExtractor",
    "DocumentReference",
    "EntityResolver",
    "ImportRunContext",
    "ImportSummary",
    "Importer",
    "IngestError",
    "MappingError",
    "NormalizedFields",
    "PartyNames",
    "PersistenceRejection",
    "RecoveredData",
    "RowError",
    "RowMapper",
    "RowOutcome",
    "SourceOpenError",
    "WorkAssembler",
    "WorkDescriptor",
    "new_run_id",
    "split_urls",
]
