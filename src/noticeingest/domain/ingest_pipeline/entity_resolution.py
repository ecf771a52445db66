"""Resolve party names into shared entities and per-notice roles."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from noticeingest.domain.model import Entity

if TYPE_CHECKING:
    from noticeingest.domain.ingest_pipeline.context import ImportRunContext
    from noticeingest.domain.ingest_pipeline.fields import PartyNames
    from noticeingest.domain.model import Notice
    from noticeingest.domain.ports.persistence import EntityRepository

log = getLogger(__name__)


class EntityResolver:
    """Exact, case-sensitive name matching; no fuzzy merging."""

    def resolve(
        self,
        notice: Notice,
        parties: PartyNames,
        *,
        entities: EntityRepository,
        context: ImportRunContext | None = None,
    ) -> list[Entity]:
        """Attach one role per populated party slot and return newly created entities."""

        local: dict[str, Entity] = {}
        created: list[Entity] = []
        for role, name in parties.items():
            entity = local.get(name)
            if entity is None:
                entity = entities.get_by_name(name)
                if entity is None:
                    entity = Entity(name=name)
                    entities.add(entity)
                    created.append(entity)
                local[name] = entity
            notice.add_role(entity, role)

        if context is not None:
            context.entities_created += len(created)
        if created:
            log.debug("Created %d new entities for %r", len(created), notice.title)
        return created
