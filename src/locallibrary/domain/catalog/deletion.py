"""Integrity-gated delete.

The target and its dependents are read concurrently. Deletion only happens
when nothing references the target; dependents are reported, never removed.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from locallibrary.domain.catalog.outcomes import Blocked, Deleted
from locallibrary.domain.catalog.queries import fetch_with_dependents
from locallibrary.domain.errors import NotFoundError

if TYPE_CHECKING:
    from uuid import UUID

    from locallibrary.domain.catalog.kinds import CatalogKind
    from locallibrary.domain.catalog.outcomes import DeleteOutcome
    from locallibrary.domain.model import Entity
    from locallibrary.domain.ports import EntityStore
    from locallibrary.domain.validation import CatalogForm

log = getLogger(__name__)


async def delete_entity[TEntity: Entity](
    store: EntityStore,
    kind: CatalogKind[TEntity, CatalogForm],
    entity_id: UUID,
) -> DeleteOutcome[TEntity]:
    if kind.dependency is not None:
        entity, dependents = await fetch_with_dependents(store, kind, entity_id)
        if entity is None:
            raise NotFoundError(kind.label, entity_id)
        if dependents:
            log.info(
                "Refusing to delete %s %s: %d dependent(s)",
                kind.label,
                entity_id,
                len(dependents),
            )
            return Blocked(entity, tuple(dependents))

    removed = await store.delete_by_id(kind.entity_cls, entity_id)
    if removed is None:
        # also reached when a concurrent request removed it after the check
        raise NotFoundError(kind.label, entity_id)
    log.info("Deleted %s: id=%s", kind.label, entity_id)
    return Deleted(removed)
