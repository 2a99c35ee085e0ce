"""Full-replacement updates.

No uniqueness check runs here, unlike create: an update may give an entity
the key of another one.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from locallibrary.domain.catalog.outcomes import Updated
from locallibrary.domain.errors import NotFoundError

if TYPE_CHECKING:
    from uuid import UUID

    from locallibrary.domain.catalog.kinds import CatalogKind
    from locallibrary.domain.model import Entity
    from locallibrary.domain.ports import EntityStore
    from locallibrary.domain.validation import CatalogForm

log = getLogger(__name__)


async def update_entity[TEntity: Entity, TForm: CatalogForm](
    store: EntityStore,
    kind: CatalogKind[TEntity, TForm],
    entity_id: UUID,
    draft: TForm,
) -> Updated[TEntity]:
    replacement = kind.build(draft, entity_id)
    updated = await store.update_by_id(kind.entity_cls, entity_id, replacement)
    if updated is None:
        raise NotFoundError(kind.label, entity_id)
    log.info("Updated %s: id=%s", kind.label, entity_id)
    return Updated(updated)
