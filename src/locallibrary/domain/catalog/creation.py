"""Dedup-create: reuse an equivalent stored entity or insert the draft.

The lookup and the insert are separate store calls. Two concurrent creates
with the same key can both miss the lookup and both insert. A store that
enforces the key itself raises ``DuplicateKeyError`` on the losing insert,
which is answered from the lookup path instead.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from locallibrary.domain.catalog.outcomes import AlreadyExists, Created
from locallibrary.domain.errors import DuplicateKeyError

if TYPE_CHECKING:
    from locallibrary.domain.catalog.kinds import CatalogKind
    from locallibrary.domain.catalog.outcomes import CreateOutcome
    from locallibrary.domain.model import Entity
    from locallibrary.domain.ports import EntityStore
    from locallibrary.domain.validation import CatalogForm

log = getLogger(__name__)


async def create_entity[TEntity: Entity, TForm: CatalogForm](
    store: EntityStore,
    kind: CatalogKind[TEntity, TForm],
    draft: TForm,
) -> CreateOutcome[TEntity]:
    entity = kind.build(draft)
    where = kind.unique_filter(entity)

    if where is not None:
        existing = await store.find_one(kind.entity_cls, where)
        if existing is not None:
            log.info("%s already exists: id=%s", kind.label, existing.id)
            return AlreadyExists(existing)

    try:
        created = await store.insert(entity)
    except DuplicateKeyError:
        if where is None:
            raise
        existing = await store.find_one(kind.entity_cls, where)
        if existing is None:
            raise
        log.info("%s inserted concurrently, reusing id=%s", kind.label, existing.id)
        return AlreadyExists(existing)

    log.info("Created %s: id=%s", kind.label, created.id)
    return Created(created)
