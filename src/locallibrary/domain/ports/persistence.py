"""Ports for persisting catalog entities.

Filters are document-style mappings from entity field name to the value that
field must equal. ``Contains`` matches entities whose to-many reference field
holds the given value.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from locallibrary.domain.model import Entity

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class Contains:
    """Membership match for a list-valued field."""

    value: object


type Filter = Mapping[str, object]


@runtime_checkable
class EntityStore(Protocol):
    """Persistence contract for the catalog.

    Every operation is a single shot that either succeeds or raises
    ``StoreError``. Independent operations may run concurrently.
    """

    async def find_all[TEntity: Entity](
        self,
        entity_cls: type[TEntity],
        *,
        where: Filter | None = None,
        order_by: Sequence[str] = (),
    ) -> list[TEntity]: ...

    async def find_by_id[TEntity: Entity](
        self, entity_cls: type[TEntity], entity_id: UUID
    ) -> TEntity | None: ...

    async def find_one[TEntity: Entity](
        self, entity_cls: type[TEntity], where: Filter
    ) -> TEntity | None: ...

    async def insert[TEntity: Entity](self, entity: TEntity) -> TEntity: ...

    async def update_by_id[TEntity: Entity](
        self, entity_cls: type[TEntity], entity_id: UUID, entity: TEntity
    ) -> TEntity | None:
        """Replace every stored field at ``entity_id``; None when absent."""
        ...

    async def delete_by_id[TEntity: Entity](
        self, entity_cls: type[TEntity], entity_id: UUID
    ) -> TEntity | None:
        """Remove and return the entity; None when absent."""
        ...

    async def count(self, entity_cls: type[Entity], *, where: Filter | None = None) -> int: ...
