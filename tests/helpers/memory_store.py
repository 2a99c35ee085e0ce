"""In-memory entity store used by the catalog tests."""

from __future__ import annotations

import asyncio
from copy import deepcopy
from typing import TYPE_CHECKING, Any

from locallibrary.domain.errors import DuplicateKeyError, StoreError
from locallibrary.domain.ports import Contains

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from uuid import UUID

    from locallibrary.domain.model import Entity
    from locallibrary.domain.ports import Filter


def _matches(entity: Entity, where: Filter | None) -> bool:
    for name, expected in (where or {}).items():
        actual = getattr(entity, name)
        if isinstance(expected, Contains):
            if expected.value not in actual:
                return False
        elif actual != expected:
            return False
    return True


class InMemoryEntityStore:
    """Document-style store keeping deep copies, so callers never share state with it.

    ``unique_keys`` makes ``insert`` reject duplicates the way a database
    unique index would. ``fail_on`` names operations that raise ``StoreError``.
    Every call yields to the event loop once, and ``peak_in_flight`` records
    how many calls were running at the same time.
    """

    def __init__(
        self,
        *,
        unique_keys: Mapping[type[Entity], Sequence[str]] | None = None,
    ) -> None:
        self._collections: dict[type[Entity], dict[UUID, Entity]] = {}
        self.unique_keys = dict(unique_keys or {})
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    def seed(self, *entities: Entity) -> None:
        for entity in entities:
            self._collection(type(entity))[entity.id] = deepcopy(entity)

    def snapshot(self, entity_cls: type[Entity]) -> list[Entity]:
        return [deepcopy(entity) for entity in self._collection(entity_cls).values()]

    def _collection(self, entity_cls: type[Entity]) -> dict[UUID, Entity]:
        return self._collections.setdefault(entity_cls, {})

    async def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if operation in self.fail_on:
                raise StoreError(f"{operation} failed")
        except BaseException:
            self.in_flight -= 1
            raise

    def _leave(self) -> None:
        self.in_flight -= 1

    async def find_all[TEntity: Entity](
        self,
        entity_cls: type[TEntity],
        *,
        where: Filter | None = None,
        order_by: Sequence[str] = (),
    ) -> list[TEntity]:
        await self._enter("find_all")
        try:
            found: list[Any] = [
                deepcopy(entity)
                for entity in self._collection(entity_cls).values()
                if _matches(entity, where)
            ]
            for name in reversed(order_by):
                found.sort(key=lambda entity, name=name: getattr(entity, name))
            return found
        finally:
            self._leave()

    async def find_by_id[TEntity: Entity](
        self, entity_cls: type[TEntity], entity_id: UUID
    ) -> TEntity | None:
        await self._enter("find_by_id")
        try:
            entity: Any = self._collection(entity_cls).get(entity_id)
            return deepcopy(entity)
        finally:
            self._leave()

    async def find_one[TEntity: Entity](
        self, entity_cls: type[TEntity], where: Filter
    ) -> TEntity | None:
        await self._enter("find_one")
        try:
            for entity in self._collection(entity_cls).values():
                if _matches(entity, where):
                    found: Any = deepcopy(entity)
                    return found
            return None
        finally:
            self._leave()

    async def insert[TEntity: Entity](self, entity: TEntity) -> TEntity:
        await self._enter("insert")
        try:
            collection = self._collection(type(entity))
            key = self.unique_keys.get(type(entity))
            if key:
                where = {name: getattr(entity, name) for name in key}
                if any(_matches(existing, where) for existing in collection.values()):
                    raise DuplicateKeyError(f"duplicate {type(entity).__name__}")
            collection[entity.id] = deepcopy(entity)
            return entity
        finally:
            self._leave()

    async def update_by_id[TEntity: Entity](
        self, entity_cls: type[TEntity], entity_id: UUID, entity: TEntity
    ) -> TEntity | None:
        await self._enter("update_by_id")
        try:
            collection = self._collection(entity_cls)
            if entity_id not in collection:
                return None
            collection[entity_id] = deepcopy(entity)
            return entity
        finally:
            self._leave()

    async def delete_by_id[TEntity: Entity](
        self, entity_cls: type[TEntity], entity_id: UUID
    ) -> TEntity | None:
        await self._enter("delete_by_id")
        try:
            removed: Any = self._collection(entity_cls).pop(entity_id, None)
            return removed
        finally:
            self._leave()

    async def count(self, entity_cls: type[Entity], *, where: Filter | None = None) -> int:
        await self._enter("count")
        try:
            return sum(
                1 for entity in self._collection(entity_cls).values() if _matches(entity, where)
            )
        finally:
            self._leave()
