"""Entity store backed by an SQLAlchemy async engine.

Each operation runs in its own short transaction on a pooled connection, so
independent reads issued together really do run side by side.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from locallibrary.adapters.sqlalchemy.mappings import binding_for
from locallibrary.domain.errors import DuplicateKeyError, StoreError
from locallibrary.domain.ports import Contains

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping, Sequence
    from uuid import UUID

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

    from locallibrary.adapters.sqlalchemy.mappings import TableBinding
    from locallibrary.domain.model import Entity
    from locallibrary.domain.ports import Filter

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the store is used before it was opened or after it was closed."""


def _is_unique_violation(exc: IntegrityError) -> bool:
    return "unique" in str(exc.orig).lower()


def _criteria(binding: TableBinding[Any], where: Filter | None) -> list[ColumnElement[bool]]:
    table = binding.table
    clauses: list[ColumnElement[bool]] = []
    for name, value in (where or {}).items():
        if isinstance(value, Contains):
            link = binding.link
            if link is None or link.attribute != name:
                raise ValueError(f"{name} is not a list-valued field of {table.name}")
            owners = select(link.table.c[link.owner_column]).where(
                link.table.c[link.target_column] == value.value
            )
            clauses.append(table.c.id.in_(owners))
        else:
            clauses.append(table.c[name] == value)
    return clauses


class SqlAlchemyEntityStore:
    def __init__(self, engine: AsyncEngine, *, timeout_seconds: float | None = None) -> None:
        self._engine: AsyncEngine | None = engine
        self.timeout_seconds = timeout_seconds

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StartupError("Entity store is closed")
        return self._engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    async def close(self) -> None:
        """Dispose the engine; further operations raise ``StartupError``."""

        if self._engine is not None:
            log.info("Closing entity store")
            await self._engine.dispose()
        self._engine = None

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncConnection]:
        engine = self.engine
        try:
            async with asyncio.timeout(self.timeout_seconds), engine.begin() as connection:
                yield connection
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise DuplicateKeyError(f"{operation}: uniqueness constraint violated") from exc
            raise StoreError(f"{operation} failed") from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"{operation} failed") from exc
        except TimeoutError as exc:
            raise StoreError(f"{operation} timed out after {self.timeout_seconds}s") from exc

    # Reads --------------------------------------------------------------------

    async def find_all[TEntity: Entity](
        self,
        entity_cls: type[TEntity],
        *,
        where: Filter | None = None,
        order_by: Sequence[str] = (),
    ) -> list[TEntity]:
        binding = binding_for(entity_cls)
        stmt = self._select(binding, where, order_by)
        async with self._transaction(f"find {binding.table.name}") as connection:
            return await self._fetch(connection, binding, stmt)

    async def find_by_id[TEntity: Entity](
        self, entity_cls: type[TEntity], entity_id: UUID
    ) -> TEntity | None:
        return await self.find_one(entity_cls, {"id": entity_id})

    async def find_one[TEntity: Entity](
        self, entity_cls: type[TEntity], where: Filter
    ) -> TEntity | None:
        binding = binding_for(entity_cls)
        stmt = self._select(binding, where).limit(1)
        async with self._transaction(f"find one {binding.table.name}") as connection:
            found = await self._fetch(connection, binding, stmt)
        return found[0] if found else None

    async def count(self, entity_cls: type[Entity], *, where: Filter | None = None) -> int:
        binding = binding_for(entity_cls)
        stmt = select(func.count()).select_from(binding.table).where(*_criteria(binding, where))
        async with self._transaction(f"count {binding.table.name}") as connection:
            return (await connection.execute(stmt)).scalar_one()

    # Writes -------------------------------------------------------------------

    async def insert[TEntity: Entity](self, entity: TEntity) -> TEntity:
        binding = binding_for(type(entity))
        async with self._transaction(f"insert {binding.table.name}") as connection:
            await connection.execute(insert(binding.table).values(**binding.to_row(entity)))
            await self._write_links(connection, binding, entity)
        return entity

    async def update_by_id[TEntity: Entity](
        self, entity_cls: type[TEntity], entity_id: UUID, entity: TEntity
    ) -> TEntity | None:
        if entity.id != entity_id:
            raise ValueError("Replacement entity must carry the id being updated")
        binding = binding_for(entity_cls)
        table = binding.table
        values = {key: value for key, value in binding.to_row(entity).items() if key != "id"}
        async with self._transaction(f"update {table.name}") as connection:
            result = await connection.execute(
                update(table).where(table.c.id == entity_id).values(**values)
            )
            if result.rowcount == 0:
                return None
            await self._delete_links(connection, binding, entity_id)
            await self._write_links(connection, binding, entity)
        return entity

    async def delete_by_id[TEntity: Entity](
        self, entity_cls: type[TEntity], entity_id: UUID
    ) -> TEntity | None:
        binding = binding_for(entity_cls)
        table = binding.table
        stmt = self._select(binding, {"id": entity_id}).limit(1)
        async with self._transaction(f"delete {table.name}") as connection:
            found = await self._fetch(connection, binding, stmt)
            if not found:
                return None
            await self._delete_links(connection, binding, entity_id)
            await connection.execute(delete(table).where(table.c.id == entity_id))
        return found[0]

    # Helpers ------------------------------------------------------------------

    @staticmethod
    def _select(
        binding: TableBinding[Any],
        where: Filter | None,
        order_by: Sequence[str] = (),
    ) -> Select[Any]:
        table = binding.table
        return (
            select(table)
            .where(*_criteria(binding, where))
            .order_by(*(table.c[name].asc() for name in order_by))
        )

    @staticmethod
    async def _fetch[TEntity: Entity](
        connection: AsyncConnection,
        binding: TableBinding[TEntity],
        stmt: Select[Any],
    ) -> list[TEntity]:
        rows: Sequence[Mapping[str, Any]] = (await connection.execute(stmt)).mappings().all()
        link = binding.link
        if link is None or not rows:
            return [binding.from_row(row) for row in rows]

        owner = link.table.c[link.owner_column]
        target = link.table.c[link.target_column]
        link_stmt = (
            select(owner, target)
            .where(owner.in_([row["id"] for row in rows]))
            .order_by(owner, link.table.c.position)
        )
        targets: defaultdict[UUID, list[UUID]] = defaultdict(list)
        for owner_id, target_id in await connection.execute(link_stmt):
            targets[owner_id].append(target_id)
        return [binding.from_row(row, targets[row["id"]]) for row in rows]

    @staticmethod
    async def _write_links(
        connection: AsyncConnection, binding: TableBinding[Any], entity: Entity
    ) -> None:
        rows = binding.link_rows(entity)
        if binding.link is not None and rows:
            await connection.execute(insert(binding.link.table), rows)

    @staticmethod
    async def _delete_links(
        connection: AsyncConnection, binding: TableBinding[Any], entity_id: UUID
    ) -> None:
        link = binding.link
        if link is None:
            return
        await connection.execute(
            delete(link.table).where(link.table.c[link.owner_column] == entity_id)
        )


if TYPE_CHECKING:
    from typing import cast

    from locallibrary.domain.ports import EntityStore

    _store_check: EntityStore = SqlAlchemyEntityStore(cast("AsyncEngine", object()))
