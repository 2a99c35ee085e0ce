from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from locallibrary.adapters.sqlalchemy import SqlAlchemyEntityStore, store_session
from locallibrary.domain.catalog import Catalog
from tests.helpers.memory_store import InMemoryEntityStore

os.environ.setdefault("DATABASE_URI", "sqlite+aiosqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path


@pytest.fixture
def memory_store() -> InMemoryEntityStore:
    return InMemoryEntityStore()


@pytest.fixture
def catalog(memory_store: InMemoryEntityStore) -> Catalog:
    return Catalog(memory_store)


@pytest.fixture
def sqlite_uri(tmp_path: Path) -> str:
    # a file database, so concurrent reads on separate pooled connections see the same data
    return f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture
async def sqlite_store(sqlite_uri: str) -> AsyncIterator[SqlAlchemyEntityStore]:
    engine = create_async_engine(sqlite_uri)
    async with store_session(engine=engine) as store:
        yield store


@pytest.fixture
def sqlite_catalog(sqlite_store: SqlAlchemyEntityStore) -> Catalog:
    return Catalog(sqlite_store)
