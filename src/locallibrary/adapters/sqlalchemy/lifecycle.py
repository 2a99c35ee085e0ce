"""Opening and closing the SQLAlchemy-backed entity store."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import create_async_engine

from locallibrary.adapters.sqlalchemy.migrations import upgrade_head
from locallibrary.adapters.sqlalchemy.store import SqlAlchemyEntityStore
from locallibrary.config import get_database_config

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine

log = getLogger(__name__)


async def open_store(
    *,
    engine: AsyncEngine | None = None,
    database_uri: str | None = None,
    timeout_seconds: float | None = None,
) -> SqlAlchemyEntityStore:
    """Create the engine, bring the schema to head, and return a ready store."""

    if engine is None:
        if database_uri is None:
            config = get_database_config()
            database_uri = config.uri
            if timeout_seconds is None:
                timeout_seconds = config.store_timeout_seconds
        engine = create_async_engine(database_uri)

    log.info("Opening entity store at %s", engine.url.render_as_string(hide_password=True))
    try:
        await upgrade_head(engine)
    except BaseException:
        await engine.dispose()
        raise
    return SqlAlchemyEntityStore(engine, timeout_seconds=timeout_seconds)


@asynccontextmanager
async def store_session(
    *,
    engine: AsyncEngine | None = None,
    database_uri: str | None = None,
    timeout_seconds: float | None = None,
) -> AsyncIterator[SqlAlchemyEntityStore]:
    """Open a store for the duration of the block and close it afterwards."""

    store = await open_store(
        engine=engine,
        database_uri=database_uri,
        timeout_seconds=timeout_seconds,
    )
    try:
        yield store
    finally:
        await store.close()
