"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from locallibrary.adapters.sqlalchemy import store_session
from locallibrary.config import get_database_config
from locallibrary.domain.catalog import Catalog

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from locallibrary.config import DatabaseConfig
    from locallibrary.domain.ports import EntityStore

log = getLogger(__name__)


@asynccontextmanager
async def open_catalog(
    *,
    store: EntityStore | None = None,
    database: DatabaseConfig | None = None,
) -> AsyncIterator[Catalog]:
    """Yield a catalog bound to ``store``, or to a SQLAlchemy store opened for the block.

    A caller-supplied store is left open; a store opened here is closed on exit.
    """

    if store is not None:
        yield Catalog(store)
        return

    config = database or get_database_config()
    async with store_session(
        database_uri=config.uri,
        timeout_seconds=config.store_timeout_seconds,
    ) as sql_store:
        log.info("Catalog ready")
        yield Catalog(sql_store)
