"""SQLAlchemy adapter package for the catalog."""

from __future__ import annotations

from .lifecycle import open_store, store_session
from .mappings import BINDINGS, binding_for, metadata
from .store import SqlAlchemyEntityStore, StartupError

__all__ = [
    "BINDINGS",
    "SqlAlchemyEntityStore",
    "StartupError",
    "binding_for",
    "metadata",
    "open_store",
    "store_session",
]
