"""Catalog coordinators and services."""

from __future__ import annotations

from .creation import create_entity
from .deletion import delete_entity
from .fanout import join_all, join_pair
from .kinds import AUTHOR, BOOK, BOOK_INSTANCE, GENRE, CatalogKind, Dependency
from .outcomes import (
    AlreadyExists,
    Blocked,
    BookFormChoices,
    BookInstanceFormChoices,
    CatalogSummary,
    CreateOutcome,
    Created,
    DeleteOutcome,
    Deleted,
    Detail,
    Updated,
)
from .queries import fetch_with_dependents, get_entity, list_entities, load_detail
from .service import Catalog, CatalogService
from .updates import update_entity

__all__ = [
    "AUTHOR",
    "BOOK",
    "BOOK_INSTANCE",
    "GENRE",
    "AlreadyExists",
    "Blocked",
    "BookFormChoices",
    "BookInstanceFormChoices",
    "Catalog",
    "CatalogKind",
    "CatalogService",
    "CatalogSummary",
    "CreateOutcome",
    "Created",
    "DeleteOutcome",
    "Deleted",
    "Dependency",
    "Detail",
    "Updated",
    "create_entity",
    "delete_entity",
    "fetch_with_dependents",
    "get_entity",
    "join_all",
    "join_pair",
    "list_entities",
    "load_detail",
    "update_entity",
]
