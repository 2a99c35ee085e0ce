"""Public domain model surface."""

from __future__ import annotations

from locallibrary.domain.model.catalog import Author, Book, BookInstance, Genre
from locallibrary.domain.model.entity import Entity, new_id
from locallibrary.domain.model.enums import BookInstanceStatus, EntityType

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "new_id",
    # catalog
    "Genre",
    "Author",
    "Book",
    "BookInstance",
    # enums
    "BookInstanceStatus",
    "EntityType",
]
