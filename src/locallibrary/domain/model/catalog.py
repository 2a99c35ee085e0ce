"""Catalog entities.

References between entities are held as identifiers, never as loaded objects:
the store answers "who points at X" queries, the entities do not.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from locallibrary.domain.model.entity import Entity
from locallibrary.domain.model.enums import BookInstanceStatus, EntityType

if TYPE_CHECKING:
    from datetime import date
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class Genre(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.GENRE

    name: str


@dataclass(eq=False, kw_only=True)
class Author(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.AUTHOR

    first_name: str
    family_name: str
    date_of_birth: date | None = None
    date_of_death: date | None = None


@dataclass(eq=False, kw_only=True)
class Book(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.BOOK

    title: str
    author_id: UUID
    summary: str
    isbn: str
    genre_ids: list[UUID] = field(default_factory=list["UUID"])


@dataclass(eq=False, kw_only=True)
class BookInstance(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.BOOK_INSTANCE

    book_id: UUID
    imprint: str
    status: BookInstanceStatus = BookInstanceStatus.MAINTENANCE
    due_back: date | None = None
