"""Structured results handed to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from locallibrary.domain.model import Author, Book, Entity, Genre

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class EntityOutcome[TEntity: Entity]:
    entity: TEntity

    @property
    def id(self) -> UUID:
        return self.entity.id


@dataclass(frozen=True, slots=True)
class Created[TEntity: Entity](EntityOutcome[TEntity]):
    """A new entity was persisted."""


@dataclass(frozen=True, slots=True)
class AlreadyExists[TEntity: Entity](EntityOutcome[TEntity]):
    """An equivalent entity was already stored; nothing was written."""


@dataclass(frozen=True, slots=True)
class Updated[TEntity: Entity](EntityOutcome[TEntity]):
    pass


@dataclass(frozen=True, slots=True)
class Deleted[TEntity: Entity](EntityOutcome[TEntity]):
    pass


@dataclass(frozen=True, slots=True)
class Blocked[TEntity: Entity](EntityOutcome[TEntity]):
    """Deletion refused because other entities still reference the target."""

    dependents: tuple[Entity, ...]


@dataclass(frozen=True, slots=True)
class Detail[TEntity: Entity](EntityOutcome[TEntity]):
    dependents: tuple[Entity, ...]


type CreateOutcome[TEntity: Entity] = Created[TEntity] | AlreadyExists[TEntity]
type DeleteOutcome[TEntity: Entity] = Deleted[TEntity] | Blocked[TEntity]


@dataclass(frozen=True, slots=True)
class CatalogSummary:
    book_count: int
    book_instance_count: int
    book_instance_available_count: int
    author_count: int
    genre_count: int


@dataclass(frozen=True, slots=True)
class BookFormChoices:
    authors: tuple[Author, ...]
    genres: tuple[Genre, ...]


@dataclass(frozen=True, slots=True)
class BookInstanceFormChoices:
    books: tuple[Book, ...]
