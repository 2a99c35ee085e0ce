"""Read-only projections computed from stored fields, never persisted."""

from __future__ import annotations

from dataclasses import dataclass
from functools import singledispatch
from typing import TYPE_CHECKING, Final

from locallibrary.domain.model import Author, Book, BookInstance, Entity, Genre

if TYPE_CHECKING:
    from datetime import date
    from uuid import UUID

CATALOG_PREFIX: Final[str] = "/catalog"


def entity_url(entity: Entity) -> str:
    return f"{CATALOG_PREFIX}/{entity.entity_type}/{entity.id}"


def _date_input(value: date | None) -> str:
    return value.isoformat() if value else ""


@dataclass(frozen=True, slots=True)
class DerivedView:
    id: UUID
    url: str


@dataclass(frozen=True, slots=True)
class GenreView(DerivedView):
    name: str


@dataclass(frozen=True, slots=True)
class AuthorView(DerivedView):
    full_name: str
    lifespan: str
    date_of_birth_input: str
    date_of_death_input: str


@dataclass(frozen=True, slots=True)
class BookView(DerivedView):
    title: str


@dataclass(frozen=True, slots=True)
class BookInstanceView(DerivedView):
    imprint: str
    status: str
    due_back_input: str


def full_name(author: Author) -> str:
    """``"Family, First"``; empty when either part is missing."""

    if not author.first_name or not author.family_name:
        return ""
    return f"{author.family_name}, {author.first_name}"


def lifespan(author: Author) -> str:
    return f"{_date_input(author.date_of_birth)} - {_date_input(author.date_of_death)}"


@singledispatch
def derive(entity: Entity) -> DerivedView:
    return DerivedView(id=entity.id, url=entity_url(entity))


@derive.register
def _(entity: Genre) -> GenreView:
    return GenreView(id=entity.id, url=entity_url(entity), name=entity.name)


@derive.register
def _(entity: Author) -> AuthorView:
    return AuthorView(
        id=entity.id,
        url=entity_url(entity),
        full_name=full_name(entity),
        lifespan=lifespan(entity),
        date_of_birth_input=_date_input(entity.date_of_birth),
        date_of_death_input=_date_input(entity.date_of_death),
    )


@derive.register
def _(entity: Book) -> BookView:
    return BookView(id=entity.id, url=entity_url(entity), title=entity.title)


@derive.register
def _(entity: BookInstance) -> BookInstanceView:
    return BookInstanceView(
        id=entity.id,
        url=entity_url(entity),
        imprint=entity.imprint,
        status=str(entity.status),
        due_back_input=_date_input(entity.due_back),
    )
