"""Per-kind catalog descriptors.

A kind names the entity class, its form, how lists are ordered, which fields
make two entities "the same" for dedup-create, and which other entities hold
references to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from locallibrary.domain.model import Author, Book, BookInstance, Entity, EntityType, Genre
from locallibrary.domain.ports import Contains
from locallibrary.domain.validation import (
    AuthorForm,
    BookForm,
    BookInstanceForm,
    CatalogForm,
    GenreForm,
)

if TYPE_CHECKING:
    from uuid import UUID

    from locallibrary.domain.ports import Filter


@dataclass(frozen=True, slots=True)
class Dependency:
    """Entities of ``entity_cls`` depend on a target through ``field``."""

    entity_cls: type[Entity]
    field: str
    many: bool = False
    order_by: tuple[str, ...] = ()

    def where(self, target_id: UUID) -> Filter:
        return {self.field: Contains(target_id) if self.many else target_id}


@dataclass(frozen=True, slots=True)
class CatalogKind[TEntity: Entity, TForm: CatalogForm]:
    label: str
    entity_cls: type[TEntity]
    form: type[TForm]
    order_by: tuple[str, ...]
    unique_fields: tuple[str, ...] = ()
    dependency: Dependency | None = None

    @property
    def entity_type(self) -> EntityType:
        return self.entity_cls.ENTITY_TYPE

    def build(self, draft: TForm, entity_id: UUID | None = None) -> TEntity:
        entity = draft.to_entity(entity_id)
        if not isinstance(entity, self.entity_cls):
            raise TypeError(f"{type(draft).__name__} does not build a {self.label}")
        return entity

    def unique_filter(self, entity: TEntity) -> Filter | None:
        """Exact-match lookup for an equivalent entity, or None when the kind has no key."""

        if not self.unique_fields:
            return None
        return {name: getattr(entity, name) for name in self.unique_fields}


GENRE: Final = CatalogKind(
    label="Genre",
    entity_cls=Genre,
    form=GenreForm,
    order_by=("name",),
    unique_fields=("name",),
    dependency=Dependency(Book, "genre_ids", many=True, order_by=("title",)),
)

AUTHOR: Final = CatalogKind(
    label="Author",
    entity_cls=Author,
    form=AuthorForm,
    order_by=("family_name", "first_name"),
    unique_fields=("first_name", "family_name"),
    dependency=Dependency(Book, "author_id", order_by=("title",)),
)

BOOK: Final = CatalogKind(
    label="Book",
    entity_cls=Book,
    form=BookForm,
    order_by=("title",),
    unique_fields=("isbn",),
    dependency=Dependency(BookInstance, "book_id", order_by=("imprint",)),
)

BOOK_INSTANCE: Final = CatalogKind(
    label="Book instance",
    entity_cls=BookInstance,
    form=BookInstanceForm,
    order_by=("imprint",),
)
