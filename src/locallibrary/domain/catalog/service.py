"""Catalog services: validate a submission, then hand the draft to a coordinator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from locallibrary.domain.catalog.creation import create_entity
from locallibrary.domain.catalog.deletion import delete_entity
from locallibrary.domain.catalog.kinds import AUTHOR, BOOK, BOOK_INSTANCE, GENRE
from locallibrary.domain.catalog.queries import (
    book_form_choices,
    book_instance_form_choices,
    catalog_summary,
    get_entity,
    list_entities,
    load_detail,
)
from locallibrary.domain.catalog.updates import update_entity
from locallibrary.domain.errors import ValidationFailed
from locallibrary.domain.model import Entity, EntityType
from locallibrary.domain.validation import CatalogForm, ErrorSet, validate

if TYPE_CHECKING:
    from uuid import UUID

    from locallibrary.domain.catalog.kinds import CatalogKind
    from locallibrary.domain.catalog.outcomes import (
        BookFormChoices,
        BookInstanceFormChoices,
        CatalogSummary,
        CreateOutcome,
        DeleteOutcome,
        Detail,
        Updated,
    )
    from locallibrary.domain.model import Author, Book, BookInstance, Genre
    from locallibrary.domain.ports import EntityStore
    from locallibrary.domain.validation import (
        AuthorForm,
        BookForm,
        BookInstanceForm,
        GenreForm,
        RawForm,
    )


class CatalogService[TEntity: Entity, TForm: CatalogForm]:
    """List/detail/create/update/delete for one entity kind over an injected store."""

    def __init__(self, store: EntityStore, kind: CatalogKind[TEntity, TForm]) -> None:
        self.store = store
        self.kind = kind

    async def list(self) -> list[TEntity]:
        return await list_entities(self.store, self.kind)

    async def detail(self, entity_id: UUID) -> Detail[TEntity]:
        return await load_detail(self.store, self.kind, entity_id)

    async def get(self, entity_id: UUID) -> TEntity:
        return await get_entity(self.store, self.kind, entity_id)

    def validate(self, raw: RawForm) -> TForm | ErrorSet:
        return validate(self.kind.form, raw)

    async def create(self, raw: RawForm) -> CreateOutcome[TEntity]:
        draft = self._require_draft(raw)
        return await create_entity(self.store, self.kind, draft)

    async def update(self, entity_id: UUID, raw: RawForm) -> Updated[TEntity]:
        draft = self._require_draft(raw)
        return await update_entity(self.store, self.kind, entity_id, draft)

    async def delete(self, entity_id: UUID) -> DeleteOutcome[TEntity]:
        return await delete_entity(self.store, self.kind, entity_id)

    def _require_draft(self, raw: RawForm) -> TForm:
        result = self.validate(raw)
        if isinstance(result, ErrorSet):
            raise ValidationFailed(result)
        return result


class Catalog:
    """Entry point for the presentation layer: one service per kind plus lookups."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store
        self.genres: CatalogService[Genre, GenreForm] = CatalogService(store, GENRE)
        self.authors: CatalogService[Author, AuthorForm] = CatalogService(store, AUTHOR)
        self.books: CatalogService[Book, BookForm] = CatalogService(store, BOOK)
        self.book_instances: CatalogService[BookInstance, BookInstanceForm] = CatalogService(
            store, BOOK_INSTANCE
        )

    def service_for(self, entity_type: EntityType) -> CatalogService[Any, Any]:
        services: tuple[CatalogService[Any, Any], ...] = (
            self.genres,
            self.authors,
            self.books,
            self.book_instances,
        )
        for service in services:
            if service.kind.entity_type is entity_type:
                return service
        raise KeyError(entity_type)

    async def summary(self) -> CatalogSummary:
        return await catalog_summary(self.store)

    async def book_form_choices(self) -> BookFormChoices:
        return await book_form_choices(self.store)

    async def book_instance_form_choices(self) -> BookInstanceFormChoices:
        return await book_instance_form_choices(self.store)
