"""Read-side coordinators: lists, details, and cross-entity lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING

from locallibrary.domain.catalog.fanout import join_all, join_pair
from locallibrary.domain.catalog.kinds import AUTHOR, BOOK, GENRE
from locallibrary.domain.catalog.outcomes import (
    BookFormChoices,
    BookInstanceFormChoices,
    CatalogSummary,
    Detail,
)
from locallibrary.domain.errors import NotFoundError
from locallibrary.domain.model import (
    Author,
    Book,
    BookInstance,
    BookInstanceStatus,
    Entity,
    Genre,
)

if TYPE_CHECKING:
    from uuid import UUID

    from locallibrary.domain.catalog.kinds import CatalogKind
    from locallibrary.domain.ports import EntityStore
    from locallibrary.domain.validation import CatalogForm


async def list_entities[TEntity: Entity](
    store: EntityStore,
    kind: CatalogKind[TEntity, CatalogForm],
) -> list[TEntity]:
    return await store.find_all(kind.entity_cls, order_by=kind.order_by)


async def get_entity[TEntity: Entity](
    store: EntityStore,
    kind: CatalogKind[TEntity, CatalogForm],
    entity_id: UUID,
) -> TEntity:
    entity = await store.find_by_id(kind.entity_cls, entity_id)
    if entity is None:
        raise NotFoundError(kind.label, entity_id)
    return entity


async def fetch_with_dependents[TEntity: Entity](
    store: EntityStore,
    kind: CatalogKind[TEntity, CatalogForm],
    entity_id: UUID,
) -> tuple[TEntity | None, list[Entity]]:
    """Load the target and everything referencing it, both reads in flight at once."""

    dependency = kind.dependency
    if dependency is None:
        return await store.find_by_id(kind.entity_cls, entity_id), []
    entity, dependents = await join_pair(
        store.find_by_id(kind.entity_cls, entity_id),
        store.find_all(
            dependency.entity_cls,
            where=dependency.where(entity_id),
            order_by=dependency.order_by,
        ),
    )
    return entity, list(dependents)


async def load_detail[TEntity: Entity](
    store: EntityStore,
    kind: CatalogKind[TEntity, CatalogForm],
    entity_id: UUID,
) -> Detail[TEntity]:
    entity, dependents = await fetch_with_dependents(store, kind, entity_id)
    if entity is None:
        raise NotFoundError(kind.label, entity_id)
    return Detail(entity, tuple(dependents))


async def catalog_summary(store: EntityStore) -> CatalogSummary:
    """Record counts for the catalog landing page."""

    books, instances, available, authors, genres = await join_all(
        store.count(Book),
        store.count(BookInstance),
        store.count(BookInstance, where={"status": BookInstanceStatus.AVAILABLE}),
        store.count(Author),
        store.count(Genre),
    )
    return CatalogSummary(
        book_count=books,
        book_instance_count=instances,
        book_instance_available_count=available,
        author_count=authors,
        genre_count=genres,
    )


async def book_form_choices(store: EntityStore) -> BookFormChoices:
    authors, genres = await join_pair(
        list_entities(store, AUTHOR),
        list_entities(store, GENRE),
    )
    return BookFormChoices(authors=tuple(authors), genres=tuple(genres))


async def book_instance_form_choices(store: EntityStore) -> BookInstanceFormChoices:
    books = await list_entities(store, BOOK)
    return BookInstanceFormChoices(books=tuple(books))
