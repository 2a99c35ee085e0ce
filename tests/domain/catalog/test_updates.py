from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from locallibrary.domain.catalog import Updated
from locallibrary.domain.errors import NotFoundError, ValidationFailed
from locallibrary.domain.model import Author, BookInstance, BookInstanceStatus, Genre
from tests.helpers.catalog_items import (
    author_form,
    book_instance_form,
    genre_form,
    make_author,
    make_book,
    make_book_instance,
    make_genre,
)

if TYPE_CHECKING:
    from locallibrary.domain.catalog import Catalog
    from tests.helpers.memory_store import InMemoryEntityStore


async def test_update_replaces_every_field(
    catalog: Catalog, memory_store: InMemoryEntityStore
) -> None:
    author = make_author()
    memory_store.seed(author)

    outcome = await catalog.authors.update(
        author.id, author_form("Ursula", "LeGuin", date_of_birth="1929-10-21", date_of_death="")
    )

    assert isinstance(outcome, Updated)
    assert outcome.id == author.id
    stored = memory_store.snapshot(Author)
    assert len(stored) == 1
    assert stored[0].id == author.id
    assert stored[0].date_of_death is None


async def test_update_missing_target_is_not_found(catalog: Catalog) -> None:
    with pytest.raises(NotFoundError):
        await catalog.genres.update(uuid4(), genre_form("Poetry"))


async def test_invalid_update_leaves_stored_entity(
    catalog: Catalog, memory_store: InMemoryEntityStore
) -> None:
    genre = make_genre("Fantasy")
    memory_store.seed(genre)

    with pytest.raises(ValidationFailed):
        await catalog.genres.update(genre.id, genre_form(""))

    assert [stored.name for stored in memory_store.snapshot(Genre)] == ["Fantasy"]


async def test_update_may_duplicate_another_key(
    catalog: Catalog, memory_store: InMemoryEntityStore
) -> None:
    fantasy, poetry = make_genre("Fantasy"), make_genre("Poetry")
    memory_store.seed(fantasy, poetry)

    await catalog.genres.update(poetry.id, genre_form("Fantasy"))

    assert sorted(stored.name for stored in memory_store.snapshot(Genre)) == [
        "Fantasy",
        "Fantasy",
    ]


async def test_update_book_instance_status(
    catalog: Catalog, memory_store: InMemoryEntityStore
) -> None:
    book = make_book(make_author())
    copy = make_book_instance(book, status=BookInstanceStatus.AVAILABLE)
    memory_store.seed(copy)

    outcome = await catalog.book_instances.update(
        copy.id, book_instance_form(book.id, status="Loaned", due_back="2024-06-01")
    )

    assert outcome.entity.status is BookInstanceStatus.LOANED
    stored = memory_store.snapshot(BookInstance)[0]
    assert isinstance(stored, BookInstance)
    assert stored.due_back is not None
    assert stored.due_back.isoformat() == "2024-06-01"
