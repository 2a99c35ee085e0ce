from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from locallibrary.domain.catalog import AlreadyExists, Blocked, Created, Deleted
from locallibrary.domain.errors import NotFoundError, ValidationFailed
from locallibrary.domain.validation import FieldError
from tests.helpers.catalog_items import author_form, book_form, book_instance_form, genre_form

if TYPE_CHECKING:
    from locallibrary.domain.catalog import Catalog


@pytest.fixture(params=["memory", "sqlite"])
def any_catalog(
    request: pytest.FixtureRequest, catalog: Catalog, sqlite_catalog: Catalog
) -> Catalog:
    return catalog if request.param == "memory" else sqlite_catalog


async def test_fantasy_genre_lifecycle(any_catalog: Catalog) -> None:
    genre = await any_catalog.genres.create(genre_form("Fantasy"))
    assert isinstance(genre, Created)

    book = await any_catalog.books.create(book_form(uuid4(), genre.id))
    assert isinstance(book, Created)

    blocked = await any_catalog.genres.delete(genre.id)
    assert isinstance(blocked, Blocked)
    assert [dependent.id for dependent in blocked.dependents] == [book.id]
    assert (await any_catalog.genres.get(genre.id)).name == "Fantasy"

    assert isinstance(await any_catalog.books.delete(book.id), Deleted)
    assert isinstance(await any_catalog.genres.delete(genre.id), Deleted)
    assert [stored.name for stored in await any_catalog.genres.list()] == []


async def test_empty_genre_name_reports_field_error(any_catalog: Catalog) -> None:
    with pytest.raises(ValidationFailed) as excinfo:
        await any_catalog.genres.create(genre_form(""))

    assert tuple(excinfo.value.errors) == (FieldError("name", "Genre name required"),)


async def test_delete_twice_is_deleted_then_not_found(any_catalog: Catalog) -> None:
    author = await any_catalog.authors.create(author_form())

    assert isinstance(await any_catalog.authors.delete(author.id), Deleted)
    with pytest.raises(NotFoundError):
        await any_catalog.authors.delete(author.id)
    with pytest.raises(NotFoundError):
        await any_catalog.authors.detail(author.id)


async def test_missing_ids_are_not_found_for_update_and_delete(any_catalog: Catalog) -> None:
    with pytest.raises(NotFoundError):
        await any_catalog.books.update(uuid4(), book_form(uuid4()))
    with pytest.raises(NotFoundError):
        await any_catalog.book_instances.delete(uuid4())


async def test_sequential_duplicate_creates_keep_one_entity(any_catalog: Catalog) -> None:
    first = await any_catalog.authors.create(author_form("Ursula", "LeGuin"))
    second = await any_catalog.authors.create(author_form("Ursula", "LeGuin"))

    assert isinstance(second, AlreadyExists)
    assert second.id == first.id
    assert len(await any_catalog.authors.list()) == 1


async def test_blocked_lists_every_dependent(any_catalog: Catalog) -> None:
    book = await any_catalog.books.create(book_form(uuid4()))
    copies = [
        await any_catalog.book_instances.create(book_instance_form(book.id, imprint))
        for imprint in ("First printing", "Second printing")
    ]
    await any_catalog.book_instances.create(book_instance_form(uuid4(), "Unrelated"))

    outcome = await any_catalog.books.delete(book.id)

    assert isinstance(outcome, Blocked)
    assert {dependent.id for dependent in outcome.dependents} == {copy.id for copy in copies}
    assert len(await any_catalog.book_instances.list()) == 3


async def test_longest_name_is_stored_escaped(any_catalog: Catalog) -> None:
    created = await any_catalog.genres.create(genre_form("&" * 100))
    assert isinstance(created, Created)

    stored = await any_catalog.genres.get(created.id)

    assert stored.name == "&amp;" * 100
