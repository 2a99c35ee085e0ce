from __future__ import annotations

from datetime import date

from locallibrary.domain.model import Author, BookInstanceStatus
from locallibrary.domain.views import (
    AuthorView,
    BookInstanceView,
    BookView,
    GenreView,
    derive,
    full_name,
)
from tests.helpers.catalog_items import make_author, make_book, make_book_instance, make_genre


def test_genre_view_url() -> None:
    genre = make_genre("Poetry")

    view = derive(genre)

    assert isinstance(view, GenreView)
    assert view.name == "Poetry"
    assert view.url == f"/catalog/genre/{genre.id}"


def test_author_view_name_and_lifespan() -> None:
    author = make_author("Ursula", "LeGuin")

    view = derive(author)

    assert isinstance(view, AuthorView)
    assert view.full_name == "LeGuin, Ursula"
    assert view.lifespan == "1929-10-21 - 2018-01-22"
    assert view.date_of_birth_input == "1929-10-21"
    assert view.url == f"/catalog/author/{author.id}"


def test_author_full_name_empty_when_part_missing() -> None:
    assert full_name(Author(first_name="", family_name="Austen")) == ""
    assert full_name(Author(first_name="Jane", family_name="")) == ""


def test_author_view_without_dates() -> None:
    view = derive(Author(first_name="Jane", family_name="Austen"))

    assert isinstance(view, AuthorView)
    assert view.lifespan == " - "
    assert view.date_of_death_input == ""


def test_book_and_instance_views() -> None:
    book = make_book(make_author())
    instance = make_book_instance(book, status=BookInstanceStatus.LOANED)
    instance.due_back = date(2024, 5, 1)

    book_view = derive(book)
    instance_view = derive(instance)

    assert isinstance(book_view, BookView)
    assert book_view.url == f"/catalog/book/{book.id}"
    assert isinstance(instance_view, BookInstanceView)
    assert instance_view.url == f"/catalog/bookinstance/{instance.id}"
    assert instance_view.status == "Loaned"
    assert instance_view.due_back_input == "2024-05-01"
