"""Form payloads and entity builders shared by catalog tests."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from locallibrary.domain.model import Author, Book, BookInstance, BookInstanceStatus, Genre

if TYPE_CHECKING:
    from uuid import UUID

    from locallibrary.domain.validation import RawForm


def genre_form(name: str = "Fantasy") -> RawForm:
    return {"name": name}


def author_form(
    first_name: str = "Ursula",
    family_name: str = "LeGuin",
    date_of_birth: str = "1929-10-21",
    date_of_death: str = "2018-01-22",
) -> RawForm:
    return {
        "first_name": first_name,
        "family_name": family_name,
        "date_of_birth": date_of_birth,
        "date_of_death": date_of_death,
    }


def book_form(
    author_id: UUID,
    *genre_ids: UUID,
    title: str = "A Wizard of Earthsea",
    isbn: str = "9780547773742",
    summary: str = "A young wizard on Gont.",
) -> RawForm:
    return {
        "title": title,
        "author": str(author_id),
        "summary": summary,
        "isbn": isbn,
        "genre": [str(genre_id) for genre_id in genre_ids],
    }


def book_instance_form(
    book_id: UUID,
    imprint: str = "Parnassus Press, 1968",
    status: str = "Available",
    due_back: str = "",
) -> RawForm:
    return {
        "book": str(book_id),
        "imprint": imprint,
        "status": status,
        "due_back": due_back,
    }


def make_genre(name: str = "Fantasy") -> Genre:
    return Genre(name=name)


def make_author(first_name: str = "Ursula", family_name: str = "LeGuin") -> Author:
    return Author(
        first_name=first_name,
        family_name=family_name,
        date_of_birth=date(1929, 10, 21),
        date_of_death=date(2018, 1, 22),
    )


def make_book(
    author: Author,
    *genres: Genre,
    title: str = "A Wizard of Earthsea",
    isbn: str = "9780547773742",
) -> Book:
    return Book(
        title=title,
        author_id=author.id,
        summary="A young wizard on Gont.",
        isbn=isbn,
        genre_ids=[genre.id for genre in genres],
    )


def make_book_instance(
    book: Book,
    imprint: str = "Parnassus Press, 1968",
    status: BookInstanceStatus = BookInstanceStatus.AVAILABLE,
) -> BookInstance:
    return BookInstance(book_id=book.id, imprint=imprint, status=status)
