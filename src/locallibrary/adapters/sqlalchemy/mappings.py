"""SQLAlchemy table metadata and row translation for the catalog."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from sqlalchemy import (
    Column,
    Date,
    Enum,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    Uuid,
)

from locallibrary.domain.model import Author, Book, BookInstance, BookInstanceStatus, Entity, Genre
from locallibrary.domain.validation import NAME_MAX_LENGTH

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

UUIDColumnType = Uuid[uuid.UUID]

# names are stored HTML-escaped; html.escape turns one character into at most six
ESCAPED_NAME_LENGTH: Final = NAME_MAX_LENGTH * 6

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# References between collections are plain id columns: integrity is checked by
# the catalog before deletes, not by the database.

genre_table = Table(
    "genre",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("name", String(ESCAPED_NAME_LENGTH), nullable=False),
    Index("ix_genre_name", "name"),
)

author_table = Table(
    "author",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("first_name", String(ESCAPED_NAME_LENGTH), nullable=False),
    Column("family_name", String(ESCAPED_NAME_LENGTH), nullable=False),
    Column("date_of_birth", Date, nullable=True),
    Column("date_of_death", Date, nullable=True),
    Index("ix_author_name", "family_name", "first_name"),
)

book_table = Table(
    "book",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("title", String, nullable=False),
    Column("author_id", UUIDColumnType, nullable=False),
    Column("summary", Text, nullable=False),
    Column("isbn", String, nullable=False),
    Index("ix_book_author_id", "author_id"),
    Index("ix_book_isbn", "isbn"),
)

book_genre_table = Table(
    "book_genre",
    metadata,
    Column("book_id", UUIDColumnType, primary_key=True),
    Column("genre_id", UUIDColumnType, primary_key=True),
    Column("position", Integer, nullable=False, default=0),
    Index("ix_book_genre_genre_id", "genre_id"),
)

book_instance_table = Table(
    "book_instance",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("book_id", UUIDColumnType, nullable=False),
    Column("imprint", String, nullable=False),
    Column(
        "status",
        Enum(BookInstanceStatus, native_enum=False, name="book_instance_status"),
        nullable=False,
    ),
    Column("due_back", Date, nullable=True),
    Index("ix_book_instance_book_id", "book_id"),
)


@dataclass(frozen=True, slots=True)
class LinkTable:
    """Link table holding a list-valued reference attribute, in list order."""

    attribute: str
    table: Table
    owner_column: str
    target_column: str


@dataclass(frozen=True, slots=True)
class TableBinding[TEntity: Entity]:
    entity_cls: type[TEntity]
    table: Table
    link: LinkTable | None = None

    def to_row(self, entity: TEntity) -> dict[str, Any]:
        return {column.key: getattr(entity, column.key) for column in self.table.columns}

    def from_row(self, row: Mapping[str, Any], targets: Sequence[uuid.UUID] = ()) -> TEntity:
        values = dict(row)
        if self.link is not None:
            values[self.link.attribute] = list(targets)
        return self.entity_cls(**values)

    def link_rows(self, entity: TEntity) -> list[dict[str, Any]]:
        if self.link is None:
            return []
        targets: Sequence[uuid.UUID] = getattr(entity, self.link.attribute)
        return [
            {
                self.link.owner_column: entity.id,
                self.link.target_column: target,
                "position": position,
            }
            for position, target in enumerate(targets)
        ]


BINDINGS: Final[dict[type[Entity], TableBinding[Any]]] = {
    Genre: TableBinding(Genre, genre_table),
    Author: TableBinding(Author, author_table),
    Book: TableBinding(
        Book,
        book_table,
        link=LinkTable(
            attribute="genre_ids",
            table=book_genre_table,
            owner_column="book_id",
            target_column="genre_id",
        ),
    ),
    BookInstance: TableBinding(BookInstance, book_instance_table),
}


def binding_for[TEntity: Entity](entity_cls: type[TEntity]) -> TableBinding[TEntity]:
    try:
        return BINDINGS[entity_cls]
    except KeyError:
        raise TypeError(f"No table mapped for {entity_cls.__name__}") from None
