"""Form validation: raw submitted fields in, a draft or an error set out.

Each form field is annotated with an ordered list of independent predicates.
Every field is checked, so one submission reports all failing fields at once.
Validation is pure and never consults the store.
"""

from __future__ import annotations

import html
from abc import abstractmethod
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    ValidationError,
    model_validator,
)

from locallibrary.domain.model import Author, Book, BookInstance, BookInstanceStatus, Genre

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

    from locallibrary.domain.model import Entity

type RawValue = str | Sequence[str] | None
type RawForm = Mapping[str, RawValue]

NAME_MAX_LENGTH = 100


@dataclass(frozen=True, slots=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True, slots=True)
class ErrorSet:
    """Ordered field errors, in form declaration order."""

    errors: tuple[FieldError, ...]

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(error.field for error in self.errors)

    def messages_for(self, field: str) -> tuple[str, ...]:
        return tuple(error.message for error in self.errors if error.field == field)


# Field predicates -------------------------------------------------------------


def _scalar(value: object) -> object:
    # repeated form keys keep the last submitted value for single-valued fields
    if isinstance(value, list | tuple):
        items: Sequence[object] = value
        return items[-1] if items else None
    return value


def _trim(value: object) -> object:
    value = _scalar(value)
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return value


def required(message: str) -> AfterValidator:
    def check(value: str) -> str:
        if not value:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def max_length(limit: int, message: str) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) > limit:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def alphanumeric(message: str) -> AfterValidator:
    def check(value: str) -> str:
        if value and not value.isalnum():
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _escape(value: str) -> str:
    return html.escape(value)


# text fields are trimmed first and escaped for HTML output last
_TRIM = BeforeValidator(_trim)
_ESCAPE = AfterValidator(_escape)


def optional_date(message: str) -> BeforeValidator:
    def parse(value: object) -> date | None:
        value = _trim(value)
        if value == "":
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value))
        except ValueError as exc:
            raise ValueError(message) from exc

    return BeforeValidator(parse)


def reference(missing: str, invalid: str) -> BeforeValidator:
    def parse(value: object) -> UUID:
        value = _trim(value)
        if isinstance(value, UUID):
            return value
        if not value:
            raise ValueError(missing)
        try:
            return UUID(str(value))
        except ValueError as exc:
            raise ValueError(invalid) from exc

    return BeforeValidator(parse)


def reference_list(invalid: str) -> BeforeValidator:
    def parse(value: object) -> list[UUID]:
        if value is None:
            return []
        if isinstance(value, str | UUID):
            value = [value]
        if not isinstance(value, Sequence):
            raise ValueError(invalid)
        ids: list[UUID] = []
        for item in value:
            if isinstance(item, UUID):
                parsed = item
            else:
                stripped = str(item).strip()
                if not stripped:
                    continue
                try:
                    parsed = UUID(stripped)
                except ValueError as exc:
                    raise ValueError(invalid) from exc
            if parsed not in ids:
                ids.append(parsed)
        return ids

    return BeforeValidator(parse)


def _status(value: object) -> BookInstanceStatus:
    value = _trim(value)
    if not value:
        return BookInstanceStatus.MAINTENANCE
    try:
        return BookInstanceStatus(value)
    except ValueError as exc:
        raise ValueError("Invalid status") from exc


# Forms ------------------------------------------------------------------------


def _identity(entity_id: UUID | None) -> dict[str, UUID]:
    return {} if entity_id is None else {"id": entity_id}


class CatalogForm(BaseModel):
    """A validated draft: normalized field values without a store identity.

    Fields absent from the submission are validated as ``None``, so each
    field's own predicates decide whether it is required.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def absent_fields_as_none(cls, data: object) -> object:
        if not isinstance(data, Mapping):
            return data
        submitted: Mapping[str, object] = data
        return {name: None for name in cls.model_fields} | dict(submitted)

    @abstractmethod
    def to_entity(self, entity_id: UUID | None = None) -> Entity:
        """Build the entity, reusing ``entity_id`` for full-replacement updates."""


GenreName = Annotated[
    str,
    _TRIM,
    required("Genre name required"),
    max_length(NAME_MAX_LENGTH, "Genre name must be at most 100 characters"),
    _ESCAPE,
]
FirstName = Annotated[
    str,
    _TRIM,
    required("First name must be specified."),
    max_length(NAME_MAX_LENGTH, "First name must be at most 100 characters."),
    alphanumeric("First name has non-alphanumeric characters."),
    _ESCAPE,
]
FamilyName = Annotated[
    str,
    _TRIM,
    required("Family name must be specified."),
    max_length(NAME_MAX_LENGTH, "Family name must be at most 100 characters."),
    alphanumeric("Family name has non-alphanumeric characters."),
    _ESCAPE,
]
Title = Annotated[str, _TRIM, required("Title must not be empty."), _ESCAPE]
Summary = Annotated[str, _TRIM, required("Summary must not be empty."), _ESCAPE]
Isbn = Annotated[str, _TRIM, required("ISBN must not be empty"), _ESCAPE]
Imprint = Annotated[str, _TRIM, required("Imprint must be specified"), _ESCAPE]


class GenreForm(CatalogForm):
    name: GenreName

    def to_entity(self, entity_id: UUID | None = None) -> Genre:
        return Genre(name=self.name, **_identity(entity_id))


class AuthorForm(CatalogForm):
    first_name: FirstName
    family_name: FamilyName
    date_of_birth: Annotated[date | None, optional_date("Invalid date of birth")]
    date_of_death: Annotated[date | None, optional_date("Invalid date of death")]

    def to_entity(self, entity_id: UUID | None = None) -> Author:
        return Author(
            first_name=self.first_name,
            family_name=self.family_name,
            date_of_birth=self.date_of_birth,
            date_of_death=self.date_of_death,
            **_identity(entity_id),
        )


class BookForm(CatalogForm):
    title: Title
    author: Annotated[
        UUID,
        reference("Author must not be empty.", "Author must be a valid identifier."),
    ]
    summary: Summary
    isbn: Isbn
    genre: Annotated[list[UUID], reference_list("Genre must be a valid identifier.")]

    def to_entity(self, entity_id: UUID | None = None) -> Book:
        return Book(
            title=self.title,
            author_id=self.author,
            summary=self.summary,
            isbn=self.isbn,
            genre_ids=list(self.genre),
            **_identity(entity_id),
        )


class BookInstanceForm(CatalogForm):
    book: Annotated[
        UUID,
        reference("Book must be specified", "Book must be a valid identifier."),
    ]
    imprint: Imprint
    status: Annotated[BookInstanceStatus, BeforeValidator(_status)]
    due_back: Annotated[date | None, optional_date("Invalid date")]

    def to_entity(self, entity_id: UUID | None = None) -> BookInstance:
        return BookInstance(
            book_id=self.book,
            imprint=self.imprint,
            status=self.status,
            due_back=self.due_back,
            **_identity(entity_id),
        )


# Pipeline ---------------------------------------------------------------------


def _field_error(error: ErrorDetails) -> FieldError:
    location = error["loc"]
    field = str(location[0]) if location else "__all__"
    context = error.get("ctx") or {}
    cause = context.get("error")
    if error["type"] == "value_error" and cause is not None:
        return FieldError(field=field, message=str(cause))
    return FieldError(field=field, message=error["msg"])


def validate[TForm: CatalogForm](form: type[TForm], raw: RawForm) -> TForm | ErrorSet:
    """Validate ``raw`` submitted fields against ``form``."""

    try:
        return form.model_validate(dict(raw))
    except ValidationError as exc:
        return ErrorSet(tuple(_field_error(error) for error in exc.errors()))
