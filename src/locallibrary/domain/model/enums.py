"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Discriminator for the catalog's entity kinds."""

    GENRE = "genre"
    AUTHOR = "author"
    BOOK = "book"
    BOOK_INSTANCE = "bookinstance"


class BookInstanceStatus(StrEnum):
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"
