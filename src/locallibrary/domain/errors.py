"""Failure taxonomy for catalog operations.

``Blocked`` deletions are not errors and live with the other outcomes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from locallibrary.domain.validation import ErrorSet


class CatalogError(Exception):
    """Base class for failures surfaced by the catalog."""


class ValidationFailed(CatalogError):  # noqa: N818
    """Raised when a submitted form does not produce a draft."""

    def __init__(self, errors: ErrorSet) -> None:
        self.errors = errors
        fields = ", ".join(error.field for error in errors)
        super().__init__(f"Validation failed for: {fields}")


class NotFoundError(CatalogError):
    """Raised when the targeted entity does not exist in the store."""

    status = 404

    def __init__(self, label: str, entity_id: UUID) -> None:
        self.label = label
        self.entity_id = entity_id
        super().__init__(f"{label} not found")


class StoreError(CatalogError):
    """Raised by store adapters for I/O, constraint, or timeout failures."""


class DuplicateKeyError(StoreError):
    """Raised by store adapters when an insert violates a uniqueness constraint."""
