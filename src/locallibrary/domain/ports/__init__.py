"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import Contains, EntityStore, Filter

__all__ = [
    "Contains",
    "EntityStore",
    "Filter",
]
