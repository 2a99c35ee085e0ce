"""Catalog domain: entities, validation, coordinators, and derived views."""
