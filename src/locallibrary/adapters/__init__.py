"""Adapters implementing the catalog's ports."""
