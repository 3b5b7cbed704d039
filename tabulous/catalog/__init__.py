"""Game descriptors available to create games: built-in Python modules and JSON files."""
from __future__ import annotations

from tabulous.catalog.registry import Catalog, CatalogLoadError, FileDescriptor, load_catalog, load_descriptor_json
from tabulous.catalog.singleton import get_catalog, init_catalog, reset_catalog_for_tests

__all__ = [
    "Catalog",
    "CatalogLoadError",
    "FileDescriptor",
    "get_catalog",
    "init_catalog",
    "load_catalog",
    "load_descriptor_json",
    "reset_catalog_for_tests",
]
