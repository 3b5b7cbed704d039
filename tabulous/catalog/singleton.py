from __future__ import annotations

from pathlib import Path

from tabulous import config
from tabulous.catalog.registry import Catalog, load_catalog


_CATALOG: Catalog | None = None


def init_catalog(*, root: Path | None = None) -> Catalog:
    """Load built-in and JSON game descriptors, keeping the catalog for `get_catalog()`.

    `root` defaults to TABULOUS_CATALOG_DIR. Once loaded, later calls ignore `root`.
    """

    global _CATALOG
    if _CATALOG is None:
        _CATALOG = load_catalog(root=root if root is not None else config.get_catalog_dir())
    return _CATALOG


def reset_catalog_for_tests() -> None:
    """Forget the loaded catalog, so the next `init_catalog()` reads descriptors again."""

    global _CATALOG
    _CATALOG = None


def get_catalog() -> Catalog:
    if _CATALOG is None:
        raise RuntimeError("No game catalog loaded: call init_catalog() first")
    return _CATALOG
