from __future__ import annotations

import os
from pathlib import Path


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes"}


def get_catalog_dir() -> Path | None:
    """Directory holding JSON game descriptors, if any."""

    raw = os.environ.get("TABULOUS_CATALOG_DIR", "").strip()
    return Path(raw) if raw else None


def strict_catalog() -> bool:
    """Fail instead of falling back to built-in games when the catalog directory can't be read."""

    return _flag("TABULOUS_STRICT_CATALOG")


def strict_ids() -> bool:
    """Raise on reused mesh/anchor ids instead of logging a warning."""

    return _flag("TABULOUS_STRICT_IDS")
