from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from tabulous.models import GameData


@pytest.fixture(scope="session", autouse=True)
def _init_catalog_from_test_fixtures() -> None:
    """Initialize the catalog from `tests/catalog` and forbid silent fallbacks.

    This keeps tests hermetic: only built-in games and fixture descriptors are available.
    """

    os.environ["TABULOUS_STRICT_CATALOG"] = "1"

    from tabulous.catalog.singleton import init_catalog, reset_catalog_for_tests

    reset_catalog_for_tests()
    init_catalog(root=Path(__file__).resolve().parent / "catalog")


@pytest.fixture()
def make_game() -> Callable[..., GameData]:
    """Factory for small game data, meshes and hands given as platform JSON."""

    def _make(**overrides: Any) -> GameData:
        data: dict[str, Any] = {
            "id": "test",
            "kind": "playground",
            "created": 0,
            "meshes": [],
            "hands": [],
        }
        data.update(overrides)
        return GameData.model_validate(data)

    return _make
