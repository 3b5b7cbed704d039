from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from tabulous import config
from tabulous.descriptor import Descriptor
from tabulous.games import klondike
from tabulous.models import GameSetup


logger = logging.getLogger(__name__)

SETUP_KEYS = ("meshes", "bags", "slots")

BUILTIN_DESCRIPTORS: Mapping[str, Descriptor] = MappingProxyType({"klondike": klondike})


class CatalogLoadError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class FileDescriptor:
    """Game descriptor read from a JSON file.

    Layout keys (`meshes`, `bags`, `slots`) feed `build()`; everything else is game metadata.
    """

    name: str
    path: Path
    data: Mapping[str, Any]

    @property
    def metadata(self) -> dict[str, Any]:
        return {k: v for k, v in self.data.items() if k not in SETUP_KEYS and k != "name"}

    def build(self) -> GameSetup:
        # Validated from raw data on each call: every game gets its own objects.
        return GameSetup.model_validate({k: self.data[k] for k in SETUP_KEYS if k in self.data})


def load_descriptor_json(path: Path) -> FileDescriptor:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CatalogLoadError(f"Descriptor file not found: {path}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogLoadError(f"Unexpected descriptor in {path}: expected an object")

    descriptor = FileDescriptor(name=str(data.get("name") or path.stem), path=path, data=data)
    try:
        descriptor.build()
    except ValidationError as e:
        raise CatalogLoadError(f"Invalid descriptor in {path}: {e}") from e
    return descriptor


@dataclass(frozen=True, slots=True)
class Catalog:
    """Game descriptors available for new games, by kind."""

    descriptors: Mapping[str, Descriptor] = field(default_factory=dict)

    @staticmethod
    def from_items(items: Iterable[tuple[str, Descriptor]]) -> "Catalog":
        descriptors: dict[str, Descriptor] = {}
        for kind, descriptor in items:
            if kind in descriptors:
                raise CatalogLoadError(f"Duplicate game kind: {kind}")
            descriptors[kind] = descriptor
        return Catalog(descriptors=descriptors)

    def get(self, kind: str) -> Descriptor | None:
        return self.descriptors.get(kind)

    def require(self, kind: str) -> Descriptor:
        descriptor = self.get(kind)
        if descriptor is None:
            raise ValueError(f"Unknown game kind: {kind}")
        return descriptor

    def kinds(self) -> tuple[str, ...]:
        return tuple(sorted(self.descriptors))

    def __contains__(self, item: object) -> bool:
        return isinstance(item, str) and item in self.descriptors


def load_catalog(*, root: Path | None) -> Catalog:
    """Built-in games plus every `*.json` descriptor found in `root`.

    A missing directory falls back to built-in games, unless TABULOUS_STRICT_CATALOG is set.
    """

    items: list[tuple[str, Descriptor]] = list(BUILTIN_DESCRIPTORS.items())

    if root is None or not root.is_dir():
        if root is not None and config.strict_catalog():
            raise CatalogLoadError(f"Catalog directory not found: {root}")
        if root is not None:
            logger.warning("catalog directory %s not found, using built-in games only", root)
        return Catalog.from_items(items)

    for path in sorted(root.glob("*.json")):
        descriptor = load_descriptor_json(path)
        items.append((descriptor.name, descriptor))
    catalog = Catalog.from_items(items)
    logger.debug("loaded catalog from %s: %s", root, ", ".join(catalog.kinds()))
    return catalog
