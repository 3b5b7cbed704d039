from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from typing import Any, Protocol

from tabulous import config
from tabulous.collection import shuffle
from tabulous.mesh import capacity, find_anchor, find_mesh, stack_meshes
from tabulous.models import GameData, GameSetup, Mesh, Slot
from tabulous.utils import merge_props


logger = logging.getLogger(__name__)


class Descriptor(Protocol):
    """A game definition: anything exposing `build()` (a module, an object...)."""

    def build(self) -> GameSetup | Mapping[str, Any]: ...


class DescriptorError(ValueError):
    pass


class ReusedIdsError(ValueError):
    pass


def create_meshes(kind: str, descriptor: Descriptor | None, *, rng: random.Random | None = None) -> list[Mesh]:
    """Create a unique, randomized layout from a game descriptor.

    - Descriptor meshes are copied, so games built from the same descriptor never share state.
    - Bags are shuffled, then slots draw from them in declaration order.
    - Meshes left in bags once all slots are filled are not part of the game.
    """

    build = getattr(descriptor, "build", None)
    if not callable(build):
        raise DescriptorError(f"Game {kind} does not export a build() function")

    built = build()
    setup = built if isinstance(built, GameSetup) else GameSetup.model_validate(built)

    mesh_by_id = _clone_all(setup.meshes)
    all_meshes = list(mesh_by_id.values())
    meshes_by_bag_id = _randomize_bags(setup.bags, mesh_by_id, rng=rng)
    for slot in setup.slots or []:
        _fill_slot(slot, meshes_by_bag_id, all_meshes)
    return _remove_dangling_meshes(meshes_by_bag_id, all_meshes)


def _clone_all(meshes: list[Mesh]) -> dict[str, Mesh]:
    return {mesh.id: mesh.model_copy(deep=True) for mesh in meshes}


def _randomize_bags(
    bags: dict[str, list[str]] | None,
    mesh_by_id: dict[str, Mesh],
    *,
    rng: random.Random | None = None,
) -> dict[str, list[Mesh]]:
    meshes_by_bag_id: dict[str, list[Mesh]] = {}
    for bag_id, mesh_ids in (bags or {}).items():
        meshes_by_bag_id[bag_id] = [mesh_by_id[i] for i in shuffle(mesh_ids, rng=rng) if i in mesh_by_id]
    return meshes_by_bag_id


def _fill_slot(slot: Slot, meshes_by_bag_id: dict[str, list[Mesh]], all_meshes: list[Mesh]) -> None:
    """Draw the slot's meshes from its bag and place them.

    Meshes are snapped on the slot's anchor while it has room, the rest is stacked on the
    last snapped one (or on the mesh already there).
    Multiple meshes snapped on a multi-capacity anchor are not laid out.
    """

    candidates = meshes_by_bag_id.get(slot.bag_id)
    if not candidates:
        return

    count = len(candidates) if slot.count is None else slot.count
    meshes = candidates[:count]
    del candidates[:count]

    props = slot.model_extra or {}
    for mesh in meshes:
        merge_props(mesh, props)

    stack = meshes
    if slot.anchor_id:
        anchor = find_anchor(slot.anchor_id, all_meshes)
        snapped = find_mesh(anchor.snapped_ids[0], all_meshes, False) if anchor.snapped_ids else None
        stack = [snapped] if snapped else []
        for mesh in meshes:
            if len(anchor.snapped_ids) >= capacity(anchor):
                stack.append(mesh)
            else:
                anchor.snapped_ids.append(mesh.id)
                stack = [mesh]
    stack_meshes(stack)


def _remove_dangling_meshes(meshes_by_bag_id: dict[str, list[Mesh]], all_meshes: list[Mesh]) -> list[Mesh]:
    removed_ids = {mesh.id for meshes in meshes_by_bag_id.values() for mesh in meshes}
    return [mesh for mesh in all_meshes if mesh.id not in removed_ids]


def is_relative_asset(path: str | None) -> bool:
    return bool(path) and not path.startswith("#") and not path.startswith("/")


def add_absolute_asset(path: str, kind: str, asset_type: str) -> str:
    return f"/{kind}/{asset_type}s/{path}"


def _all_meshes(game: GameData) -> list[Mesh]:
    return [*game.meshes, *(mesh for hand in game.hands for mesh in hand.meshes)]


def enrich_assets(game: GameData) -> GameData:
    """Turn relative textures, models and images of every mesh (table and hands) into absolute paths.

    Paths starting with `/` or `#` (colors) are kept, so running it twice changes nothing.
    """

    kind = game.kind
    if not kind:
        return game

    for mesh in _all_meshes(game):
        if is_relative_asset(mesh.texture):
            mesh.texture = add_absolute_asset(mesh.texture, kind, "texture")
        if is_relative_asset(mesh.file):
            mesh.file = add_absolute_asset(mesh.file, kind, "model")
        if mesh.detailable is not None:
            if is_relative_asset(mesh.detailable.front_image):
                mesh.detailable.front_image = add_absolute_asset(mesh.detailable.front_image, kind, "image")
            if is_relative_asset(mesh.detailable.back_image):
                mesh.detailable.back_image = add_absolute_asset(mesh.detailable.back_image, kind, "image")
    return game


def report_reused_ids(game: GameData, throw_violations: bool | None = None) -> set[str]:
    """Find mesh and anchor ids used more than once, across the table and all hands.

    Reused ids are logged as a warning, or raised when `throw_violations` is set
    (defaults to the TABULOUS_STRICT_IDS setting). Game data is left untouched.
    """

    if throw_violations is None:
        throw_violations = config.strict_ids()

    unique_ids: set[str] = set()
    reused_ids: dict[str, None] = {}

    def check(id: str) -> None:
        if id in unique_ids:
            reused_ids[id] = None
        else:
            unique_ids.add(id)

    for mesh in _all_meshes(game):
        check(mesh.id)
        for anchor in mesh.anchorable.anchors if mesh.anchorable else []:
            check(anchor.id)

    if reused_ids:
        message = f"game {game.kind} ({game.id}) has reused ids: {', '.join(reused_ids)}"
        if throw_violations:
            raise ReusedIdsError(message)
        logger.warning(message)
    return set(reused_ids)
