from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tabulous.mesh import find_anchor, find_mesh, pop_mesh
from tabulous.models import GameData, Hand, Mesh
from tabulous.utils import NotFoundError, merge_props


def find_or_create_hand(game: GameData, player_id: str) -> Hand:
    hand = next((h for h in game.hands if h.player_id == player_id), None)
    if hand is None:
        hand = Hand(player_id=player_id, meshes=[])
        game.hands.append(hand)
    return hand


def _is_exhausted(stack: Mesh) -> bool:
    return not (stack.stackable and stack.stackable.stack_ids)


def _remove(meshes: list[Mesh], mesh: Mesh) -> None:
    for idx, candidate in enumerate(meshes):
        if candidate is mesh:
            del meshes[idx]
            return


def draw_in_hand(
    game: GameData,
    *,
    player_id: str,
    from_anchor: str,
    count: int = 1,
    props: Mapping[str, Any] | None = None,
) -> None:
    """Move meshes from the stack snapped on an anchor into a player's hand.

    - The player's hand is created on first draw.
    - Meshes come from the top of the stack; when it runs out, the base is drawn and drawing stops.
    - `props` are merged into every drawn mesh.
    - Once the stack is empty, the anchor is left with no snapped mesh.
    - A stacked id that resolves to no mesh raises `NotFoundError`; that id is already gone from
      the stack and meshes drawn before it stay in the hand.
    """

    hand = find_or_create_hand(game, player_id)
    meshes = game.meshes
    anchor = find_anchor(from_anchor, meshes)
    stack = find_mesh(anchor.snapped_ids[0], meshes, False) if anchor.snapped_ids else None
    if stack is None:
        raise NotFoundError(f"Anchor {from_anchor} has no snapped mesh")

    for _ in range(count):
        drawn = stack if _is_exhausted(stack) else pop_mesh(stack, meshes)
        merge_props(drawn, props or {})
        hand.meshes.append(drawn)
        _remove(meshes, drawn)
        if drawn is stack:
            break

    if _is_exhausted(stack) and anchor.snapped_ids:
        anchor.snapped_ids.pop(0)
