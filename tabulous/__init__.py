"""Tabletop arrangement engine.

Builds randomized initial layouts from game descriptors, and moves meshes around
(snap, stack, pop, draw in hand, split) over plain, JSON-serializable game data.
Kept free of rendering and transport concerns so it can be reused by servers, tools, and tests.
"""
from __future__ import annotations

from tabulous.camera import build_camera_position
from tabulous.collection import pick_random, shuffle
from tabulous.descriptor import (
    Descriptor,
    DescriptorError,
    ReusedIdsError,
    add_absolute_asset,
    create_meshes,
    enrich_assets,
    is_relative_asset,
    report_reused_ids,
)
from tabulous.hand import draw_in_hand, find_or_create_hand
from tabulous.mesh import decrement, find_anchor, find_mesh, pop, pop_mesh, snap_to, stack_meshes, unsnap
from tabulous.models import (
    Anchor,
    Anchorable,
    CameraPosition,
    Detailable,
    GameData,
    GameSetup,
    Hand,
    Mesh,
    PlayerPreference,
    Quantifiable,
    Slot,
    Stackable,
)
from tabulous.preference import find_available_values, find_player_preferences
from tabulous.utils import NotFoundError, merge_props

__all__ = [
    "Anchor",
    "Anchorable",
    "CameraPosition",
    "Descriptor",
    "DescriptorError",
    "Detailable",
    "GameData",
    "GameSetup",
    "Hand",
    "Mesh",
    "NotFoundError",
    "PlayerPreference",
    "Quantifiable",
    "ReusedIdsError",
    "Slot",
    "Stackable",
    "add_absolute_asset",
    "build_camera_position",
    "create_meshes",
    "decrement",
    "draw_in_hand",
    "enrich_assets",
    "find_anchor",
    "find_available_values",
    "find_mesh",
    "find_or_create_hand",
    "find_player_preferences",
    "is_relative_asset",
    "merge_props",
    "pick_random",
    "pop",
    "pop_mesh",
    "report_reused_ids",
    "shuffle",
    "snap_to",
    "stack_meshes",
    "unsnap",
]
