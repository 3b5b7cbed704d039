from __future__ import annotations

import logging
import random
import time
from uuid import uuid4

from tabulous.catalog.registry import Catalog
from tabulous.catalog.singleton import get_catalog
from tabulous.collection import pick_random
from tabulous.descriptor import create_meshes, enrich_assets, report_reused_ids
from tabulous.models import GameData, PlayerPreference


logger = logging.getLogger(__name__)

DEFAULT_PLAYER_COLORS = ("#ff4500", "#1e90ff", "#ffd700", "#32cd32", "#ff69b4", "#8a2be2", "#00ced1", "#a0522d")

# Descriptor metadata that describes the game kind rather than a single game.
_DESCRIPTOR_ONLY_KEYS = {"maxSeats", "askForParameters"}


def _now_ms() -> int:
    return int(time.time() * 1000)


def create_game(*, kind: str, catalog: Catalog | None = None, seed: int | None = None) -> GameData:
    """Create a game of a given kind, with its randomized initial layout.

    The seed is stored on the game so the layout can be reproduced.
    """

    catalog = catalog or get_catalog()
    descriptor = catalog.require(kind)

    if seed is None:
        seed = random.SystemRandom().randint(1, 2**31 - 1)
    rng = random.Random(seed)

    metadata = dict(getattr(descriptor, "metadata", None) or {})
    max_seats = metadata.get("maxSeats")
    props = {k: v for k, v in metadata.items() if k not in _DESCRIPTOR_ONLY_KEYS}

    game = GameData.model_validate(
        {
            **props,
            "id": str(uuid4()),
            "kind": kind,
            "created": _now_ms(),
            "seed": seed,
            "availableSeats": max_seats if max_seats is not None else 2,
            "meshes": create_meshes(kind, descriptor, rng=rng),
        }
    )
    enrich_assets(game)
    report_reused_ids(game)
    logger.debug("created game %s (%s) with %d meshes", game.id, kind, len(game.meshes))
    return game


def add_player(
    game: GameData,
    *,
    player_id: str,
    color: str | None = None,
    catalog: Catalog | None = None,
    rng: random.Random | None = None,
) -> GameData:
    """Seat a player in a game.

    - Records a color preference: the requested one, or a random color nobody uses yet.
    - Runs the descriptor's `add_player(game, player_id)` hook, if any, then enriches assets again.
    """

    if player_id in game.player_ids:
        raise ValueError(f"Player {player_id} already joined game {game.id}")
    if game.available_seats is not None and game.available_seats <= 0:
        raise ValueError(f"Game {game.id} has no seat available")

    descriptor = None
    if game.kind:
        descriptor = (catalog or get_catalog()).require(game.kind)

    game.player_ids.append(player_id)
    if game.available_seats is not None:
        game.available_seats -= 1

    if descriptor is None:
        return game

    colors = (getattr(game, "colors", None) or {}).get("players") or DEFAULT_PLAYER_COLORS
    used = [getattr(p, "color", None) for p in game.preferences]
    game.preferences.append(PlayerPreference(player_id=player_id, color=color or pick_random(colors, used, rng=rng)))

    hook = getattr(descriptor, "add_player", None)
    if callable(hook):
        game = hook(game, player_id)
    logger.debug("player %s joined game %s", player_id, game.id)
    return enrich_assets(game)
