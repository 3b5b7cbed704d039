from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from tabulous.models import PlayerPreference


T = TypeVar("T")


def find_available_values(
    preferences: Sequence[PlayerPreference],
    name: str,
    possible_values: Sequence[T],
) -> list[T]:
    """Values of `possible_values` no player has picked yet for the `name` preference."""

    used = {getattr(p, name, None) for p in preferences}
    return [value for value in possible_values if value not in used]


def find_player_preferences(preferences: Sequence[PlayerPreference] | None, player_id: str) -> dict[str, Any]:
    preference = next((p for p in preferences or [] if p.player_id == player_id), None)
    if preference is None:
        return {}
    return preference.model_dump(exclude={"player_id"})
