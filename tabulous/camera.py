from __future__ import annotations

import math
from collections.abc import Sequence

from tabulous.models import CameraPosition


def build_camera_position(
    *,
    player_id: str | None,
    index: int = 0,
    target: Sequence[float] = (0, 0, 0),
    alpha: float = 3 * math.pi / 2,
    beta: float = math.pi / 8,
    elevation: float = 35,
) -> CameraPosition:
    """Build a saved camera position for a player.

    Defaults look at the table origin from the south, slightly elevated. The hash eases change detection.
    """

    if not player_id:
        raise ValueError("camera position requires playerId")
    position = CameraPosition(
        player_id=player_id,
        index=index,
        target=list(target),
        alpha=alpha,
        beta=beta,
        elevation=elevation,
    )
    position.hash = _hash(position)
    return position


def _hash(position: CameraPosition) -> str:
    x, y, z = position.target
    return f"{_num(x)}-{_num(y)}-{_num(z)}-{_num(position.alpha)}-{_num(position.beta)}-{_num(position.elevation)}"


def _num(value: float) -> str:
    # Integral values print without decimals, as in the platform's JSON.
    return str(int(value)) if float(value).is_integer() else repr(float(value))
