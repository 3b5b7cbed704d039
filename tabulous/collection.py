from __future__ import annotations

import random
from collections.abc import Collection, Sequence
from typing import TypeVar


T = TypeVar("T")


def shuffle(items: Sequence[T] | None = None, iterations: int = 1, *, rng: random.Random | None = None) -> list[T]:
    """Return a shuffled copy of `items`; the source is left untouched.

    `rng` makes shuffles reproducible (games store their seed). 0 iterations returns a plain copy.
    """

    rng = rng or random.Random()
    result = list(items or [])
    for _ in range(iterations):
        rng.shuffle(result)
    return result


def pick_random(items: Sequence[T], ignored: Collection[T] = (), *, rng: random.Random | None = None) -> T:
    """Pick a random item that isn't ignored.

    When every item is ignored, picks among all of them.
    """

    if not items:
        raise ValueError("Cannot pick from an empty sequence")
    rng = rng or random.Random()
    candidates = [item for item in items if item not in ignored]
    return rng.choice(candidates or list(items))
