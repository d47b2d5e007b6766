# -----------------------------------------------------------------------------
# glide_functions/services/random_service.py — Keyed pseudo-random numbers
# -----------------------------------------------------------------------------
# A non-empty key pins the underlying draw in [0, 1); min/max are applied
# afterwards, so a later call with the same key and a different range rescales
# the same draw. An empty key always draws afresh.
# -----------------------------------------------------------------------------

import random
from typing import Callable


class RandomCache:
    """Draws remembered per key.

    Unbounded and never evicted: entries live as long as the cache object
    (one per process in the HTTP host) unless ``clear`` is called.
    """

    def __init__(self) -> None:
        self._draws: dict[str, float] = {}

    def get(self, key: str) -> float | None:
        return self._draws.get(key)

    def set(self, key: str, draw: float) -> None:
        self._draws[key] = draw

    def clear(self) -> None:
        self._draws.clear()

    def __len__(self) -> int:
        return len(self._draws)

    def __contains__(self, key: object) -> bool:
        return key in self._draws


def random_number(
    key: str = "",
    minimum: float = 0.0,
    maximum: float = 1.0,
    cache: RandomCache | None = None,
    rng: Callable[[], float] = random.random,
) -> float:
    draw = None
    if key and cache is not None:
        draw = cache.get(key)
    if draw is None:
        draw = rng()
        if key and cache is not None:
            cache.set(key, draw)
    return draw * (maximum - minimum) + minimum
