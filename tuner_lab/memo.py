"""Memo cache for cents-keyed lattice searches.

Searches are keyed on the target rounded to the millicent. Entries are
never evicted: the set of distinct targets met in practice is small, and
a key always maps to the same result.
"""

import math
from typing import Generic, Optional, TypeVar

from . import config
from .intervals import round_half_up

T = TypeVar("T")


def cents_key(cents: float, scale: int = config.CACHE_SCALE) -> Optional[int]:
    """Integer cache key for a cents value, or None if it is not finite."""
    if not math.isfinite(cents):
        return None
    return round_half_up(cents * scale)


class CentsCache(Generic[T]):
    """Append-only map from rounded cents to a search result.

    Not synchronized; share an instance only within one thread.
    """

    def __init__(self, scale: int = config.CACHE_SCALE):
        self.scale = scale
        self._entries: dict[int, T] = {}
        self.hits = 0
        self.misses = 0

    def key(self, cents: float) -> Optional[int]:
        return cents_key(cents, self.scale)

    def get(self, key: int) -> Optional[T]:
        value = self._entries.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def put(self, key: int, value: T) -> None:
        self._entries[key] = value

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: int) -> bool:
        return key in self._entries
