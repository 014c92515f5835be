from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence

DEFAULT_SEED = 42
CITY_SCALE = 100.0

_MASK64 = (1 << 64) - 1
_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_ZERO_SEED_REPLACEMENT = 12345


@dataclass(frozen=True)
class City:
    """A point in the plane with a stable index."""

    id: int
    x: float
    y: float

    def distance_to(self, other: "City") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)


class SimpleRng:
    """64-bit linear congruential generator for reproducible instances."""

    def __init__(self, seed: int = DEFAULT_SEED):
        seed = int(seed) & _MASK64
        self.state = seed if seed != 0 else _ZERO_SEED_REPLACEMENT

    def next(self) -> int:
        self.state = (self.state * _LCG_MULTIPLIER + _LCG_INCREMENT) & _MASK64
        return self.state

    def next_float(self) -> float:
        return self.next() / float(_MASK64)


def generate_cities(count: int, seed: int = DEFAULT_SEED) -> List[City]:
    """Generate ``count`` cities uniformly in ``[0, 100) x [0, 100)``."""
    if count < 0:
        raise ValueError(f"City count must be non-negative, got {count}")
    rng = SimpleRng(seed)
    cities: List[City] = []
    for i in range(count):
        x = rng.next_float() * CITY_SCALE
        y = rng.next_float() * CITY_SCALE
        cities.append(City(id=i, x=x, y=y))
    return cities


def cities_from_coordinates(coordinates: Iterable[Sequence[float]]) -> List[City]:
    cities: List[City] = []
    for i, point in enumerate(coordinates):
        x, y = (float(v) for v in point)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"City {i} has non-finite coordinates ({x}, {y})")
        cities.append(City(id=i, x=x, y=y))
    return cities


__all__ = [
    "CITY_SCALE",
    "City",
    "DEFAULT_SEED",
    "SimpleRng",
    "cities_from_coordinates",
    "generate_cities",
]
