from __future__ import annotations

from typing import Sequence

import numpy as np

from ExactTSP.cities import City


def distance(a: City, b: City) -> float:
    """Euclidean distance between two cities."""
    return a.distance_to(b)


def build_matrix(cities: Sequence[City]) -> np.ndarray:
    """Precompute the symmetric pairwise distance matrix.

    Only the upper triangle is evaluated; the lower triangle is mirrored from it
    and the diagonal stays zero.
    """
    n = len(cities)
    matrix = np.zeros((n, n), dtype=float)
    if n < 2:
        return matrix
    coords = np.array([(city.x, city.y) for city in cities], dtype=float)
    rows, cols = np.triu_indices(n, k=1)
    dx = coords[rows, 0] - coords[cols, 0]
    dy = coords[rows, 1] - coords[cols, 1]
    upper = np.sqrt(dx * dx + dy * dy)
    matrix[rows, cols] = upper
    matrix[cols, rows] = upper
    return matrix


def tour_length(cities: Sequence[City], tour: Sequence[int]) -> float:
    """Cyclic tour length computed directly from city coordinates."""
    if len(tour) < 2:
        return 0.0
    total = 0.0
    for i in range(len(tour)):
        a = cities[tour[i]]
        b = cities[tour[(i + 1) % len(tour)]]
        total += a.distance_to(b)
    return total


def cycle_cost(dist_matrix: np.ndarray, tour: Sequence[int]) -> float:
    """Compute tour cost (including return leg) from a distance matrix."""
    if len(tour) < 2:
        return 0.0
    cost = 0.0
    for i in range(len(tour)):
        a = tour[i]
        b = tour[(i + 1) % len(tour)]
        cost += float(dist_matrix[a, b])
    return cost


__all__ = ["build_matrix", "cycle_cost", "distance", "tour_length"]
