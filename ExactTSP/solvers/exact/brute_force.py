from __future__ import annotations

import itertools
import logging
from typing import Iterator, List, Sequence, Tuple

from ExactTSP.cities import City
from ExactTSP.distance import tour_length
from ExactTSP.solvers.base import AlgorithmResult, BaseSolver, current_time
from ExactTSP.utils.taxonomy import AlgorithmFamily

logger = logging.getLogger(__name__)


def tours_from(prefix: Tuple[int, ...], rest: Sequence[int]) -> Iterator[Tuple[int, ...]]:
    """Lazily yield every tour that starts with ``prefix`` and ends with a permutation of ``rest``.

    Each tour is a fresh tuple, so callers may keep it without copying.
    """
    for perm in itertools.permutations(rest):
        yield prefix + perm


def search_tours(cities: Sequence[City], tours: Iterator[Tuple[int, ...]]) -> Tuple[List[int] | None, float, int]:
    """Scan ``tours`` and return the shortest one, its length and how many were checked."""
    best_cost = float("inf")
    best_path: List[int] | None = None
    checked = 0
    for tour in tours:
        checked += 1
        cost = tour_length(cities, tour)
        if cost < best_cost:
            best_cost = cost
            best_path = list(tour)
    return best_path, best_cost, checked


class BruteForceSolver(BaseSolver):
    name = "brute_force"
    family = AlgorithmFamily.ENUMERATION
    practical_limit = 11

    def solve(self, cities: Sequence[City]) -> AlgorithmResult:
        start_time = current_time()
        trivial = self._trivial_result(cities, start_time)
        if trivial is not None:
            return trivial

        n = len(cities)
        logger.debug("Brute force over %d cities (%d! tours)", n, n - 1)
        # City 0 is fixed in front; rotations of a tour share its length.
        best_path, best_cost, checked = search_tours(cities, tours_from((0,), range(1, n)))
        if best_path is None:
            raise RuntimeError(f"Brute force found no tour for {n} cities")
        elapsed = current_time() - start_time
        logger.debug("Brute force checked %d tours in %.3fs, best %.4f", checked, elapsed, best_cost)
        return AlgorithmResult(
            name=self.name,
            path=best_path,
            cost=best_cost,
            elapsed=elapsed,
            status="complete",
            metadata={"permutations_checked": checked},
        )


__all__ = ["BruteForceSolver", "search_tours", "tours_from"]
