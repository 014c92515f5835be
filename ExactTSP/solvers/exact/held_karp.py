from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from ExactTSP.cities import City
from ExactTSP.distance import build_matrix
from ExactTSP.solvers.base import AlgorithmResult, BaseSolver, StateSpaceTooLarge, current_time
from ExactTSP.solvers.exact.branch_and_bound import BranchAndBoundSolver
from ExactTSP.utils.taxonomy import AlgorithmFamily

logger = logging.getLogger(__name__)

# The DP arena holds n * 2**n entries per table; 20 cities is ~21M entries.
MAX_DP_CITIES = 20

NO_PREDECESSOR = -1


def dp_table_entries(n: int) -> int:
    return n * (1 << n)


def subset_layers(n: int) -> List[np.ndarray]:
    """Masks that contain the start city, grouped by subset size (index = size)."""
    masks = np.arange(1, 1 << n, 2, dtype=np.int64)
    sizes = np.zeros_like(masks)
    for bit in range(n):
        sizes += (masks >> bit) & 1
    return [masks[sizes == size] for size in range(n + 1)]


def fill_tables(dist_matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Build the ``cost`` and ``predecessor`` tables indexed by ``[city, mask]``.

    ``cost[v, mask]`` is the shortest path from city 0 through exactly the
    cities in ``mask`` ending at ``v``. Subsets are processed by increasing size,
    so every source state is final before it is read.
    """
    n = dist_matrix.shape[0]
    full = 1 << n
    cost = np.full((n, full), np.inf, dtype=float)
    predecessor = np.full((n, full), NO_PREDECESSOR, dtype=np.int8)
    cost[0, 1] = 0.0

    layers = subset_layers(n)
    for size in range(2, n + 1):
        layer = layers[size]
        for v in range(1, n):
            bit = 1 << v
            targets = layer[(layer & bit) != 0]
            if targets.size == 0:
                continue
            sources = targets ^ bit
            # candidates[u, k]: arrive at v from u, having visited sources[k]
            candidates = cost[:, sources] + dist_matrix[:, v][:, None]
            best_u = np.argmin(candidates, axis=0)
            best = candidates[best_u, np.arange(targets.size)]
            cost[v, targets] = best
            reached = np.isfinite(best)
            predecessor[v, targets[reached]] = best_u[reached]
    return cost, predecessor


def reconstruct_tour(predecessor: np.ndarray, last_city: int) -> List[int]:
    n = predecessor.shape[0]
    mask = (1 << n) - 1
    city = last_city
    path: List[int] = []
    while True:
        path.append(city)
        prev = int(predecessor[city, mask])
        if prev == NO_PREDECESSOR:
            break
        mask ^= 1 << city
        city = prev
    path.reverse()
    return path


class HeldKarpSolver(BaseSolver):
    """Exact bitmask dynamic programming over subsets of visited cities.

    Instances above ``MAX_DP_CITIES`` are handed to branch-and-bound unless
    ``fallback`` is disabled, in which case ``StateSpaceTooLarge`` is raised.
    """

    name = "held_karp"
    family = AlgorithmFamily.DYNAMIC_PROGRAMMING
    practical_limit = MAX_DP_CITIES

    def __init__(self, fallback: bool = True, max_cities: int = MAX_DP_CITIES):
        if max_cities > MAX_DP_CITIES:
            raise ValueError(f"max_cities cannot exceed {MAX_DP_CITIES}, got {max_cities}")
        self.fallback = fallback
        self.max_cities = max_cities

    def solve(self, cities: Sequence[City]) -> AlgorithmResult:
        start_time = current_time()
        trivial = self._trivial_result(cities, start_time)
        if trivial is not None:
            return trivial

        n = len(cities)
        if n > self.max_cities:
            if not self.fallback:
                raise StateSpaceTooLarge(
                    f"Held-Karp needs {dp_table_entries(n)} table entries for {n} cities; "
                    f"the limit is {self.max_cities} cities"
                )
            logger.debug("Held-Karp redirecting %d cities to branch and bound", n)
            result = BranchAndBoundSolver().solve(cities)
            metadata = dict(result.metadata)
            metadata["fallback"] = BranchAndBoundSolver.name
            return AlgorithmResult(
                name=self.name,
                path=result.path,
                cost=result.cost,
                elapsed=current_time() - start_time,
                status=result.status,
                metadata=metadata,
            )

        dist_matrix = build_matrix(cities)
        logger.debug("Held-Karp over %d cities (%d table entries)", n, dp_table_entries(n))
        cost, predecessor = fill_tables(dist_matrix)

        full_mask = (1 << n) - 1
        totals = cost[1:, full_mask] + dist_matrix[1:, 0]
        best_last = int(np.argmin(totals)) + 1
        best_cost = float(totals[best_last - 1])
        path = reconstruct_tour(predecessor, best_last)

        elapsed = current_time() - start_time
        logger.debug("Held-Karp finished in %.3fs, best %.4f", elapsed, best_cost)
        return AlgorithmResult(
            name=self.name,
            path=path,
            cost=best_cost,
            elapsed=elapsed,
            status="complete",
            metadata={"states": int(np.isfinite(cost).sum())},
        )


__all__ = [
    "HeldKarpSolver",
    "MAX_DP_CITIES",
    "NO_PREDECESSOR",
    "dp_table_entries",
    "fill_tables",
    "reconstruct_tour",
    "subset_layers",
]
