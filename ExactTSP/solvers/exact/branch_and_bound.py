from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from ExactTSP.cities import City
from ExactTSP.distance import build_matrix
from ExactTSP.solvers.base import AlgorithmResult, BaseSolver, current_time
from ExactTSP.utils.taxonomy import AlgorithmFamily

logger = logging.getLogger(__name__)


class BranchAndBoundSolver(BaseSolver):
    """Depth-first enumeration from city 0 that prunes on the accumulated distance.

    A partial tour whose length already equals or exceeds the best complete tour
    is abandoned: edges are non-negative, so no completion can beat the best.
    With zero-length edges (duplicate cities) this can skip a tour that merely
    ties the best; the optimal length is still found and one optimal tour is
    reported.
    """

    name = "branch_and_bound"
    family = AlgorithmFamily.BRANCH_AND_BOUND
    practical_limit = 14

    def solve(self, cities: Sequence[City], dist_matrix: np.ndarray | None = None) -> AlgorithmResult:
        start_time = current_time()
        trivial = self._trivial_result(cities, start_time)
        if trivial is not None:
            return trivial

        n = len(cities)
        matrix = build_matrix(cities) if dist_matrix is None else np.asarray(dist_matrix, dtype=float)
        # Nested lists keep scalar lookups cheap inside the recursion.
        dist = matrix.tolist()
        best_cost = float("inf")
        best_path: Tuple[int, ...] | None = None
        nodes_explored = 0
        pruned = 0

        def dfs(path: Tuple[int, ...], remaining: Tuple[int, ...], cost_so_far: float) -> None:
            nonlocal best_cost, best_path, nodes_explored, pruned
            nodes_explored += 1

            if not remaining:
                total_cost = cost_so_far + dist[path[-1]][0]
                if total_cost < best_cost:
                    best_cost = total_cost
                    best_path = path
                return

            last = path[-1]
            for i, next_city in enumerate(remaining):
                new_cost = cost_so_far + dist[last][next_city]
                if new_cost >= best_cost:
                    pruned += 1
                    continue
                dfs(path + (next_city,), remaining[:i] + remaining[i + 1 :], new_cost)

        logger.debug("Branch and bound over %d cities", n)
        dfs((0,), tuple(range(1, n)), 0.0)

        if best_path is None:
            raise RuntimeError(f"Branch and bound found no tour for {n} cities")
        elapsed = current_time() - start_time
        logger.debug(
            "Branch and bound explored %d nodes, pruned %d subtrees in %.3fs, best %.4f",
            nodes_explored,
            pruned,
            elapsed,
            best_cost,
        )
        return AlgorithmResult(
            name=self.name,
            path=list(best_path),
            cost=best_cost,
            elapsed=elapsed,
            status="complete",
            metadata={"nodes_explored": nodes_explored, "pruned": pruned},
        )


__all__ = ["BranchAndBoundSolver"]
