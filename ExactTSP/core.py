from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from ExactTSP.cities import City
from ExactTSP.selectors import get_selector
from ExactTSP.solvers import (
    AlgorithmResult,
    BranchAndBoundSolver,
    BruteForceSolver,
    HeldKarpSolver,
    ParallelBruteForceSolver,
    get_solver,
)
from ExactTSP.solvers.base import current_time

logger = logging.getLogger(__name__)

COST_TOLERANCE = 1e-3

COMPARISON_SOLVERS = (
    BruteForceSolver.name,
    ParallelBruteForceSolver.name,
    BranchAndBoundSolver.name,
    HeldKarpSolver.name,
)


@dataclass
class ComparisonReport:
    """Results of several solvers run on the same cities."""

    results: List[AlgorithmResult] = field(default_factory=list)
    tolerance: float = COST_TOLERANCE

    @property
    def best_cost(self) -> float:
        return min((result.cost for result in self.results), default=math.inf)

    @property
    def consistent(self) -> bool:
        best = self.best_cost
        return all(abs(result.cost - best) < self.tolerance for result in self.results)

    def by_speed(self) -> List[AlgorithmResult]:
        return sorted(self.results, key=lambda result: result.elapsed)


class ExactTSP:
    """End-to-end pipeline: instance size -> selector -> exact solver."""

    def __init__(self, selector: object | None = None, selector_name: str = "rule_based", thread_count: int = 4):
        if selector is not None:
            self.selector = selector
        else:
            self.selector = get_selector(selector_name)
        self.thread_count = thread_count

    def solve(self, cities: Sequence[City]) -> AlgorithmResult:
        start_time = current_time()
        solver_cls = self.selector.predict({"n_nodes": len(cities)})
        logger.info("Selected %s for %d cities", solver_cls.name, len(cities))
        result = solver_cls().solve(cities)
        metadata = dict(result.metadata)
        metadata.update(
            {
                "selected_solver": solver_cls.name,
                "wallclock_total": current_time() - start_time,
            }
        )
        return AlgorithmResult(
            name=result.name,
            path=result.path,
            cost=result.cost,
            elapsed=result.elapsed,
            status=result.status,
            metadata=metadata,
        )

    def compare(self, cities: Sequence[City], solver_names: Iterable[str] | None = None) -> ComparisonReport:
        """Run each named solver on ``cities`` and cross-check their optimal costs."""
        report = ComparisonReport()
        for name in solver_names or COMPARISON_SOLVERS:
            kwargs: Dict[str, object] = {}
            if name == ParallelBruteForceSolver.name:
                kwargs["thread_count"] = self.thread_count
            report.results.append(get_solver(name, **kwargs).solve(cities))
        if not report.consistent:
            logger.warning(
                "Solvers disagree on the optimum: %s",
                ", ".join(f"{result.name}={result.cost:.4f}" for result in report.results),
            )
        return report


def solve_brute_force(cities: Sequence[City]) -> Tuple[List[int], float]:
    return BruteForceSolver().solve(cities).as_tuple()


def solve_brute_force_parallel(cities: Sequence[City], thread_count: int) -> Tuple[List[int], float]:
    return ParallelBruteForceSolver(thread_count=thread_count).solve(cities).as_tuple()


def solve_branch_and_bound(cities: Sequence[City]) -> Tuple[List[int], float]:
    return BranchAndBoundSolver().solve(cities).as_tuple()


def solve_bitmask_dp(cities: Sequence[City]) -> Tuple[List[int], float]:
    """Held-Karp; instances above the table ceiling go to branch-and-bound."""
    return HeldKarpSolver().solve(cities).as_tuple()


def solve_optimized(cities: Sequence[City]) -> Tuple[List[int], float]:
    return ExactTSP().solve(cities).as_tuple()


__all__ = [
    "COMPARISON_SOLVERS",
    "COST_TOLERANCE",
    "ComparisonReport",
    "ExactTSP",
    "solve_bitmask_dp",
    "solve_branch_and_bound",
    "solve_brute_force",
    "solve_brute_force_parallel",
    "solve_optimized",
]
