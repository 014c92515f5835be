from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, Type

from ExactTSP.cities import City
from ExactTSP.distance import tour_length
from ExactTSP.utils.taxonomy import AlgorithmFamily


@dataclass
class AlgorithmResult:
    """Container capturing the outcome of running a TSP solver."""

    name: str
    path: List[int]
    cost: float
    elapsed: float
    status: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def as_tuple(self) -> Tuple[List[int], float]:
        return list(self.path), self.cost


class StateSpaceTooLarge(ValueError):
    """Raised when an instance exceeds a solver's tractable state space."""


def current_time() -> float:
    return time.perf_counter()


def trivial_tour(cities: Sequence[City]) -> Tuple[List[int], float] | None:
    """Return the only possible tour for instances with fewer than three cities."""
    n = len(cities)
    if n >= 3:
        return None
    path = list(range(n))
    return path, tour_length(cities, path)


def is_valid_tour(tour: Sequence[int], n: int) -> bool:
    return len(tour) == n and sorted(tour) == list(range(n))


@dataclass(frozen=True)
class SolverSpec:
    """Metadata describing a solver implementation."""

    name: str
    cls: Type["BaseSolver"]
    family: AlgorithmFamily
    practical_limit: int


class BaseSolver:
    """Common interface for ExactTSP solvers."""

    name: str
    family: AlgorithmFamily
    practical_limit: int

    def solve(self, cities: Sequence[City]) -> AlgorithmResult:  # noqa: D401
        """Solve a TSP instance given as a sequence of cities."""
        raise NotImplementedError

    def _trivial_result(self, cities: Sequence[City], start_time: float) -> AlgorithmResult | None:
        trivial = trivial_tour(cities)
        if trivial is None:
            return None
        path, cost = trivial
        return AlgorithmResult(
            name=self.name,
            path=path,
            cost=cost,
            elapsed=current_time() - start_time,
            status="complete",
            metadata={"trivial": True},
        )


__all__ = [
    "AlgorithmResult",
    "AlgorithmFamily",
    "BaseSolver",
    "SolverSpec",
    "StateSpaceTooLarge",
    "current_time",
    "is_valid_tour",
    "trivial_tour",
]
