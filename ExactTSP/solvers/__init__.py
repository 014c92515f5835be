from __future__ import annotations

from ExactTSP.solvers.base import AlgorithmResult, BaseSolver, SolverSpec, StateSpaceTooLarge
from ExactTSP.solvers.exact import (
    BranchAndBoundSolver,
    BruteForceSolver,
    HeldKarpSolver,
    ParallelBruteForceSolver,
)
from ExactTSP.utils.taxonomy import AlgorithmFamily

SOLVER_SPECS: dict[str, SolverSpec] = {
    solver_cls.name: SolverSpec(
        name=solver_cls.name,
        cls=solver_cls,
        family=solver_cls.family,
        practical_limit=solver_cls.practical_limit,
    )
    for solver_cls in (
        BruteForceSolver,
        ParallelBruteForceSolver,
        BranchAndBoundSolver,
        HeldKarpSolver,
    )
}

SOLVER_REGISTRY: dict[str, type[BaseSolver]] = {name: spec.cls for name, spec in SOLVER_SPECS.items()}
SOLVER_FAMILIES: dict[str, AlgorithmFamily] = {name: spec.family for name, spec in SOLVER_SPECS.items()}
SOLVER_LIMITS: dict[str, int] = {name: spec.practical_limit for name, spec in SOLVER_SPECS.items()}


def get_solver(name: str, **kwargs) -> BaseSolver:
    solver_cls = SOLVER_REGISTRY.get(name)
    if solver_cls is None:
        raise KeyError(f"Unknown solver: {name}")
    return solver_cls(**kwargs)


__all__ = [
    "AlgorithmResult",
    "AlgorithmFamily",
    "BaseSolver",
    "BranchAndBoundSolver",
    "BruteForceSolver",
    "HeldKarpSolver",
    "ParallelBruteForceSolver",
    "SOLVER_FAMILIES",
    "SOLVER_LIMITS",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "SolverSpec",
    "StateSpaceTooLarge",
    "get_solver",
]
