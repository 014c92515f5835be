from ExactTSP.cities import City, SimpleRng, cities_from_coordinates, generate_cities
from ExactTSP.core import (
    COST_TOLERANCE,
    ComparisonReport,
    ExactTSP,
    solve_bitmask_dp,
    solve_branch_and_bound,
    solve_brute_force,
    solve_brute_force_parallel,
    solve_optimized,
)
from ExactTSP.distance import build_matrix, distance, tour_length
from ExactTSP.selectors import BaseSelector, RuleBasedSelector, get_selector
from ExactTSP.solvers import (
    AlgorithmResult,
    BaseSolver,
    SOLVER_FAMILIES,
    SOLVER_LIMITS,
    SOLVER_REGISTRY,
    SOLVER_SPECS,
    StateSpaceTooLarge,
    get_solver,
)
from ExactTSP.utils.taxonomy import AlgorithmFamily

__all__ = [
    "COST_TOLERANCE",
    "AlgorithmFamily",
    "AlgorithmResult",
    "BaseSelector",
    "BaseSolver",
    "City",
    "ComparisonReport",
    "ExactTSP",
    "RuleBasedSelector",
    "SOLVER_FAMILIES",
    "SOLVER_LIMITS",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "SimpleRng",
    "StateSpaceTooLarge",
    "build_matrix",
    "cities_from_coordinates",
    "distance",
    "generate_cities",
    "get_selector",
    "get_solver",
    "solve_bitmask_dp",
    "solve_branch_and_bound",
    "solve_brute_force",
    "solve_brute_force_parallel",
    "solve_optimized",
    "tour_length",
]
