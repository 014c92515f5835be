from ExactTSP.solvers.exact.branch_and_bound import BranchAndBoundSolver
from ExactTSP.solvers.exact.brute_force import BruteForceSolver
from ExactTSP.solvers.exact.held_karp import HeldKarpSolver
from ExactTSP.solvers.exact.parallel import ParallelBruteForceSolver

__all__ = [
    "BranchAndBoundSolver",
    "BruteForceSolver",
    "HeldKarpSolver",
    "ParallelBruteForceSolver",
]
