from __future__ import annotations

from ExactTSP.selectors.base import BaseSelector
from ExactTSP.solvers import BranchAndBoundSolver, HeldKarpSolver
from ExactTSP.solvers.exact.held_karp import MAX_DP_CITIES


class RuleBasedSelector(BaseSelector):
    """Pick the recommended exact solver from the instance size."""

    def predict(self, features: dict):
        n = int(features.get("n_nodes") or 0)

        # Subset DP is exact and pruning-independent while its table fits.
        if n <= MAX_DP_CITIES:
            return HeldKarpSolver
        return BranchAndBoundSolver


__all__ = ["RuleBasedSelector"]
