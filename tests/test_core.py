from __future__ import annotations

import pytest

from ExactTSP import (
    ExactTSP,
    RuleBasedSelector,
    generate_cities,
    get_selector,
    get_solver,
    solve_bitmask_dp,
    solve_branch_and_bound,
    solve_brute_force,
    solve_brute_force_parallel,
    solve_optimized,
)
from ExactTSP.core import ComparisonReport
from ExactTSP.solvers import BranchAndBoundSolver, HeldKarpSolver
from ExactTSP.solvers.base import AlgorithmResult


@pytest.mark.parametrize("n,expected", [(0, HeldKarpSolver), (12, HeldKarpSolver), (20, HeldKarpSolver), (21, BranchAndBoundSolver)])
def test_rule_based_selection(n, expected):
    assert RuleBasedSelector().predict({"n_nodes": n}) is expected


def test_unknown_selector_and_solver():
    with pytest.raises(ValueError):
        get_selector("random_forest")
    with pytest.raises(KeyError):
        get_solver("simulated_annealing")


def test_solve_records_selected_solver(random_cities):
    result = ExactTSP().solve(random_cities)
    assert result.metadata["selected_solver"] == "held_karp"
    assert result.name == "held_karp"


def test_functional_entry_points_agree(square_with_center):
    solutions = [
        solve_brute_force(square_with_center),
        solve_brute_force_parallel(square_with_center, thread_count=2),
        solve_branch_and_bound(square_with_center),
        solve_bitmask_dp(square_with_center),
        solve_optimized(square_with_center),
    ]
    reference = solutions[0][1]
    for tour, distance in solutions:
        assert sorted(tour) == list(range(5))
        assert abs(distance - reference) < 1e-3


def test_functional_entry_points_on_unit_square(unit_square):
    for solve in (solve_brute_force, solve_branch_and_bound, solve_bitmask_dp, solve_optimized):
        assert solve(unit_square)[1] == 4.0
    assert solve_brute_force_parallel(unit_square, 4)[1] == 4.0


def test_empty_instance_through_api():
    assert solve_optimized([]) == ([], 0.0)
    assert solve_brute_force([]) == ([], 0.0)


def test_compare_runs_every_solver():
    cities = generate_cities(7, 12)
    report = ExactTSP(thread_count=3).compare(cities)
    assert [result.name for result in report.results] == [
        "brute_force",
        "parallel_brute_force",
        "branch_and_bound",
        "held_karp",
    ]
    assert report.consistent
    assert [r.elapsed for r in report.by_speed()] == sorted(r.elapsed for r in report.results)


def test_compare_subset():
    report = ExactTSP().compare(generate_cities(6, 1), ["held_karp", "branch_and_bound"])
    assert len(report.results) == 2
    assert report.consistent


def test_report_detects_disagreement():
    report = ComparisonReport(
        results=[
            AlgorithmResult(name="a", path=[0, 1, 2], cost=10.0, elapsed=0.1, status="complete"),
            AlgorithmResult(name="b", path=[0, 2, 1], cost=10.5, elapsed=0.2, status="complete"),
        ]
    )
    assert report.best_cost == 10.0
    assert not report.consistent
