from __future__ import annotations

from math import comb

import numpy as np
import pytest

from ExactTSP.cities import generate_cities
from ExactTSP.distance import build_matrix, cycle_cost
from ExactTSP.solvers.base import StateSpaceTooLarge
from ExactTSP.solvers.exact.brute_force import BruteForceSolver
from ExactTSP.solvers.exact.held_karp import (
    MAX_DP_CITIES,
    NO_PREDECESSOR,
    HeldKarpSolver,
    dp_table_entries,
    fill_tables,
    reconstruct_tour,
    subset_layers,
)


def test_subset_layers_always_contain_start_city():
    layers = subset_layers(5)
    assert layers[0].size == 0
    assert layers[1].tolist() == [1]
    for size, layer in enumerate(layers[1:], start=1):
        assert layer.size == comb(4, size - 1)
        assert np.all(layer & 1)


def test_tables_base_case_and_invariants():
    matrix = build_matrix(generate_cities(5, 3))
    cost, predecessor = fill_tables(matrix)
    assert cost[0, 1] == 0.0
    assert predecessor[0, 1] == NO_PREDECESSOR
    n = matrix.shape[0]
    for city in range(n):
        for mask in range(1 << n):
            if np.isfinite(cost[city, mask]):
                # Reached states include their own city and the start city.
                assert mask & 1
                assert mask & (1 << city)


def test_single_edge_states_cost_the_edge():
    matrix = build_matrix(generate_cities(4, 8))
    cost, predecessor = fill_tables(matrix)
    for v in range(1, 4):
        assert cost[v, 1 | (1 << v)] == matrix[0, v]
        assert predecessor[v, 1 | (1 << v)] == 0


@pytest.mark.parametrize("n,seed", [(3, 1), (6, 2), (9, 3), (12, 4)])
def test_reconstructed_tour_reproduces_the_dp_cost(n, seed):
    cities = generate_cities(n, seed)
    result = HeldKarpSolver().solve(cities)
    assert sorted(result.path) == list(range(n))
    assert result.path[0] == 0
    assert cycle_cost(build_matrix(cities), result.path) == pytest.approx(result.cost, abs=1e-9)


def test_matches_brute_force():
    cities = generate_cities(8, 99)
    assert HeldKarpSolver().solve(cities).cost == pytest.approx(BruteForceSolver().solve(cities).cost, abs=1e-9)


def test_reconstruct_tour_walks_predecessors():
    predecessor = np.full((3, 8), NO_PREDECESSOR, dtype=np.int8)
    predecessor[2, 0b111] = 1
    predecessor[1, 0b011] = 0
    assert reconstruct_tour(predecessor, 2) == [0, 1, 2]


def test_refuses_oversized_instances_without_fallback():
    cities = generate_cities(MAX_DP_CITIES + 1, 1)
    with pytest.raises(StateSpaceTooLarge):
        HeldKarpSolver(fallback=False).solve(cities)


def test_redirects_to_branch_and_bound_above_the_ceiling():
    cities = generate_cities(7, 6)
    result = HeldKarpSolver(max_cities=5).solve(cities)
    assert result.metadata["fallback"] == "branch_and_bound"
    assert result.cost == pytest.approx(BruteForceSolver().solve(cities).cost, abs=1e-9)


def test_table_entry_count():
    assert dp_table_entries(20) == 20 * 2**20


def test_solves_at_the_table_ceiling():
    cities = generate_cities(MAX_DP_CITIES, 20)
    result = HeldKarpSolver(fallback=False).solve(cities)
    assert sorted(result.path) == list(range(MAX_DP_CITIES))
    assert result.path[0] == 0
    assert "fallback" not in result.metadata
    assert cycle_cost(build_matrix(cities), result.path) == pytest.approx(result.cost, abs=1e-9)


@pytest.mark.parametrize("max_cities", [MAX_DP_CITIES + 1, 30, 200])
def test_ceiling_cannot_be_raised(max_cities):
    with pytest.raises(ValueError):
        HeldKarpSolver(max_cities=max_cities)
