"""Tests for HeldKarpSolver — optimality, tie-breaking and instrumentation."""

import itertools
import logging

import numpy as np
import pytest

from tspsolver.core.errors import InvalidGraphError, SolverError
from tspsolver.core.graph import Graph
from tspsolver.core.memo import MemoTable, subset_mask
from tspsolver.solver.held_karp import HeldKarpSolver

DOC_MATRIX = [
    [0, 10, 15, 20],
    [5, 0, 9, 10],
    [6, 13, 0, 12],
    [8, 8, 9, 0],
]


def _random_matrix(size, seed, high=100):
    rng = np.random.default_rng(seed)
    matrix = rng.integers(1, high, size=(size, size))
    np.fill_diagonal(matrix, 0)
    return matrix.tolist()


def _brute_force_cost(matrix):
    n = len(matrix)
    best = None
    for order in itertools.permutations(range(1, n)):
        tour = (0, *order, 0)
        cost = sum(matrix[a][b] for a, b in zip(tour, tour[1:]))
        if best is None or cost < best:
            best = cost
    return best


def test_document_example():
    """The four-city example has a unique optimum of 35."""
    graph = Graph(DOC_MATRIX)
    solution = HeldKarpSolver(graph).solve()

    assert solution.optimal_cost == 35
    assert solution.optimal_path == (0, 1, 3, 2, 0)
    assert solution.is_valid
    assert graph.calculate_path_cost(solution.optimal_path) == 35
    assert graph.is_valid_tour(solution.optimal_path)
    assert solution.solver == "held_karp"


def test_three_nodes():
    solution = HeldKarpSolver(Graph([[0, 2, 3], [4, 0, 1], [5, 6, 0]])).solve()
    assert solution.optimal_cost == 8
    assert solution.optimal_path == (0, 1, 2, 0)
    assert solution.is_valid


def test_two_nodes():
    solution = HeldKarpSolver(Graph([[0, 7], [4, 0]])).solve()
    assert solution.optimal_path == (0, 1, 0)
    assert solution.optimal_cost == 11
    assert solution.is_valid


@pytest.mark.parametrize("size", range(2, 9))
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_matches_brute_force(size, seed):
    matrix = _random_matrix(size, seed=seed * 100 + size)
    graph = Graph(matrix)
    solution = HeldKarpSolver(graph).solve()

    assert solution.optimal_cost == _brute_force_cost(matrix)
    assert solution.is_valid
    assert len(solution.optimal_path) == size + 1
    assert solution.optimal_path[0] == solution.optimal_path[-1] == 0
    assert sorted(solution.optimal_path[1:-1]) == list(range(1, size))


@pytest.mark.parametrize("size", [10, 12])
def test_larger_graphs_are_valid(size):
    graph = Graph(_random_matrix(size, seed=size))
    solution = HeldKarpSolver(graph).solve()
    assert solution.is_valid
    assert graph.calculate_path_cost(solution.optimal_path) == solution.optimal_cost


def test_uniform_weights_break_ties_by_lowest_index():
    """Every tour costs the same; the first candidate in index order wins."""
    matrix = [[0 if i == j else 1 for j in range(5)] for i in range(5)]
    solution = HeldKarpSolver(Graph(matrix)).solve()
    assert solution.optimal_cost == 5
    assert solution.optimal_path == (0, 1, 2, 3, 4, 0)


def test_repeated_solves_are_identical():
    solver = HeldKarpSolver(Graph(_random_matrix(7, seed=42)))
    first = solver.solve()
    second = solver.solve()

    assert first.optimal_cost == second.optimal_cost
    assert first.optimal_path == second.optimal_path
    assert first.stats.states_computed == second.stats.states_computed
    assert first.stats.cache_hits == second.stats.cache_hits


def test_equal_graphs_give_identical_solutions():
    matrix = _random_matrix(6, seed=7)
    a = HeldKarpSolver(Graph(matrix)).solve()
    b = HeldKarpSolver(Graph([row[:] for row in matrix])).solve()
    assert (a.optimal_cost, a.optimal_path) == (b.optimal_cost, b.optimal_path)


def test_instrumentation_counts():
    """n=4: 3 base states, 6 of size one, 3 of size two; 15 lookups."""
    solver = HeldKarpSolver(Graph(DOC_MATRIX))
    stats = solver.solve().stats

    assert stats.states_computed == 12
    assert stats.max_memory_states == 12
    assert stats.cache_hits == 15
    assert stats.cache_misses == 0
    assert stats.cache_hit_rate == 100.0
    assert stats.solve_duration is not None and stats.solve_duration >= 0
    assert solver.get_stats() == stats


@pytest.mark.parametrize("size", range(2, 9))
def test_state_count_formula(size):
    stats = HeldKarpSolver(Graph(_random_matrix(size, seed=size))).solve().stats
    assert stats.states_computed == (size - 1) * 2 ** (size - 2)
    assert stats.max_memory_states == stats.states_computed


def test_rejects_single_node():
    with pytest.raises(SolverError):
        HeldKarpSolver(Graph([[0]]))


def test_rejects_more_than_twenty_nodes():
    matrix = [[0 if i == j else 1 for j in range(21)] for i in range(21)]
    with pytest.raises(SolverError, match="too large"):
        HeldKarpSolver(Graph(matrix))


def test_rejects_missing_edge():
    with pytest.raises(InvalidGraphError):
        HeldKarpSolver(Graph([[0, 2, 3], [4, 0, 0], [5, 6, 0]]))


def test_solver_owns_a_copy_of_the_graph():
    graph = Graph(DOC_MATRIX)
    solver = HeldKarpSolver(graph)
    assert solver.graph == graph
    assert solver.graph is not graph


def test_debug_trace(caplog):
    with caplog.at_level(logging.DEBUG, logger="tspsolver.solver.held_karp"):
        HeldKarpSolver(Graph(DOC_MATRIX)).solve()
    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("f(City_2, ∅) = 5") for m in messages)
    assert any("Minimum tour cost: 35" in m for m in messages)


def test_largest_weights_do_not_overflow():
    weight = 2**31 - 1
    size = 6
    matrix = [[0 if i == j else weight for j in range(size)] for i in range(size)]
    solution = HeldKarpSolver(Graph(matrix)).solve()

    assert solution.optimal_cost == size * weight
    assert solution.optimal_path == (0, 1, 2, 3, 4, 5, 0)
    assert solution.is_valid


# ── Broken memo tables ─────────────────────────────────────────────

def test_missing_sub_state_is_fatal():
    solver = HeldKarpSolver(Graph(DOC_MATRIX))
    solver._memo = MemoTable(4)
    solver._memo.insert(1, 0, 5)
    solver._memo.insert(2, 0, 6)

    with pytest.raises(SolverError, match="Missing sub-state f\\(3"):
        solver._compute_subset_size(1)
    assert solver._cache_hits == 4
    assert solver._cache_misses == 2


def test_final_phase_without_states():
    solver = HeldKarpSolver(Graph([[0, 2, 3], [4, 0, 1], [5, 6, 0]]))
    solver._memo = MemoTable(3)

    with pytest.raises(SolverError, match="No optimal solution found"):
        solver._compute_final_result()
    assert solver._cache_misses == 2
    assert solver._cache_hits == 0


def test_reconstruction_needs_every_state():
    solver = HeldKarpSolver(Graph(DOC_MATRIX))
    solver._memo = MemoTable(4)

    with pytest.raises(SolverError, match="Failed to reconstruct path"):
        solver._reconstruct_path(1)


def test_reconstruction_rejects_next_hop_outside_subset():
    solver = HeldKarpSolver(Graph(DOC_MATRIX))
    solver._memo = MemoTable(4)
    solver._memo.insert(1, subset_mask([2, 3]), 19, 1)

    with pytest.raises(SolverError, match="Failed to reconstruct path"):
        solver._reconstruct_path(1)
