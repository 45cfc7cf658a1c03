"""Tests for the plain-text report renderers."""

from tspsolver.core.graph import Graph
from tspsolver.engine import report
from tspsolver.engine.config_reader import ConfigReader
from tspsolver.solver.brute_force import BruteForceSolver
from tspsolver.solver.held_karp import HeldKarpSolver


def _graph():
    return Graph.with_node_names([[0, 2, 3], [4, 0, 1], [5, 6, 0]], ["A", "B", "C"])


def test_format_table_aligns_columns():
    text = report.format_table([["x", "long header"], ["value", 1]])
    lines = text.splitlines()
    assert len(lines) == 5
    assert len({len(line) for line in lines}) == 1
    assert "| value | 1           |" in lines


def test_render_graph_marks_missing_edges():
    graph = Graph.with_node_names([[0, 2], [0, 0]], ["A", "B"])
    text = report.render_graph(graph)
    assert "Number of cities: 2" in text
    assert "∞" in text


def test_render_edges():
    text = report.render_edges(_graph())
    assert "A --> B (2)" in text
    assert "Total edges: 6" in text


def test_render_solution():
    graph = _graph()
    solution = HeldKarpSolver(graph).solve()
    text = report.render_solution(graph, solution)

    assert "[VALID]" in text
    assert "A → B → C → A" in text
    assert "Total cost: 8" in text
    assert "States Computed: 4" in text
    assert "TOTAL" in text


def test_render_graph_with_tour():
    graph = _graph()
    text = report.render_graph_with_tour(graph, [0, 1, 2, 0])
    assert "A === B (2)" in text
    assert "B --- A (4)" in text


def test_render_tour_sequence():
    text = report.render_tour_sequence(_graph(), [0, 1, 2, 0])
    assert text.splitlines()[1:] == [
        "1. Start at A",
        "2. Visit B",
        "3. Visit C",
        "4. Return to A",
    ]


def test_render_comparison():
    graph = _graph()
    solutions = [
        ("held_karp", HeldKarpSolver(graph).solve()),
        ("brute_force", BruteForceSolver(graph).solve()),
    ]
    text = report.render_comparison(solutions)
    assert text.count("8 [BEST]") == 2
    assert report.render_comparison([]) == "No solutions to compare"


def test_render_complexity():
    assert "O(16²×2^16)" in report.render_complexity(16)
    assert "[WARNING]" in report.render_complexity(16)
    assert "[NOTICE]" in report.render_complexity(11)


def test_render_validation_report():
    graph = Graph.with_node_names([[0, 2, 3], [4, 0, 0], [5, 6, 0]], ["A", "B", "C"])
    text = report.render_validation_report(ConfigReader.validate_graph(graph))
    assert "[ERROR]" in text
    assert "Status: [INVALID]" in text
