"""
TSPEngine — Top-level orchestrator.

Accepts matrix payloads or configuration text, builds the Graph,
delegates to a registered solver, and runs solver comparisons and
size benchmarks.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from tspsolver.core.graph import Graph
from tspsolver.core.memo import MAX_NODES, MIN_NODES
from tspsolver.core.solution import Solution
from tspsolver.engine.config_reader import ConfigReader
from tspsolver.solver.registry import DEFAULT_SOLVER, create_solver

logger = logging.getLogger(__name__)

# Complexity notice thresholds
NOTICE_SIZE = 10
WARNING_SIZE = 15


def create_benchmark_graph(size: int) -> Graph:
    """Deterministic complete graph with weights ``((7i + 11j) mod 19) + 1``."""
    matrix = [
        [0 if i == j else (i * 7 + j * 11) % 19 + 1 for j in range(size)]
        for i in range(size)
    ]
    return Graph(matrix)


class TSPEngine:
    """
    Main entry-point for solving graphs.

    Usage
    -----
    >>> engine = TSPEngine()
    >>> result = engine.run({"matrix": [[0, 2], [3, 0]]})
    >>> print(result["optimal_path"])
    """

    def __init__(self, default_solver: str = DEFAULT_SOLVER) -> None:
        self.default_solver = default_solver

    # ── Public API ─────────────────────────────────────────────────

    @staticmethod
    def build_graph(payload: dict[str, Any]) -> Graph:
        """
        Build a Graph from ``{"matrix": [[...]], "names": [...]}``;
        ``names`` is optional.
        """
        return Graph(payload["matrix"], node_names=payload.get("names"))

    def solve(self, graph: Graph, solver: str | None = None) -> Solution:
        """Solve *graph* once with the named (or default) solver."""
        name = solver or self.default_solver
        logger.info("Solving %d-node graph with %s", graph.size, name)
        return create_solver(name, graph).solve()

    def run(
        self, payload: dict[str, Any], solver: str | None = None
    ) -> dict[str, Any]:
        """
        Solve a matrix payload and return the solution plus metadata.

        Returns
        -------
        dict with keys: optimal_cost, optimal_path, named_path, is_valid,
        solver, stats, node_count
        """
        graph = self.build_graph(payload)
        return self._describe(graph, self.solve(graph, solver))

    def run_config(
        self, content: str, solver: str | None = None
    ) -> dict[str, Any]:
        """Same as ``run`` but from configuration text."""
        graph = ConfigReader.parse_content(content)
        return self._describe(graph, self.solve(graph, solver))

    def compare(
        self, graph: Graph, solvers: Iterable[str]
    ) -> list[tuple[str, Solution]]:
        """Solve the same graph with several solvers, in the given order."""
        return [(name, self.solve(graph, name)) for name in solvers]

    def run_benchmark(
        self,
        max_size: int,
        min_size: int = 3,
        solver: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Solve the benchmark graph for every size in ``min_size..max_size``.
        """
        min_size = max(min_size, MIN_NODES)
        max_size = min(max_size, MAX_NODES)
        results: list[dict[str, Any]] = []

        for size in range(min_size, max_size + 1):
            solution = self.solve(create_benchmark_graph(size), solver)
            results.append({
                "size": size,
                "optimal_cost": solution.optimal_cost,
                "solve_duration": solution.stats.solve_duration,
                "states_computed": solution.stats.states_computed,
                "is_valid": solution.is_valid,
            })
            logger.info(
                "Benchmark n=%d: cost=%d in %.4fs",
                size,
                solution.optimal_cost,
                solution.stats.solve_duration,
            )

        return results

    @staticmethod
    def complexity_info(size: int) -> dict[str, Any]:
        """State count and operation estimate for an n-node instance."""
        if size < 1:
            raise ValueError(f"Graph size must be positive, got {size}")

        if size > WARNING_SIZE:
            level = "warning"
        elif size > NOTICE_SIZE:
            level = "notice"
        else:
            level = "ok"

        return {
            "size": size,
            "states": size * (1 << (size - 1)),
            "operations": size * size * (1 << size),
            "level": level,
            "supported": MIN_NODES <= size <= MAX_NODES,
        }

    # ── Helper ─────────────────────────────────────────────────────

    @staticmethod
    def _describe(graph: Graph, solution: Solution) -> dict[str, Any]:
        result = solution.to_dict()
        result["named_path"] = solution.named_path(graph)
        result["node_count"] = graph.size
        return result
