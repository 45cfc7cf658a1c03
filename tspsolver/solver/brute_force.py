"""
BruteForceSolver — reference solver that tries every tour.

Used to cross-check Held-Karp on small graphs and in solver comparisons.
"""

from __future__ import annotations

import itertools
import logging
import time

from tspsolver.core.errors import SolverError
from tspsolver.core.graph import Graph
from tspsolver.core.memo import MIN_NODES
from tspsolver.core.solution import Solution, SolverStats
from tspsolver.solver.interface import TourSolver

logger = logging.getLogger(__name__)

# (n-1)! permutations: 9! = 362880 is the practical ceiling
BRUTE_FORCE_MAX_NODES = 10


class BruteForceSolver(TourSolver):
    """
    Enumerates permutations of ``1..n-1`` in lexicographic order and keeps
    the first tour with the lowest cost.
    """

    name = "brute_force"

    def __init__(self, graph: Graph) -> None:
        if graph.size < MIN_NODES:
            raise SolverError(f"Graph must have at least {MIN_NODES} nodes")
        if graph.size > BRUTE_FORCE_MAX_NODES:
            raise SolverError(
                f"Brute force is limited to {BRUTE_FORCE_MAX_NODES} nodes, "
                f"got {graph.size}"
            )
        graph.validate_for_tsp()
        super().__init__(graph)

    def solve(self) -> Solution:
        started = time.perf_counter()
        dist = self.graph.adjacency_matrix.tolist()
        best_cost: int | None = None
        best_order: tuple[int, ...] = ()
        evaluated = 0

        for order in itertools.permutations(range(1, self.graph.size)):
            cost = dist[0][order[0]] + dist[order[-1]][0]
            for a, b in zip(order, order[1:]):
                cost += dist[a][b]
            evaluated += 1
            if best_cost is None or cost < best_cost:
                best_cost = cost
                best_order = order

        if best_cost is None:
            raise SolverError("No optimal solution found")

        path = [0, *best_order, 0]
        is_valid = (
            self.graph.is_valid_tour(path)
            and self.graph.calculate_path_cost(path) == best_cost
        )
        stats = SolverStats(
            states_computed=evaluated,
            solve_duration=time.perf_counter() - started,
        )

        logger.info(
            "Brute force evaluated %d tours on %d nodes: cost=%d",
            evaluated,
            self.graph.size,
            best_cost,
        )
        return Solution(
            optimal_cost=best_cost,
            optimal_path=path,
            is_valid=is_valid,
            stats=stats,
            solver=self.name,
        )
