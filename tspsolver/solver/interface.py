"""
Solver Interface — abstract base for all exact tour solvers.

Design: Strategy pattern.  The TSPEngine looks solvers up by name in the
registry, so HeldKarpSolver, BruteForceSolver, etc. can be swapped
without touching the rest of the code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tspsolver.core.graph import Graph
from tspsolver.core.solution import Solution


class TourSolver(ABC):
    """
    Abstract solver bound to one graph at construction time.

    Construction validates the graph; ``solve()`` may then be called any
    number of times sequentially, never concurrently on one instance.
    """

    name: str = ""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph.copy()

    @abstractmethod
    def solve(self) -> Solution:
        """
        Compute an optimal tour starting and ending at node 0.

        Returns
        -------
        Solution
            optimal cost, path of length n + 1, validity flag and stats.
        """
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} size={self.graph.size}>"
