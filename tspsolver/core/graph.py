"""
Graph — complete weighted directed graph backed by an adjacency matrix.

The matrix is validated once at construction and frozen afterwards:
square, integer-valued, zero on the diagonal.  The stronger "every
directed edge exists" requirement is checked separately by
``validate_for_tsp`` so that incomplete graphs can still be displayed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import networkx as nx
import numpy as np

from tspsolver.core.errors import InvalidGraphError, InvalidPathError

# Any tour of at most 20 edges with 32-bit weights sums within int64.
WEIGHT_MIN = int(np.iinfo(np.int32).min)
WEIGHT_MAX = int(np.iinfo(np.int32).max)


@dataclass(frozen=True)
class GraphStats:
    """Summary of the positive off-diagonal edges of a graph."""

    nodes: int
    edges: int
    min_edge_weight: int
    max_edge_weight: int
    avg_edge_weight: float
    total_weight: int

    def __str__(self) -> str:
        return (
            f"Nodes: {self.nodes}, Edges: {self.edges}, "
            f"Min Weight: {self.min_edge_weight}, "
            f"Max Weight: {self.max_edge_weight}, "
            f"Avg Weight: {self.avg_edge_weight:.2f}, "
            f"Total Weight: {self.total_weight}"
        )


class Graph:
    """
    An n-node directed graph stored as an n×n integer matrix.

    Attributes
    ----------
    size : int
        Number of nodes.
    adjacency_matrix : np.ndarray
        Read-only int64 matrix; ``[i][j]`` is the cost from i to j.
    node_names : tuple[str, ...]
        Display labels, one per node.
    """

    def __init__(
        self,
        matrix: Sequence[Sequence[int]] | np.ndarray,
        node_names: Sequence[str] | None = None,
    ) -> None:
        size = len(matrix)
        if size == 0:
            raise InvalidGraphError("Matrix must not be empty")

        for i, row in enumerate(matrix):
            try:
                width = len(row)
            except TypeError:
                raise InvalidGraphError(f"Row {i} is not a sequence") from None
            if width != size:
                raise InvalidGraphError(
                    f"Matrix must be square. Row {i} has {width} "
                    f"columns, expected {size}"
                )

        raw = np.asarray(matrix)
        if raw.dtype.kind not in "iu":
            raise InvalidGraphError(
                f"Matrix entries must be integers, got dtype {raw.dtype}"
            )

        if raw.min() < WEIGHT_MIN or raw.max() > WEIGHT_MAX:
            raise InvalidGraphError(
                f"Matrix entries must lie in {WEIGHT_MIN}..{WEIGHT_MAX}"
            )

        adjacency = np.array(raw, dtype=np.int64)
        non_zero_diagonal = np.flatnonzero(np.diag(adjacency))
        if non_zero_diagonal.size:
            node = int(non_zero_diagonal[0])
            raise InvalidGraphError(
                f"Distance from node {node + 1} to itself must be 0"
            )
        adjacency.setflags(write=False)

        if node_names is None:
            names = tuple(f"City_{i}" for i in range(1, size + 1))
        else:
            names = tuple(str(name) for name in node_names)
            if len(names) != size:
                raise InvalidGraphError(
                    f"Number of names ({len(names)}) does not match "
                    f"graph size ({size})"
                )

        self._matrix = adjacency
        self._node_names = names

    @classmethod
    def with_node_names(
        cls,
        matrix: Sequence[Sequence[int]] | np.ndarray,
        names: Sequence[str],
    ) -> Graph:
        """Build a graph and attach caller-supplied display labels."""
        return cls(matrix, node_names=names)

    # ── Accessors ──────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return self._matrix.shape[0]

    @property
    def adjacency_matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def node_names(self) -> tuple[str, ...]:
        return self._node_names

    @property
    def nodes(self) -> list[int]:
        return list(range(self.size))

    def distance(self, frm: int, to: int) -> int:
        """
        Return the directed cost from *frm* to *to*.

        Indices are trusted: an out-of-range index is a programming
        error and raises IndexError, not a TSPError.
        """
        if not (0 <= frm < self.size and 0 <= to < self.size):
            raise IndexError(
                f"Node index out of bounds: from={frm}, to={to}, size={self.size}"
            )
        return int(self._matrix[frm, to])

    def copy(self) -> Graph:
        """Return an equal, independently owned graph."""
        return Graph(self._matrix, self._node_names)

    # ── Validation ─────────────────────────────────────────────────

    def validate_for_tsp(self) -> None:
        """
        Require an edge in every direction between every pair of nodes.

        Raises InvalidGraphError naming the first missing edge in
        row-major order.
        """
        missing = self._matrix <= 0
        np.fill_diagonal(missing, False)
        rows, cols = np.nonzero(missing)
        if rows.size:
            i, j = int(rows[0]), int(cols[0])
            raise InvalidGraphError(
                f"No path from {self._node_names[i]} to {self._node_names[j]} "
                f"(value: {int(self._matrix[i, j])})"
            )

    # ── Paths ──────────────────────────────────────────────────────

    def calculate_path_cost(self, path: Sequence[int]) -> int:
        """Sum the edge weights along *path* (at least two nodes)."""
        nodes = list(path)
        if len(nodes) < 2:
            raise InvalidPathError("Path must contain at least 2 nodes")

        total_cost = 0
        for frm, to in zip(nodes, nodes[1:]):
            if not (0 <= frm < self.size and 0 <= to < self.size):
                raise InvalidPathError(f"Node index out of bounds: {frm}, {to}")

            cost = self.distance(frm, to)
            if cost <= 0:
                raise InvalidPathError(
                    f"No edge from {self._node_names[frm]} "
                    f"to {self._node_names[to]}"
                )
            total_cost += cost

        return total_cost

    def is_valid_tour(self, path: Sequence[int]) -> bool:
        """True iff *path* is a closed Hamiltonian cycle over every node."""
        nodes = list(path)
        if len(nodes) != self.size + 1:
            return False
        if nodes[0] != nodes[-1]:
            return False

        visited = [False] * self.size
        for node in nodes[:-1]:
            if not (0 <= node < self.size) or visited[node]:
                return False
            visited[node] = True

        return all(visited)

    # ── Edge views ─────────────────────────────────────────────────

    def edges(self) -> list[tuple[int, int, int]]:
        """Existing directed edges as (from, to, weight), row-major."""
        existing = self._matrix > 0
        np.fill_diagonal(existing, False)
        rows, cols = np.nonzero(existing)
        return [
            (int(i), int(j), int(self._matrix[i, j]))
            for i, j in zip(rows, cols)
        ]

    def to_networkx(self) -> nx.DiGraph:
        """Weighted DiGraph of the existing edges; nodes carry a ``name``."""
        g = nx.DiGraph()
        g.add_nodes_from(
            (i, {"name": name}) for i, name in enumerate(self._node_names)
        )
        g.add_weighted_edges_from(self.edges())
        return g

    def get_stats(self) -> GraphStats:
        weights = np.array([w for _, _, w in self.edges()], dtype=np.int64)
        if weights.size == 0:
            return GraphStats(
                nodes=self.size,
                edges=0,
                min_edge_weight=0,
                max_edge_weight=0,
                avg_edge_weight=0.0,
                total_weight=0,
            )
        return GraphStats(
            nodes=self.size,
            edges=int(weights.size),
            min_edge_weight=int(weights.min()),
            max_edge_weight=int(weights.max()),
            avg_edge_weight=float(weights.mean()),
            total_weight=int(weights.sum()),
        )

    # ── Dunder helpers ─────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return (
            self._node_names == other._node_names
            and np.array_equal(self._matrix, other._matrix)
        )

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"<Graph size={self.size} nodes={list(self._node_names)!r}>"
