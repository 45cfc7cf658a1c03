"""
MemoTable — dense Held-Karp state table owned by a single solver.

A state is ``(node, mask)`` where *mask* encodes the set of nodes still to
be visited before returning to node 0.  Node ``j`` (1..n-1) maps to bit
``j - 1``; node 0 is the fixed tour origin and never appears in a mask.

Storage is three ``[node][mask]`` arrays of width ``2**(n-1)``: the optimal
cost, the next hop (``NO_NEXT`` for base cases) and a presence flag.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from tspsolver.core.errors import SolverError

MIN_NODES = 2
MAX_NODES = 20

NO_NEXT = -1


def node_bit(node: int) -> int:
    """Bit for a non-origin node."""
    return 1 << (node - 1)


def subset_mask(nodes: Iterable[int]) -> int:
    """Encode a set of non-origin nodes as a bitmask."""
    mask = 0
    for node in nodes:
        mask |= node_bit(node)
    return mask


def mask_members(mask: int) -> list[int]:
    """Decode a bitmask back into its ascending node indices."""
    members: list[int] = []
    node = 1
    while mask:
        if mask & 1:
            members.append(node)
        mask >>= 1
        node += 1
    return members


class MemoTable:
    """
    Insert-only table of ``(cost, next_hop)`` entries keyed by
    ``(node, mask)``.
    """

    def __init__(self, size: int) -> None:
        if not (MIN_NODES <= size <= MAX_NODES):
            raise SolverError(
                f"Memo table supports {MIN_NODES}..{MAX_NODES} nodes, got {size}"
            )
        self.size = size
        self.width = 1 << (size - 1)
        self._cost = np.zeros((size, self.width), dtype=np.int64)
        self._next = np.full((size, self.width), NO_NEXT, dtype=np.int8)
        self._present = np.zeros((size, self.width), dtype=bool)
        self._count = 0

    # ── Read ───────────────────────────────────────────────────────

    def get(self, node: int, mask: int) -> tuple[int, int | None] | None:
        """Return ``(cost, next_hop)`` for a state, or None if absent."""
        if not self._present[node, mask]:
            return None
        next_hop = int(self._next[node, mask])
        return (
            int(self._cost[node, mask]),
            None if next_hop == NO_NEXT else next_hop,
        )

    def has(self, node: int, mask: int) -> bool:
        return bool(self._present[node, mask])

    def lookup_many(
        self, nodes: np.ndarray, masks: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        Vectorised lookup of ``(nodes[k], masks[k])`` pairs.

        Returns the cost array and a boolean presence array; costs of
        absent states are meaningless.
        """
        return self._cost[nodes, masks], self._present[nodes, masks]

    # ── Write ──────────────────────────────────────────────────────

    def insert(
        self, node: int, mask: int, cost: int, next_hop: int | None = None
    ) -> None:
        """Store a state.  Existing entries are never overwritten."""
        if self._present[node, mask]:
            raise SolverError(
                f"State ({node}, {mask:#b}) already computed; "
                f"memo entries are insert-only"
            )
        self._cost[node, mask] = cost
        self._next[node, mask] = NO_NEXT if next_hop is None else next_hop
        self._present[node, mask] = True
        self._count += 1

    def insert_many(
        self,
        nodes: np.ndarray,
        mask: int,
        costs: np.ndarray,
        next_hops: np.ndarray,
    ) -> None:
        """Store one state per node in *nodes*, all sharing *mask*."""
        if self._present[nodes, mask].any():
            raise SolverError(
                f"States for mask {mask:#b} already computed; "
                f"memo entries are insert-only"
            )
        self._cost[nodes, mask] = costs
        self._next[nodes, mask] = next_hops
        self._present[nodes, mask] = True
        self._count += len(nodes)

    # ── Dunder helpers ─────────────────────────────────────────────

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: tuple[int, int]) -> bool:
        node, mask = key
        return self.has(node, mask)

    def __repr__(self) -> str:
        return f"MemoTable(size={self.size}, states={self._count})"
