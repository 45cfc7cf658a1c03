"""
HeldKarpSolver — exact TSP via the Held-Karp bitmask dynamic program.

State ``f(i, S)``: minimum cost of starting at node *i*, visiting every
node of *S* exactly once and finishing at node 0.

    f(i, ∅) = dist(i, 0)
    f(i, S) = min over j in S of  dist(i, j) + f(j, S \\ {j})
    answer  = min over k of       dist(0, k) + f(k, {1..n-1} \\ {k})

States are filled by increasing ``|S|`` so every lookup hits a state that
already exists.  Iteration order is fixed: subsets come from
``itertools.combinations`` (lexicographic), candidate successors ``j`` and
final first hops ``k`` are scanned in ascending index order, and ties keep
the first candidate seen.
"""

from __future__ import annotations

import itertools
import logging
import time

import numpy as np

from tspsolver.core.errors import SolverError
from tspsolver.core.graph import Graph
from tspsolver.core.memo import (
    MAX_NODES,
    MIN_NODES,
    MemoTable,
    mask_members,
    node_bit,
    subset_mask,
)
from tspsolver.core.solution import Solution, SolverStats
from tspsolver.solver.interface import TourSolver

logger = logging.getLogger(__name__)


class HeldKarpSolver(TourSolver):
    """
    Solver that owns a private memo table, rebuilt on every ``solve()``.
    """

    name = "held_karp"

    def __init__(self, graph: Graph) -> None:
        if graph.size < MIN_NODES:
            raise SolverError(f"Graph must have at least {MIN_NODES} nodes")
        if graph.size > MAX_NODES:
            raise SolverError(
                f"Graph too large (>{MAX_NODES} nodes). "
                f"O(n²2ⁿ) complexity would be too high"
            )
        graph.validate_for_tsp()
        super().__init__(graph)

        self._dist = self.graph.adjacency_matrix
        self._memo: MemoTable | None = None
        self._last_stats = SolverStats()
        self._reset_counters()

    # ── Public API ─────────────────────────────────────────────────

    def solve(self) -> Solution:
        """
        Run the three DP phases, rebuild the tour and double-check it.
        """
        started = time.perf_counter()
        n = self.graph.size
        self._memo = MemoTable(n)
        self._reset_counters()

        logger.debug(
            "Starting Held-Karp on %d nodes: O(n²2ⁿ) = O(%d)",
            n,
            n * n * (1 << n),
        )

        # Phase 1: f(i, ∅) = dist(i, 0)
        self._compute_base_cases()

        # Phase 2: every subset size from 1 to n-2
        for subset_size in range(1, n - 1):
            self._compute_subset_size(subset_size)

        # Phase 3: f(0, {1..n-1})
        optimal_cost, first_next = self._compute_final_result()

        optimal_path = self._reconstruct_path(first_next)
        is_valid = self._validate_solution(optimal_path, optimal_cost)

        stats = SolverStats(
            states_computed=self._states_computed,
            cache_hits=self._cache_hits,
            cache_misses=self._cache_misses,
            solve_duration=time.perf_counter() - started,
            max_memory_states=len(self._memo),
        )
        self._last_stats = stats

        logger.info(
            "Held-Karp solved %d nodes: cost=%d valid=%s states=%d (%.4fs)",
            n,
            optimal_cost,
            is_valid,
            stats.states_computed,
            stats.solve_duration,
        )

        return Solution(
            optimal_cost=optimal_cost,
            optimal_path=optimal_path,
            is_valid=is_valid,
            stats=stats,
            solver=self.name,
        )

    def get_stats(self) -> SolverStats:
        """Stats of the most recent ``solve()`` call."""
        return self._last_stats

    # ── DP phases ──────────────────────────────────────────────────

    def _compute_base_cases(self) -> None:
        names = self.graph.node_names
        for i in range(1, self.graph.size):
            cost = self.graph.distance(i, 0)
            self._memo.insert(i, 0, cost, None)
            self._states_computed += 1
            logger.debug("f(%s, ∅) = %d", names[i], cost)

    def _compute_subset_size(self, subset_size: int) -> None:
        """
        Fill ``f(i, S)`` for every ``|S| == subset_size`` and ``i ∉ S``.

        For a fixed S the sub-states ``f(j, S \\ {j})`` are shared by every
        start node, so the minimisation runs as one matrix operation over
        all outside nodes; ``argmin`` keeps the first (lowest) ``j`` on ties.
        """
        n = self.graph.size
        candidates = np.arange(1, n, dtype=np.intp)
        logger.debug("Phase %d - subsets of size %d", subset_size + 1, subset_size)

        for subset in itertools.combinations(range(1, n), subset_size):
            members = np.array(subset, dtype=np.intp)
            mask = subset_mask(subset)
            outside = np.setdiff1d(candidates, members, assume_unique=True)
            sub_masks = mask ^ np.left_shift(1, members - 1)

            tails, present = self._memo.lookup_many(members, sub_masks)
            if not present.all():
                self._cache_misses += int((~present).sum()) * len(outside)
                missing = int(members[~present][0])
                raise SolverError(
                    f"Missing sub-state f({missing}, "
                    f"{mask_members(mask ^ node_bit(missing))}) "
                    f"while computing subsets of size {subset_size}"
                )
            self._cache_hits += len(outside) * len(members)

            transitions = self._dist[np.ix_(outside, members)] + tails
            best = transitions.argmin(axis=1)
            costs = transitions[np.arange(len(outside)), best]
            next_hops = members[best]

            self._memo.insert_many(outside, mask, costs, next_hops)
            self._states_computed += len(outside)

            if logger.isEnabledFor(logging.DEBUG):
                for i, cost, nxt in zip(outside, costs, next_hops):
                    logger.debug(
                        "f(%d, %s) = %d (next: %d)", i, list(subset), cost, nxt
                    )

    def _compute_final_result(self) -> tuple[int, int]:
        n = self.graph.size
        full_mask = subset_mask(range(1, n))
        min_cost: int | None = None
        first_next: int | None = None

        for k in range(1, n):
            entry = self._memo.get(k, full_mask ^ node_bit(k))
            if entry is None:
                self._cache_misses += 1
                continue
            self._cache_hits += 1

            total_cost = self.graph.distance(0, k) + entry[0]
            logger.debug(
                "dist(0, %d) + f(%d, rest) = %d + %d = %d",
                k, k, self.graph.distance(0, k), entry[0], total_cost,
            )
            if min_cost is None or total_cost < min_cost:
                min_cost = total_cost
                first_next = k

        if min_cost is None or first_next is None:
            raise SolverError("No optimal solution found")

        logger.debug("Minimum tour cost: %d", min_cost)
        return min_cost, first_next

    # ── Reconstruction / validation ────────────────────────────────

    def _reconstruct_path(self, start: int) -> list[int]:
        path = [0, start]
        current = start
        remaining = set(range(1, self.graph.size))
        remaining.discard(start)

        while remaining:
            entry = self._memo.get(current, subset_mask(remaining))
            if entry is None or entry[1] not in remaining:
                raise SolverError("Failed to reconstruct path")
            next_hop = entry[1]
            path.append(next_hop)
            remaining.discard(next_hop)
            current = next_hop

        path.append(0)
        logger.debug("Reconstructed tour: %s", path)
        return path

    def _validate_solution(self, path: list[int], expected_cost: int) -> bool:
        if not self.graph.is_valid_tour(path):
            return False
        return self.graph.calculate_path_cost(path) == expected_cost

    # ── Helper ─────────────────────────────────────────────────────

    def _reset_counters(self) -> None:
        self._states_computed = 0
        self._cache_hits = 0
        self._cache_misses = 0
