"""
Immutable solver results: the optimal tour and its instrumentation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from tspsolver.core.graph import Graph


@dataclass(frozen=True)
class SolverStats:
    """Counters collected during a single ``solve()`` call."""

    states_computed: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    solve_duration: float | None = None
    max_memory_states: int = 0

    @property
    def cache_hit_rate(self) -> float | None:
        """Percentage of transition lookups that hit, or None if none ran."""
        total = self.cache_hits + self.cache_misses
        if total == 0:
            return None
        return self.cache_hits / total * 100.0


@dataclass(frozen=True)
class Solution:
    """
    Result of solving one graph.

    ``optimal_path`` has ``n + 1`` entries, starts and ends at node 0.
    ``is_valid`` is the post-solve double check: the path is a
    Hamiltonian cycle and its recomputed cost equals ``optimal_cost``.
    """

    optimal_cost: int
    optimal_path: tuple[int, ...]
    is_valid: bool
    stats: SolverStats = field(default_factory=SolverStats)
    solver: str = "held_karp"

    def __post_init__(self) -> None:
        object.__setattr__(self, "optimal_path", tuple(self.optimal_path))

    def named_path(self, graph: Graph) -> list[str]:
        return [graph.node_names[i] for i in self.optimal_path]

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["optimal_path"] = list(self.optimal_path)
        data["stats"]["cache_hit_rate"] = self.stats.cache_hit_rate
        return data
