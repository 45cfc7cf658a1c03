"""
Pydantic schemas for the FastAPI endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from tspsolver.solver.registry import DEFAULT_SOLVER


# ── Solve ──────────────────────────────────────────────────────────

class GraphInput(BaseModel):
    """Adjacency matrix + optional city names."""

    matrix: list[list[int]] = Field(..., description="n×n distance matrix, zero diagonal")
    names: list[str] | None = Field(default=None, description="Optional city names")
    solver: str = Field(default=DEFAULT_SOLVER, description="Registered solver name")


class ConfigInput(BaseModel):
    """Graph in the CITIES:/MATRIX: text format."""

    content: str = Field(..., description="Configuration file contents")
    solver: str = Field(default=DEFAULT_SOLVER)


class SolverStatsModel(BaseModel):
    states_computed: int
    cache_hits: int
    cache_misses: int
    solve_duration: float | None
    max_memory_states: int
    cache_hit_rate: float | None


class SolveResult(BaseModel):
    """Result of solving one graph."""

    optimal_cost: int
    optimal_path: list[int]
    named_path: list[str]
    is_valid: bool
    solver: str
    stats: SolverStatsModel
    node_count: int


# ── Compare ────────────────────────────────────────────────────────

class CompareInput(BaseModel):
    matrix: list[list[int]]
    names: list[str] | None = None
    solvers: list[str] = Field(default_factory=lambda: ["held_karp", "brute_force"])


class ComparisonEntry(BaseModel):
    solver: str
    optimal_cost: int
    optimal_path: list[int]
    is_valid: bool
    solve_duration: float | None
    states_computed: int
    best: bool


# ── Validation ─────────────────────────────────────────────────────

class GraphStatsModel(BaseModel):
    nodes: int
    edges: int
    min_edge_weight: int
    max_edge_weight: int
    avg_edge_weight: float
    total_weight: int


class ValidationResult(BaseModel):
    graph_size: int
    stats: GraphStatsModel
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    is_valid: bool


# ── Misc ───────────────────────────────────────────────────────────

class ComplexityInfo(BaseModel):
    size: int
    states: int
    operations: int
    level: str
    supported: bool


class BenchmarkInput(BaseModel):
    max_size: int = Field(default=8, ge=2, le=12, description="Largest graph size")
    min_size: int = Field(default=3, ge=2)
    solver: str = Field(default=DEFAULT_SOLVER)


class BenchmarkEntry(BaseModel):
    size: int
    optimal_cost: int
    solve_duration: float | None
    states_computed: int
    is_valid: bool
