"""
FastAPI routes for the TSP solver backend.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, HTTPException

from tspsolver.api.schemas import (
    BenchmarkEntry,
    BenchmarkInput,
    CompareInput,
    ComparisonEntry,
    ComplexityInfo,
    ConfigInput,
    GraphInput,
    GraphStatsModel,
    SolveResult,
    ValidationResult,
)
from tspsolver.core.errors import TSPError
from tspsolver.engine.config_reader import ConfigReader
from tspsolver.engine.tsp_engine import TSPEngine
from tspsolver.solver.registry import list_solvers

logger = logging.getLogger(__name__)

router = APIRouter()

# ── Shared instances ───────────────────────────────────────────────
# The engine is stateless; every request builds its own solver.

engine = TSPEngine()


def _bad_request(exc: TSPError) -> HTTPException:
    logger.warning("Request rejected: %s", exc)
    return HTTPException(
        status_code=400, detail={"kind": exc.kind, "message": exc.message}
    )


def _not_found(exc: KeyError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(exc.args[0]))


# ── Solvers ────────────────────────────────────────────────────────

@router.get("/solvers")
def get_solvers() -> dict[str, list[str]]:
    """Names of all registered solvers."""
    return {"solvers": list_solvers()}


@router.post("/solve", response_model=SolveResult)
def solve_graph(payload: GraphInput) -> SolveResult:
    """
    Solve an adjacency matrix.
    Returns the optimal tour, its cost and solver statistics.
    """
    try:
        result = engine.run(
            {"matrix": payload.matrix, "names": payload.names}, payload.solver
        )
        return SolveResult(**result)
    except TSPError as exc:
        raise _bad_request(exc)
    except KeyError as exc:
        raise _not_found(exc)


@router.post("/solve/config", response_model=SolveResult)
def solve_config(payload: ConfigInput) -> SolveResult:
    """Solve a graph given in the CITIES:/MATRIX: text format."""
    try:
        return SolveResult(**engine.run_config(payload.content, payload.solver))
    except TSPError as exc:
        raise _bad_request(exc)
    except KeyError as exc:
        raise _not_found(exc)


@router.post("/compare", response_model=list[ComparisonEntry])
def compare_solvers(payload: CompareInput) -> list[ComparisonEntry]:
    """Solve the same graph with several solvers."""
    try:
        graph = engine.build_graph({"matrix": payload.matrix, "names": payload.names})
        solutions = engine.compare(graph, payload.solvers)
    except TSPError as exc:
        raise _bad_request(exc)
    except KeyError as exc:
        raise _not_found(exc)

    best_cost = min((s.optimal_cost for _, s in solutions), default=None)
    return [
        ComparisonEntry(
            solver=name,
            optimal_cost=s.optimal_cost,
            optimal_path=s.optimal_path,
            is_valid=s.is_valid,
            solve_duration=s.stats.solve_duration,
            states_computed=s.stats.states_computed,
            best=s.optimal_cost == best_cost,
        )
        for name, s in solutions
    ]


# ── Configuration files ────────────────────────────────────────────

@router.post("/validate", response_model=ValidationResult)
def validate_config(payload: ConfigInput) -> ValidationResult:
    """Parse configuration text and report whether it is solvable."""
    try:
        graph = ConfigReader.parse_content(payload.content)
    except TSPError as exc:
        raise _bad_request(exc)

    report = ConfigReader.validate_graph(graph)
    return ValidationResult(
        graph_size=report.graph_size,
        stats=GraphStatsModel(**asdict(report.stats)),
        warnings=report.warnings,
        errors=report.errors,
        is_valid=report.is_valid,
    )


@router.get("/samples/{kind}")
def get_sample(kind: str) -> dict[str, str]:
    """Return a bundled sample configuration (small, medium, large)."""
    try:
        return {"kind": kind, "content": ConfigReader.sample_content(kind)}
    except KeyError as exc:
        raise _not_found(exc)


# ── Complexity / benchmark ─────────────────────────────────────────

@router.get("/complexity/{size}", response_model=ComplexityInfo)
def get_complexity(size: int) -> ComplexityInfo:
    try:
        return ComplexityInfo(**TSPEngine.complexity_info(size))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/benchmark", response_model=list[BenchmarkEntry])
def run_benchmark(payload: BenchmarkInput) -> list[dict[str, Any]]:
    """Solve the deterministic benchmark graphs for a range of sizes."""
    try:
        return engine.run_benchmark(
            payload.max_size, payload.min_size, payload.solver
        )
    except TSPError as exc:
        raise _bad_request(exc)
    except KeyError as exc:
        raise _not_found(exc)
