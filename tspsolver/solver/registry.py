"""
Solver Registry — maps solver names to TourSolver classes.

This is the single extensibility point for adding new solvers.
"""

from __future__ import annotations

from typing import Type

from tspsolver.core.graph import Graph
from tspsolver.solver.brute_force import BruteForceSolver
from tspsolver.solver.held_karp import HeldKarpSolver
from tspsolver.solver.interface import TourSolver

DEFAULT_SOLVER = HeldKarpSolver.name

# ── Default registry ───────────────────────────────────────────────

_REGISTRY: dict[str, Type[TourSolver]] = {
    HeldKarpSolver.name: HeldKarpSolver,
    BruteForceSolver.name: BruteForceSolver,
}


def register_solver(name: str, cls: Type[TourSolver]) -> None:
    """Register a new solver (or override an existing one)."""
    _REGISTRY[name] = cls


def get_solver_class(name: str) -> Type[TourSolver]:
    """
    Look up the class registered under *name*.

    Raises KeyError if the name is not registered.
    """
    if name not in _REGISTRY:
        raise KeyError(
            f"Unknown solver {name!r}. "
            f"Registered solvers: {list(_REGISTRY.keys())}"
        )
    return _REGISTRY[name]


def list_solvers() -> list[str]:
    """Return all registered solver names."""
    return list(_REGISTRY.keys())


def create_solver(name: str, graph: Graph) -> TourSolver:
    """
    Factory: instantiate a solver by name, bound to *graph*.
    """
    cls = get_solver_class(name)
    return cls(graph)
