"""
Error taxonomy for the TSP solver.

Every fallible operation raises one of these immediately; nothing is
retried and no partial solution is ever returned.
"""

from __future__ import annotations


class TSPError(Exception):
    """Base class for all solver-related failures."""

    kind = "TSP Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class InvalidGraphError(TSPError, ValueError):
    """Malformed matrix, non-zero diagonal, or a missing directed edge."""

    kind = "Invalid Graph"


class InvalidPathError(TSPError, ValueError):
    """A path violates length, index-range or connectivity requirements."""

    kind = "Invalid Path"


class ConfigError(TSPError, ValueError):
    """A textual graph configuration could not be read or parsed."""

    kind = "Config Error"


class SolverError(TSPError, RuntimeError):
    """Unsupported graph size or an internal consistency failure."""

    kind = "Solver Error"
