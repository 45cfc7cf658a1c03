"""
ConfigReader — builds a Graph from the line-oriented text format.

Format::

    # Comments start with '#'
    # Optional city names
    CITIES: City_A, City_B, City_C, City_D

    # Adjacency matrix
    MATRIX:
    0 10 15 20
    5  0  9 10
    6 13  0 12
    8  8  9  0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from tspsolver.core.errors import ConfigError, InvalidGraphError
from tspsolver.core.graph import Graph, GraphStats

logger = logging.getLogger(__name__)

CITIES_PREFIX = "CITIES:"
MATRIX_HEADER = "MATRIX:"

# Validation thresholds
LARGE_GRAPH_WARNING = 10
WEIGHT_SPREAD_WARNING = 10


class SampleType(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


_SAMPLES: dict[SampleType, str] = {
    SampleType.SMALL: """\
# Simple TSP example - 3 cities

CITIES: A, B, C

MATRIX:
0 2 3
4 0 1
5 6 0
""",
    SampleType.MEDIUM: """\
# Medium TSP example - 5 cities

CITIES: Jakarta, Bandung, Yogyakarta, Surabaya, Medan

# Distance matrix
MATRIX:
0  2  9 10  7
1  0  6  4  3
15 7  0  8  3
6  3 12  0 11
7  8  4  2  0
""",
    SampleType.LARGE: """\
# Large TSP example - 7 cities

CITIES: A, B, C, D, E, F, G

# Distance matrix
MATRIX:
0  3  4  2  7  6  8
2  0  5  3  6  4  7
4  5  0  6  8  9  3
2  3  6  0  4  5  9
7  6  8  4  0  2  5
6  4  9  5  2  0  7
8  7  3  9  5  7  0
""",
}


@dataclass
class ValidationReport:
    """Outcome of checking a configuration file before solving it."""

    graph_size: int
    stats: GraphStats
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class ConfigReader:
    """Reads, writes and validates graph configuration files."""

    @classmethod
    def read_from_file(cls, file_path: str | Path) -> Graph:
        try:
            content = Path(file_path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to read file {str(file_path)!r}: {exc}") from exc

        logger.info("Reading graph configuration from %s", file_path)
        return cls.parse_content(content)

    @classmethod
    def parse_content(cls, content: str) -> Graph:
        """
        Parse configuration text into a Graph.

        Lines before ``MATRIX:`` other than ``CITIES:`` are ignored; every
        line after it is a matrix row.
        """
        lines = [
            line.strip()
            for line in content.splitlines()
            if line.strip() and not line.strip().startswith("#")
        ]
        if not lines:
            raise ConfigError("File is empty or contains only comments")

        city_names: list[str] | None = None
        matrix: list[list[int]] | None = None

        for line in lines:
            if line.startswith(CITIES_PREFIX):
                city_names = [
                    name.strip()
                    for name in line[len(CITIES_PREFIX):].split(",")
                ]
            elif line == MATRIX_HEADER:
                matrix = []
            elif matrix is not None:
                matrix.append(cls._parse_matrix_row(line))

        if matrix is None:
            raise ConfigError("No MATRIX section found")
        if not matrix:
            raise ConfigError("Matrix must not be empty")

        graph = Graph(matrix, node_names=city_names)
        logger.info("Parsed graph: %d nodes", graph.size)
        return graph

    @staticmethod
    def _parse_matrix_row(line: str) -> list[int]:
        row: list[int] = []
        for token in line.split():
            try:
                row.append(int(token))
            except ValueError:
                raise ConfigError(f"Failed to parse number: {token!r}") from None
        return row

    # ── Samples ────────────────────────────────────────────────────

    @staticmethod
    def sample_content(kind: SampleType | str) -> str:
        """Return the text of a bundled sample (small, medium or large)."""
        try:
            sample_type = SampleType(kind)
        except ValueError:
            raise KeyError(
                f"Unknown sample type {kind!r}. "
                f"Use one of: {[s.value for s in SampleType]}"
            ) from None
        return _SAMPLES[sample_type]

    @classmethod
    def create_sample_file(
        cls, file_path: str | Path, kind: SampleType | str = SampleType.MEDIUM
    ) -> None:
        content = cls.sample_content(kind)
        try:
            Path(file_path).write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to write file {str(file_path)!r}: {exc}") from exc
        logger.info("Sample %s written to %s", SampleType(kind).value, file_path)

    # ── Validation ─────────────────────────────────────────────────

    @classmethod
    def validate_file(cls, file_path: str | Path) -> ValidationReport:
        """
        Read a file and report whether it is solvable.

        Read and parse failures propagate; TSP-completeness failures
        become report errors.
        """
        return cls.validate_graph(cls.read_from_file(file_path))

    @staticmethod
    def validate_graph(graph: Graph) -> ValidationReport:
        stats = graph.get_stats()
        report = ValidationReport(graph_size=graph.size, stats=stats)

        try:
            graph.validate_for_tsp()
        except InvalidGraphError as exc:
            report.errors.append(f"Graph is not valid for TSP: {exc}")

        if graph.size > LARGE_GRAPH_WARNING:
            report.warnings.append(
                f"Graph of size {graph.size} may take a long time to solve"
            )

        if stats.max_edge_weight > stats.min_edge_weight * WEIGHT_SPREAD_WARNING:
            report.warnings.append(
                "Edge weights are very unbalanced, this may affect performance"
            )

        return report
