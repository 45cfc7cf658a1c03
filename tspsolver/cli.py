#!/usr/bin/env python
"""
Command-line front end for the Held-Karp TSP solver.

Usage:
    tsp-solver solve --file <config> [--verbose] [--solver <name>]
    tsp-solver sample --output <path> [--kind small|medium|large]
    tsp-solver validate --file <config>
    tsp-solver benchmark [--max-size N]

Examples:
    tsp-solver sample --output cities.txt --kind medium
    tsp-solver solve --file cities.txt --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from tspsolver.core.errors import TSPError
from tspsolver.engine import report
from tspsolver.engine.config_reader import ConfigReader, SampleType
from tspsolver.engine.tsp_engine import TSPEngine
from tspsolver.solver.registry import DEFAULT_SOLVER, list_solvers

logger = logging.getLogger(__name__)

# Sizes above this get a runtime warning before benchmarking
BENCHMARK_WARNING_SIZE = 12

HEADER = """\
+--------------------------------------------------------------+
|                       TSP SOLVER v1.0                        |
|               Travelling Salesman Problem Solver             |
|                 Dynamic Programming Algorithm                |
+--------------------------------------------------------------+
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsp-solver",
        description="Travelling Salesman Problem solver using dynamic programming",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command", required=True)

    solve = commands.add_parser("solve", help="Solve a graph configuration file")
    solve.add_argument("--file", "-f", required=True, help="Configuration file")
    solve.add_argument("--verbose", "-v", action="store_true",
                       help="Trace every DP phase")
    solve.add_argument("--solver", "-s", default=DEFAULT_SOLVER,
                       choices=list_solvers(), help="Solver to use")

    sample = commands.add_parser("sample", help="Write a sample configuration file")
    sample.add_argument("--output", "-o", required=True, help="Output path")
    sample.add_argument("--kind", "-k", default=SampleType.MEDIUM.value,
                        choices=[s.value for s in SampleType])

    validate = commands.add_parser("validate", help="Validate a configuration file")
    validate.add_argument("--file", "-f", required=True, help="Configuration file")

    benchmark = commands.add_parser("benchmark", help="Benchmark graph sizes 3..N")
    benchmark.add_argument("--max-size", "-m", type=int, default=8)

    return parser


def _solve(args: argparse.Namespace, engine: TSPEngine) -> None:
    print(f"Reading file: {args.file}")
    graph = ConfigReader.read_from_file(args.file)

    print(report.render_graph(graph))
    print()
    print(report.render_edges(graph))
    print()
    print(report.render_complexity(graph.size))
    print()

    solution = engine.solve(graph, args.solver)

    print(report.render_solution(graph, solution))
    print()
    print(report.render_graph_with_tour(graph, solution.optimal_path))
    print()
    print(report.render_tour_sequence(graph, solution.optimal_path))


def _sample(args: argparse.Namespace) -> None:
    ConfigReader.create_sample_file(args.output, args.kind)
    print(f"[SUCCESS] Sample file created: {args.output}")


def _validate(args: argparse.Namespace) -> None:
    print(f"Validating file: {args.file}")
    print(report.render_validation_report(ConfigReader.validate_file(args.file)))


def _benchmark(args: argparse.Namespace, engine: TSPEngine) -> None:
    if args.max_size > BENCHMARK_WARNING_SIZE:
        logger.warning(
            "Sizes above %d take a very long time", BENCHMARK_WARNING_SIZE
        )
    rows: list[list[object]] = [["Size", "Cost", "Time", "States", "Valid"]]
    for entry in engine.run_benchmark(args.max_size):
        rows.append([
            entry["size"],
            entry["optimal_cost"],
            f"{entry['solve_duration'] * 1000:.2f}ms",
            entry["states_computed"],
            "[VALID]" if entry["is_valid"] else "[INVALID]",
        ])
    print(report.format_table(rows))


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    print(HEADER)
    engine = TSPEngine()
    try:
        if args.command == "solve":
            _solve(args, engine)
        elif args.command == "sample":
            _sample(args)
        elif args.command == "validate":
            _validate(args)
        elif args.command == "benchmark":
            _benchmark(args, engine)
    except TSPError as exc:
        print(f"[ERROR] {exc}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
