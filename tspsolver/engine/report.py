"""
Plain-text rendering of graphs, tours and solver results.

Every function returns a string; printing is left to the caller.
"""

from __future__ import annotations

from typing import Sequence

from tspsolver.core.graph import Graph
from tspsolver.core.solution import Solution, SolverStats
from tspsolver.engine.config_reader import ValidationReport
from tspsolver.engine.tsp_engine import TSPEngine

INFINITY = "∞"


def format_table(rows: Sequence[Sequence[object]]) -> str:
    """Render rows as a boxed table; the first row is the header."""
    cells = [[str(c) for c in row] for row in rows]
    widths = [max(len(row[i]) for row in cells) for i in range(len(cells[0]))]
    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(row: list[str]) -> str:
        return "| " + " | ".join(c.ljust(w) for c, w in zip(row, widths)) + " |"

    out = [border, line(cells[0]), border]
    out.extend(line(row) for row in cells[1:])
    out.append(border)
    return "\n".join(out)


# ── Graph ──────────────────────────────────────────────────────────

def render_graph(graph: Graph) -> str:
    header = ["From/To", *graph.node_names]
    rows: list[list[object]] = [header]
    for i, name in enumerate(graph.node_names):
        row: list[object] = [name]
        for j in range(graph.size):
            value = graph.distance(i, j)
            row.append(INFINITY if i != j and value <= 0 else value)
        rows.append(row)

    return "\n".join([
        "=== TSP GRAPH ===",
        f"Number of cities: {graph.size}",
        format_table(rows),
    ])


def render_edges(graph: Graph) -> str:
    g = graph.to_networkx()
    lines = ["=== GRAPH EDGES ===", "Available edges:"]
    for u, v, weight in g.edges(data="weight"):
        lines.append(f"  {g.nodes[u]['name']} --> {g.nodes[v]['name']} ({weight})")
    lines.append(f"Total edges: {g.number_of_edges()}")
    return "\n".join(lines)


def render_graph_with_tour(graph: Graph, path: Sequence[int]) -> str:
    """List every edge, marking the ones used by *path* with ``===``."""
    g = graph.to_networkx()
    tour_edges = set(zip(path, path[1:]))
    lines = [
        "=== GRAPH WITH OPTIMAL TOUR ===",
        "  --- = regular edge",
        "  === = edge in optimal tour",
    ]
    for u, v, weight in g.edges(data="weight"):
        marker = "===" if (u, v) in tour_edges else "---"
        lines.append(
            f"  {g.nodes[u]['name']} {marker} {g.nodes[v]['name']} ({weight})"
        )
    return "\n".join(lines)


# ── Solution ───────────────────────────────────────────────────────

def render_journey(graph: Graph, path: Sequence[int], total_cost: int) -> str:
    rows: list[list[object]] = [["Step", "From", "To", "Distance", "Cumulative"]]
    cumulative = 0
    for step, (frm, to) in enumerate(zip(path, path[1:]), start=1):
        distance = graph.distance(frm, to)
        cumulative += distance
        rows.append([
            step, graph.node_names[frm], graph.node_names[to], distance, cumulative,
        ])
    rows.append(["TOTAL", "", "", "", total_cost])
    return "Journey details:\n" + format_table(rows)


def render_tour_sequence(graph: Graph, path: Sequence[int]) -> str:
    lines = ["=== VISIT ORDER ==="]
    last = len(path) - 1
    for step, node in enumerate(path):
        if step == 0:
            action = "Start at"
        elif step == last:
            action = "Return to"
        else:
            action = "Visit"
        lines.append(f"{step + 1}. {action} {graph.node_names[node]}")
    return "\n".join(lines)


def render_stats(stats: SolverStats) -> str:
    lines = ["=== SOLVER STATISTICS ==="]
    if stats.solve_duration is not None:
        lines.append(f"Solve Time: {stats.solve_duration * 1000:.2f}ms")
    lines.append(f"States Computed: {stats.states_computed}")
    lines.append(f"Cache Hits: {stats.cache_hits}")
    lines.append(f"Cache Misses: {stats.cache_misses}")
    lines.append(f"Max Memory States: {stats.max_memory_states}")
    if stats.cache_hit_rate is not None:
        lines.append(f"Cache Hit Rate: {stats.cache_hit_rate:.1f}%")
    return "\n".join(lines)


def render_solution(graph: Graph, solution: Solution) -> str:
    return "\n\n".join([
        "\n".join([
            "=== TSP SOLUTION ===",
            f"Graph: {graph.size} cities",
            f"Status: {'[VALID]' if solution.is_valid else '[INVALID]'}",
            "Optimal path:",
            "  " + " → ".join(solution.named_path(graph)),
            f"Total cost: {solution.optimal_cost}",
        ]),
        render_journey(graph, solution.optimal_path, solution.optimal_cost),
        render_stats(solution.stats),
    ])


def render_comparison(solutions: Sequence[tuple[str, Solution]]) -> str:
    """Side-by-side table; the cheapest cost is tagged ``[BEST]``."""
    if not solutions:
        return "No solutions to compare"

    best_cost = min(s.optimal_cost for _, s in solutions)
    rows: list[list[object]] = [["Method", "Cost", "Time", "States", "Valid"]]
    for name, solution in solutions:
        cost = solution.optimal_cost
        duration = solution.stats.solve_duration
        rows.append([
            name,
            f"{cost} [BEST]" if cost == best_cost else cost,
            "N/A" if duration is None else f"{duration * 1000:.2f}ms",
            solution.stats.states_computed,
            "[VALID]" if solution.is_valid else "[INVALID]",
        ])
    return "=== SOLUTION COMPARISON ===\n" + format_table(rows)


# ── Misc ───────────────────────────────────────────────────────────

def render_complexity(size: int) -> str:
    info = TSPEngine.complexity_info(size)
    lines = [
        "=== COMPLEXITY ===",
        f"Graph size: {size} nodes",
        f"Number of states: {info['states']}",
        f"Complexity: O(n²×2ⁿ) = O({size}²×2^{size}) = O({info['operations']})",
    ]
    if info["level"] == "warning":
        lines.append("[WARNING] Graphs larger than 15 nodes take a very long time")
    elif info["level"] == "notice":
        lines.append("[NOTICE] Graphs larger than 10 nodes take a while")
    return "\n".join(lines)


def render_validation_report(report: ValidationReport) -> str:
    lines = [
        "=== VALIDATION REPORT ===",
        f"Graph Size: {report.graph_size}",
        f"Stats: {report.stats}",
    ]
    if report.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  [WARNING] {w}" for w in report.warnings)
    if report.errors:
        lines.append("")
        lines.append("Errors:")
        lines.extend(f"  [ERROR] {e}" for e in report.errors)
    lines.append("")
    lines.append(f"Status: {'[VALID]' if report.is_valid else '[INVALID]'}")
    return "\n".join(lines)
