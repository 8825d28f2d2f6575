from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Circle
import numpy as np

from .errors import GraphError
from .exact_coloring import DEFAULT_MAX_STATES
from .geometry import VERTEX_DIAMETER, vertex_center
from .logger_config import LoggerFactory
from .session import GraphSession


def plot_colored_graph(
    points: np.ndarray,
    edges: Sequence[Tuple[int, int]],
    colors: Sequence[Optional[int]],
    title: str,
    labels: Optional[Sequence[int]] = None,
    save_path: str | None = None,
):
    """Draw vertices at `points` (top-left corners) filled with their color index.

    edges 使用 points 的行下标；colors[i] 为 None 表示尚未染色，画成白色。
    """
    n = points.shape[0]
    centers = np.array([vertex_center(p) for p in points]) if n else np.zeros((0, 2))
    if labels is None:
        labels = list(range(n))

    fig, ax = plt.subplots(figsize=(6, 6))
    # 先画边
    for i, j in edges:
        ax.plot(centers[[i, j], 0], centers[[i, j], 1], "k-", linewidth=2.5, zorder=1)

    # 再画点：tab10 最多 10 种明显不同的颜色，超出后循环使用
    cmap = plt.get_cmap("tab10")
    for i in range(n):
        face = "white" if colors[i] is None else cmap(colors[i] % 10)
        circle = Circle(
            centers[i], VERTEX_DIAMETER / 2.0, facecolor=face, edgecolor="black", linewidth=2.5, zorder=2
        )
        ax.add_patch(circle)
        ax.text(centers[i, 0], centers[i, 1], str(labels[i]), ha="center", va="center", fontsize=11, zorder=3)

    ax.set_title(title)
    ax.set_aspect("equal")
    if n:
        lo = centers.min(axis=0) - VERTEX_DIAMETER
        hi = centers.max(axis=0) + VERTEX_DIAMETER
        ax.set_xlim(lo[0], hi[0])
        # 画布坐标系 y 轴向下
        ax.set_ylim(hi[1], lo[1])
    ax.axis("off")
    fig.tight_layout()

    if save_path is not None:
        os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
        fig.savefig(save_path, dpi=150)
        print(f"Saved figure to {save_path}")
    else:
        plt.show()

    plt.close(fig)


def plot_session(session: GraphSession, save_path: str | None = None):
    vertices = session.vertices()
    index = {v.number: i for i, v in enumerate(vertices)}
    edges = [(index[u], index[v]) for u, v in session.edges()]
    title = f"Chromatic number: {session.chromatic_number if session.chromatic_number is not None else '-'}"
    plot_colored_graph(
        session.points(),
        edges,
        [v.color for v in vertices],
        title=title,
        labels=[v.number for v in vertices],
        save_path=save_path,
    )


def build_demo(session: GraphSession) -> None:
    """Two disjoint triangles next to a square: chi = 3."""
    placements = {
        0: (60.0, 60.0), 1: (180.0, 60.0), 2: (120.0, 160.0),
        3: (300.0, 60.0), 4: (420.0, 60.0), 5: (360.0, 160.0),
        6: (60.0, 300.0), 7: (180.0, 300.0), 8: (180.0, 420.0), 9: (60.0, 420.0),
    }
    for number, (x, y) in placements.items():
        session.add_vertex(x, y, number)
    for u, v in [(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5), (6, 7), (7, 8), (8, 9), (6, 9)]:
        session.add_edge(u, v)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute the chromatic number of a drawn graph.")
    parser.add_argument("graph_file", nargs="?", help="graph in Node:/Line: text format (default: built-in demo)")
    parser.add_argument("--max-states", type=int, default=DEFAULT_MAX_STATES,
                        help="backtracking state budget before falling back to greedy (0 = unlimited)")
    parser.add_argument("--time-limit", type=float, default=None, help="wall-clock budget in seconds")
    parser.add_argument("--save-figure", default=None, help="write the colored graph to this image file")
    parser.add_argument("--save-graph", default=None, help="re-serialize the graph to this file")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    LoggerFactory.get_console_logger("paint_graph", level=args.log_level)

    max_states = args.max_states if args.max_states and args.max_states > 0 else None
    session = GraphSession(max_states=max_states, time_limit=args.time_limit)

    try:
        if args.graph_file:
            session.load(args.graph_file)
        else:
            build_demo(session)
    except (OSError, GraphError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    k = session.colorize()
    result = session.last_result
    print(f"n={len(session.vertices())}, |E|={len(session.edges())}")
    if result is not None and not result.exact:
        print(f"Chromatic number: <= {k} (search budget exhausted, greedy upper bound)")
    else:
        print(f"Chromatic number: {k}")
    for vertex in session.vertices():
        print(f"  {vertex}: {vertex.color}")

    if args.save_graph:
        session.save(args.save_graph)
        print(f"Saved graph to {args.save_graph}")
    if args.save_figure:
        plot_session(session, save_path=args.save_figure)

    return 0


if __name__ == "__main__":
    sys.exit(main())
