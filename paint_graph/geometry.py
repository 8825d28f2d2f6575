from __future__ import annotations

from typing import Mapping, Optional, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

# 顶点圆的直径（坐标记录的是外接正方形左上角），以及删边时的点击宽度
VERTEX_DIAMETER: float = 40.0
EDGE_HIT_WIDTH: float = 35.0


def vertex_center(corner: Point, diameter: float = VERTEX_DIAMETER) -> np.ndarray:
    """Centre of the circle whose bounding box starts at `corner`."""
    return np.asarray(corner, dtype=float) + diameter / 2.0


def corner_for_click(x: float, y: float, diameter: float = VERTEX_DIAMETER) -> Point:
    """Bounding-box corner that centres a new vertex circle on the click."""
    return (float(x) - diameter / 2.0, float(y) - diameter / 2.0)


def circle_contains(corner: Point, x: float, y: float, diameter: float = VERTEX_DIAMETER) -> bool:
    center = vertex_center(corner, diameter)
    return bool(np.linalg.norm(np.array([x, y], dtype=float) - center) <= diameter / 2.0)


def point_segment_distance(p: Sequence[float], a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance from point p to the segment a-b."""
    p = np.asarray(p, dtype=float)
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    ab = b - a
    denom = float(ab @ ab)
    if denom == 0.0:
        return float(np.linalg.norm(p - a))
    t = float(np.clip((p - a) @ ab / denom, 0.0, 1.0))
    return float(np.linalg.norm(p - (a + t * ab)))


def hit_vertex(positions: Mapping[int, Point], x: float, y: float) -> Optional[int]:
    """Vertex whose circle contains (x, y); the one drawn last (highest number) wins."""
    hit = None
    for number in sorted(positions):
        if circle_contains(positions[number], x, y):
            hit = number
    return hit


def hit_edge(
    positions: Mapping[int, Point],
    edges: Sequence[Tuple[int, int]],
    x: float,
    y: float,
    tol: float = EDGE_HIT_WIDTH / 2.0,
) -> Optional[Tuple[int, int]]:
    """Nearest edge whose segment passes within `tol` of (x, y)."""
    best = None
    best_d = tol
    for u, v in edges:
        d = point_segment_distance((x, y), vertex_center(positions[u]), vertex_center(positions[v]))
        if d <= best_d:
            best, best_d = (u, v), d
    return best
