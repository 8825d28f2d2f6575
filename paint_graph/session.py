from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

import numpy as np

from . import graph_text
from .errors import NotFoundError
from .exact_coloring import DEFAULT_MAX_STATES, ColoringResult, colorize
from .graph_model import Graph, Vertex

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class GraphSession:
    """The graph being drawn, plus where each vertex sits on the canvas.

    一个会话只拥有一张图；所有修改、查询和 colorize 都在同一把锁下进行，
    因此 colorize 总是看到一致的邻接结构。
    """

    def __init__(self, max_states: Optional[int] = DEFAULT_MAX_STATES, time_limit: Optional[float] = None):
        self.graph = Graph()
        self.positions: Dict[int, Point] = {}
        self.max_states = max_states
        self.time_limit = time_limit
        self.chromatic_number: Optional[int] = None
        self.last_result: Optional[ColoringResult] = None
        self._lock = threading.RLock()

    def _invalidate(self) -> None:
        self.chromatic_number = None
        self.last_result = None

    # ---- mutation ---- #
    def add_vertex(self, x: float, y: float, number: Optional[int] = None) -> Vertex:
        with self._lock:
            vertex = self.graph.add_vertex(number)
            self.positions[vertex.number] = (float(x), float(y))
            self._invalidate()
            return vertex

    def remove_vertex(self, number: int) -> List[Tuple[int, int]]:
        with self._lock:
            if not self.graph.has_vertex(number):
                return []
            removed = self.graph.remove_vertex(number)
            self.positions.pop(number, None)
            self._invalidate()
            return removed

    def add_edge(self, u: int, v: int) -> None:
        with self._lock:
            if self.graph.has_edge(u, v):
                return
            self.graph.add_edge(u, v)
            self._invalidate()

    def remove_edge(self, u: int, v: int) -> None:
        with self._lock:
            if not self.graph.has_edge(u, v):
                return
            self.graph.remove_edge(u, v)
            self._invalidate()

    def clear(self) -> None:
        with self._lock:
            self.graph.clear()
            self.positions.clear()
            self._invalidate()

    # ---- queries ---- #
    def vertices(self) -> List[Vertex]:
        with self._lock:
            return self.graph.vertices()

    def edges(self) -> List[Tuple[int, int]]:
        with self._lock:
            return self.graph.edges()

    def get_adjacent(self, number: int) -> Set[int]:
        with self._lock:
            return self.graph.get_adjacent(number)

    def has_vertex(self, number: int) -> bool:
        with self._lock:
            return self.graph.has_vertex(number)

    def positions_snapshot(self) -> Dict[int, Point]:
        """Copy of the placements, safe to iterate while other callers mutate the session."""
        with self._lock:
            return dict(self.positions)

    def layout_snapshot(self) -> Tuple[Dict[int, Point], List[Tuple[int, int]]]:
        """Placements and edges taken together under one lock."""
        with self._lock:
            return dict(self.positions), self.graph.edges()

    def color_of(self, number: int) -> Optional[int]:
        with self._lock:
            return self.graph.vertex(number).color

    def position(self, number: int) -> Point:
        with self._lock:
            if number not in self.positions:
                raise NotFoundError(number)
            return self.positions[number]

    def points(self) -> np.ndarray:
        """(n, 2) array of placements in vertex order."""
        with self._lock:
            numbers = [v.number for v in self.graph.vertices()]
            if not numbers:
                return np.zeros((0, 2), dtype=float)
            return np.array([self.positions[n] for n in numbers], dtype=float)

    # ---- actions ---- #
    def colorize(self) -> int:
        with self._lock:
            result = colorize(self.graph, max_states=self.max_states, time_limit=self.time_limit)
            self.last_result = result
            self.chromatic_number = result.chromatic_number
            return result.chromatic_number

    def to_text(self) -> str:
        with self._lock:
            return graph_text.dumps(self.graph, self.positions)

    def _replace(self, graph: Graph, positions: Dict[int, Point]) -> None:
        with self._lock:
            self.graph = graph
            self.positions = positions
            self._invalidate()
        logger.info("loaded graph with %d vertices and %d edges", len(graph), len(graph.edges()))

    def from_text(self, text: str) -> None:
        # 解析失败时抛出 GraphFormatError，当前会话保持不变
        self._replace(*graph_text.loads(text))

    def save(self, path: Union[str, Path]) -> None:
        with self._lock:
            graph_text.dump(self.graph, self.positions, path)

    def load(self, path: Union[str, Path]) -> None:
        self._replace(*graph_text.load(path))
