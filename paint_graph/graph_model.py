from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from .errors import DuplicateVertexError, InvalidEdgeError, MissingEndpointError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Vertex:
    number: int
    color: Optional[int] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.number == other.number

    def __hash__(self) -> int:
        return hash(self.number)

    def __str__(self) -> str:
        return f"{{{self.number}}}"


class Graph:
    """Undirected simple graph: vertices plus a symmetric adjacency mapping.

    - adj[u] 是 u 的邻居编号集合，始终对称、无自环；
    - 每个存活顶点都有一个（可能为空的）邻接项；
    - 任何结构性修改都会使已有的染色失效（所有顶点颜色重置为 None）。
    """

    def __init__(self) -> None:
        self._vertices: Dict[int, Vertex] = {}
        self.adj: Dict[int, Set[int]] = {}
        self._next_number = 0

    # ---- vertices ---- #
    def add_vertex(self, number: Optional[int] = None) -> Vertex:
        if number is None:
            number = self._next_number
        if number in self._vertices:
            raise DuplicateVertexError(number)
        vertex = Vertex(number)
        self._vertices[number] = vertex
        self.adj[number] = set()
        if number >= self._next_number:
            self._next_number = number + 1
        self.reset_colors()
        logger.debug("added vertex %s", vertex)
        return vertex

    def remove_vertex(self, number: int) -> List[Tuple[int, int]]:
        """Remove a vertex together with all incident edges.

        Returns the removed edges as (min, max) pairs; absent vertex -> [].
        """
        if number not in self._vertices:
            return []
        removed_edges: List[Tuple[int, int]] = []
        for v in sorted(self.adj.pop(number)):
            self.adj[v].discard(number)
            removed_edges.append((min(number, v), max(number, v)))
        del self._vertices[number]
        self.reset_colors()
        logger.debug("removed vertex {%d} and %d incident edges", number, len(removed_edges))
        return removed_edges

    def vertex(self, number: int) -> Vertex:
        try:
            return self._vertices[number]
        except KeyError:
            raise NotFoundError(number) from None

    def has_vertex(self, number: int) -> bool:
        return number in self._vertices

    def vertices(self) -> List[Vertex]:
        return [self._vertices[n] for n in sorted(self._vertices)]

    # ---- edges ---- #
    def add_edge(self, u: int, v: int) -> None:
        if u == v:
            raise InvalidEdgeError(f"Self-loop on vertex {{{u}}} is not allowed.")
        for x in (u, v):
            if x not in self._vertices:
                raise MissingEndpointError(x)
        if v in self.adj[u]:
            return
        self.adj[u].add(v)
        self.adj[v].add(u)
        self.reset_colors()

    def remove_edge(self, u: int, v: int) -> None:
        if not self.has_edge(u, v):
            return
        self.adj[u].discard(v)
        self.adj[v].discard(u)
        self.reset_colors()

    def has_edge(self, u: int, v: int) -> bool:
        return u in self.adj and v in self.adj[u]

    def edges(self) -> List[Tuple[int, int]]:
        return sorted((u, v) for u, nbrs in self.adj.items() for v in nbrs if u < v)

    def get_adjacent(self, number: int) -> Set[int]:
        if number not in self._vertices:
            raise NotFoundError(number)
        return set(self.adj[number])

    def degree(self, number: int) -> int:
        if number not in self._vertices:
            raise NotFoundError(number)
        return len(self.adj[number])

    # ---- colors ---- #
    def colors(self) -> Dict[int, Optional[int]]:
        return {n: self._vertices[n].color for n in sorted(self._vertices)}

    def reset_colors(self) -> None:
        for vertex in self._vertices.values():
            vertex.color = None

    def clear(self) -> None:
        self._vertices.clear()
        self.adj.clear()
        self._next_number = 0

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, number: object) -> bool:
        if isinstance(number, Vertex):
            number = number.number
        return number in self._vertices

    def __repr__(self) -> str:
        return f"Graph(n={len(self._vertices)}, |E|={len(self.edges())})"
