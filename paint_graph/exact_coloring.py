from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Set

from .graph_model import Graph

logger = logging.getLogger(__name__)

# ======== 搜索预算 ========
DEFAULT_MAX_STATES: Optional[int] = 200_000  # 回溯访问的状态数上限；None 表示不限制
# =========================

Adjacency = Mapping[int, Set[int]]


class SearchBudgetExceeded(Exception):
    """Raised inside the backtracking search when the step/time budget runs out."""


@dataclass
class ColoringResult:
    colors: Dict[int, int]  # vertex number -> color index
    chromatic_number: int
    exact: bool  # False: greedy fallback, chromatic_number is only an upper bound
    states: int = 0


class _Budget:
    def __init__(self, max_states: Optional[int], time_limit: Optional[float]):
        self.max_states = max_states
        self.deadline = None if time_limit is None else time.monotonic() + time_limit
        self.states = 0

    def step(self) -> None:
        self.states += 1
        if self.max_states is not None and self.states > self.max_states:
            raise SearchBudgetExceeded
        # 每 1024 步才看一次时钟
        if self.deadline is not None and self.states % 1024 == 0 and time.monotonic() > self.deadline:
            raise SearchBudgetExceeded


def connected_components(adj: Adjacency) -> List[List[int]]:
    """Connectivity components, each sorted, ordered by their smallest vertex."""
    seen: Set[int] = set()
    components: List[List[int]] = []
    for start in sorted(adj):
        if start in seen:
            continue
        seen.add(start)
        stack = [start]
        comp = []
        while stack:
            u = stack.pop()
            comp.append(u)
            for v in adj[u]:
                if v not in seen:
                    seen.add(v)
                    stack.append(v)
        components.append(sorted(comp))
    return components


def degree_order(adj: Adjacency, vertices: Optional[List[int]] = None) -> List[int]:
    """Descending degree, ties broken by vertex number."""
    if vertices is None:
        vertices = list(adj)
    return sorted(vertices, key=lambda v: (-len(adj[v]), v))


def greedy_coloring(adj: Adjacency, order: List[int]) -> Dict[int, int]:
    """Give each vertex the smallest color not used by an already colored neighbor.

    结果总是合法染色，但颜色数只是色数的上界。
    """
    colors: Dict[int, int] = {}
    for u in order:
        used = {colors[v] for v in adj[u] if v in colors}
        c = 0
        while c in used:
            c += 1
        colors[u] = c
    return colors


def greedy_clique(adj: Adjacency, order: List[int]) -> List[int]:
    """Grow a clique greedily along `order`; its size is a lower bound for chi."""
    best: List[int] = []
    for seed in order:
        clique = [seed]
        for v in order:
            if v != seed and all(v in adj[u] for u in clique):
                clique.append(v)
        if len(clique) > len(best):
            best = clique
    return best


def k_colorable(
    adj: Adjacency,
    order: List[int],
    k: int,
    budget: Optional[_Budget] = None,
) -> Optional[Dict[int, int]]:
    """Try to color the vertices in `order` with k colors, return the coloring or None.

    按固定顺序回溯：每个顶点依次尝试 0..k-1，与已染色邻居冲突则跳过，走不通就回退。
    第一个顶点只试颜色 0（颜色对称性剪枝）。
    用显式栈代替递归，顶点数不受解释器递归深度限制。
    """
    n = len(order)
    color: Dict[int, int] = {}
    # next_color[i]: 第 i 个顶点下一次要尝试的颜色；top[i]: 前 i 个顶点用到的最大颜色
    next_color = [0] * n
    top = [-1] * (n + 1)

    idx = 0
    entering = True
    while idx < n:
        if idx < 0:
            return None
        v = order[idx]
        if entering:
            if budget is not None:
                budget.step()
            next_color[idx] = 0
        else:
            del color[v]
        forbidden = {color[u] for u in adj[v] if u in color}
        # 只允许比已用最大颜色大 1 的新颜色，避免重复搜索同构的换色方案
        limit = min(k, top[idx] + 2)
        c = next_color[idx]
        while c < limit and c in forbidden:
            c += 1
        if c < limit:
            color[v] = c
            next_color[idx] = c + 1
            top[idx + 1] = max(top[idx], c)
            idx += 1
            entering = True
        else:
            idx -= 1
            entering = False

    return dict(color)


def _color_component(
    adj: Adjacency,
    component: List[int],
    budget: _Budget,
) -> tuple[Dict[int, int], bool]:
    order = degree_order(adj, component)
    greedy = greedy_coloring(adj, order)
    upper = max(greedy.values()) + 1
    lower = max(1, len(greedy_clique(adj, order)))

    # 从下界开始逐个尝试 k；到达贪心上界时贪心解本身就是最优的
    for k in range(lower, upper):
        try:
            found = k_colorable(adj, order, k, budget)
        except SearchBudgetExceeded:
            logger.warning(
                "search budget exhausted on component of %d vertices; using greedy coloring (%d colors, upper bound)",
                len(component), upper,
            )
            return greedy, False
        if found is not None:
            return found, True
    return greedy, True


def chromatic_number(
    graph: Graph,
    max_states: Optional[int] = DEFAULT_MAX_STATES,
    time_limit: Optional[float] = None,
) -> ColoringResult:
    """Compute a minimum coloring without touching the graph's vertices.

    每个连通分量单独求最优染色，颜色编号在分量之间复用，
    总色数取各分量色数的最大值。步数或时间预算耗尽时退回贪心解，exact=False。
    """
    adj = graph.adj
    budget = _Budget(max_states, time_limit)
    colors: Dict[int, int] = {}
    exact = True

    for component in connected_components(adj):
        comp_colors, comp_exact = _color_component(adj, component, budget)
        colors.update(comp_colors)
        exact = exact and comp_exact

    k = len(set(colors.values()))
    return ColoringResult(colors=colors, chromatic_number=k, exact=exact, states=budget.states)


def colorize(
    graph: Graph,
    max_states: Optional[int] = DEFAULT_MAX_STATES,
    time_limit: Optional[float] = None,
) -> ColoringResult:
    """Color `graph` in place: write a color index onto every vertex and return the result."""
    result = chromatic_number(graph, max_states=max_states, time_limit=time_limit)
    for vertex in graph.vertices():
        vertex.color = result.colors[vertex.number]
    logger.info(
        "colorized %d vertices with %d colors (exact=%s, states=%d)",
        len(graph), result.chromatic_number, result.exact, result.states,
    )
    return result


def is_proper_coloring(adj: Adjacency, colors: Mapping[int, Optional[int]]) -> bool:
    """Every vertex colored and no edge joins two vertices of the same color."""
    for u, nbrs in adj.items():
        if colors.get(u) is None:
            return False
        for v in nbrs:
            if colors.get(u) == colors.get(v):
                return False
    return True
