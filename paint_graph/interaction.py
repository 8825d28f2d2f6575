from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import Optional

from .geometry import corner_for_click, hit_edge, hit_vertex
from .session import GraphSession

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    CREATE = "create"
    DELETE = "delete"
    CONNECT = "connect"


class Phase(enum.Enum):
    IDLE = "idle"
    VERTEX_SELECTED = "vertex-selected"
    EDGE_PENDING = "edge-pending"


@dataclass(frozen=True)
class InteractionState:
    """What the mouse is doing right now; a plain value, replaced on every click.

    - IDLE：没有选中任何顶点；
    - VERTEX_SELECTED：连边模式下已选中起点 selected；
    - EDGE_PENDING：起点 selected 和终点 target 都已确定，等待提交这条边。
    """

    mode: Mode = Mode.CREATE
    selected: Optional[int] = None
    target: Optional[int] = None

    @property
    def phase(self) -> Phase:
        if self.selected is None:
            return Phase.IDLE
        if self.target is None:
            return Phase.VERTEX_SELECTED
        return Phase.EDGE_PENDING

    def select(self, number: int) -> "InteractionState":
        return replace(self, selected=number, target=None)

    def connect_to(self, number: int) -> "InteractionState":
        if self.selected is None:
            raise ValueError("no start vertex selected")
        return replace(self, target=number)

    def reset(self) -> "InteractionState":
        return InteractionState(mode=self.mode)


def set_mode(state: InteractionState, mode: Mode) -> InteractionState:
    return InteractionState(mode=mode)


def commit_edge(session: GraphSession, state: InteractionState) -> InteractionState:
    """Add the pending edge to the session and go back to idle."""
    if state.phase is not Phase.EDGE_PENDING:
        return state
    session.add_edge(state.selected, state.target)
    logger.debug("connected {%d} and {%d}", state.selected, state.target)
    return state.reset()


def _on_create(session: GraphSession, state: InteractionState, x: float, y: float) -> InteractionState:
    cx, cy = corner_for_click(x, y)
    session.add_vertex(cx, cy)
    return state


def _on_delete(session: GraphSession, state: InteractionState, x: float, y: float) -> InteractionState:
    positions, edges = session.layout_snapshot()
    number = hit_vertex(positions, x, y)
    if number is not None:
        session.remove_vertex(number)
        return state
    edge = hit_edge(positions, edges, x, y)
    if edge is not None:
        session.remove_edge(*edge)
    return state


def _on_connect(session: GraphSession, state: InteractionState, x: float, y: float) -> InteractionState:
    # 起点可能已经在别处被删掉
    if state.selected is not None and not session.has_vertex(state.selected):
        state = state.reset()

    number = hit_vertex(session.positions_snapshot(), x, y)
    if number is None:
        return state
    if state.phase is Phase.IDLE:
        return state.select(number)
    if number == state.selected:
        return state.reset()
    return commit_edge(session, state.connect_to(number))


_HANDLERS = {
    Mode.CREATE: _on_create,
    Mode.DELETE: _on_delete,
    Mode.CONNECT: _on_connect,
}


def handle_click(session: GraphSession, state: InteractionState, x: float, y: float) -> InteractionState:
    """Apply one mouse click at (x, y) and return the next interaction state."""
    return _HANDLERS[state.mode](session, state, x, y)
