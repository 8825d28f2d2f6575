"""Line-based text format used to save and reopen drawn graphs.

A file holds one record per line::

    Node: {0} (120.0, 80.0) [{1}, {2}]
    Node: {1} (300.0, 95.0) [{0}]
    Node: {2} (210.0, 240.0) [{0}]
    Line: <{0}, {1}>
    Line: <{0}, {2}>

Node records carry the vertex number, the placement of the vertex (top-left
corner of its circle) and its neighbours; Line records carry one edge each.
Other lines are ignored.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .errors import GraphFormatError
from .graph_model import Graph

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

_NUMBER = r"-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?"
_NODE_ID = re.compile(r"^Node:\s*\{(\d+)\}")
_NODE_POS = re.compile(r"\(\s*(" + _NUMBER + r")\s*,\s*(" + _NUMBER + r")\s*\)")
_NODE_ADJ = re.compile(r"\[((?:\s*\{\d+\}\s*,?)*)\s*\]\s*$")
_ADJ_ID = re.compile(r"\{(\d+)\}")
_LINE = re.compile(r"^Line:\s*<\s*\{(\d+)\}\s*,\s*\{(\d+)\}\s*>")


@dataclass
class _NodeRecord:
    number: int
    position: Point
    neighbors: List[int] = field(default_factory=list)
    line_no: int = 0


def _format_float(value: float) -> str:
    return repr(float(value))


def dumps(graph: Graph, positions: Optional[Mapping[int, Point]] = None) -> str:
    positions = positions or {}
    lines = []
    for vertex in graph.vertices():
        x, y = positions.get(vertex.number, (0.0, 0.0))
        nbrs = ", ".join(f"{{{v}}}" for v in sorted(graph.adj[vertex.number]))
        lines.append(f"Node: {vertex} ({_format_float(x)}, {_format_float(y)}) [{nbrs}]")
    for u, v in graph.edges():
        lines.append(f"Line: <{{{u}}}, {{{v}}}>")
    return "\n".join(lines) + ("\n" if lines else "")


def _parse_node(text: str, line_no: int) -> _NodeRecord:
    m = _NODE_ID.search(text)
    if m is None:
        raise GraphFormatError("node record without a {number}", line_no)
    number = int(m.group(1))

    rest = text[m.end():]
    m = _NODE_POS.search(rest)
    if m is None:
        raise GraphFormatError(f"node {{{number}}} has no (x, y) placement", line_no)
    position = (float(m.group(1)), float(m.group(2)))

    m = _NODE_ADJ.search(rest[m.end():])
    if m is None:
        raise GraphFormatError(f"node {{{number}}} has a malformed neighbour list", line_no)
    neighbors = [int(g) for g in _ADJ_ID.findall(m.group(1))]
    return _NodeRecord(number=number, position=position, neighbors=neighbors, line_no=line_no)


def _parse_line(text: str, line_no: int) -> Tuple[int, int]:
    m = _LINE.search(text)
    if m is None:
        raise GraphFormatError("line record is not of the form <{a}, {b}>", line_no)
    return int(m.group(1)), int(m.group(2))


def loads(text: str) -> Tuple[Graph, Dict[int, Point]]:
    """Parse the text format into a fresh graph and the vertex placements.

    先解析全部记录，全部合法后才建图；任何错误都在建图前以 GraphFormatError 报告。
    """
    nodes: Dict[int, _NodeRecord] = {}
    edges: List[Tuple[int, int, int]] = []  # (u, v, line_no)

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if line.startswith("Node:"):
            record = _parse_node(line, line_no)
            if record.number in nodes:
                raise GraphFormatError(f"duplicate node {{{record.number}}}", line_no)
            nodes[record.number] = record
        elif line.startswith("Line:"):
            u, v = _parse_line(line, line_no)
            edges.append((u, v, line_no))

    for record in nodes.values():
        for v in record.neighbors:
            edges.append((record.number, v, record.line_no))

    for u, v, line_no in edges:
        if u == v:
            raise GraphFormatError(f"self-loop on {{{u}}}", line_no)
        for x in (u, v):
            if x not in nodes:
                raise GraphFormatError(f"reference to unknown node {{{x}}}", line_no)

    graph = Graph()
    for number in sorted(nodes):
        graph.add_vertex(number)
    for u, v, _ in edges:
        graph.add_edge(u, v)

    positions = {number: record.position for number, record in nodes.items()}
    logger.debug("loaded %r", graph)
    return graph, positions


def dump(graph: Graph, positions: Optional[Mapping[int, Point]], path: Union[str, Path]) -> None:
    Path(path).write_text(dumps(graph, positions), encoding="utf-8")


def load(path: Union[str, Path]) -> Tuple[Graph, Dict[int, Point]]:
    return loads(Path(path).read_text(encoding="utf-8"))
