import pytest

from paint_graph import graph_text
from paint_graph.errors import GraphFormatError
from paint_graph.graph_model import Graph


SAMPLE = """\
Node: {0} (120.0, 80.0) [{1}, {2}]
Node: {1} (300.0, 95.0) [{0}]
Node: {2} (210.0, 240.0) [{0}]
Node: {5} (400.0, 400.0) []
Line: <{0}, {1}>
Line: <{0}, {2}>
"""


def test_loads_sample():
    g, positions = graph_text.loads(SAMPLE)
    assert [v.number for v in g.vertices()] == [0, 1, 2, 5]
    assert g.edges() == [(0, 1), (0, 2)]
    assert g.get_adjacent(5) == set()
    assert positions[2] == (210.0, 240.0)


def test_dumps_matches_record_format():
    g = Graph()
    for n in (0, 1, 2, 5):
        g.add_vertex(n)
    g.add_edge(0, 1)
    g.add_edge(2, 0)
    positions = {0: (120.0, 80.0), 1: (300.0, 95.0), 2: (210.0, 240.0), 5: (400.0, 400.0)}
    assert graph_text.dumps(g, positions) == SAMPLE


def test_round_trip_preserves_numbers_and_adjacency(tmp_path):
    g = Graph()
    for n in (3, 4, 9, 11):
        g.add_vertex(n)
    for u, v in [(3, 4), (4, 9), (9, 3), (11, 3)]:
        g.add_edge(u, v)
    positions = {3: (10.0, 20.0), 4: (12.5, 7.0), 9: (0.0, 0.0), 11: (33.0, 44.0)}

    path = tmp_path / "graph.txt"
    graph_text.dump(g, positions, path)
    loaded, loaded_positions = graph_text.load(path)

    assert [v.number for v in loaded.vertices()] == [3, 4, 9, 11]
    for v in g.vertices():
        assert loaded.get_adjacent(v.number) == g.get_adjacent(v.number)
    assert loaded_positions == positions


def test_empty_text():
    g, positions = graph_text.loads("")
    assert len(g) == 0
    assert positions == {}
    assert graph_text.dumps(g, positions) == ""


def test_node_adjacency_alone_creates_edges():
    g, _ = graph_text.loads("Node: {0} (0.0, 0.0) [{1}]\nNode: {1} (5.0, 5.0) []\n")
    assert g.edges() == [(0, 1)]


def test_unrelated_lines_are_ignored():
    g, _ = graph_text.loads("# drawn by hand\n\nNode: {0} (1.0, 2.0) []\n")
    assert len(g) == 1


@pytest.mark.parametrize(
    "text, line_no",
    [
        ("Node: {x} (1.0, 2.0) []", 1),
        ("Node: {0} (1.0) []", 1),
        ("Node: {0} (1.0, 2.0) [{1}", 1),
        ("Node: {0} (1.0, 2.0) []\nLine: <{0}, {1}>", 2),
        ("Node: {0} (1.0, 2.0) []\nLine: {0} - {1}", 2),
        ("Node: {0} (1.0, 2.0) []\nNode: {0} (3.0, 4.0) []", 2),
        ("Node: {0} (1.0, 2.0) [{0}]", 1),
    ],
)
def test_malformed_records(text, line_no):
    with pytest.raises(GraphFormatError) as info:
        graph_text.loads(text)
    assert info.value.line_no == line_no
