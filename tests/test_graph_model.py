import pytest

from paint_graph.errors import (
    DuplicateVertexError,
    InvalidEdgeError,
    MissingEndpointError,
    NotFoundError,
)
from paint_graph.graph_model import Graph, Vertex


def make_graph(n, edges):
    g = Graph()
    for i in range(n):
        g.add_vertex(i)
    for u, v in edges:
        g.add_edge(u, v)
    return g


def test_sequential_numbers_and_explicit_numbers():
    g = Graph()
    assert g.add_vertex().number == 0
    assert g.add_vertex().number == 1
    assert g.add_vertex(7).number == 7
    assert g.add_vertex().number == 8
    assert [v.number for v in g.vertices()] == [0, 1, 7, 8]


def test_duplicate_vertex_rejected_without_mutation():
    g = make_graph(2, [(0, 1)])
    with pytest.raises(DuplicateVertexError):
        g.add_vertex(1)
    assert len(g) == 2
    assert g.get_adjacent(1) == {0}


def test_new_vertex_has_empty_adjacency():
    g = Graph()
    g.add_vertex(3)
    assert g.get_adjacent(3) == set()


def test_vertex_equality_by_number():
    a = Vertex(1)
    b = Vertex(1, color=2)
    assert a == b
    assert hash(a) == hash(b)
    assert Vertex(1) != Vertex(2)


def test_add_edge_is_symmetric_and_idempotent():
    g = make_graph(3, [(0, 1)])
    once = {v.number: g.get_adjacent(v.number) for v in g.vertices()}
    g.add_edge(0, 1)
    g.add_edge(1, 0)
    twice = {v.number: g.get_adjacent(v.number) for v in g.vertices()}
    assert once == twice
    assert g.get_adjacent(0) == {1}
    assert g.get_adjacent(1) == {0}
    assert g.edges() == [(0, 1)]


def test_self_loop_rejected():
    g = make_graph(2, [(0, 1)])
    with pytest.raises(InvalidEdgeError):
        g.add_edge(1, 1)
    assert g.get_adjacent(1) == {0}


def test_edge_to_missing_vertex_rejected():
    g = make_graph(2, [])
    with pytest.raises(MissingEndpointError) as info:
        g.add_edge(0, 5)
    assert isinstance(info.value, InvalidEdgeError)
    assert isinstance(info.value, NotFoundError)
    assert info.value.number == 5
    assert g.get_adjacent(0) == set()


def test_remove_vertex_purges_adjacency():
    g = make_graph(4, [(0, 1), (0, 2), (1, 2), (2, 3)])
    removed = g.remove_vertex(2)
    assert removed == [(0, 2), (1, 2), (2, 3)]
    assert 2 not in g
    for v in g.vertices():
        assert 2 not in g.get_adjacent(v.number)
    assert g.edges() == [(0, 1)]


def test_remove_absent_vertex_is_noop():
    g = make_graph(2, [(0, 1)])
    assert g.remove_vertex(9) == []
    assert g.edges() == [(0, 1)]


def test_remove_edge():
    g = make_graph(3, [(0, 1), (1, 2)])
    g.remove_edge(1, 0)
    assert not g.has_edge(0, 1)
    assert g.get_adjacent(1) == {2}
    g.remove_edge(0, 2)
    assert g.edges() == [(1, 2)]


def test_get_adjacent_returns_copy_and_fails_on_absent():
    g = make_graph(2, [(0, 1)])
    nbrs = g.get_adjacent(0)
    nbrs.add(42)
    assert g.get_adjacent(0) == {1}
    with pytest.raises(NotFoundError):
        g.get_adjacent(5)
    with pytest.raises(KeyError):
        g.vertex(5)


def test_number_reuse_after_deletion():
    g = make_graph(2, [])
    g.remove_vertex(1)
    g.add_vertex(1)
    assert [v.number for v in g.vertices()] == [0, 1]


def test_structural_change_resets_colors():
    g = make_graph(2, [(0, 1)])
    for v in g.vertices():
        v.color = v.number
    g.add_vertex()
    assert all(c is None for c in g.colors().values())


def test_clear():
    g = make_graph(3, [(0, 1)])
    g.clear()
    assert len(g) == 0
    assert g.edges() == []
    assert g.add_vertex().number == 0
