import networkx as nx
import pytest

from Quantum_Walks.engine.base import PositionOutOfRangeError
from Quantum_Walks.graph import Edge, Graph


def _path(n: int) -> Graph:
    g = Graph(n)
    for i in range(n - 1):
        g.add_edge(i, i + 1)
    return g


def test_add_edge_is_idempotent():
    g = Graph(3)
    assert g.add_edge(0, 1)
    assert not g.add_edge(1, 0)
    assert g.number_of_edges == 1
    assert g.has_edge(1, 0)
    assert g.degree(0) == 1
    assert g.edges == (Edge(0, 1),)
    assert list(g) == [Edge(0, 1)]


def test_self_loops_and_bad_indices_rejected():
    g = Graph(3)
    with pytest.raises(ValueError):
        g.add_edge(1, 1)
    with pytest.raises(PositionOutOfRangeError):
        g.add_edge(0, 3)
    with pytest.raises(IndexError):
        g.has_edge(-1, 0)
    assert g.number_of_edges == 0
    assert g.version == 0
    with pytest.raises(ValueError):
        Graph(0)


def test_remove_edge_reindexes_later_edges():
    g = _path(4)
    assert g.edge_index(2, 3) == 2
    assert g.remove_edge(1, 0)
    assert not g.remove_edge(0, 1)
    assert g.edge_index(3, 2) == 1
    assert g.neighbours(1) == [2]
    with pytest.raises(KeyError):
        g.edge_index(0, 1)


def test_version_counts_edits():
    g = Graph(4)
    g.add_edge(0, 1)
    g.add_edge(0, 1)
    g.add_edge(2, 3)
    g.remove_edge(2, 3)
    assert g.version == 3


def test_edge_other_endpoint():
    e = Edge(4, 7)
    assert e.other(4) == 7
    assert e.other(7) == 4
    assert e.key() == (4, 7)
    assert Edge(7, 4).key() == (4, 7)


def test_networkx_round_trip():
    nxg = nx.cycle_graph(["a", "b", "c", "d"])
    g = Graph.from_networkx(nxg)
    assert g.number_of_vertices == 4
    assert g.degrees() == [2, 2, 2, 2]
    back = g.to_networkx()
    assert nx.is_isomorphic(back, nxg)
    assert Graph.from_networkx(back) == g
