"""Undirected simple graph used by :class:`~Quantum_Walks.engine.graph_walk.GraphWalk`."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, NamedTuple

from ..errors import PositionOutOfRangeError
from .types import GraphDict


class Edge(NamedTuple):
    """An undirected edge; its amplitude slots are ``2 * index`` (``v1``) and
    ``2 * index + 1`` (``v2``)."""

    v1: int
    v2: int

    def other(self, vertex: int) -> int:
        """Return the endpoint that is not ``vertex``."""
        return self.v2 if vertex == self.v1 else self.v1

    def key(self) -> tuple[int, int]:
        return (self.v1, self.v2) if self.v1 < self.v2 else (self.v2, self.v1)


class Graph:
    """Adjacency model with a fixed vertex set ``0 .. N-1``.

    Edges are kept in insertion order; removing an edge shifts the indices of
    the edges after it. Every successful edit bumps :attr:`version` so that
    walks built on the graph notice the change.
    """

    def __init__(self, number_of_vertices: int) -> None:
        number_of_vertices = int(number_of_vertices)
        if number_of_vertices < 1:
            raise ValueError(
                f"number_of_vertices must be positive, got {number_of_vertices}"
            )
        self._n = number_of_vertices
        self._edges: List[Edge] = []
        self._index: Dict[tuple[int, int], int] = {}
        self._adjacency: List[set[int]] = [set() for _ in range(number_of_vertices)]
        self._version = 0

    def __repr__(self) -> str:
        return f"Graph(N={self._n}, edges={len(self._edges)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self._n == other._n and set(self._index) == set(other._index)

    # ---- queries ------------------------------------------------------------
    @property
    def number_of_vertices(self) -> int:
        return self._n

    @property
    def number_of_edges(self) -> int:
        return len(self._edges)

    @property
    def version(self) -> int:
        """Counter incremented by every adjacency edit."""
        return self._version

    @property
    def vertices(self) -> range:
        return range(self._n)

    @property
    def edges(self) -> tuple[Edge, ...]:
        """Edges in slot order."""
        return tuple(self._edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges)

    def _check_vertex(self, i: Any) -> int:
        i = int(i)
        if i < 0 or i >= self._n:
            raise PositionOutOfRangeError(f"vertex {i} outside [0, {self._n})")
        return i

    def has_edge(self, i: int, j: int) -> bool:
        """Return ``True`` if ``i`` and ``j`` are adjacent."""
        i, j = self._check_vertex(i), self._check_vertex(j)
        return j in self._adjacency[i]

    def edge_index(self, i: int, j: int) -> int:
        """Return the index of edge ``(i, j)`` or raise :class:`KeyError`."""
        i, j = self._check_vertex(i), self._check_vertex(j)
        return self._index[(i, j) if i < j else (j, i)]

    def degree(self, i: int) -> int:
        return len(self._adjacency[self._check_vertex(i)])

    def neighbours(self, i: int) -> List[int]:
        """Sorted neighbours of ``i``."""
        return sorted(self._adjacency[self._check_vertex(i)])

    def degrees(self) -> List[int]:
        return [len(adj) for adj in self._adjacency]

    # ---- edits --------------------------------------------------------------
    def add_edge(self, i: int, j: int) -> bool:
        """Connect ``i`` and ``j``.

        Returns ``False`` when the edge already exists. Self loops raise
        :class:`ValueError`.
        """

        i, j = self._check_vertex(i), self._check_vertex(j)
        if i == j:
            raise ValueError(f"self loop at vertex {i} is not allowed")
        if j in self._adjacency[i]:
            return False
        edge = Edge(i, j)
        self._index[edge.key()] = len(self._edges)
        self._edges.append(edge)
        self._adjacency[i].add(j)
        self._adjacency[j].add(i)
        self._version += 1
        return True

    def remove_edge(self, i: int, j: int) -> bool:
        """Disconnect ``i`` and ``j``; returns ``False`` if they were not adjacent."""

        i, j = self._check_vertex(i), self._check_vertex(j)
        if j not in self._adjacency[i]:
            return False
        k = self._index.pop((i, j) if i < j else (j, i))
        del self._edges[k]
        for later in range(k, len(self._edges)):
            self._index[self._edges[later].key()] = later
        self._adjacency[i].discard(j)
        self._adjacency[j].discard(i)
        self._version += 1
        return True

    # ---- conversion ---------------------------------------------------------
    def to_dict(self) -> GraphDict:
        """Serialize the graph to a plain ``dict`` suitable for JSON."""
        return {
            "number_of_vertices": self._n,
            "edges": [[e.v1, e.v2] for e in self._edges],
        }

    @classmethod
    def from_dict(cls, data: GraphDict) -> "Graph":
        """Construct a :class:`Graph` from ``data``."""
        graph = cls(data["number_of_vertices"])
        for i, j in data.get("edges", []):
            graph.add_edge(i, j)
        return graph

    @classmethod
    def from_networkx(cls, g: Any) -> "Graph":
        """Build a graph from a :class:`networkx.Graph`.

        Node labels are mapped to ``0 .. N-1`` in the order networkx reports
        them.
        """

        import networkx as nx

        relabelled = nx.convert_node_labels_to_integers(g)
        graph = cls(relabelled.number_of_nodes())
        for i, j in relabelled.edges():
            graph.add_edge(i, j)
        return graph

    def to_networkx(self) -> Any:
        """Return an equivalent :class:`networkx.Graph`."""

        import networkx as nx

        g = nx.Graph()
        g.add_nodes_from(self.vertices)
        g.add_edges_from((e.v1, e.v2) for e in self._edges)
        return g
