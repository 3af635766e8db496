"""Random graph generators built on :mod:`networkx`."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import networkx as nx

from .model import Edge, Graph

logger = logging.getLogger(__name__)


def erdos_renyi(n: int, p: float, seed: Optional[int] = None) -> Graph:
    """Return a ``G(n, p)`` random graph.

    Parameters
    ----------
    n:
        Number of vertices.
    p:
        Probability of each of the ``n (n - 1) / 2`` edges.
    seed:
        Seed for reproducible graphs.
    """

    if not 0.0 <= p <= 1.0:
        raise ValueError(f"edge probability must lie in [0, 1], got {p}")
    graph = Graph.from_networkx(nx.gnp_random_graph(int(n), p, seed=seed))
    logger.debug("erdos-renyi n=%d p=%g edges=%d", n, p, graph.number_of_edges)
    return graph


def barabasi_albert(n: int, m: int, seed: Optional[int] = None) -> Graph:
    """Return a preferential attachment graph where each new vertex brings ``m`` edges."""

    if m < 1 or m >= n:
        raise ValueError(f"Barabasi-Albert graphs need 1 <= m < n, got m={m}, n={n}")
    graph = Graph.from_networkx(nx.barabasi_albert_graph(int(n), int(m), seed=seed))
    logger.debug("barabasi-albert n=%d m=%d edges=%d", n, m, graph.number_of_edges)
    return graph


def max_equal_degree_edge(graph: Graph) -> Optional[Tuple[Edge, int]]:
    """Return the edge whose endpoints share the highest common degree.

    Only edges with ``degree(v1) == degree(v2)`` are considered; the first such
    edge in slot order wins ties. Returns ``None`` when no edge qualifies.
    """

    degrees = graph.degrees()
    best: Optional[Tuple[Edge, int]] = None
    for edge in graph.edges:
        d = degrees[edge.v1]
        if d == degrees[edge.v2] and (best is None or d > best[1]):
            best = (edge, d)
    return best
