"""Quantum walk engines and a name based factory."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from ..graph.model import Graph
from .base import (
    PositionOutOfRangeError,
    QuantumWalkSimulator,
    UnitarityError,
    Vertex,
)
from .coin import Coin
from .graph_walk import GraphWalk
from .honeycomb import HoneycombDirection, HoneycombWalk
from .hypercube import HypercubeWalk
from .nand_tree import NandTreeWalk
from .rectangle import Direction, RectangleWalk
from .staggered import StaggeredRectangleWalk
from .triangle import TriangleDirection, TriangleWalk

logger = logging.getLogger(__name__)


def _build_graph_walk(graph: Any, **params: Any) -> GraphWalk:
    """Accept a :class:`Graph`, its ``dict`` form or a JSON file path."""

    if isinstance(graph, str):
        from ..graph.io import load_graph

        graph = load_graph(graph)
    elif isinstance(graph, dict):
        graph = Graph.from_dict(graph)
    return GraphWalk(graph, **params)


_REGISTRY: Dict[str, Callable[..., QuantumWalkSimulator]] = {
    "rectangle": RectangleWalk,
    "triangle": TriangleWalk,
    "honeycomb": HoneycombWalk,
    "staggered": StaggeredRectangleWalk,
    "hypercube": HypercubeWalk,
    "graph": _build_graph_walk,
    "nand_tree": NandTreeWalk,
}

TOPOLOGIES = tuple(_REGISTRY)


def build_simulator(topology: str, **params: Any) -> QuantumWalkSimulator:
    """Create the engine registered under ``topology``.

    Parameters
    ----------
    topology:
        One of :data:`TOPOLOGIES` (case-insensitive).
    **params:
        Forwarded to the engine constructor, e.g. ``height``/``width`` for the
        lattices, ``n`` for the hypercube, ``graph`` for graphs and
        ``tree_depth`` for the NAND tree.

    Raises
    ------
    KeyError
        If ``topology`` is not registered.
    """

    key = str(topology).strip().lower()
    try:
        factory = _REGISTRY[key]
    except KeyError:
        raise KeyError(
            f"unknown topology {topology!r}; expected one of {list(TOPOLOGIES)}"
        ) from None
    logger.debug("building %s simulator with %s", key, sorted(params))
    return factory(**params)


__all__ = [
    "Coin",
    "Direction",
    "GraphWalk",
    "HoneycombDirection",
    "HoneycombWalk",
    "HypercubeWalk",
    "NandTreeWalk",
    "PositionOutOfRangeError",
    "QuantumWalkSimulator",
    "RectangleWalk",
    "StaggeredRectangleWalk",
    "TOPOLOGIES",
    "TriangleDirection",
    "TriangleWalk",
    "UnitarityError",
    "Vertex",
    "build_simulator",
]
