"""File IO helpers for :mod:`Quantum_Walks.graph`."""

from __future__ import annotations

import json
from typing import Any

from .model import Graph


def load_graph(path: str) -> Graph:
    """Load a graph from ``path`` and return a :class:`Graph`."""
    with open(path) as f:
        data = json.load(f)
    _validate_graph(data)
    return Graph.from_dict(data)


def save_graph(path: str, graph: Graph) -> None:
    """Write ``graph`` to ``path`` in JSON format."""
    with open(path, "w") as f:
        json.dump(graph.to_dict(), f, indent=2)


def _validate_graph(data: dict[str, Any]) -> None:
    if not isinstance(data, dict):
        raise ValueError("Graph file must contain a JSON object")
    if "number_of_vertices" not in data:
        raise ValueError("Graph file must contain 'number_of_vertices'")
    if not isinstance(data["number_of_vertices"], int):
        raise ValueError("'number_of_vertices' must be an integer")
    if not isinstance(data.get("edges", []), list):
        raise ValueError("'edges' must be a list")
    for edge in data.get("edges", []):
        if not isinstance(edge, list) or len(edge) != 2:
            raise ValueError("edge entries must be [i, j] pairs")
