"""Graph model and random graph generators."""

from .model import Edge, Graph

__all__ = ["Edge", "Graph"]
