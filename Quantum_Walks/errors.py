"""Exception types raised by the walk engines and the graph model."""

from __future__ import annotations


class PositionOutOfRangeError(IndexError):
    """Raised when a vertex position lies outside the engine's domain."""


class UnitarityError(ArithmeticError):
    """Raised in diagnostics mode when the total probability drifts from 1."""
