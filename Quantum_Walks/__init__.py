"""Quantum_Walks package initialization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from .engine import build_simulator

__all__ = ["build_simulator"]


def __getattr__(name: str) -> Any:  # pragma: no cover - attribute access
    """Lazily expose the engine factory."""

    if name == "build_simulator":
        from .engine import build_simulator as _build_simulator

        return _build_simulator
    raise AttributeError(name)
