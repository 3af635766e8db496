from __future__ import annotations

from typing import List, TypedDict

# Typed mapping for graph JSON files

GraphDict = TypedDict(
    "GraphDict",
    {
        "number_of_vertices": int,
        "edges": List[List[int]],
    },
    total=False,
)
