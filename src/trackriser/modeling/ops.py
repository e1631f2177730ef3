from __future__ import annotations

from typing import Iterable

from .tree import Hull, Node


def hull(shapes: Iterable[Node]) -> Hull:
    """Convex hull of 2D profiles or 3D solids (all of the same dimension)."""

    items = tuple(shapes)
    if not items:
        raise ValueError("hull requires at least one shape.")
    return Hull(items=items)


__all__ = ["hull"]
