from __future__ import annotations

from typing import Iterable

from .tree import Difference, Intersection, Node, Union


def boolean_union(nodes: Iterable[Node]) -> Node:
    """Union of the given shapes; a single shape is returned unchanged."""

    items = tuple(nodes)
    if not items:
        raise ValueError("boolean_union requires at least one shape.")
    if len(items) == 1:
        return items[0]
    return Union(items=items)


def boolean_difference(base: Node, cutters: Iterable[Node]) -> Node:
    """Subtract every cutter from ``base`` in one pass."""

    items = tuple(cutters)
    if not items:
        return base
    return Difference(base=base, cutters=items)


def boolean_intersection(nodes: Iterable[Node]) -> Node:
    items = tuple(nodes)
    if not items:
        raise ValueError("boolean_intersection requires at least one shape.")
    if len(items) == 1:
        return items[0]
    return Intersection(items=items)


__all__ = ["boolean_union", "boolean_difference", "boolean_intersection"]
