from __future__ import annotations

from typing import Iterable, Sequence

from .tree import Circle, Polygon, Rect


def make_circle(radius: float = 1.0, segments: int | None = None) -> Circle:
    """Circle centred on the origin."""

    return Circle(radius=radius, segments=segments)


def make_rect(size: Sequence[float] = (1.0, 1.0), center: bool = False) -> Rect:
    return Rect(size=tuple(size), center=center)


def make_polygon(points: Iterable[Sequence[float]]) -> Polygon:
    """Simple polygon from its outline; winding order does not matter."""

    return Polygon(points=tuple(tuple(p) for p in points))


__all__ = ["make_circle", "make_rect", "make_polygon"]
