from __future__ import annotations

from typing import Sequence

from .tree import Box, Cylinder


def make_box(
    size: Sequence[float] = (1.0, 1.0, 1.0),
    center: bool = False,
) -> Box:
    """Axis-aligned box of size (dx, dy, dz); one corner sits on the origin unless ``center``."""

    return Box(size=tuple(size), center=center)


def make_cylinder(
    radius: float = 0.5,
    height: float = 1.0,
    radius_top: float | None = None,
    center: bool = False,
    segments: int | None = None,
) -> Cylinder:
    """Right circular cylinder along +z. Pass ``radius_top`` for a frustum.

    ``segments`` overrides the facet count from the render settings.
    """

    return Cylinder(
        height=height,
        radius_low=radius,
        radius_high=radius_top,
        center=center,
        segments=segments,
    )


__all__ = ["make_box", "make_cylinder"]
