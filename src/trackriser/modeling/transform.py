from __future__ import annotations

from typing import Sequence

from .tree import Node, Rotate, Scale, Translate


def translate(node: Node, offset: Sequence[float]) -> Translate:
    """Return the node moved by ``offset`` (2 or 3 components)."""
    return Translate(child=node, offset=tuple(offset))


def rotate(node: Node, angles_deg: Sequence[float] | float) -> Rotate:
    """Rotate about x, then y, then z. A single number rotates about z."""
    if isinstance(angles_deg, (int, float)):
        angles = (0.0, 0.0, float(angles_deg))
    else:
        angles = tuple(angles_deg)
    return Rotate(child=node, angles=angles)


def scale(node: Node, factors: Sequence[float] | float) -> Scale:
    if isinstance(factors, (int, float)):
        factors = (float(factors),) * 3
    return Scale(child=node, factors=tuple(factors))


__all__ = ["translate", "rotate", "scale"]
