from __future__ import annotations

from typing import Sequence

from .tree import LinearExtrude, Node


def linear_extrude(
    profile: Node,
    height: float = 1.0,
    scale_top: Sequence[float] | float = (1.0, 1.0),
    convexity: int = 1,
    center: bool = False,
) -> LinearExtrude:
    """Extrude a 2D profile along +z, optionally scaling it towards the top."""

    height = float(height)
    if height <= 0:
        raise ValueError("height must be positive.")
    if isinstance(scale_top, (int, float)):
        scale_top = (float(scale_top), float(scale_top))
    return LinearExtrude(
        profile=profile,
        height=height,
        scale_top=tuple(scale_top),
        convexity=convexity,
        center=center,
    )


__all__ = ["linear_extrude"]
