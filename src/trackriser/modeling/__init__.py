"""Modeling utilities: primitives, transforms and CSG helpers building an expression tree."""

from __future__ import annotations

from .transform import rotate, scale, translate
from .primitives import make_box, make_cylinder
from .drawing2d import make_circle, make_polygon, make_rect
from .csg import boolean_difference, boolean_intersection, boolean_union
from .extrude import linear_extrude
from .ops import hull
from .tree import Node, walk

__all__ = [
    "make_box",
    "make_cylinder",
    "make_circle",
    "make_rect",
    "make_polygon",
    "boolean_union",
    "boolean_difference",
    "boolean_intersection",
    "hull",
    "linear_extrude",
    "rotate",
    "scale",
    "translate",
    "Node",
    "walk",
]
