"""Immutable CSG expression tree.

Nodes only describe geometry; ``trackriser.kernel`` turns a tree into a mesh.
Every node is a frozen dataclass holding tuples, so two trees built from the
same parameters compare equal and hash alike.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]


def _vec(value: Sequence[float], size: int, label: str) -> tuple[float, ...]:
    try:
        arr = np.asarray(value, dtype=float).reshape(size)
    except Exception as exc:
        raise ValueError(f"{label} must have {size} components.") from exc
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{label} must be finite.")
    return tuple(float(v) for v in arr)


def _positive(value: float, label: str) -> float:
    number = float(value)
    if not np.isfinite(number) or number <= 0:
        raise ValueError(f"{label} must be positive.")
    return number


def _segments(value: int | None) -> int | None:
    if value is None:
        return None
    if int(value) < 3:
        raise ValueError("segments must be >= 3.")
    return int(value)


class Node:
    """Base class of every tree node; ``dim`` is 2 for shapes, 3 for solids."""

    dim: int = 3

    def children(self) -> tuple["Node", ...]:
        return ()


# Primitives -----------------------------------------------------------------


@dataclass(frozen=True)
class Box(Node):
    size: Vec3
    center: bool = False

    def __post_init__(self) -> None:
        size = _vec(self.size, 3, "size")
        for value in size:
            _positive(value, "size")
        object.__setattr__(self, "size", size)


@dataclass(frozen=True)
class Cylinder(Node):
    """Cylinder or frustum along +z; ``radius_high`` defaults to ``radius_low``."""

    height: float
    radius_low: float
    radius_high: float | None = None
    center: bool = False
    segments: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "height", _positive(self.height, "height"))
        object.__setattr__(self, "radius_low", _positive(self.radius_low, "radius_low"))
        if self.radius_high is not None:
            high = float(self.radius_high)
            if not np.isfinite(high) or high < 0:
                raise ValueError("radius_high must be non-negative.")
            object.__setattr__(self, "radius_high", high)
        object.__setattr__(self, "segments", _segments(self.segments))


@dataclass(frozen=True)
class Circle(Node):
    radius: float
    segments: int | None = None
    dim = 2

    def __post_init__(self) -> None:
        object.__setattr__(self, "radius", _positive(self.radius, "radius"))
        object.__setattr__(self, "segments", _segments(self.segments))


@dataclass(frozen=True)
class Rect(Node):
    size: Vec2
    center: bool = False
    dim = 2

    def __post_init__(self) -> None:
        size = _vec(self.size, 2, "size")
        for value in size:
            _positive(value, "size")
        object.__setattr__(self, "size", size)


@dataclass(frozen=True)
class Polygon(Node):
    points: Tuple[Vec2, ...]
    dim = 2

    def __post_init__(self) -> None:
        pts = tuple(_vec(p, 2, "point") for p in self.points)
        if len(pts) < 3:
            raise ValueError("Polygon requires at least three points.")
        object.__setattr__(self, "points", pts)


# Transforms -----------------------------------------------------------------


class _Unary(Node):
    child: Node

    @property
    def dim(self) -> int:  # type: ignore[override]
        return self.child.dim

    def children(self) -> tuple[Node, ...]:
        return (self.child,)


def _check_child(child: Node) -> None:
    if not isinstance(child, Node):
        raise TypeError(f"Expected a tree node, got {type(child).__name__}.")


@dataclass(frozen=True)
class Translate(_Unary):
    child: Node
    offset: Vec3

    def __post_init__(self) -> None:
        _check_child(self.child)
        offset = _vec(_pad3(self.offset, 0.0), 3, "offset")
        if self.child.dim == 2 and offset[2] != 0.0:
            raise ValueError("2D shapes cannot be translated along z.")
        object.__setattr__(self, "offset", offset)


@dataclass(frozen=True)
class Rotate(_Unary):
    """Rotation in degrees about x, then y, then z. 2D shapes only use z."""

    child: Node
    angles: Vec3

    def __post_init__(self) -> None:
        _check_child(self.child)
        angles = _vec(self.angles, 3, "angles")
        if self.child.dim == 2 and (angles[0] != 0.0 or angles[1] != 0.0):
            raise ValueError("2D shapes can only rotate about z.")
        object.__setattr__(self, "angles", angles)


@dataclass(frozen=True)
class Scale(_Unary):
    child: Node
    factors: Vec3

    def __post_init__(self) -> None:
        _check_child(self.child)
        factors = _vec(_pad3(self.factors, 1.0), 3, "factors")
        for value in factors:
            _positive(value, "scale factor")
        object.__setattr__(self, "factors", factors)


def _pad3(value: Sequence[float], fill: float) -> tuple[float, ...]:
    values = tuple(value)
    if len(values) == 2:
        return (values[0], values[1], fill)
    return values


# Booleans -------------------------------------------------------------------


def _check_group(children: Sequence[Node], label: str, minimum: int = 1) -> tuple[Node, ...]:
    items = tuple(children)
    if len(items) < minimum:
        raise ValueError(f"{label} requires at least {minimum} shape(s).")
    for child in items:
        _check_child(child)
    dims = {child.dim for child in items}
    if len(dims) > 1:
        raise ValueError(f"{label} cannot mix 2D and 3D shapes.")
    return items


class _Group(Node):
    items: Tuple[Node, ...]

    @property
    def dim(self) -> int:  # type: ignore[override]
        return self.items[0].dim

    def children(self) -> tuple[Node, ...]:
        return self.items


@dataclass(frozen=True)
class Union(_Group):
    items: Tuple[Node, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", _check_group(self.items, "Union"))


@dataclass(frozen=True)
class Intersection(_Group):
    items: Tuple[Node, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", _check_group(self.items, "Intersection"))


@dataclass(frozen=True)
class Hull(_Group):
    items: Tuple[Node, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", _check_group(self.items, "Hull"))


@dataclass(frozen=True)
class Difference(Node):
    """``base`` minus every cutter; an empty cutter tuple leaves ``base`` as is."""

    base: Node
    cutters: Tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        _check_child(self.base)
        cutters = _check_group(self.cutters, "Difference", minimum=0)
        if cutters and cutters[0].dim != self.base.dim:
            raise ValueError("Difference cannot mix 2D and 3D shapes.")
        object.__setattr__(self, "cutters", cutters)

    @property
    def dim(self) -> int:  # type: ignore[override]
        return self.base.dim

    def children(self) -> tuple[Node, ...]:
        return (self.base, *self.cutters)


# Extrusion ------------------------------------------------------------------


@dataclass(frozen=True)
class LinearExtrude(Node):
    """Extrude a 2D profile along +z.

    ``scale_top`` scales the profile at ``z = height`` relative to the base,
    so ``(2, 1)`` doubles the x extent at the top while the base keeps the
    profile's own size. ``convexity`` is a hint for viewers that ray-cast
    the solid; the mesh kernel does not need it.
    """

    profile: Node
    height: float
    scale_top: Vec2 = (1.0, 1.0)
    convexity: int = 1
    center: bool = False

    def __post_init__(self) -> None:
        _check_child(self.profile)
        if self.profile.dim != 2:
            raise ValueError("linear_extrude expects a 2D profile.")
        object.__setattr__(self, "height", _positive(self.height, "height"))
        scale_top = _vec(self.scale_top, 2, "scale_top")
        for value in scale_top:
            if value < 0:
                raise ValueError("scale_top must be non-negative.")
        object.__setattr__(self, "scale_top", scale_top)
        if int(self.convexity) < 1:
            raise ValueError("convexity must be >= 1.")
        object.__setattr__(self, "convexity", int(self.convexity))

    def children(self) -> tuple[Node, ...]:
        return (self.profile,)


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants depth-first."""

    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


__all__ = [
    "Box",
    "Circle",
    "Cylinder",
    "Difference",
    "Hull",
    "Intersection",
    "LinearExtrude",
    "Node",
    "Polygon",
    "Rect",
    "Rotate",
    "Scale",
    "Translate",
    "Union",
    "walk",
]
