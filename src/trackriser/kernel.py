"""Evaluate CSG expression trees into meshes using manifold3d."""

from __future__ import annotations

import operator
from functools import reduce

import numpy as np

from trackriser._config import RenderSettings
from trackriser.mesh import Mesh
from trackriser.modeling.tree import (
    Box,
    Circle,
    Cylinder,
    Difference,
    Hull,
    Intersection,
    LinearExtrude,
    Node,
    Polygon,
    Rect,
    Rotate,
    Scale,
    Translate,
    Union,
)


class KernelError(RuntimeError):
    """Raised when a tree cannot be turned into a usable mesh."""


def _load_manifold():
    try:
        from manifold3d import CrossSection, Manifold
    except ImportError as exc:  # pragma: no cover - runtime dependency
        raise KernelError("manifold3d is required to evaluate geometry.") from exc
    return CrossSection, Manifold


def evaluate(node: Node, settings: RenderSettings | None = None) -> Mesh:
    """Evaluate a 3D tree into a triangle mesh."""

    settings = settings or RenderSettings()
    if node.dim != 3:
        raise KernelError("Only 3D trees can be evaluated into a mesh; extrude the profile first.")
    solid = _evaluate(node, settings)
    if solid.is_empty():
        raise KernelError("Geometry evaluated to an empty solid.")
    return _mesh_from_manifold(solid)


def evaluate_profile(node: Node, settings: RenderSettings | None = None) -> list[np.ndarray]:
    """Evaluate a 2D tree into its outline polygons (Nx2 arrays)."""

    settings = settings or RenderSettings()
    if node.dim != 2:
        raise KernelError("evaluate_profile expects a 2D tree.")
    section = _evaluate(node, settings)
    return [np.asarray(poly, dtype=float) for poly in section.to_polygons()]


def _evaluate(node: Node, settings: RenderSettings):
    CrossSection, Manifold = _load_manifold()

    if isinstance(node, Box):
        return Manifold.cube(node.size, node.center)
    if isinstance(node, Cylinder):
        radius_high = node.radius_low if node.radius_high is None else node.radius_high
        return Manifold.cylinder(
            node.height,
            node.radius_low,
            radius_high,
            node.segments or settings.facets,
            node.center,
        )
    if isinstance(node, Circle):
        return CrossSection.circle(node.radius, node.segments or settings.facets)
    if isinstance(node, Rect):
        return CrossSection.square(node.size, node.center)
    if isinstance(node, Polygon):
        return CrossSection([_counter_clockwise(np.asarray(node.points, dtype=float))])

    if isinstance(node, Translate):
        child = _evaluate(node.child, settings)
        if node.dim == 2:
            return child.translate(node.offset[:2])
        return child.translate(node.offset)
    if isinstance(node, Rotate):
        child = _evaluate(node.child, settings)
        if node.dim == 2:
            return child.rotate(node.angles[2])
        return child.rotate(node.angles)
    if isinstance(node, Scale):
        child = _evaluate(node.child, settings)
        if node.dim == 2:
            return child.scale(node.factors[:2])
        return child.scale(node.factors)

    if isinstance(node, Union):
        return reduce(operator.add, (_evaluate(child, settings) for child in node.items))
    if isinstance(node, Intersection):
        return reduce(operator.xor, (_evaluate(child, settings) for child in node.items))
    if isinstance(node, Difference):
        result = _evaluate(node.base, settings)
        for cutter in node.cutters:
            result = result - _evaluate(cutter, settings)
        return result
    if isinstance(node, Hull):
        parts = [_evaluate(child, settings) for child in node.items]
        if node.dim == 2:
            return CrossSection.batch_hull(parts)
        return Manifold.batch_hull(parts)

    if isinstance(node, LinearExtrude):
        section = _evaluate(node.profile, settings)
        solid = Manifold.extrude(section, node.height, scale_top=node.scale_top)
        if node.center:
            solid = solid.translate((0.0, 0.0, -node.height / 2.0))
        return solid

    raise KernelError(f"Unsupported node type {type(node).__name__}.")


def _counter_clockwise(points: np.ndarray) -> np.ndarray:
    x = points[:, 0]
    y = points[:, 1]
    area = 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))
    if area < 0:
        return points[::-1].copy()
    return points


def _mesh_from_manifold(manifold) -> Mesh:
    mesh = manifold.to_mesh()
    # vert_properties may carry extra channels after the xyz position.
    vertices = np.asarray(mesh.vert_properties, dtype=float)
    faces = np.asarray(mesh.tri_verts, dtype=int)
    return Mesh(vertices[:, :3], faces)


__all__ = ["KernelError", "evaluate", "evaluate_profile"]
