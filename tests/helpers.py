from __future__ import annotations

import numpy as np

from trackriser.mesh import Mesh, analyze_mesh


def bounds(mesh: Mesh) -> np.ndarray:
    return np.array(mesh.bounds, dtype=float)


def is_watertight(mesh: Mesh) -> tuple[bool, int]:
    analysis = analyze_mesh(mesh)
    return analysis.is_watertight, analysis.boundary_edges + analysis.nonmanifold_edges


def profile_bounds(polygons: list[np.ndarray]) -> np.ndarray:
    points = np.vstack(polygons)
    return np.array([points[:, 0].min(), points[:, 0].max(), points[:, 1].min(), points[:, 1].max()])
