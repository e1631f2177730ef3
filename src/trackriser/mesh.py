"""numpy triangle meshes, topology checks and the PyVista bridge."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np


@dataclass
class Mesh:
    vertices: np.ndarray
    faces: np.ndarray
    metadata: dict[str, object] = field(default_factory=dict)
    analysis: MeshAnalysis | None = None

    def __post_init__(self) -> None:
        self.vertices = np.asarray(self.vertices, dtype=float).reshape(-1, 3).copy()
        self.faces = np.asarray(self.faces, dtype=int).reshape(-1, 3).copy()

    def copy(self) -> "Mesh":
        return Mesh(
            vertices=self.vertices.copy(),
            faces=self.faces.copy(),
            metadata=dict(self.metadata),
            analysis=self.analysis,
        )

    @property
    def n_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def n_faces(self) -> int:
        return int(self.faces.shape[0])

    @property
    def bounds(self) -> tuple[float, float, float, float, float, float]:
        if self.n_vertices == 0:
            return (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        mins = self.vertices.min(axis=0)
        maxs = self.vertices.max(axis=0)
        return (float(mins[0]), float(maxs[0]), float(mins[1]), float(maxs[1]), float(mins[2]), float(maxs[2]))

    @property
    def volume(self) -> float:
        """Enclosed volume from the divergence theorem; assumes outward-facing triangles."""
        if self.n_faces == 0:
            return 0.0
        v0 = self.vertices[self.faces[:, 0]]
        v1 = self.vertices[self.faces[:, 1]]
        v2 = self.vertices[self.faces[:, 2]]
        return float(np.einsum("ij,ij->i", v0, np.cross(v1, v2)).sum() / 6.0)

    def scale(self, factor: float | Sequence[float], inplace: bool = True) -> "Mesh":
        vec = np.broadcast_to(np.asarray(factor, dtype=float), (3,))
        if inplace:
            self.vertices = self.vertices * vec
            return self
        mesh = self.copy()
        mesh.vertices = mesh.vertices * vec
        return mesh


@dataclass
class MeshAnalysis:
    """Topology counts used to decide whether a mesh can be printed as is."""

    n_vertices: int
    n_faces: int
    degenerate_faces: int
    boundary_edges: int
    nonmanifold_edges: int
    invalid_vertices: int

    @property
    def is_watertight(self) -> bool:
        return self.boundary_edges == 0 and self.nonmanifold_edges == 0

    def issues(self) -> list[str]:
        issues: list[str] = []
        if self.invalid_vertices:
            issues.append(f"{self.invalid_vertices} invalid vertices (NaN/inf)")
        if self.degenerate_faces:
            issues.append(f"{self.degenerate_faces} degenerate faces")
        if self.boundary_edges:
            issues.append(f"{self.boundary_edges} boundary edges (not watertight)")
        if self.nonmanifold_edges:
            issues.append(f"{self.nonmanifold_edges} non-manifold edges")
        return issues


def analyze_mesh(mesh: Mesh, area_epsilon: float = 1e-12) -> MeshAnalysis:
    """Count degenerate faces and open or over-shared edges; the result is cached on ``mesh``."""

    faces = mesh.faces
    degenerate = 0
    edge_uses = np.zeros(0, dtype=int)
    if faces.size:
        corners = mesh.vertices[faces]
        areas = 0.5 * np.linalg.norm(np.cross(corners[:, 1] - corners[:, 0], corners[:, 2] - corners[:, 0]), axis=1)
        degenerate = int(np.count_nonzero(areas <= area_epsilon))
        # Every triangle contributes its three undirected edges.
        edges = np.sort(np.concatenate([faces[:, [0, 1]], faces[:, [1, 2]], faces[:, [2, 0]]]), axis=1)
        _, edge_uses = np.unique(edges, axis=0, return_counts=True)

    mesh.analysis = MeshAnalysis(
        n_vertices=mesh.n_vertices,
        n_faces=mesh.n_faces,
        degenerate_faces=degenerate,
        boundary_edges=int(np.count_nonzero(edge_uses == 1)),
        nonmanifold_edges=int(np.count_nonzero(edge_uses > 2)),
        invalid_vertices=int(np.count_nonzero(~np.isfinite(mesh.vertices))),
    )
    return mesh.analysis


def mesh_to_pyvista(mesh: Mesh):
    import pyvista as pv

    if mesh.n_faces == 0:
        return pv.PolyData(mesh.vertices, deep=True)
    faces = np.hstack([np.full((mesh.n_faces, 1), 3, dtype=np.int64), mesh.faces.astype(np.int64)]).ravel()
    poly = pv.PolyData(mesh.vertices, faces, deep=True)
    return poly
