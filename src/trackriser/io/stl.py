from __future__ import annotations

from pathlib import Path
import struct

import numpy as np

from trackriser.mesh import Mesh


def _face_normals(mesh: Mesh) -> np.ndarray:
    if mesh.n_faces == 0:
        return np.zeros((0, 3), dtype=float)
    v0 = mesh.vertices[mesh.faces[:, 0]]
    v1 = mesh.vertices[mesh.faces[:, 1]]
    v2 = mesh.vertices[mesh.faces[:, 2]]
    normals = np.cross(v1 - v0, v2 - v0)
    lengths = np.linalg.norm(normals, axis=1)
    safe = np.where(lengths > 0, lengths, 1.0)
    normals = normals / safe[:, np.newaxis]
    normals[lengths == 0] = 0.0
    return normals


def write_stl(mesh: Mesh, path: Path, ascii: bool = False, name: str = "trackriser") -> None:
    path = Path(path)
    normals = _face_normals(mesh)
    faces = mesh.faces
    vertices = mesh.vertices

    if ascii:
        lines = [f"solid {name}"]
        for idx, tri in enumerate(faces):
            nx, ny, nz = normals[idx]
            lines.append(f"  facet normal {nx:.6e} {ny:.6e} {nz:.6e}")
            lines.append("    outer loop")
            for vidx in tri:
                vx, vy, vz = vertices[vidx]
                lines.append(f"      vertex {vx:.6e} {vy:.6e} {vz:.6e}")
            lines.append("    endloop")
            lines.append("  endfacet")
        lines.append(f"endsolid {name}")
        path.write_text("\n".join(lines) + "\n")
        return

    header = name.encode("ascii", "replace")[:80].ljust(80, b"\0")
    records = np.zeros(
        faces.shape[0],
        dtype=np.dtype([("normal", "<f4", (3,)), ("vertices", "<f4", (3, 3)), ("attr", "<u2")]),
    )
    records["normal"] = normals
    records["vertices"] = vertices[faces]
    with path.open("wb") as handle:
        handle.write(header)
        handle.write(struct.pack("<I", faces.shape[0]))
        handle.write(records.tobytes())


__all__ = ["write_stl"]
