"""Export one riser per standard height, female to male, at the default length."""

from __future__ import annotations

from pathlib import Path

from trackriser._config import get_render_settings
from trackriser.io import write_stl
from trackriser.options import STANDARD_HEIGHTS, resolve_options
from trackriser.riser import build_mesh

OUTPUT_DIR = Path(__file__).resolve().parent / "out"


def build():
    settings = get_render_settings()
    meshes = {}
    for height in STANDARD_HEIGHTS:
        options = resolve_options(left="female", right="male", height=height)
        meshes[f"riser-{height:g}mm.stl"] = build_mesh(options, settings=settings)
    return meshes


if __name__ == "__main__":
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    for name, mesh in build().items():
        write_stl(mesh, OUTPUT_DIR / name)
        print(f"wrote {OUTPUT_DIR / name} ({mesh.n_faces} triangles)")
