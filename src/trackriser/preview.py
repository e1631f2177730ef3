from __future__ import annotations

import math
from pathlib import Path

from rich.console import Console

from trackriser._config import UnitSettings, get_unit_settings
from trackriser.mesh import Mesh, mesh_to_pyvista


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


class RiserPreviewer:
    """Render a riser mesh with PyVista, interactively or to a screenshot."""

    surface_color = "#c8a27a"
    edge_color = "#cdd7ff"
    edge_angle = 60.0

    def __init__(self, console: Console | None = None, unit_settings: UnitSettings | None = None):
        self.console = console
        self._pv = None
        self._unit_settings = unit_settings or get_unit_settings()

    @property
    def unit_name(self) -> str:
        return self._unit_settings.name

    @property
    def unit_label(self) -> str:
        return self._unit_settings.label

    @property
    def unit_scale_to_mm(self) -> float:
        return self._unit_settings.scale_to_mm

    def show(
        self,
        mesh: Mesh,
        screenshot_path: Path | None = None,
        show_edges: bool = False,
        face_edges: bool = False,
        title: str = "Track Riser",
    ) -> None:
        pv = self._ensure_backend()
        poly = self.to_polydata(mesh)
        off_screen = screenshot_path is not None
        plotter = pv.Plotter(window_size=(1280, 800), off_screen=off_screen)
        self._configure_plotter(plotter)
        plotter.add_mesh(
            poly,
            name="riser",
            show_edges=show_edges,
            color=self.surface_color,
            smooth_shading=True,
            specular=0.2,
        )
        if face_edges:
            self._add_feature_edges(plotter, poly)
        self._reset_camera(plotter, poly.bounds)

        try:
            if screenshot_path is not None:
                screenshot_path.parent.mkdir(parents=True, exist_ok=True)
                plotter.show(title=title, auto_close=False, screenshot=str(screenshot_path))
            else:
                plotter.show(title=title, auto_close=False)
        finally:
            plotter.close()

    def to_polydata(self, mesh: Mesh):
        """Convert a mesh to PyVista, scaled from millimeters to the configured units."""

        self._ensure_backend()
        if mesh.n_faces == 0:
            raise PreviewBackendError("Cannot preview an empty mesh.")
        scaled = mesh.scale(1.0 / self.unit_scale_to_mm, inplace=False)
        return mesh_to_pyvista(scaled)

    # Internal helpers -----------------------------------------------------

    def _ensure_backend(self):
        if self._pv is None:
            try:
                import pyvista as pv
            except ImportError as exc:  # pragma: no cover - runtime dep
                raise PreviewBackendError(
                    "PyVista is required for previewing. Install trackriser with `pip install -e .`."
                ) from exc
            pv.set_plot_theme("document")
            self._pv = pv
        return self._pv

    def _configure_plotter(self, plotter) -> None:
        plotter.set_background("#090c10", top="#1b2333")
        plotter.add_axes(interactive=True)
        self._show_bounds_with_units(plotter)

    def _add_feature_edges(self, plotter, poly) -> None:
        edges = poly.extract_feature_edges(angle=self.edge_angle)
        if edges.n_cells == 0:
            return
        plotter.add_mesh(
            edges,
            name="riser-edges",
            color=self.edge_color,
            line_width=1.0,
            render_lines_as_tubes=False,
        )

    def _reset_camera(self, plotter, bounds) -> None:
        x_center = (bounds[0] + bounds[1]) / 2.0
        y_center = (bounds[2] + bounds[3]) / 2.0
        z_center = (bounds[4] + bounds[5]) / 2.0

        diag = math.sqrt(
            (bounds[1] - bounds[0]) ** 2
            + (bounds[3] - bounds[2]) ** 2
            + (bounds[5] - bounds[4]) ** 2
        )
        distance = max(diag, 1.0) * 1.2

        # Look along the track from its side so both connectors are visible.
        camera_pos = (x_center + distance, y_center - distance * 0.5, z_center + distance * 0.4)
        focal_point = (x_center, y_center, z_center)
        view_up = (0.0, 0.0, 1.0)
        plotter.camera_position = [camera_pos, focal_point, view_up]

    def _show_bounds_with_units(self, plotter) -> None:
        label = self._unit_settings.label
        plotter.show_bounds(
            grid="front",
            color="#5a677d",
            xlabel=f"X ({label})",
            ylabel=f"Y ({label})",
            zlabel=f"Z ({label})",
        )


__all__ = ["PreviewBackendError", "RiserPreviewer"]
