from __future__ import annotations

import pathlib
import traceback
from dataclasses import replace

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from trackriser._config import RenderSettings, get_render_settings
from trackriser.io.stl import write_stl
from trackriser.kernel import KernelError
from trackriser.mesh import Mesh, analyze_mesh
from trackriser.options import (
    AUTO,
    STANDARD_HEIGHTS,
    STANDARD_LENGTHS,
    ConnectorType,
    RiserOptions,
    resolve_options,
)
from trackriser.preview import PreviewBackendError, RiserPreviewer
from trackriser.riser import RiserProfile, build_mesh
from trackriser.tracks import TrackStandard, get_standard
from trackriser.validation import ValidationError

console = Console()
app = typer.Typer(help="Build 3D-printable risers for wooden train track.")

_LENGTH_HELP = f"Segment length in mm ({', '.join(f'{v:g}' for v in STANDARD_LENGTHS)}) or '{AUTO}'."
_HEIGHT_HELP = f"Riser height in mm ({', '.join(f'{v:g}' for v in STANDARD_HEIGHTS)}) or '{AUTO}'."

LeftOption = typer.Option(ConnectorType.FEMALE, "--left", help="Connector on the left end.")
RightOption = typer.Option(ConnectorType.MALE, "--right", help="Connector on the right end.")
LengthOption = typer.Option(AUTO, "--length", help=_LENGTH_HELP)
HeightOption = typer.Option(AUTO, "--height", help=_HEIGHT_HELP)
SupportsOption = typer.Option(
    None,
    "--supports/--no-supports",
    help="Add print supports under the connectors (defaults to the config file).",
)
CustomOption = typer.Option(False, "--custom-size", help="Allow lengths and heights outside the standard set.")


def _format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(exc))


def _log_active_units(settings: RenderSettings) -> None:
    units = settings.units
    if abs(units.scale_to_mm - 1.0) < 1e-9:
        console.print(f"[magenta]Units: {units.name} ({units.label}).[/magenta]")
    else:
        console.print(
            f"[magenta]Units: {units.name} ({units.label}); 1 {units.label} = {units.scale_to_mm:.4g} mm.[/magenta]"
        )


def _resolve(
    left: ConnectorType,
    right: ConnectorType,
    length: str,
    height: str,
    supports: bool | None,
    custom_size: bool,
) -> tuple[RiserOptions, TrackStandard, RenderSettings]:
    settings = get_render_settings()
    if supports is not None:
        settings = replace(settings, supports=supports)
    try:
        options = resolve_options(
            left=left,
            right=right,
            length=length,
            height=height,
            supports=settings.supports,
            allow_custom=custom_size,
        )
        standard = get_standard(settings.standard, settings)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return options, standard, settings


def _build(options: RiserOptions, standard: TrackStandard, settings: RenderSettings) -> Mesh:
    try:
        return build_mesh(options, standard, settings)
    except KernelError as exc:
        console.print(Panel.fit(_format_exception(exc), title="Geometry build failed", style="red"))
        raise typer.BadParameter(f"Geometry build failed: {exc}") from exc


def _describe(options: RiserOptions) -> str:
    return (
        f"{options.left.value}/{options.right.value}, "
        f"length {options.length:g} mm, height {options.height:g} mm"
        + (", with supports" if options.supports else "")
    )


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix
    n = 1
    while True:
        candidate = parent / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


@app.command()
def export(
    left: ConnectorType = LeftOption,
    right: ConnectorType = RightOption,
    length: str = LengthOption,
    height: str = HeightOption,
    supports: bool | None = SupportsOption,
    custom_size: bool = CustomOption,
    output: pathlib.Path = typer.Option(
        pathlib.Path("riser.stl"),
        "--output",
        "-o",
        help="Path to the STL file that will be produced.",
    ),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing STL."),
    ascii: bool = typer.Option(False, "--ascii", help="Write ASCII STL instead of binary."),
) -> None:
    """
    Build the riser and save it as an STL file.
    """

    options, standard, settings = _resolve(left, right, length, height, supports, custom_size)

    final_output = output
    if output.exists() and not overwrite:
        final_output = _next_available_path(output)
        console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")

    console.rule("Track Riser Export")
    console.print(f"Building [green]{_describe(options)}[/green] on {standard.name} track")
    _log_active_units(settings)
    mesh = _build(options, standard, settings)
    analysis = analyze_mesh(mesh)
    for issue in analysis.issues():
        console.print(f"[yellow]Mesh check: {issue}[/yellow]")

    final_output.parent.mkdir(parents=True, exist_ok=True)
    scaled = mesh.scale(1.0 / settings.units.scale_to_mm, inplace=False)
    try:
        write_stl(scaled, final_output, ascii=ascii)
    except OSError as exc:
        raise typer.BadParameter(f"Failed to export STL: {exc}") from exc

    mode = "ASCII" if ascii else "binary"
    console.print(
        Panel(
            f"Wrote {mode} STL ({mesh.n_faces} triangles) to [green]{final_output}[/green]. "
            f"Units: {settings.units.name} ({settings.units.label}).",
            title="Export complete",
            border_style="green",
        )
    )


@app.command()
def preview(
    left: ConnectorType = LeftOption,
    right: ConnectorType = RightOption,
    length: str = LengthOption,
    height: str = HeightOption,
    supports: bool | None = SupportsOption,
    custom_size: bool = CustomOption,
    screenshot: pathlib.Path | None = typer.Option(
        None, "--screenshot", help="Save a screenshot instead of opening a window."
    ),
    show_edges: bool = typer.Option(False, "--show-edges/--hide-edges", help="Toggle triangle edge rendering."),
    face_edges: bool = typer.Option(
        False,
        "--face-edges/--no-face-edges",
        help="Overlay detected face edges (feature edges) for hard-outline visuals.",
    ),
) -> None:
    """
    Build the riser and open an interactive PyVista preview.
    """

    options, standard, settings = _resolve(left, right, length, height, supports, custom_size)
    console.rule("Track Riser Preview")
    console.print(f"Previewing [green]{_describe(options)}[/green]")
    mesh = _build(options, standard, settings)

    previewer = RiserPreviewer(console=console, unit_settings=settings.units)
    _log_active_units(settings)
    try:
        previewer.show(mesh, screenshot_path=screenshot, show_edges=show_edges, face_edges=face_edges)
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if screenshot is not None:
        console.print(f"[green]Saved screenshot to {screenshot}[/green]")


@app.command()
def info(
    left: ConnectorType = LeftOption,
    right: ConnectorType = RightOption,
    length: str = LengthOption,
    height: str = HeightOption,
    supports: bool | None = SupportsOption,
    custom_size: bool = CustomOption,
) -> None:
    """
    Print the resolved options and the derived column profile without building geometry.
    """

    options, standard, settings = _resolve(left, right, length, height, supports, custom_size)
    profile = RiserProfile.for_connectors(
        options.length, standard.width, options.height, options.left, options.right, standard
    )

    table = Table(title=f"Riser {_describe(options)}")
    table.add_column("Quantity", style="cyan")
    table.add_column("Value", justify="right")
    rows = [
        ("track standard", standard.name),
        ("track width", f"{standard.width:g}"),
        ("arc_h", f"{profile.arc_h:.4f}"),
        ("scale_x", f"{profile.scale_x:.4f}"),
        ("scale_y", f"{profile.scale_y:.4f}"),
        ("trans_y", f"{profile.trans_y:.4f}"),
        ("extra left", f"{profile.extra_yl:.4f}"),
        ("extra right", f"{profile.extra_yr:.4f}"),
        ("top scale", f"{profile.vscale[0]:.4f} x {profile.vscale[1]:.4f}"),
        ("column offset", f"{profile.offset_y:.4f}"),
        ("clamped profile", "yes" if profile.is_clamped else "no"),
        ("facets", str(settings.facets)),
    ]
    for name, value in rows:
        table.add_row(name, value)
    console.print(table)


def main() -> None:  # pragma: no cover - console script
    app()


__all__ = ["app", "main"]
