"""Stack the track surface on top of the riser body."""

from __future__ import annotations

from trackriser._config import RenderSettings
from trackriser.kernel import evaluate
from trackriser.mesh import Mesh
from trackriser.modeling import boolean_intersection, boolean_union, make_box, translate
from trackriser.modeling.tree import Node
from trackriser.options import RiserOptions
from trackriser.tracks import TrackStandard, get_standard

from .column import compose_riser_body
from .supports import compose_supports
from .surface import compose_track_surface

# The cap copy sits this far below the surface to fill the bevel seam at the column.
CAP_DROP = 1.0


def cap_slice(surface: Node, length: float, standard: TrackStandard) -> Node:
    """The surface clipped to the segment length and the middle half of its width."""

    clip = translate(
        make_box((standard.width / 2.0, length, standard.height)),
        (standard.width / 4.0, 0.0, 0.0),
    )
    return boolean_intersection([surface, clip])


def compose_riser(
    options: RiserOptions,
    standard: TrackStandard,
    settings: RenderSettings | None = None,
) -> Node:
    """Build the full riser tree for ``options``."""

    settings = settings or RenderSettings()
    surface = compose_track_surface(options.length, options.left, options.right, standard)
    parts = [
        translate(surface, (0.0, 0.0, options.height)),
        translate(cap_slice(surface, options.length, standard), (0.0, 0.0, options.height - CAP_DROP)),
        compose_riser_body(
            options.length,
            standard.width,
            options.height,
            options.left,
            options.right,
            standard,
        ),
    ]
    if options.supports:
        parts.append(
            compose_supports(
                options.length,
                options.height,
                options.left,
                options.right,
                standard,
                epsilon=settings.epsilon,
            )
        )
    return boolean_union(parts)


def build_mesh(
    options: RiserOptions,
    standard: TrackStandard | None = None,
    settings: RenderSettings | None = None,
) -> Mesh:
    """Compose the riser and evaluate it into a mesh."""

    settings = settings or RenderSettings()
    if standard is None:
        standard = get_standard(settings.standard, settings)
    mesh = evaluate(compose_riser(options, standard, settings), settings)
    mesh.metadata.update(
        {
            "left": options.left.value,
            "right": options.right.value,
            "length": options.length,
            "height": options.height,
            "standard": standard.name,
        }
    )
    return mesh


__all__ = ["CAP_DROP", "build_mesh", "cap_slice", "compose_riser"]
