"""Optional print supports under the connector ends.

Each support is a 45 degree wedge hanging below a track end, trimmed by a
vertical cylinder: the plug footprint for a male end, the track width for a
female end.
"""

from __future__ import annotations

import math

from trackriser.modeling import boolean_intersection, boolean_union, make_box, make_cylinder, rotate, translate
from trackriser.modeling.tree import Node
from trackriser.options import ConnectorType
from trackriser.tracks import TrackStandard

from .column import connector_allowance
from .surface import LEFT, RIGHT, end_placement


def support_wedge(depth: float, span: float, epsilon: float = 0.01) -> Node:
    """Triangular prism below the local +x overhang.

    Spans x in [0, depth] at z = 0 and shrinks to x = 0 at z = -depth, so the
    sloped face never exceeds 45 degrees.
    """

    block = translate(make_box((depth, span, depth)), (0.0, -span / 2.0, -depth))
    side = depth * math.sqrt(2.0)
    diamond = translate(
        rotate(make_box((side, span + 2 * epsilon, side)), (0.0, 45.0, 0.0)),
        (-depth, -span / 2.0 - epsilon, 0.0),
    )
    return boolean_intersection([block, diamond])


def plug_support(standard: TrackStandard, epsilon: float = 0.01) -> Node:
    reach = connector_allowance(ConnectorType.MALE, standard)
    footprint = translate(make_cylinder(radius=reach, height=reach), (0.0, 0.0, -reach))
    return boolean_intersection([support_wedge(reach, 2 * standard.plug_radius, epsilon), footprint])


def cutout_support(standard: TrackStandard, epsilon: float = 0.01) -> Node:
    # Like the plug support this hangs past the track end, under the column flare that
    # carries the cutout allowance; inside the segment the column already sits below.
    reach = connector_allowance(ConnectorType.FEMALE, standard)
    radius = standard.width / 2.0
    footprint = translate(make_cylinder(radius=radius, height=reach), (0.0, 0.0, -reach))
    return boolean_intersection([support_wedge(reach, standard.width, epsilon), footprint])


def compose_supports(
    length: float,
    height: float,
    left: ConnectorType,
    right: ConnectorType,
    standard: TrackStandard,
    epsilon: float = 0.01,
) -> Node:
    """Supports for both ends, hanging from the underside of the track at ``height``."""

    parts = []
    for side, connector in ((LEFT, left), (RIGHT, right)):
        place = end_placement(side, length, standard.width)
        if connector is ConnectorType.MALE:
            support = plug_support(standard, epsilon)
        else:
            support = cutout_support(standard, epsilon)
        x, y, _ = place.origin
        parts.append(translate(rotate(support, place.outward_deg), (x, y, height)))
    return boolean_union(parts)


__all__ = ["compose_supports", "cutout_support", "plug_support", "support_wedge"]
