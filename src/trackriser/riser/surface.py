"""Track surface: a straight segment with a plug or a cutout at each end."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from trackriser.modeling import boolean_difference, boolean_union, rotate, translate
from trackriser.modeling.tree import Node
from trackriser.options import ConnectorType
from trackriser.tracks import TrackStandard

LEFT = "left"
RIGHT = "right"


@dataclass(frozen=True)
class EndPlacement:
    """Where a connector attaches: the middle of a track end and the outward heading."""

    side: str
    origin: tuple[float, float, float]
    outward_deg: float


@dataclass(frozen=True)
class ConnectorFeature:
    side: str
    connector: ConnectorType
    node: Node

    @property
    def is_cutter(self) -> bool:
        return self.connector is ConnectorType.FEMALE


def end_placement(side: str, length: float, width: float) -> EndPlacement:
    """The left end sits at y = length and faces +y, the right end at y = 0 facing -y."""

    if side == LEFT:
        return EndPlacement(side, (width / 2.0, length, 0.0), 90.0)
    if side == RIGHT:
        return EndPlacement(side, (width / 2.0, 0.0, 0.0), -90.0)
    raise ValueError(f"side must be '{LEFT}' or '{RIGHT}', got {side!r}.")


def connector_features(
    length: float,
    left: ConnectorType,
    right: ConnectorType,
    standard: TrackStandard,
) -> tuple[ConnectorFeature, ...]:
    features = []
    for side, connector in ((LEFT, left), (RIGHT, right)):
        place = end_placement(side, length, standard.width)
        if connector is ConnectorType.MALE:
            node = translate(rotate(standard.plug(), place.outward_deg), place.origin)
        else:
            # Cutouts point back into the track.
            node = translate(rotate(standard.cutout(), place.outward_deg + 180.0), place.origin)
        features.append(ConnectorFeature(side=side, connector=connector, node=node))
    return tuple(features)


def straight_segment(length: float, standard: TrackStandard) -> Node:
    """The standard's straight track turned to run along +y over x in [0, width]."""
    return translate(rotate(standard.straight(length), 90.0), (standard.width, 0.0, 0.0))


def compose_track_surface(
    length: float,
    left: ConnectorType,
    right: ConnectorType,
    standard: TrackStandard,
) -> Node:
    """Union the plugs onto the segment, then cut every cutout in one final pass."""

    features = connector_features(length, left, right, standard)
    plugs: Sequence[Node] = [f.node for f in features if not f.is_cutter]
    cutouts: Sequence[Node] = [f.node for f in features if f.is_cutter]
    body = boolean_union([straight_segment(length, standard), *plugs])
    return boolean_difference(body, cutouts)


__all__ = [
    "LEFT",
    "RIGHT",
    "ConnectorFeature",
    "EndPlacement",
    "compose_track_surface",
    "connector_features",
    "end_placement",
    "straight_segment",
]
