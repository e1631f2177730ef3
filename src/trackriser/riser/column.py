"""Riser body: a tapered column whose cross-section is a rounded stadium.

The footprint is ``FOOT_X`` percent of the track width at the floor and
narrows to exactly the track width under the track. Along the track it grows
towards the top so it also carries the plugs and the material around the
cutouts.
"""

from __future__ import annotations

from dataclasses import dataclass

from trackriser.modeling import hull, linear_extrude, make_circle, scale, translate
from trackriser.modeling.tree import Node
from trackriser.options import ConnectorType
from trackriser.tracks import TrackStandard

SQUARENESS = 3.0
FOOT_X = 150.0
FOOT_Y = 100.0
CONVEXITY = 10
# Extra length kept around a cutout, as a fraction of the plug neck.
CUTOUT_ALLOWANCE = 1.25


def connector_allowance(connector: ConnectorType, standard: TrackStandard) -> float:
    """How far the column reaches past a track end for the given connector."""

    if connector is ConnectorType.MALE:
        return standard.plug_neck_length + standard.plug_radius
    return standard.plug_neck_length * CUTOUT_ALLOWANCE


@dataclass(frozen=True)
class RiserProfile:
    length: float
    width: float
    height: float
    extra_yl: float
    extra_yr: float
    squareness: float = SQUARENESS
    foot_x: float = FOOT_X
    foot_y: float = FOOT_Y

    def __post_init__(self) -> None:
        for label in ("length", "width", "height", "squareness", "foot_x", "foot_y"):
            if getattr(self, label) <= 0:
                raise ValueError(f"{label} must be positive.")
        if self.extra_yl < 0 or self.extra_yr < 0:
            raise ValueError("connector allowances must be non-negative.")

    @classmethod
    def for_connectors(
        cls,
        length: float,
        width: float,
        height: float,
        left: ConnectorType,
        right: ConnectorType,
        standard: TrackStandard,
    ) -> "RiserProfile":
        return cls(
            length=length,
            width=width,
            height=height,
            extra_yl=connector_allowance(left, standard),
            extra_yr=connector_allowance(right, standard),
        )

    @property
    def arc_h(self) -> float:
        """Radius of the two circles before they are stretched."""
        return (self.width / 2.0) / self.squareness

    @property
    def scale_x(self) -> float:
        return self.foot_x / 100.0 * self.squareness

    @property
    def scale_y(self) -> float:
        return min(1.0, (self.length / 2.0) / self.arc_h)

    @property
    def trans_y(self) -> float:
        return max(0.0, self.length / 2.0 - self.arc_h)

    @property
    def is_clamped(self) -> bool:
        """True when the segment is too short for two distinct circles."""
        return self.length / 2.0 <= self.arc_h

    @property
    def vscale(self) -> tuple[float, float]:
        return (
            100.0 / self.foot_x,
            (100.0 / self.foot_y) * (1.0 + (self.extra_yl + self.extra_yr) / self.length),
        )

    @property
    def offset_y(self) -> float:
        return self.length / 2.0 + self.extra_yl - self.extra_yr

    @property
    def is_symmetric(self) -> bool:
        return self.extra_yl == self.extra_yr


def riser_cross_section(profile: RiserProfile) -> Node:
    circles = [
        translate(
            scale(make_circle(profile.arc_h), (profile.scale_x, profile.scale_y)),
            (0.0, sign * profile.trans_y),
        )
        for sign in (1.0, -1.0)
    ]
    return hull(circles)


def column_from_profile(profile: RiserProfile) -> Node:
    column = linear_extrude(
        riser_cross_section(profile),
        height=profile.height,
        scale_top=profile.vscale,
        convexity=CONVEXITY,
    )
    return translate(column, (profile.width / 2.0, profile.offset_y, 0.0))


def compose_riser_body(
    length: float,
    width: float,
    height: float,
    left: ConnectorType,
    right: ConnectorType,
    standard: TrackStandard,
) -> Node:
    profile = RiserProfile.for_connectors(length, width, height, left, right, standard)
    return column_from_profile(profile)


__all__ = [
    "CONVEXITY",
    "FOOT_X",
    "FOOT_Y",
    "SQUARENESS",
    "RiserProfile",
    "column_from_profile",
    "compose_riser_body",
    "connector_allowance",
    "riser_cross_section",
]
