"""Brio-compatible wooden train track."""

from __future__ import annotations

from dataclasses import dataclass

from trackriser._config import RenderSettings
from trackriser.modeling import (
    boolean_difference,
    boolean_union,
    linear_extrude,
    make_box,
    make_cylinder,
    make_polygon,
    rotate,
    translate,
)
from trackriser.modeling.tree import Node

from . import register_standard


@dataclass(frozen=True)
class WoodenTrack:
    """Dimensions in millimeters of the common wooden track system."""

    name: str = "wooden"
    width: float = 40.0
    height: float = 12.0
    bevel: float = 1.0
    well_width: float = 6.0
    well_depth: float = 3.0
    # Centre-to-centre distance of the two wheel grooves.
    well_spacing: float = 26.0
    plug_neck_length: float = 12.0
    plug_neck_width: float = 6.0
    plug_radius: float = 6.0
    cutout_clearance: float = 0.5
    epsilon: float = 0.01

    def __post_init__(self) -> None:
        for label in ("width", "height", "plug_neck_length", "plug_neck_width", "plug_radius"):
            if getattr(self, label) <= 0:
                raise ValueError(f"{label} must be positive.")
        if self.well_spacing + self.well_width >= self.width - 2 * self.bevel:
            raise ValueError("wheel grooves do not fit on the track.")

    def _section(self) -> Node:
        # Track cross-section in (width, height) coordinates, beveled on all four long edges.
        w, h, b = self.width, self.height, self.bevel
        return make_polygon(
            [
                (b, 0.0),
                (w - b, 0.0),
                (w, b),
                (w, h - b),
                (w - b, h),
                (b, h),
                (0.0, h - b),
                (0.0, b),
            ]
        )

    def straight(self, length: float) -> Node:
        """Straight track along +x, spanning [0, length] x [0, width] x [0, height]."""

        if length <= 0:
            raise ValueError("length must be positive.")
        body = rotate(linear_extrude(self._section(), height=length), (90.0, 0.0, 90.0))
        eps = self.epsilon
        wells = [
            translate(
                make_box((length + 2 * eps, self.well_width, self.well_depth + eps)),
                (-eps, centre - self.well_width / 2.0, self.height - self.well_depth),
            )
            for centre in (
                self.width / 2.0 - self.well_spacing / 2.0,
                self.width / 2.0 + self.well_spacing / 2.0,
            )
        ]
        return boolean_difference(body, wells)

    def plug(self) -> Node:
        """Male connector: a neck ending in a round knob, reaching neck + radius past the end."""

        # The neck starts inside the track so the union never shares a face with it.
        overlap = self.bevel + self.epsilon
        neck = translate(
            make_box((self.plug_neck_length + overlap, self.plug_neck_width, self.height)),
            (-overlap, -self.plug_neck_width / 2.0, 0.0),
        )
        knob = translate(
            make_cylinder(radius=self.plug_radius, height=self.height),
            (self.plug_neck_length, 0.0, 0.0),
        )
        return boolean_union([neck, knob])

    def cutout(self) -> Node:
        """Female connector: the plug shape grown by the clearance, cut into the track."""

        eps = self.epsilon
        clearance = self.cutout_clearance
        depth = self.height + 2 * eps
        neck = translate(
            make_box((self.plug_neck_length + eps, self.plug_neck_width + 2 * clearance, depth)),
            (-eps, -(self.plug_neck_width / 2.0 + clearance), -eps),
        )
        knob = translate(
            make_cylinder(radius=self.plug_radius + clearance, height=depth),
            (self.plug_neck_length, 0.0, -eps),
        )
        return boolean_union([neck, knob])


@register_standard("wooden")
def wooden_track(settings: RenderSettings) -> WoodenTrack:
    return WoodenTrack(epsilon=settings.epsilon)


__all__ = ["WoodenTrack", "wooden_track"]
