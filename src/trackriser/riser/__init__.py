"""Riser composers: track surface, column, optional supports and the assembly."""

from __future__ import annotations

from .assembly import CAP_DROP, build_mesh, cap_slice, compose_riser
from .column import RiserProfile, compose_riser_body, connector_allowance, riser_cross_section
from .supports import compose_supports, cutout_support, plug_support
from .surface import LEFT, RIGHT, compose_track_surface, connector_features

__all__ = [
    "CAP_DROP",
    "LEFT",
    "RIGHT",
    "RiserProfile",
    "build_mesh",
    "cap_slice",
    "compose_riser",
    "compose_riser_body",
    "compose_supports",
    "compose_track_surface",
    "connector_allowance",
    "connector_features",
    "cutout_support",
    "plug_support",
    "riser_cross_section",
]
