"""Track standards: dimensions and connector solids consumed by the riser composers."""

from __future__ import annotations

from typing import Callable, Dict, Protocol, runtime_checkable

from trackriser._config import RenderSettings
from trackriser.modeling.tree import Node
from trackriser.validation import ValidationError


@runtime_checkable
class TrackStandard(Protocol):
    """What a composer needs to know about a track system.

    Solids are expressed in the standard's own frame: the straight track lies
    along +x from the origin with its width along +y, and both the plug and
    the cutout point along +x from the origin, centred on y = 0, so that the
    origin is the middle of the track end they attach to.
    """

    name: str

    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...

    @property
    def plug_neck_length(self) -> float: ...

    @property
    def plug_radius(self) -> float: ...

    def straight(self, length: float) -> Node: ...

    def plug(self) -> Node: ...

    def cutout(self) -> Node: ...


StandardFactory = Callable[[RenderSettings], TrackStandard]

_STANDARDS: Dict[str, StandardFactory] = {}


def register_standard(name: str):
    """Decorator to register a track standard factory under ``name``."""

    def decorator(factory: StandardFactory) -> StandardFactory:
        _STANDARDS[name.lower()] = factory
        return factory

    return decorator


def available_standards() -> list[str]:
    return sorted(_STANDARDS)


def get_standard(name: str, settings: RenderSettings | None = None) -> TrackStandard:
    settings = settings or RenderSettings()
    factory = _STANDARDS.get(name.strip().lower())
    if factory is None:
        allowed = ", ".join(available_standards())
        raise ValidationError(f"Unknown track standard '{name}' (available: {allowed}).")
    return factory(settings)


from .wooden import WoodenTrack  # noqa: E402

__all__ = [
    "TrackStandard",
    "WoodenTrack",
    "available_standards",
    "get_standard",
    "register_standard",
]
