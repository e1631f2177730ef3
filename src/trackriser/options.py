"""Named riser options and their resolution into concrete numbers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from trackriser.validation import ValidationError, validate_choice, validate_positive

AUTO = "auto"

STANDARD_LENGTHS: tuple[float, ...] = (25.0, 40.0, 54.0, 108.0, 144.0, 216.0)
# Multiples of half a 2.5 in rise unit, matching the common riser blocks.
STANDARD_HEIGHTS: tuple[float, ...] = (31.75, 63.5, 95.25, 127.0)

AUTO_LENGTH = 40.0
AUTO_HEIGHT = 63.5


class ConnectorType(str, Enum):
    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class RiserOptions:
    """Resolved, validated inputs of one riser build."""

    left: ConnectorType = ConnectorType.FEMALE
    right: ConnectorType = ConnectorType.MALE
    length: float = AUTO_LENGTH
    height: float = AUTO_HEIGHT
    supports: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "left", resolve_connector(self.left, "left"))
        object.__setattr__(self, "right", resolve_connector(self.right, "right"))
        object.__setattr__(self, "length", validate_positive("length", self.length))
        object.__setattr__(self, "height", validate_positive("height", self.height))


def resolve_connector(value: ConnectorType | str, label: str = "connector") -> ConnectorType:
    if isinstance(value, ConnectorType):
        return value
    try:
        return ConnectorType(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(c.value for c in ConnectorType)
        raise ValidationError(f"{label} must be one of {allowed}, got {value!r}.") from exc


def _resolve_dimension(
    name: str,
    value: float | str,
    choices: tuple[float, ...],
    auto_value: float,
    allow_custom: bool,
) -> float:
    if isinstance(value, str):
        text = value.strip().lower()
        if text == AUTO:
            return auto_value
        try:
            value = float(text)
        except ValueError as exc:
            raise ValidationError(f"{name} must be a number or '{AUTO}', got {value!r}.") from exc
    number = validate_positive(name, value)
    if allow_custom:
        return number
    return validate_choice(name, number, choices)


def resolve_length(value: float | str, allow_custom: bool = False) -> float:
    return _resolve_dimension("length", value, STANDARD_LENGTHS, AUTO_LENGTH, allow_custom)


def resolve_height(value: float | str, allow_custom: bool = False) -> float:
    return _resolve_dimension("height", value, STANDARD_HEIGHTS, AUTO_HEIGHT, allow_custom)


def resolve_options(
    left: ConnectorType | str = ConnectorType.FEMALE,
    right: ConnectorType | str = ConnectorType.MALE,
    length: float | str = AUTO,
    height: float | str = AUTO,
    supports: bool = False,
    allow_custom: bool = False,
) -> RiserOptions:
    """Turn user-facing option values into a validated RiserOptions.

    ``length`` and ``height`` accept the standard values or ``"auto"``;
    ``allow_custom`` lifts the standard-value restriction but still rejects
    non-positive sizes.
    """

    return RiserOptions(
        left=resolve_connector(left, "left"),
        right=resolve_connector(right, "right"),
        length=resolve_length(length, allow_custom=allow_custom),
        height=resolve_height(height, allow_custom=allow_custom),
        supports=bool(supports),
    )


__all__ = [
    "AUTO",
    "AUTO_HEIGHT",
    "AUTO_LENGTH",
    "STANDARD_HEIGHTS",
    "STANDARD_LENGTHS",
    "ConnectorType",
    "RiserOptions",
    "resolve_connector",
    "resolve_height",
    "resolve_length",
    "resolve_options",
]
