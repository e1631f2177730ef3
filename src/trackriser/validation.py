from __future__ import annotations

import numpy as np


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


def validate_positive(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be a number, got {value!r}.") from exc
    if not np.isfinite(number):
        raise ValidationError(f"{name} must be finite.")
    if number <= 0:
        raise ValidationError(f"{name} must be positive, got {number:g}.")
    return number


def validate_choice(name: str, value: float, choices: tuple[float, ...], atol: float = 1e-6) -> float:
    for choice in choices:
        if np.isclose(value, choice, atol=atol):
            return float(choice)
    allowed = ", ".join(f"{c:g}" for c in choices)
    raise ValidationError(f"{name} {value:g} is not a standard value ({allowed}).")
