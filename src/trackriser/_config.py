from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR = Path.home() / ".trackriser"
CONFIG_FILE = CONFIG_DIR / "trackriser.cfg"
DEFAULT_CONFIG = {
    "_comment": "Valid units: millimeters (default), meters, inches. Value is case-insensitive.",
    "units": "millimeters",
    "facets": 64,
    "epsilon": 0.01,
    "standard": "wooden",
    "supports": False,
}
_UNIT_INFO: Dict[str, Dict[str, Any]] = {
    "millimeters": {"label": "mm", "scale_to_mm": 1.0},
    "meters": {"label": "m", "scale_to_mm": 1000.0},
    "inches": {"label": "in", "scale_to_mm": 25.4},
}
_UNIT_ALIASES = {
    "millimeter": "millimeters",
    "millimeters": "millimeters",
    "mm": "millimeters",
    "meter": "meters",
    "meters": "meters",
    "m": "meters",
    "inch": "inches",
    "inches": "inches",
    "in": "inches",
}
_MIN_FACETS = 8


@dataclass(frozen=True)
class UnitSettings:
    """Resolved export units from trackriser.cfg."""

    name: str
    label: str
    scale_to_mm: float


@dataclass(frozen=True)
class RenderSettings:
    """Process-wide rendering knobs, fixed before any part is composed.

    ``facets`` is the number of segments used for every circle and cylinder.
    ``epsilon`` is the small overlap added to cutters so boolean operations
    never see coincident faces.
    """

    facets: int = 64
    epsilon: float = 0.01
    units: UnitSettings = UnitSettings(name="millimeters", label="mm", scale_to_mm=1.0)
    standard: str = "wooden"
    supports: bool = False

    def __post_init__(self) -> None:
        if int(self.facets) < 3:
            raise ValueError("facets must be >= 3.")
        if self.epsilon < 0:
            raise ValueError("epsilon must be non-negative.")


def ensure_user_config() -> None:
    """Ensure ~/.trackriser/trackriser.cfg exists with sane defaults."""

    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if CONFIG_FILE.exists():
        return

    try:
        CONFIG_FILE.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        loaded = json.loads(CONFIG_FILE.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(loaded, dict):
        return DEFAULT_CONFIG.copy()
    return loaded


def _normalize_units(value: str) -> str | None:
    key = value.strip().lower()
    if key in _UNIT_INFO:
        return key
    return _UNIT_ALIASES.get(key)


def _units_from_config(raw_config: Dict[str, Any]) -> UnitSettings:
    raw_units = str(raw_config.get("units", DEFAULT_CONFIG["units"]))
    normalized = _normalize_units(raw_units)
    if normalized is None:
        normalized = DEFAULT_CONFIG["units"]

    info = _UNIT_INFO[normalized]
    return UnitSettings(name=normalized, label=info["label"], scale_to_mm=info["scale_to_mm"])


def _coerce_facets(value: Any) -> int:
    try:
        facets = int(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_CONFIG["facets"]
    return max(facets, _MIN_FACETS)


def _coerce_epsilon(value: Any) -> float:
    try:
        epsilon = float(value)
    except (TypeError, ValueError):
        return DEFAULT_CONFIG["epsilon"]
    if epsilon < 0 or epsilon != epsilon:
        return DEFAULT_CONFIG["epsilon"]
    return epsilon


def get_unit_settings() -> UnitSettings:
    """Return the configured units and the conversion to millimeters."""

    return _units_from_config(_load_user_config())


def get_render_settings() -> RenderSettings:
    """Read trackriser.cfg once and resolve it into immutable settings."""

    raw_config = _load_user_config()
    standard = raw_config.get("standard", DEFAULT_CONFIG["standard"])
    if not isinstance(standard, str) or not standard.strip():
        standard = DEFAULT_CONFIG["standard"]
    supports = raw_config.get("supports", DEFAULT_CONFIG["supports"])
    return RenderSettings(
        facets=_coerce_facets(raw_config.get("facets", DEFAULT_CONFIG["facets"])),
        epsilon=_coerce_epsilon(raw_config.get("epsilon", DEFAULT_CONFIG["epsilon"])),
        units=_units_from_config(raw_config),
        standard=standard.strip().lower(),
        supports=supports if isinstance(supports, bool) else DEFAULT_CONFIG["supports"],
    )
