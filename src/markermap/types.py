from __future__ import annotations
from enum import Enum
from typing import Literal, Tuple

LatLon = Tuple[float, float]                # (lat, lon) in degrees
BBoxTuple = Tuple[float, float, float, float]  # (min_x, min_y, max_x, max_y)
Layout = Literal["stacked", "side_by_side"]


class Animation(str, Enum):
    NONE = "none"
    PULSE = "pulse"
    FADE = "fade"


class Preset(str, Enum):
    """Compiled semantic style presets."""

    OPERATIONAL = "operational"
    WARNING = "warning"
    DANGER = "danger"
    INACTIVE = "inactive"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    INFO = "info"


# Older names still accepted by the style resolver.
PRESET_ALIASES = {
    "active": Preset.OPERATIONAL,
    "success": Preset.OPERATIONAL,
    "acknowledged": Preset.OPERATIONAL,
    "expected": Preset.WARNING,
}
