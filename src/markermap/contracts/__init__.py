"""Input and output contracts."""
from .inputs import (
    CoordinatePair,
    LabeledCoordinates,
    LabeledRegion,
    NodeSpec,
    RawGroup,
    RegionCode,
)
from .render import (
    Animate,
    ComposedMap,
    Gradient,
    GradientStop,
    GroupRender,
    Legend,
    LegendEntry,
    MapView,
    MarkerRender,
    RegionDot,
)

__all__ = [
    "RegionCode",
    "CoordinatePair",
    "LabeledRegion",
    "LabeledCoordinates",
    "NodeSpec",
    "RawGroup",
    "Animate",
    "GradientStop",
    "Gradient",
    "MarkerRender",
    "RegionDot",
    "GroupRender",
    "ComposedMap",
    "LegendEntry",
    "Legend",
    "MapView",
]
