"""Output records of a render pass.

Plain dataclasses: the composer builds them, the markup layer, the raster
preview and the CLI read them.  ``to_dict`` gives a JSON-ready view.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Animate:
    """One repeating attribute animation (``<animate>``)."""

    attribute: str  # "r" or "opacity"
    values: str  # semicolon separated keyframes
    dur: str  # e.g. "2s"
    repeat_count: str = "indefinite"


@dataclass(frozen=True)
class GradientStop:
    offset: str  # "60%"
    colour: str
    opacity: float


@dataclass(frozen=True)
class Gradient:
    """Radial gradient definition shared by all glow markers of one colour."""

    id: str
    colour: str
    stops: List[GradientStop]


@dataclass(frozen=True)
class MarkerRender:
    x: float
    y: float
    radius: float
    fill: str  # solid colour, or url(#glow-gradient-...) for glow styles
    colour: str  # the style colour, also for glow markers
    opacity: float
    css_class: str
    animations: List[Animate] = field(default_factory=list)
    glow: bool = False
    label: Optional[str] = None  # node label, used as tooltip text


@dataclass(frozen=True)
class RegionDot:
    code: str
    name: str
    x: float
    y: float
    radius: float
    colour: str


@dataclass(frozen=True)
class GroupRender:
    label: Optional[str]
    group_label: Optional[str]
    markers: List[MarkerRender]


@dataclass(frozen=True)
class ComposedMap:
    viewbox: str
    bbox: tuple
    region_dots: List[RegionDot]
    groups: List[GroupRender]
    gradients: List[Gradient]
    land: str
    ocean: str
    border: str


@dataclass(frozen=True)
class LegendEntry:
    label: Optional[str]
    group_label: Optional[str]
    glyph: MarkerRender
    nodes_text: str  # "sjc, fra" or "none"
    node_count: int
    visible: bool
    interactive: bool  # False for ungrouped (always visible) entries


@dataclass(frozen=True)
class Legend:
    entries: List[LegendEntry]
    total_nodes: int
    region_count: Optional[int] = None  # None when region dots are hidden
    region_colour: Optional[str] = None
    text_colour: Optional[str] = None


@dataclass(frozen=True)
class MapView:
    """Everything a front end needs to draw one map with its legend."""

    map: ComposedMap
    legend: Legend
    layout: str
    layout_class: str
    css_class: Optional[str] = None
    element_id: Optional[str] = None
    visible_group_labels: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
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
