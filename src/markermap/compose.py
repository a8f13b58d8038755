"""Render composition: projected markers, glow gradients, region dots, legend.

The composer works on already normalised :class:`~markermap.groups.MarkerGroup`
lists and produces the records in :mod:`markermap.contracts.render`.  It
performs no I/O.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, List, Literal, Optional

from .config.schema import DEFAULT_CONFIG, MapConfig
from .contracts.render import (
    Animate,
    ComposedMap,
    Gradient,
    GradientStop,
    GroupRender,
    Legend,
    LegendEntry,
    MarkerRender,
    RegionDot,
)
from .groups import MarkerGroup
from .projection import DEFAULT_VIEWBOX, BBox, project_many
from .regions import RegionCatalog
from .styles import Style
from .theme import Theme, region_marker_colour, region_text_colour, resolve_theme
from .types import Animation
from .utils.logging import get_logger
from .visibility import VisibilitySelection, is_visible

log = get_logger("compose")

Context = Literal["map", "legend"]

GLOW_SCALE = 2.2
GRADIENT_STOPS = (("60%", 1.0), ("80%", 0.6), ("100%", 0.2))
_HEX_COLOUR = re.compile(r"#[0-9A-Fa-f]+")
_ID_UNSAFE = re.compile(r"[^A-Za-z0-9-]")


def _num(v: float) -> str:
    return f"{v:g}"


def _escape_id_char(match: re.Match) -> str:
    return f"_{ord(match.group(0)):x}_"


def gradient_id(colour: str) -> str:
    """Element id of the glow gradient for ``colour``.

    Hex colours keep their digits (``#ff0000`` -> ``glow-gradient-ff0000``).
    Any other colour string is tagged ``c-`` and every character outside
    ``[A-Za-z0-9-]`` becomes ``_<hex codepoint>_``, so distinct colours never
    share an id.
    """
    if _HEX_COLOUR.fullmatch(colour):
        return "glow-gradient-" + colour[1:]
    return "glow-gradient-c-" + _ID_UNSAFE.sub(_escape_id_char, colour)


def layout_class(layout: str) -> str:
    if layout == "side_by_side":
        return "fly-map-layout-side-by-side"
    return "fly-map-layout-stacked"


# ---------------------------------------------------------------------------
# animation parameters
# ---------------------------------------------------------------------------


def opacity_values(config: MapConfig) -> str:
    lo, hi = config.animation_opacity_range
    return f"{_num(lo)};{_num(hi)};{_num(lo)}"


def pulse_radius_values(context: Context, radius: float, config: MapConfig) -> str:
    if context == "legend":
        small = radius * config.legend_size_ratio
        return f"{_num(small)};{_num(radius)};{_num(small)}"
    big = radius + config.pulse_size_delta
    return f"{_num(radius)};{_num(big)};{_num(radius)}"


def animations_for(
    style: Style, radius: float, config: MapConfig, context: Context = "map"
) -> List[Animate]:
    """``<animate>`` records for a style; static styles get none."""
    if style.animation is Animation.PULSE:
        return [
            Animate("r", pulse_radius_values(context, radius, config), config.pulse_duration),
            Animate("opacity", opacity_values(config), config.pulse_duration),
        ]
    if style.animation is Animation.FADE:
        return [Animate("opacity", opacity_values(config), config.fade_duration)]
    return []


def compose_marker(
    style: Style,
    x: float,
    y: float,
    config: Optional[MapConfig] = None,
    *,
    context: Context = "map",
    radius: Optional[float] = None,
    label: Optional[str] = None,
) -> MarkerRender:
    """One marker glyph.

    ``radius`` overrides the style size.  Legend glyphs are scaled by
    ``legend_size_ratio`` unless they pulse, in which case the animation
    runs between the scaled and the full radius.  Glow styles draw a single
    circle ``GLOW_SCALE`` times larger, filled with the colour's gradient.
    """
    cfg = config or DEFAULT_CONFIG
    base = float(style.size if radius is None else radius)
    if style.glow:
        base *= GLOW_SCALE
    animated = style.animation is not Animation.NONE
    r = base * cfg.legend_size_ratio if context == "legend" else base
    fill = f"url(#{gradient_id(style.colour)})" if style.glow else style.colour

    return MarkerRender(
        x=float(x),
        y=float(y),
        radius=r,
        fill=fill,
        colour=style.colour,
        opacity=cfg.animation_opacity_range[1] if animated else cfg.marker_opacity,
        css_class="marker-group animated" if animated else "marker-group static",
        animations=animations_for(style, base, cfg, context),
        glow=style.glow,
        label=label,
    )


def radial_gradients(groups: Iterable[MarkerGroup]) -> List[Gradient]:
    """One gradient per distinct glow colour, in first-seen order."""
    out: Dict[str, Gradient] = {}
    for g in groups:
        if not g.style.glow:
            continue
        gid = gradient_id(g.style.colour)
        if gid not in out:
            stops = [GradientStop(off, g.style.colour, op) for off, op in GRADIENT_STOPS]
            out[gid] = Gradient(gid, g.style.colour, stops)
    return list(out.values())


def compose_region_dots(
    catalog: RegionCatalog, theme: Theme, bbox: BBox, config: Optional[MapConfig] = None
) -> List[RegionDot]:
    cfg = config or DEFAULT_CONFIG
    regions = catalog.regions()
    xy = project_many([r.coordinates for r in regions], bbox)
    colour = region_marker_colour(theme)
    return [
        RegionDot(r.code, r.name, float(x), float(y), cfg.region_marker_radius, colour)
        for r, (x, y) in zip(regions, xy.tolist())
    ]


def compose_group(group: MarkerGroup, bbox: BBox, config: MapConfig) -> GroupRender:
    xy = project_many([n.coordinates for n in group.nodes], bbox)
    markers = [
        compose_marker(group.style, x, y, config, label=node.label)
        for node, (x, y) in zip(group.nodes, xy.tolist())
    ]
    return GroupRender(group.label, group.group_label, markers)


def compose_map(
    groups: Iterable[MarkerGroup],
    config: Optional[MapConfig] = None,
    theme: Optional[Theme] = None,
    *,
    show_regions: Optional[bool] = None,
    catalog: Optional[RegionCatalog] = None,
) -> ComposedMap:
    """Compose the map layer for ``groups`` (callers pass the visible ones)."""
    cfg = config or DEFAULT_CONFIG
    theme = theme or resolve_theme(None, cfg)
    bbox = BBox.from_tuple(cfg.bbox)
    groups = list(groups)
    show = cfg.show_regions if show_regions is None else show_regions
    dots = compose_region_dots(catalog or RegionCatalog(cfg), theme, bbox, cfg) if show else []
    rendered = [compose_group(g, bbox, cfg) for g in groups]
    log.debug("composed %d groups, %d region dots", len(rendered), len(dots))
    return ComposedMap(
        viewbox=DEFAULT_VIEWBOX,
        bbox=cfg.bbox,
        region_dots=dots,
        groups=rendered,
        gradients=radial_gradients(groups),
        land=theme.land,
        ocean=theme.ocean,
        border=theme.border,
    )


def nodes_text(group: MarkerGroup) -> str:
    if not group.nodes:
        return "none"
    return ", ".join(n.label for n in group.nodes)


def compose_legend(
    groups: Iterable[MarkerGroup],
    selection: Optional[VisibilitySelection] = None,
    config: Optional[MapConfig] = None,
    theme: Optional[Theme] = None,
    *,
    show_regions: Optional[bool] = None,
    catalog: Optional[RegionCatalog] = None,
) -> Legend:
    """Legend for every group; ``visible`` reflects ``selection``."""
    cfg = config or DEFAULT_CONFIG
    theme = theme or resolve_theme(None, cfg)
    groups = list(groups)
    if selection is None:
        selection = VisibilitySelection.all_of(groups)
    entries = [
        LegendEntry(
            label=g.label,
            group_label=g.group_label,
            glyph=compose_marker(g.style, 0.0, 0.0, cfg, context="legend"),
            nodes_text=nodes_text(g),
            node_count=g.node_count,
            visible=is_visible(g, selection),
            interactive=g.group_label is not None,
        )
        for g in groups
    ]
    show = cfg.show_regions if show_regions is None else show_regions
    return Legend(
        entries=entries,
        total_nodes=sum(g.node_count for g in groups),
        region_count=(catalog or RegionCatalog(cfg)).count() if show else None,
        region_colour=region_marker_colour(theme),
        text_colour=region_text_colour(theme),
    )


__all__ = [
    "GLOW_SCALE",
    "GRADIENT_STOPS",
    "gradient_id",
    "layout_class",
    "opacity_values",
    "pulse_radius_values",
    "animations_for",
    "compose_marker",
    "radial_gradients",
    "compose_region_dots",
    "compose_group",
    "compose_map",
    "nodes_text",
    "compose_legend",
]
