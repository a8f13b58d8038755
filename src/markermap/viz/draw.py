"""Raster preview of a composed :class:`~markermap.contracts.render.MapView`.

Markers are drawn as circles in map units on a y-down axis cropped to the map
viewbox.  There is no landmass artwork; the ocean colour fills the frame.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.colors import to_rgba
from matplotlib.lines import Line2D
from matplotlib.patches import Circle

from ..compose import GLOW_SCALE
from ..contracts.render import MapView, MarkerRender
from ..styles import NEUTRAL_GRAY
from ..utils.logging import get_logger

log = get_logger("viz")

HALO_ALPHA = 0.35


def mpl_colour(colour: Optional[str]):
    """RGBA for ``colour``; CSS-only values (``var(...)``, ``oklch(...)``) become gray."""
    if colour is None:
        return to_rgba(NEUTRAL_GRAY)
    if colour == "transparent":
        return to_rgba("none")
    try:
        return to_rgba(colour)
    except ValueError:
        log.debug("matplotlib cannot draw colour %r; using gray", colour)
        return to_rgba(NEUTRAL_GRAY)


def _viewbox(view: MapView):
    x, y, w, h = (float(v) for v in view.map.viewbox.split())
    return x, y, w, h


def _draw_marker(ax: plt.Axes, m: MarkerRender) -> None:
    rgba = mpl_colour(m.colour)
    radius = m.radius
    # no radial gradients here: a faint disc plus a solid centre
    if m.glow:
        ax.add_patch(
            Circle((m.x, m.y), m.radius, facecolor=rgba, alpha=HALO_ALPHA * m.opacity, lw=0, zorder=2)
        )
        radius = m.radius / GLOW_SCALE
    ax.add_patch(Circle((m.x, m.y), radius, facecolor=rgba, alpha=m.opacity, lw=0, zorder=3))


def draw_map(view: MapView, ax: Optional[plt.Axes] = None, *, legend: bool = True) -> plt.Axes:
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 3.2))
    x, y, w, h = _viewbox(view)
    ax.clear()
    ax.set_aspect("equal")
    ax.set_xlim(x, x + w)
    ax.set_ylim(y + h, y)
    ax.set_facecolor(mpl_colour(view.map.ocean))
    ax.set_xticks([])
    ax.set_yticks([])

    for dot in view.map.region_dots:
        ax.add_patch(Circle((dot.x, dot.y), dot.radius, facecolor=mpl_colour(dot.colour), lw=0, zorder=1))

    for group in view.map.groups:
        for m in group.markers:
            _draw_marker(ax, m)

    if legend and view.legend.entries:
        handles = [
            Line2D(
                [],
                [],
                marker="o",
                linestyle="",
                markerfacecolor=mpl_colour(e.glyph.colour),
                markeredgewidth=0,
                alpha=1.0 if e.visible else 0.3,
                label=f"{e.label} ({e.node_count})",
            )
            for e in view.legend.entries
        ]
        ax.legend(handles=handles, loc="lower left", fontsize="small", frameon=False)
    return ax


def save_map_png(view: MapView, path, *, dpi: int = 100) -> Path:
    """Render ``view`` to a PNG file and return its path."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots(figsize=(8, 3.2))
    try:
        draw_map(view, ax)
        fig.savefig(p, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    log.info("wrote %s", p)
    return p


__all__ = ["mpl_colour", "draw_map", "save_map_png"]
