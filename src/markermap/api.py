"""Render entry point.

``mount`` normalises the caller's groups once and returns a
:class:`MapSession`.  The session owns the visibility selection; ``render``
recomposes the map for whatever is visible at the time.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

from .compose import compose_legend, compose_map, layout_class
from .config.schema import DEFAULT_CONFIG, MapConfig
from .contracts.render import MapView
from .groups import normalize_groups
from .regions import RegionCatalog
from .theme import Theme, resolve_theme
from .types import Layout, Preset
from .utils.logging import get_logger
from .visibility import InitiallyVisible, VisibilitySession

log = get_logger("api")


class MapSession(VisibilitySession):
    """One mounted map: normalised groups, theme, options and selection."""

    def __init__(
        self,
        groups,
        *,
        config: MapConfig,
        theme: Theme,
        show_regions: bool,
        layout: str,
        initially_visible: InitiallyVisible = "all",
        css_class: Optional[str] = None,
        element_id: Optional[str] = None,
        on_toggle: bool = False,
    ):
        super().__init__(groups, initially_visible, on_toggle=on_toggle)
        self.config = config
        self.theme = theme
        self.show_regions = show_regions
        self.layout = layout
        self.css_class = css_class
        self.element_id = element_id
        self.catalog = RegionCatalog(config)

    def render(self) -> MapView:
        """Compose the current state; queued toggles are not applied here."""
        shown = self.visible_groups()
        composed = compose_map(
            shown,
            self.config,
            self.theme,
            show_regions=self.show_regions,
            catalog=self.catalog,
        )
        legend = compose_legend(
            self.groups,
            self.selection,
            self.config,
            self.theme,
            show_regions=self.show_regions,
            catalog=self.catalog,
        )
        return MapView(
            map=composed,
            legend=legend,
            layout=self.layout,
            layout_class=layout_class(self.layout),
            css_class=self.css_class,
            element_id=self.element_id,
            visible_group_labels=[g.group_label for g in shown if g.group_label is not None],
        )


def mount(
    marker_groups: Iterable[Any],
    *,
    config: Optional[MapConfig] = None,
    theme: Any = None,
    show_regions: Optional[bool] = None,
    layout: Optional[Layout] = None,
    initially_visible: InitiallyVisible = "all",
    css_class: Optional[str] = None,
    element_id: Optional[str] = None,
    on_toggle: bool = False,
    fallback_preset: Preset = Preset.OPERATIONAL,
) -> MapSession:
    """Normalise ``marker_groups`` and open a session for them.

    ``None`` for ``show_regions``, ``layout`` or ``theme`` means the configured
    default.
    """
    cfg = config or DEFAULT_CONFIG
    groups = normalize_groups(marker_groups, cfg, fallback_preset=fallback_preset)
    layout = layout or cfg.default_layout
    if layout not in ("stacked", "side_by_side"):
        raise ValueError(f"layout must be 'stacked' or 'side_by_side', got {layout!r}")
    log.info("mounted %d marker groups", len(groups))
    return MapSession(
        groups,
        config=cfg,
        theme=resolve_theme(theme, cfg),
        show_regions=cfg.show_regions if show_regions is None else bool(show_regions),
        layout=layout,
        initially_visible=initially_visible,
        css_class=css_class,
        element_id=element_id,
        on_toggle=on_toggle,
    )


def render_map(marker_groups: Iterable[Any], **kwargs) -> MapView:
    """One-shot ``mount(...).render()``."""
    return mount(marker_groups, **kwargs).render()


__all__ = ["MapSession", "mount", "render_map"]
