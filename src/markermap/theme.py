"""Map themes: land, ocean, border and neutral marker/text colours."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .config.schema import DEFAULT_CONFIG, MapConfig, ThemeColours
from .utils.logging import get_logger

log = get_logger("theme")

DEFAULT_THEME_NAME = "light"


@dataclass(frozen=True)
class Theme:
    land: str
    ocean: str
    border: str
    neutral_marker: str
    neutral_text: str


BUILTIN_THEMES = MappingProxyType(
    {
        "light": Theme("#888888", "#aaaaaa", "#0f172a", "#6b7280", "#374151"),
        "dark": Theme("#0f172a", "#aaaaaa", "#334155", "#9ca3af", "#d1d5db"),
        "minimal": Theme("transparent", "transparent", "#b5b7bb", "#aba2a0", "#374151"),
        "cool": Theme("#f1f5f9", "#aaaaaa", "#64748b", "#64748b", "#334155"),
        "warm": Theme("#fef7ed", "#aaaaaa", "#c2410c", "#92400e", "#451a03"),
        "high_contrast": Theme("#ffffff", "#aaaaaa", "#000000", "#404040", "#000000"),
        "responsive": Theme(
            "oklch(var(--color-base-100) / 1)",
            "oklch(var(--color-base-200) / 1)",
            "oklch(var(--color-base-300) / 1)",
            "oklch(var(--color-base-content) / 0.6)",
            "oklch(var(--color-base-content) / 0.8)",
        ),
    }
)

_THEME_FIELDS = tuple(f.name for f in fields(Theme))


def _layer(base: Theme, partial: Mapping[str, Any]) -> Theme:
    changes = {k: str(v) for k, v in partial.items() if k in _THEME_FIELDS and v is not None}
    return replace(base, **changes)


def _by_name(name: str, cfg: MapConfig) -> Optional[Theme]:
    key = name.strip().lower()
    custom = cfg.custom_themes.get(key)
    if custom is not None:
        return _layer(BUILTIN_THEMES[DEFAULT_THEME_NAME], custom.model_dump(exclude_none=True))
    return BUILTIN_THEMES.get(key)


def default_theme(config: Optional[MapConfig] = None) -> Theme:
    cfg = config or DEFAULT_CONFIG
    theme = _by_name(cfg.default_theme, cfg)
    if theme is None:
        log.debug("default theme %r not found; using %s", cfg.default_theme, DEFAULT_THEME_NAME)
        return BUILTIN_THEMES[DEFAULT_THEME_NAME]
    return theme


def resolve_theme(theme: Any = None, config: Optional[MapConfig] = None) -> Theme:
    """Resolve a theme argument.

    Inline themes (a :class:`Theme`, a mapping or :class:`ThemeColours`) win;
    missing inline fields come from the compiled default.  Names resolve to a
    registered custom theme, then a built-in theme.  Anything else, including
    unknown names, falls through to ``config.default_theme`` and finally
    ``light``.
    """
    cfg = config or DEFAULT_CONFIG
    if isinstance(theme, Theme):
        return theme
    if isinstance(theme, ThemeColours):
        theme = theme.model_dump(exclude_none=True)
    if isinstance(theme, Mapping):
        return _layer(BUILTIN_THEMES[DEFAULT_THEME_NAME], theme)
    if isinstance(theme, str) and theme.strip():
        hit = _by_name(theme, cfg)
        if hit is not None:
            return hit
        log.debug("theme %r not found; using configured default", theme)
    return default_theme(cfg)


def region_marker_colour(theme: Theme) -> str:
    """Colour for region dots; CSS ``oklch`` values get a plain fallback."""
    if theme.neutral_marker.startswith("oklch"):
        return "var(--color-base-content, #6b7280)"
    return theme.neutral_marker


def region_text_colour(theme: Theme) -> str:
    if theme.neutral_text.startswith("oklch"):
        return "var(--color-base-content, #374151)"
    return theme.neutral_text


__all__ = [
    "Theme",
    "BUILTIN_THEMES",
    "DEFAULT_THEME_NAME",
    "default_theme",
    "resolve_theme",
    "region_marker_colour",
    "region_text_colour",
]
