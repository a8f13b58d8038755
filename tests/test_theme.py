from markermap.config import MapConfig
from markermap.theme import (
    BUILTIN_THEMES,
    Theme,
    region_marker_colour,
    region_text_colour,
    resolve_theme,
)


def test_builtin_by_name():
    assert resolve_theme("dark") == BUILTIN_THEMES["dark"]
    assert resolve_theme("High_Contrast").land == "#ffffff"


def test_default_is_light():
    assert resolve_theme() == BUILTIN_THEMES["light"]
    assert resolve_theme("no-such-theme") == BUILTIN_THEMES["light"]


def test_configured_default_theme():
    cfg = MapConfig(default_theme="warm")
    assert resolve_theme(None, cfg) == BUILTIN_THEMES["warm"]
    assert resolve_theme("missing", cfg) == BUILTIN_THEMES["warm"]


def test_unknown_configured_default_falls_back_to_light():
    cfg = MapConfig(default_theme="missing")
    assert resolve_theme(None, cfg) == BUILTIN_THEMES["light"]


def test_custom_theme_beats_builtin():
    cfg = MapConfig(custom_themes={"dark": {"land": "#000001"}})
    t = resolve_theme("dark", cfg)
    assert t.land == "#000001"
    assert t.ocean == BUILTIN_THEMES["light"].ocean


def test_inline_theme_wins():
    cfg = MapConfig(default_theme="dark")
    t = resolve_theme({"land": "#123456", "border": "#654321"}, cfg)
    assert (t.land, t.border) == ("#123456", "#654321")
    assert t.neutral_text == BUILTIN_THEMES["light"].neutral_text
    theme = Theme("a", "b", "c", "d", "e")
    assert resolve_theme(theme, cfg) is theme


def test_region_colours_for_css_variables():
    responsive = BUILTIN_THEMES["responsive"]
    assert region_marker_colour(responsive) == "var(--color-base-content, #6b7280)"
    assert region_text_colour(responsive) == "var(--color-base-content, #374151)"
    assert region_marker_colour(BUILTIN_THEMES["dark"]) == "#9ca3af"
