import pytest

from markermap.compose import (
    compose_legend,
    compose_map,
    compose_marker,
    gradient_id,
    layout_class,
    radial_gradients,
)
from markermap.config import MapConfig
from markermap.groups import normalize_groups
from markermap.styles import normalize_style
from markermap.theme import BUILTIN_THEMES
from markermap.visibility import VisibilitySelection


def test_static_marker():
    m = compose_marker(normalize_style({"colour": "#ff0000"}), 1, 2)
    assert (m.x, m.y, m.radius) == (1.0, 2.0, 4.0)
    assert m.fill == "#ff0000"
    assert m.opacity == 1.0
    assert m.css_class == "marker-group static"
    assert m.animations == []
    assert m.glow is False and m.colour == "#ff0000"


def test_pulse_marker_on_map():
    m = compose_marker(normalize_style("danger"), 0, 0)
    r, op = m.animations
    assert (r.attribute, r.values, r.dur, r.repeat_count) == ("r", "4;7;4", "2s", "indefinite")
    assert (op.attribute, op.values, op.dur) == ("opacity", "0.5;1;0.5", "2s")
    assert m.css_class == "marker-group animated"
    assert m.opacity == 1.0


def test_pulse_marker_in_legend():
    m = compose_marker(normalize_style("danger"), 0, 0, context="legend")
    assert m.radius == pytest.approx(2.8)
    assert m.animations[0].values == "2.8;4;2.8"


def test_fade_marker_uses_fade_duration():
    m = compose_marker(normalize_style({"colour": "#000000", "animation": "fade"}), 0, 0)
    (op,) = m.animations
    assert (op.attribute, op.dur) == ("opacity", "3s")


def test_radius_override_and_config_timing():
    cfg = MapConfig(pulse_duration="1s", pulse_size_delta=5, animation_opacity_range=(0.2, 0.9))
    m = compose_marker(normalize_style("danger"), 0, 0, cfg, radius=6)
    assert m.radius == 6.0
    assert m.animations[0].values == "6;11;6"
    assert m.animations[0].dur == "1s"
    assert m.animations[1].values == "0.2;0.9;0.2"
    assert m.opacity == 0.9


def test_static_marker_uses_marker_opacity():
    cfg = MapConfig(marker_opacity=0.8)
    assert compose_marker(normalize_style("primary"), 0, 0, cfg).opacity == 0.8


def test_glow_marker_fills_with_gradient():
    m = compose_marker(normalize_style({"colour": "#ff0000", "glow": True}), 0, 0)
    assert m.fill == "url(#glow-gradient-ff0000)"
    assert m.radius == pytest.approx(8.8)
    assert m.colour == "#ff0000"
    assert m.glow is True


def test_glow_marker_in_legend_is_scaled():
    m = compose_marker(normalize_style({"colour": "#ff0000", "glow": True}), 0, 0, context="legend")
    assert m.radius == pytest.approx(4 * 2.2 * 0.7)
    assert m.fill.startswith("url(#glow-gradient-")


def test_glow_fill_matches_composed_gradient():
    groups = normalize_groups([{"nodes": ["sjc"], "style": {"colour": "#00ff00", "glow": True}}])
    cmap = compose_map(groups)
    (grad,) = cmap.gradients
    assert cmap.groups[0].markers[0].fill == f"url(#{grad.id})"


def test_gradients_deduplicated_by_colour():
    groups = normalize_groups(
        [
            {"label": "a", "style": {"colour": "#ff0000", "glow": True}},
            {"label": "b", "style": {"colour": "#ff0000", "glow": True, "size": 8}},
            {"label": "c", "style": {"colour": "#00ff00", "glow": True}},
            {"label": "d", "style": {"colour": "#0000ff"}},
        ]
    )
    grads = radial_gradients(groups)
    assert [g.id for g in grads] == ["glow-gradient-ff0000", "glow-gradient-00ff00"]
    assert [(s.offset, s.opacity) for s in grads[0].stops] == [
        ("60%", 1.0),
        ("80%", 0.6),
        ("100%", 0.2),
    ]


def test_gradient_id_is_identifier_safe():
    assert gradient_id("#ff0000") == "glow-gradient-ff0000"
    assert gradient_id("var(--brand)") == "glow-gradient-c-var_28_--brand_29_"


@pytest.mark.parametrize(
    "a, b",
    [
        ("rgb(1,23,4)", "rgb(12,3,4)"),
        ("#ff0000", "ff0000"),
        ("a_28_", "a("),
    ],
)
def test_gradient_ids_distinct_for_distinct_colours(a, b):
    assert gradient_id(a) != gradient_id(b)


def test_functional_colours_get_separate_gradients():
    groups = normalize_groups(
        [
            {"nodes": ["sjc"], "style": {"colour": "rgb(1,23,4)", "glow": True}},
            {"nodes": ["fra"], "style": {"colour": "rgb(12,3,4)", "glow": True}},
        ]
    )
    cmap = compose_map(groups)
    assert [g.colour for g in cmap.gradients] == ["rgb(1,23,4)", "rgb(12,3,4)"]
    fills = [grp.markers[0].fill for grp in cmap.groups]
    assert len(set(fills)) == 2
    assert fills == [f"url(#{g.id})" for g in cmap.gradients]


def test_compose_map_projects_nodes(catalog, config):
    groups = normalize_groups([{"nodes": ["sjc", "fra"], "label": "Prod"}], config)
    cmap = compose_map(groups, config, BUILTIN_THEMES["light"])
    (g,) = cmap.groups
    assert [m.label for m in g.markers] == ["San Jose", "Frankfurt"]
    assert g.markers[0].x == pytest.approx((-122 + 180) / 360 * 800)
    assert len(cmap.region_dots) == catalog.count()
    assert cmap.region_dots[0].colour == "#6b7280"
    assert cmap.region_dots[0].radius == 2.0
    assert cmap.viewbox == "0 10 800 320"
    assert cmap.land == "#888888"


def test_compose_map_hides_regions():
    assert compose_map([], show_regions=False).region_dots == []
    assert compose_map([], MapConfig(show_regions=False)).region_dots == []


def test_responsive_theme_region_colour():
    cmap = compose_map([], theme=BUILTIN_THEMES["responsive"])
    assert cmap.region_dots[0].colour == "var(--color-base-content, #6b7280)"


def test_legend_entries():
    groups = normalize_groups(
        [
            {"nodes": ["sjc", "fra"], "label": "Prod"},
            {"nodes": ["zzz"], "label": "Broken"},
            {"nodes": ["yyz"], "label": "Machines", "machine_count": 5},
            {"nodes": ["ams"], "label": "Pinned", "group_label": None},
        ]
    )
    sel = VisibilitySelection(frozenset({"Prod"}))
    legend = compose_legend(groups, sel)
    prod, broken, machines, pinned = legend.entries
    assert prod.nodes_text == "San Jose, Frankfurt"
    assert broken.nodes_text == "none"
    assert (prod.visible, broken.visible, machines.visible, pinned.visible) == (
        True,
        False,
        False,
        True,
    )
    assert pinned.interactive is False
    assert legend.total_nodes == 2 + 0 + 5 + 1
    assert legend.region_count == 35
    assert prod.glyph.radius == pytest.approx(4 * 0.7)


def test_legend_without_regions():
    assert compose_legend([], show_regions=False).region_count is None


def test_layout_class():
    assert layout_class("side_by_side") == "fly-map-layout-side-by-side"
    assert layout_class("stacked") == "fly-map-layout-stacked"
