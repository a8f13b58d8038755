import json

import pytest

from markermap import mount, render_map
from markermap.config import MapConfig
from markermap.visibility import ToggleNotification

GROUPS = [
    {"nodes": ["sjc", "fra"], "label": "Prod"},
    {"nodes": ["ams"], "label": "Staging", "style": "warning"},
    {"nodes": ["lhr"], "label": "Always", "group_label": None},
]


def _labels(view):
    return [g.label for g in view.map.groups]


def test_mount_renders_all_groups():
    view = mount(GROUPS).render()
    assert _labels(view) == ["Prod", "Staging", "Always"]
    assert view.visible_group_labels == ["Prod", "Staging"]
    assert len(view.legend.entries) == 3
    assert view.layout == "side_by_side"
    assert view.layout_class == "fly-map-layout-side-by-side"
    assert len(view.map.region_dots) == 35


def test_toggle_hides_group_but_keeps_legend():
    session = mount(GROUPS, on_toggle=True)
    note = session.toggle("Prod")
    assert note == ToggleNotification(True, "Prod", False)
    view = session.render()
    assert _labels(view) == ["Staging", "Always"]
    assert [e.visible for e in view.legend.entries] == [False, True, True]


def test_initially_none():
    view = mount(GROUPS, initially_visible="none").render()
    assert _labels(view) == ["Always"]


def test_config_defaults_apply():
    cfg = MapConfig(default_layout="stacked", show_regions=False, default_theme="dark")
    view = mount(GROUPS, config=cfg).render()
    assert view.layout_class == "fly-map-layout-stacked"
    assert view.map.region_dots == []
    assert view.legend.region_count is None
    assert view.map.land == "#0f172a"


def test_explicit_arguments_beat_config():
    cfg = MapConfig(default_layout="stacked", show_regions=False)
    view = mount(
        GROUPS,
        config=cfg,
        layout="side_by_side",
        show_regions=True,
        theme={"land": "#101010"},
        css_class="map",
        element_id="m1",
    ).render()
    assert view.layout_class == "fly-map-layout-side-by-side"
    assert view.map.region_dots
    assert view.map.land == "#101010"
    assert (view.css_class, view.element_id) == ("map", "m1")


def test_bad_layout_rejected():
    with pytest.raises(ValueError):
        mount(GROUPS, layout="grid")


def test_view_is_json_serialisable():
    view = render_map(GROUPS + [{"nodes": ["sjc"], "style": {"colour": "#ff0000", "glow": True}}])
    data = json.loads(json.dumps(view.to_dict()))
    assert data["map"]["gradients"][0]["id"] == "glow-gradient-ff0000"
    assert data["legend"]["entries"][0]["nodes_text"] == "San Jose, Frankfurt"
