import pytest

from markermap.config import MapConfig, load_map_config


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_map_config(tmp_path / "missing.yaml")
    assert cfg == MapConfig()
    assert cfg.default_theme == "light"
    assert cfg.default_layout == "side_by_side"
    assert cfg.animation_opacity_range == (0.5, 1.0)
    assert cfg.bbox == (0.0, 0.0, 800.0, 391.0)


def test_no_path_gives_defaults():
    assert load_map_config() == MapConfig()


def test_yaml_values_are_read(tmp_path):
    p = tmp_path / "map.yaml"
    p.write_text(
        "custom_regions:\n"
        "  dev: {name: Dev, coordinates: [47.6, -122.3]}\n"
        "pulse_duration: 1s\n"
        "default_theme: dark\n",
        encoding="utf-8",
    )
    cfg = load_map_config(p)
    assert cfg.custom_regions["dev"].coordinates == (47.6, -122.3)
    assert cfg.pulse_duration == "1s"
    assert cfg.default_theme == "dark"


def test_overrides_deep_merge(tmp_path):
    p = tmp_path / "map.yaml"
    p.write_text("custom_regions:\n  a: {coordinates: [1, 2]}\nmarker_opacity: 0.5\n")
    cfg = load_map_config(p, overrides={"custom_regions": {"b": {"coordinates": [3, 4]}}})
    assert set(cfg.custom_regions) == {"a", "b"}
    assert cfg.marker_opacity == 0.5


def test_non_mapping_top_level(tmp_path):
    p = tmp_path / "map.yaml"
    p.write_text("- just\n- a list\n")
    with pytest.raises(TypeError):
        load_map_config(p)


def test_validation_error_names_key():
    with pytest.raises(ValueError) as exc:
        load_map_config(overrides={"marker_opacity": 2.0})
    assert "marker_opacity" in str(exc.value)

    with pytest.raises(ValueError) as exc:
        load_map_config(overrides={"custom_regions": {"x": {"coordinates": ["a", 1]}}})
    assert "custom_regions.x.coordinates" in str(exc.value)


def test_unknown_keys_rejected():
    with pytest.raises(ValueError) as exc:
        load_map_config(overrides={"typo": 1})
    assert "typo" in str(exc.value)


@pytest.mark.parametrize(
    "overrides",
    [
        {"animation_opacity_range": [0.9, 0.1]},
        {"bbox": [0, 0, 0, 10]},
        {"preset_overrides": {"brand": {"size": 1}}},
        {"default_layout": "grid"},
        {"pulse_duration": "  "},
    ],
)
def test_invalid_values(overrides):
    with pytest.raises(ValueError):
        load_map_config(overrides=overrides)


def test_config_is_frozen():
    cfg = MapConfig()
    with pytest.raises(ValueError):
        cfg.marker_opacity = 0.3
