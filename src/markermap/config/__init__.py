"""Configuration loading utilities."""
from .loader import config_from_mapping, load_map_config
from .schema import DEFAULT_CONFIG, MapConfig, RegionEntry, StyleEntry, ThemeColours

__all__ = [
    "load_map_config",
    "config_from_mapping",
    "MapConfig",
    "DEFAULT_CONFIG",
    "RegionEntry",
    "StyleEntry",
    "ThemeColours",
]
