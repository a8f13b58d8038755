"""markermap top-level API.

``from markermap import mount`` is enough for most callers.
"""

from .api import MapSession, mount, render_map
from .config import MapConfig, load_map_config
from .groups import MarkerGroup, normalize_groups
from .styles import Style, normalize_style

__all__ = [
    "mount",
    "render_map",
    "MapSession",
    "normalize_groups",
    "normalize_style",
    "MarkerGroup",
    "Style",
    "MapConfig",
    "load_map_config",
]
