"""Matplotlib preview of composed maps."""

from .backend import setup_matplotlib_backend

# Select a backend before pyplot is imported below.
setup_matplotlib_backend()

from .draw import draw_map, mpl_colour, save_map_png  # noqa: E402

__all__ = ["draw_map", "save_map_png", "mpl_colour", "setup_matplotlib_backend"]
