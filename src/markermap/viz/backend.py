from __future__ import annotations

import importlib
import os
import sys
from typing import Optional


def _has_display() -> bool:
    if sys.platform.startswith("linux"):
        return bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))
    return True


def _tk_available() -> bool:
    try:
        import tkinter  # noqa: F401
    except ImportError:
        return False
    return True


def detect_backend(prefer: str = "Agg") -> str:
    """Backend to use: ``MPLBACKEND`` if set, else ``prefer`` when usable, else Agg."""
    env = os.environ.get("MPLBACKEND")
    if env:
        return env
    if prefer.lower() in ("tkagg", "tk") and not (_tk_available() and _has_display()):
        return "Agg"
    return prefer


def setup_matplotlib_backend(prefer: str = "Agg", force: Optional[str] = None) -> str:
    """Select the matplotlib backend before pyplot is imported.

    Raster previews only need Agg; pass ``prefer="TkAgg"`` for a window.  Once
    pyplot is loaded the current backend is kept and returned.
    """
    import matplotlib

    if "matplotlib.pyplot" in sys.modules:
        return matplotlib.get_backend()

    backend = force or detect_backend(prefer)
    os.environ.setdefault("MPLBACKEND", backend)
    try:
        matplotlib.use(force or os.environ["MPLBACKEND"], force=True)
    except (ImportError, ValueError):
        matplotlib.use("Agg", force=True)
    importlib.import_module("matplotlib.pyplot")
    return matplotlib.get_backend()


__all__ = ["detect_backend", "setup_matplotlib_backend"]
