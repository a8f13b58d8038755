"""Process-level logging setup for the command line.

Library code only logs through :mod:`markermap.utils.logging`; this module is
what an application (or ``markermap`` CLI) calls to make that output visible.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

# MapConfig.log_level values; "none" still lets warnings through.
_LEVEL_MAP = {
    "none": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _normalize(level: Optional[str]) -> int:
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().lower(), logging.WARNING)


def level_from_cfg(cfg: Any) -> int:
    """Level named by ``cfg.log_level`` (attribute or mapping key)."""
    if cfg is None:
        return logging.WARNING
    raw = cfg.get("log_level") if isinstance(cfg, Mapping) else getattr(cfg, "log_level", None)
    return _normalize(raw)


def init_logging(level: int | str | None = None) -> None:
    """Attach a stderr handler to the root logger once and set levels.

    Repeated calls only change the level of the root and ``markermap`` loggers.
    """
    lvl = int(level) if isinstance(level, int) else _normalize(level)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(lvl)
    logging.getLogger("markermap").setLevel(lvl)


__all__ = ["level_from_cfg", "init_logging"]
