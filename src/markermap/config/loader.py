"""Map configuration loader."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from markermap.utils.dict_merge import deep_update
from .schema import MapConfig

__all__ = ["load_map_config", "config_from_mapping"]


def _read_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise TypeError(f"Top-level YAML at {path} must be a mapping")
        return data


def _dotted(loc) -> str:
    return ".".join(str(part) for part in loc)


def config_from_mapping(data: Mapping[str, Any]) -> MapConfig:
    """Validate a plain mapping into :class:`MapConfig`.

    Pydantic errors are re-raised as ``ValueError`` whose message names the
    offending dotted key (``custom_regions.xyz.coordinates``).
    """
    try:
        return MapConfig.model_validate(dict(data))
    except ValidationError as exc:
        msgs = [f"{_dotted(err['loc'])}: {err['msg']}" for err in exc.errors()]
        raise ValueError("invalid map config: " + "; ".join(msgs)) from exc


def load_map_config(
    path: str | Path | None = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> MapConfig:
    """Load ``path`` (YAML), merge ``overrides`` and return a frozen config.

    A missing file yields the defaults.
    """
    cfg: Dict[str, Any] = _read_yaml(path) if path is not None else {}
    if overrides:
        if not isinstance(overrides, Mapping):
            raise TypeError("overrides must be a mapping")
        cfg = deep_update(cfg, overrides)
    return config_from_mapping(cfg)
