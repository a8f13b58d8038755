"""Pydantic models for the map configuration store.

A :class:`MapConfig` is built once (usually by
:func:`markermap.config.loader.load_map_config`) and handed to every pipeline
entry point.  Instances are frozen; the pipeline never mutates them.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from ..types import Animation, BBoxTuple, LatLon, Preset


def _check_latlon(v: LatLon) -> LatLon:
    if len(v) != 2 or any(not math.isfinite(c) for c in v):
        raise ValueError("coordinates must be finite (lat, lon)")
    return v


class RegionEntry(BaseModel):
    name: str | None = None
    coordinates: LatLon

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("coordinates")
    @classmethod
    def _check_coordinates(cls, v: LatLon) -> LatLon:
        return _check_latlon(v)


class ThemeColours(BaseModel):
    """Partial theme; unset fields are filled from the default theme."""

    land: str | None = None
    ocean: str | None = None
    border: str | None = None
    neutral_marker: str | None = None
    neutral_text: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class StyleEntry(BaseModel):
    """Style attributes for a registered preset or a preset override."""

    colour: str | None = Field(default=None, validation_alias=AliasChoices("colour", "color"))
    size: float | None = Field(default=None, gt=0)
    animation: Animation | None = None
    glow: bool | None = None

    model_config = ConfigDict(extra="allow", frozen=True)

    def as_style_map(self) -> Dict[str, Any]:
        """Return only the attributes that were actually set."""
        out: Dict[str, Any] = {k: v for k, v in self.model_dump(exclude_none=True).items()}
        if isinstance(out.get("animation"), Animation):
            out["animation"] = out["animation"].value
        return out


class MapConfig(BaseModel):
    # overlays
    custom_regions: Dict[str, RegionEntry] = Field(default_factory=dict)
    custom_themes: Dict[str, ThemeColours] = Field(default_factory=dict)
    custom_presets: Dict[str, StyleEntry] = Field(default_factory=dict)
    preset_overrides: Dict[str, StyleEntry] = Field(default_factory=dict)

    # defaults
    default_theme: str = "light"
    default_layout: Literal["stacked", "side_by_side"] = "side_by_side"
    show_regions: bool = True
    default_marker_size: float = Field(default=4.0, gt=0)

    # marker appearance
    marker_opacity: float = Field(default=1.0, ge=0, le=1)
    hover_opacity: float = Field(default=1.0, ge=0, le=1)
    animation_opacity_range: tuple[float, float] = (0.5, 1.0)
    pulse_duration: str = "2s"
    fade_duration: str = "3s"
    pulse_size_delta: float = Field(default=3.0, ge=0)
    legend_size_ratio: float = Field(default=0.7, gt=0)
    region_marker_radius: float = Field(default=2.0, gt=0)

    # plotting box (min_x, min_y, max_x, max_y)
    bbox: BBoxTuple = (0.0, 0.0, 800.0, 391.0)

    log_level: Literal["none", "info", "debug"] = "none"

    model_config = ConfigDict(extra="forbid", frozen=True)

    # --- validators -----------------------------------------------------
    @field_validator("custom_presets", "custom_themes")
    @classmethod
    def _lower_keys(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        return {str(k).strip().lower(): entry for k, entry in v.items()}

    @field_validator("preset_overrides")
    @classmethod
    def _known_presets(cls, v: Dict[str, StyleEntry]) -> Dict[str, StyleEntry]:
        known = {p.value for p in Preset}
        out: Dict[str, StyleEntry] = {}
        for k, entry in v.items():
            key = str(k).strip().lower()
            if key not in known:
                raise ValueError(f"preset_overrides.{k}: not a built-in preset {sorted(known)}")
            out[key] = entry
        return out

    @field_validator("animation_opacity_range")
    @classmethod
    def _check_opacity_range(cls, v: tuple[float, float]) -> tuple[float, float]:
        lo, hi = v
        if not (0.0 <= lo <= hi <= 1.0):
            raise ValueError("animation_opacity_range must satisfy 0 <= min <= max <= 1")
        return v

    @field_validator("pulse_duration", "fade_duration")
    @classmethod
    def _check_duration(cls, v: str) -> str:
        s = str(v).strip()
        if not s:
            raise ValueError("duration must be non-empty (e.g. '2s')")
        return s

    @model_validator(mode="after")
    def _check_bbox(self):
        x0, y0, x1, y1 = self.bbox
        if any(not math.isfinite(c) for c in self.bbox) or x1 <= x0 or y1 <= y0:
            raise ValueError("bbox must be finite (min_x, min_y, max_x, max_y) with max > min")
        return self


DEFAULT_CONFIG = MapConfig()

__all__ = ["RegionEntry", "ThemeColours", "StyleEntry", "MapConfig", "DEFAULT_CONFIG"]
