"""Style resolution.

:func:`normalize_style` is total: every input yields a usable :class:`Style`.
Preset identifiers resolve through, in order, user presets registered in
``MapConfig.custom_presets``, ``MapConfig.preset_overrides`` layered on the
compiled preset, the compiled preset itself, and finally ``fallback_preset``.
"""
from __future__ import annotations

import numbers
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from .config.schema import DEFAULT_CONFIG, MapConfig
from .types import PRESET_ALIASES, Animation, Preset
from .utils.logging import get_logger

log = get_logger("styles")

NEUTRAL_GRAY = "#6b7280"

# Twelve maximally distinguishable colours for groups without a style.
CYCLE_COLOURS = (
    "#2563eb",  # blue
    "#16a34a",  # green
    "#dc2626",  # red
    "#9333ea",  # purple
    "#ea580c",  # orange
    "#0891b2",  # cyan
    "#ca8a04",  # yellow
    "#db2777",  # pink
    "#0d9488",  # teal
    "#65a30d",  # lime
    "#d97706",  # amber
    "#4338ca",  # indigo
)

NAMED_COLOURS = MappingProxyType(
    {
        "blue": "#3b82f6",
        "green": "#10b981",
        "red": "#ef4444",
        "yellow": "#eab308",
        "amber": "#f59e0b",
        "orange": "#f97316",
        "purple": "#a855f7",
        "violet": "#8b5cf6",
        "indigo": "#6366f1",
        "pink": "#ec4899",
        "teal": "#14b8a6",
        "cyan": "#06b6d4",
        "sky": "#0ea5e9",
        "lime": "#84cc16",
        "emerald": "#10b981",
        "rose": "#f43f5e",
        "gray": NEUTRAL_GRAY,
        "grey": NEUTRAL_GRAY,
        "slate": "#64748b",
        "black": "#000000",
        "white": "#ffffff",
    }
)

_CORE_FIELDS = ("colour", "color", "size", "animation", "glow")


@dataclass(frozen=True)
class Style:
    colour: str
    size: float = 4.0
    animation: Animation = Animation.NONE
    glow: bool = False
    source: str = "custom"
    # not hashed; equality still compares extras
    extras: Dict[str, Any] = field(default_factory=dict, hash=False)

    def as_dict(self) -> Dict[str, Any]:
        d = {
            "colour": self.colour,
            "size": self.size,
            "animation": self.animation.value,
            "glow": self.glow,
        }
        d.update(self.extras)
        return d


def _preset(colour: str, animation: Animation = Animation.NONE) -> Style:
    return Style(colour=colour, size=4.0, animation=animation, glow=False)


BUILTIN_PRESETS = MappingProxyType(
    {
        Preset.OPERATIONAL: _preset("#10b981"),
        Preset.WARNING: _preset("#f59e0b"),
        Preset.DANGER: _preset("#ef4444", Animation.PULSE),
        Preset.INACTIVE: _preset(NEUTRAL_GRAY),
        Preset.PRIMARY: _preset("#3b82f6"),
        Preset.SECONDARY: _preset("#14b8a6"),
        Preset.INFO: _preset("#0ea5e9"),
    }
)


# ---------------------------------------------------------------------------
# attribute coercion
# ---------------------------------------------------------------------------


def resolve_colour(value: Any) -> str:
    """Colour string for a style; named colours map through :data:`NAMED_COLOURS`.

    Hex, ``rgb(...)``, ``var(--x)``, ``oklch(...)`` and similar values are
    kept verbatim.  Missing values and unknown bare names become gray.
    """
    if isinstance(value, str):
        s = value.strip()
        if s.startswith("#") or "(" in s:
            return s
        hit = NAMED_COLOURS.get(s.lower())
        if hit is not None:
            return hit
    log.debug("colour %r not recognised; using %s", value, NEUTRAL_GRAY)
    return NEUTRAL_GRAY


def _animation(value: Any) -> Animation:
    if isinstance(value, Animation):
        return value
    try:
        return Animation(str(value).strip().lower())
    except ValueError:
        log.debug("animation %r not recognised; using none", value)
        return Animation.NONE


def _size(value: Any, default: float) -> float:
    if isinstance(value, numbers.Real) and not isinstance(value, bool) and value > 0:
        return float(value)
    return default


def _glow(value: Any) -> bool:
    """Only a real ``True`` turns glow on (``"yes"`` and ``1`` do not)."""
    return value is True


def _apply_opts(style: Style, opts: Mapping[str, Any]) -> Style:
    """Layer caller options (size/animation/glow/colour plus extras) on ``style``."""
    if not opts:
        return style
    changes: Dict[str, Any] = {}
    colour = opts.get("colour", opts.get("color"))
    if colour is not None:
        changes["colour"] = resolve_colour(colour)
    if "size" in opts:
        changes["size"] = _size(opts["size"], style.size)
    if "animation" in opts:
        changes["animation"] = _animation(opts["animation"])
    if "glow" in opts:
        changes["glow"] = _glow(opts["glow"])
    extras = {k: v for k, v in opts.items() if k not in _CORE_FIELDS}
    if extras:
        changes["extras"] = {**style.extras, **extras}
    return replace(style, **changes)


# ---------------------------------------------------------------------------
# constructors
# ---------------------------------------------------------------------------


def custom(colour: Any, config: Optional[MapConfig] = None, **opts) -> Style:
    """Style from an explicit colour, defaulting size from the config."""
    cfg = config or DEFAULT_CONFIG
    base = Style(colour=resolve_colour(colour), size=cfg.default_marker_size)
    return _apply_opts(base, opts)


def colours() -> List[str]:
    return list(CYCLE_COLOURS)


def cycle(index: int, config: Optional[MapConfig] = None, **opts) -> Style:
    """Palette colour ``index mod 12``; ``cycle(i)`` and ``cycle(i + 12)`` agree."""
    cfg = config or DEFAULT_CONFIG
    i = int(index) % len(CYCLE_COLOURS)
    base = Style(colour=CYCLE_COLOURS[i], size=cfg.default_marker_size, source=f"cycle:{i}")
    return _apply_opts(base, opts)


def named_colours(name: str, config: Optional[MapConfig] = None, **opts) -> Style:
    cfg = config or DEFAULT_CONFIG
    base = Style(colour=resolve_colour(name), size=cfg.default_marker_size, source=f"named:{name}")
    return _apply_opts(base, opts)


def from_mapping(raw: Mapping[str, Any], config: Optional[MapConfig] = None) -> Style:
    """Explicit attribute mapping -> Style; extra keys are kept in ``extras``."""
    cfg = config or DEFAULT_CONFIG
    colour = raw.get("colour", raw.get("color"))
    return Style(
        colour=resolve_colour(colour),
        size=_size(raw.get("size"), cfg.default_marker_size),
        animation=_animation(raw.get("animation", Animation.NONE)),
        glow=_glow(raw.get("glow")),
        source="custom",
        extras={k: v for k, v in raw.items() if k not in _CORE_FIELDS},
    )


# ---------------------------------------------------------------------------
# presets
# ---------------------------------------------------------------------------


def _preset_key(name: Any) -> Optional[str]:
    if isinstance(name, Preset):
        return name.value
    if isinstance(name, str) and name.strip():
        return name.strip().lower()
    return None


def _builtin(key: str) -> Optional[Preset]:
    try:
        return Preset(key)
    except ValueError:
        return PRESET_ALIASES.get(key)


def is_known_preset(name: Any, config: Optional[MapConfig] = None) -> bool:
    """True when ``name`` resolves without falling back."""
    cfg = config or DEFAULT_CONFIG
    key = _preset_key(name)
    return key is not None and (key in cfg.custom_presets or _builtin(key) is not None)


def _compiled(preset: Preset, cfg: MapConfig) -> Style:
    style = replace(BUILTIN_PRESETS[preset], source=f"preset:{preset.value}")
    override = cfg.preset_overrides.get(preset.value)
    if override is not None:
        style = _apply_opts(style, override.as_style_map())
    return style


def resolve_preset(
    name: Any,
    config: Optional[MapConfig] = None,
    *,
    fallback_preset: Preset = Preset.OPERATIONAL,
    **opts,
) -> Style:
    cfg = config or DEFAULT_CONFIG
    key = _preset_key(name)

    if key is not None and key in cfg.custom_presets:
        style = from_mapping(cfg.custom_presets[key].as_style_map(), cfg)
        return _apply_opts(replace(style, source=f"preset:{key}"), opts)

    builtin = _builtin(key) if key is not None else None
    if builtin is not None:
        return _apply_opts(_compiled(builtin, cfg), opts)

    fallback = Preset(fallback_preset)
    log.warning("unknown style preset %r; falling back to %r", name, fallback.value)
    return _apply_opts(replace(_compiled(fallback, cfg), source="fallback"), opts)


def normalize_style(
    raw: Any,
    config: Optional[MapConfig] = None,
    *,
    fallback_preset: Preset = Preset.OPERATIONAL,
) -> Style:
    """Resolve any style input to a :class:`Style`; never raises."""
    if isinstance(raw, Style):
        return raw
    if isinstance(raw, Mapping):
        return from_mapping(raw, config)
    if isinstance(raw, (str, Preset)):
        return resolve_preset(raw, config, fallback_preset=fallback_preset)
    return resolve_preset(None, config, fallback_preset=fallback_preset)


__all__ = [
    "Style",
    "NEUTRAL_GRAY",
    "CYCLE_COLOURS",
    "NAMED_COLOURS",
    "BUILTIN_PRESETS",
    "resolve_colour",
    "custom",
    "colours",
    "cycle",
    "named_colours",
    "from_mapping",
    "is_known_preset",
    "resolve_preset",
    "normalize_style",
]
