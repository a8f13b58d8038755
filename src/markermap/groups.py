"""Marker group normalisation.

Two passes over the caller's groups:

1. per group, in input order: resolve the style (or assign ``cycle(index)``
   by the group's global position), resolve every node (failures are logged
   and the node dropped), and derive a sanitized ``group_label``;
2. fold over the result with an occurrence table so every ``group_label`` is
   unique (``x``, ``x 2``, ``x 3`` ...).
"""
from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Mapping, Optional

from .config.schema import DEFAULT_CONFIG, MapConfig
from .contracts.inputs import RawGroup
from .errors import NodeResolutionError
from .nodes import Node, normalize_node
from .regions import RegionCatalog
from .styles import Style, cycle, normalize_style
from .types import Preset
from .utils.logging import get_logger

log = get_logger("groups")

_UNSAFE = re.compile(r"[^a-zA-Z0-9_-]")
_UNDERSCORES = re.compile(r"_{2,}")


@dataclass(frozen=True)
class MarkerGroup:
    label: Optional[str]
    group_label: Optional[str]  # None: always visible, not toggleable
    nodes: List[Node]
    style: Style
    machine_count: Optional[int] = None

    @property
    def node_count(self) -> int:
        return self.machine_count if self.machine_count is not None else len(self.nodes)


def sanitize_group_label(label: Any) -> str:
    """Identifier-safe form of ``label`` (``"Prod / EU"`` -> ``"Prod_EU"``)."""
    s = _UNSAFE.sub("_", str(label))
    s = _UNDERSCORES.sub("_", s)
    return s.strip("_")


def default_group_label(raw: RawGroup) -> str:
    if raw.nodes is not None:
        n = len(raw.nodes)
        if n == 0:
            return "Empty Group"
        if n == 1:
            return "Single Node"
        return f"{n} Nodes"
    if raw.style is not None:
        name = raw.style.value if isinstance(raw.style, Preset) else raw.style
        if isinstance(name, str) and name.strip():
            return name.strip().replace("_", " ").capitalize()
        return "Styled Group"
    return "Marker Group"


def _as_raw_group(raw: Any) -> RawGroup:
    if isinstance(raw, RawGroup):
        return raw
    if isinstance(raw, MarkerGroup):
        return RawGroup(
            nodes=list(raw.nodes),
            style=raw.style,
            label=raw.label,
            group_label=raw.group_label,
            machine_count=raw.machine_count,
        )
    if isinstance(raw, Mapping):
        return RawGroup.model_validate(dict(raw))
    raise TypeError(f"marker group must be a mapping, got {type(raw).__name__}")


def _resolve_nodes(raw: RawGroup, catalog: RegionCatalog, where: str) -> List[Node]:
    out: List[Node] = []
    for spec in raw.nodes or ():
        if isinstance(spec, Node):
            out.append(spec)
            continue
        try:
            out.append(normalize_node(spec, catalog))
        except NodeResolutionError as exc:
            log.warning("%s: dropping node %r (%s): %s", where, spec, exc.reason, exc)
    return out


def normalize_group(
    raw: Any,
    index: int,
    config: Optional[MapConfig] = None,
    *,
    catalog: Optional[RegionCatalog] = None,
    fallback_preset: Preset = Preset.OPERATIONAL,
) -> MarkerGroup:
    """Pass one for a single group; ``index`` is its position in the batch."""
    cfg = config or DEFAULT_CONFIG
    catalog = catalog or RegionCatalog(cfg)
    rg = _as_raw_group(raw)

    if rg.style is None:
        style = cycle(index, cfg)
    else:
        style = normalize_style(rg.style, cfg, fallback_preset=fallback_preset)

    label = rg.label if rg.label is not None else default_group_label(rg)
    if rg.explicit_ungrouped:
        group_label = None
    elif rg.group_label is not None:
        group_label = rg.group_label
    else:
        # labels with no ASCII-safe characters fall back to the derived name
        group_label = (
            sanitize_group_label(label)
            or sanitize_group_label(default_group_label(rg))
            or "Marker_Group"
        )

    nodes = _resolve_nodes(rg, catalog, f"group[{index}] {label!r}")
    return MarkerGroup(
        label=label,
        group_label=group_label,
        nodes=nodes,
        style=style,
        machine_count=rg.machine_count,
    )


def dedupe_group_labels(groups: Iterable[MarkerGroup]) -> List[MarkerGroup]:
    """Suffix repeated group labels with `` 2``, `` 3``...; first occurrence wins.

    A suffix already held by another group (emitted earlier or given
    explicitly) is skipped, so every non-None label in the result is unique.
    """
    groups = list(groups)
    taken = {g.group_label for g in groups if g.group_label is not None}
    seen: Counter = Counter()
    emitted: set = set()
    out: List[MarkerGroup] = []
    for g in groups:
        base = g.group_label
        if base is None:
            out.append(g)
            continue
        seen[base] += 1
        if seen[base] == 1 and base not in emitted:
            emitted.add(base)
            out.append(g)
            continue
        n = max(seen[base], 2)
        candidate = f"{base} {n}"
        while candidate in emitted or candidate in taken:
            n += 1
            candidate = f"{base} {n}"
        seen[base] = n
        emitted.add(candidate)
        out.append(replace(g, group_label=candidate))
    return out


def normalize_groups(
    raw_groups: Iterable[Any],
    config: Optional[MapConfig] = None,
    *,
    fallback_preset: Preset = Preset.OPERATIONAL,
) -> List[MarkerGroup]:
    """Normalise a batch of raw groups.  Never fails on bad nodes."""
    cfg = config or DEFAULT_CONFIG
    catalog = RegionCatalog(cfg)
    first = [
        normalize_group(raw, i, cfg, catalog=catalog, fallback_preset=fallback_preset)
        for i, raw in enumerate(raw_groups or ())
    ]
    return dedupe_group_labels(first)


__all__ = [
    "MarkerGroup",
    "sanitize_group_label",
    "default_group_label",
    "normalize_group",
    "dedupe_group_labels",
    "normalize_groups",
]
