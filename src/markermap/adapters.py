"""Turn machine-discovery data into raw marker groups.

Only parsing lives here; fetching the DNS record is left to the caller.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .config.schema import MapConfig
from .styles import Style, is_known_preset
from .types import Preset

_SKIP_REGIONS = ("", None, "unknown")


def _parse_entry(entry: str):
    parts = entry.split(" ", 1)
    if len(parts) != 2:
        return None
    machine_id, region = parts[0].strip(), parts[1].strip()
    if not machine_id or not region:
        return None
    return machine_id, region


def from_dns_txt(txt_record: Any) -> List[Tuple[str, str]]:
    """Parse ``"<machine-id> <region>,<machine-id> <region>"``.

    >>> from_dns_txt("683d314fdd4d68 yyz,568323e9b54dd8 lhr")
    [('683d314fdd4d68', 'yyz'), ('568323e9b54dd8', 'lhr')]
    """
    if not isinstance(txt_record, str) or not txt_record.strip():
        return []
    out = []
    for entry in txt_record.strip().split(","):
        parsed = _parse_entry(entry.strip())
        if parsed is not None:
            out.append(parsed)
    return out


def _machine_style(style: Any, config: Optional[MapConfig]) -> Any:
    """Style mappings pass through; unrecognised preset names become ``info``."""
    if isinstance(style, (Mapping, Style)):
        return style
    if isinstance(style, (str, Preset)) and is_known_preset(style, config):
        return style
    return Preset.INFO.value


def from_machine_tuples(
    machine_tuples: Iterable[Tuple[str, str]] | None,
    label: str,
    style: Any = "primary",
    config: Optional[MapConfig] = None,
) -> List[Dict[str, Any]]:
    """One raw group per region, in first-seen order, labelled ``"<label> (<n>)"``."""
    if machine_tuples is None:
        return []
    style = _machine_style(style, config)
    counts: Dict[str, int] = {}
    for entry in machine_tuples:
        if not isinstance(entry, (tuple, list)) or len(entry) != 2:
            continue
        region = entry[1]
        if region in _SKIP_REGIONS:
            continue
        counts[region] = counts.get(region, 0) + 1
    return [
        {
            "nodes": [region],
            "style": style,
            "label": f"{label} ({n})",
            "machine_count": n,
        }
        for region, n in counts.items()
    ]


__all__ = ["from_dns_txt", "from_machine_tuples"]
