"""Node resolution.

Loose node input is first parsed into one of the closed input variants
(:mod:`markermap.contracts.inputs`) and then resolved against a
:class:`~markermap.regions.RegionCatalog`:

* ``"sjc"``                                  -> :class:`RegionCode`
* ``(40.7, -74.0)``                          -> :class:`CoordinatePair`
* ``{"label": "Web", "region": "fra"}``      -> :class:`LabeledRegion`
* ``{"label": "Web", "coordinates": (...)}`` -> :class:`LabeledCoordinates`
* ``{"coordinates": (...)}`` / ``{"lat": .., "lon": ..}`` -> :class:`CoordinatePair`

Coordinates are not range checked here; out-of-range values project off the
map, which callers use as an off-screen placement.
"""
from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from .contracts.inputs import (
    CoordinatePair,
    LabeledCoordinates,
    LabeledRegion,
    NodeSpec,
    RegionCode,
)
from .errors import InvalidCoordinates, InvalidFormat
from .regions import RegionCatalog
from .types import LatLon

_LAT_KEYS = ("lat", "latitude")
_LON_KEYS = ("lon", "lng", "long", "longitude")
_REGION_KEYS = ("region", "code")


@dataclass(frozen=True)
class Node:
    label: str
    coordinates: LatLon  # (lat, lon)


def _is_number(v: Any) -> bool:
    return isinstance(v, numbers.Real) and not isinstance(v, bool)


def _is_pair(v: Any) -> bool:
    return isinstance(v, Sequence) and not isinstance(v, (str, bytes)) and len(v) == 2


def coordinate_label(lat: float, lon: float) -> str:
    """Auto label for unlabeled coordinates, e.g. ``(40.7, -74)``."""
    return f"({lat:g}, {lon:g})"


def _coords_from_mapping(raw: Mapping[str, Any]) -> Optional[LatLon]:
    """Return the raw (lat, lon) carried by ``raw`` or ``None`` when absent.

    Raises :class:`InvalidCoordinates` when a coordinate structure is present
    but is not two real numbers.
    """
    if "coordinates" in raw:
        coords = raw["coordinates"]
        if isinstance(coords, Mapping):
            return _coords_from_mapping(coords) or _bad_coords(raw)
        if not _is_pair(coords) or not all(_is_number(c) for c in coords):
            _bad_coords(raw)
        return coords[0], coords[1]
    lat = next((raw[k] for k in _LAT_KEYS if k in raw), None)
    lon = next((raw[k] for k in _LON_KEYS if k in raw), None)
    if lat is None and lon is None:
        return None
    if not (_is_number(lat) and _is_number(lon)):
        _bad_coords(raw)
    return lat, lon


def _bad_coords(raw: Any):
    raise InvalidCoordinates(f"coordinates must be two real numbers: {raw!r}", raw)


def parse_node_spec(raw: Any) -> NodeSpec:
    """Turn loose caller input into one of the node input variants.

    Variant instances are returned unchanged.  Raises
    :class:`~markermap.errors.InvalidFormat` or
    :class:`~markermap.errors.InvalidCoordinates`.
    """
    if isinstance(raw, (RegionCode, CoordinatePair, LabeledRegion, LabeledCoordinates)):
        return raw
    if isinstance(raw, str):
        return RegionCode(code=raw)
    if isinstance(raw, Mapping):
        label = raw.get("label")
        if label is not None and not isinstance(label, str):
            raise InvalidFormat(f"node label must be a string: {raw!r}", raw)
        code = next((raw[k] for k in _REGION_KEYS if k in raw), None)
        if label is not None and code is not None:
            if not isinstance(code, str):
                raise InvalidFormat(f"region code must be a string: {raw!r}", raw)
            return LabeledRegion(label=label, code=code)
        coords = _coords_from_mapping(raw)
        if coords is not None:
            lat, lon = coords
            if label is not None:
                return LabeledCoordinates(label=label, lat=lat, lon=lon)
            return CoordinatePair(lat=lat, lon=lon)
        if code is not None and isinstance(code, str):
            return RegionCode(code=code)
        raise InvalidFormat(f"unrecognised node mapping: {raw!r}", raw)
    if _is_pair(raw):
        if not all(_is_number(c) for c in raw):
            _bad_coords(raw)
        return CoordinatePair(lat=raw[0], lon=raw[1])
    raise InvalidFormat(f"unrecognised node specification: {raw!r}", raw)


def resolve_node(spec: NodeSpec, catalog: RegionCatalog) -> Node:
    """Resolve a parsed node variant to a :class:`Node`."""
    if isinstance(spec, RegionCode):
        region = catalog.region(spec.code)
        return Node(region.name, region.coordinates)
    if isinstance(spec, LabeledRegion):
        return Node(spec.label, catalog.lookup(spec.code))
    if isinstance(spec, LabeledCoordinates):
        return Node(spec.label, (spec.lat, spec.lon))
    if isinstance(spec, CoordinatePair):
        return Node(coordinate_label(spec.lat, spec.lon), (spec.lat, spec.lon))
    raise InvalidFormat(f"not a node specification: {spec!r}", spec)


def normalize_node(raw: Any, catalog: Optional[RegionCatalog] = None) -> Node:
    """Parse and resolve one node; raises :class:`~markermap.errors.NodeResolutionError`."""
    return resolve_node(parse_node_spec(raw), catalog or RegionCatalog())


__all__ = [
    "Node",
    "coordinate_label",
    "parse_node_spec",
    "resolve_node",
    "normalize_node",
]
