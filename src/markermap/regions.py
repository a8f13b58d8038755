"""Region catalog: short region codes to (lat, lon) and display names.

Built-in entries are compiled in; entries from ``MapConfig.custom_regions``
are overlaid at lookup time and win on collision.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional

from .config.schema import DEFAULT_CONFIG, MapConfig
from .errors import InvalidFormat, UnknownRegion
from .types import LatLon


@dataclass(frozen=True)
class Region:
    code: str
    name: str
    coordinates: LatLon  # (lat, lon)


_BUILTIN = [
    ("ams", "Amsterdam", 52, 5),
    ("iad", "Ashburn", 39, -77),
    ("atl", "Atlanta", 34, -84),
    ("bog", "Bogotá", 5, -74),
    ("bos", "Boston", 42, -71),
    ("otp", "Bucharest", 45, 26),
    ("ord", "Chicago", 42, -88),
    ("dfw", "Dallas", 33, -97),
    ("den", "Denver", 40, -105),
    ("eze", "Ezeiza", -35, -59),
    ("fra", "Frankfurt", 50, 9),
    ("gdl", "Guadalajara", 21, -103),
    ("hkg", "Hong Kong", 22, 114),
    ("jnb", "Johannesburg", -26, 28),
    ("lhr", "London", 51, 0),
    ("lax", "Los Angeles", 34, -118),
    ("mad", "Madrid", 40, -4),
    ("mia", "Miami", 26, -80),
    ("yul", "Montreal", 45, -74),
    ("bom", "Mumbai", 19, 73),
    ("cdg", "Paris", 49, 3),
    ("phx", "Phoenix", 33, -112),
    ("qro", "Querétaro", 21, -100),
    ("gig", "Rio de Janeiro", -23, -43),
    ("sjc", "San Jose", 37, -122),
    ("scl", "Santiago", -33, -71),
    ("gru", "Sao Paulo", -23, -46),
    ("sea", "Seattle", 47, -122),
    ("ewr", "Secaucus", 41, -74),
    ("sin", "Singapore", 1, 104),
    ("arn", "Stockholm", 60, 18),
    ("syd", "Sydney", -34, 151),
    ("nrt", "Tokyo", 36, 140),
    ("yyz", "Toronto", 44, -80),
    ("waw", "Warsaw", 52, 21),
]

BUILTIN_REGIONS = MappingProxyType(
    {code: Region(code, name, (float(lat), float(lon))) for code, name, lat, lon in _BUILTIN}
)


class RegionCatalog:
    """Read-only view over built-in regions plus the configured overlay."""

    def __init__(self, config: Optional[MapConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def region(self, code) -> Region:
        if not isinstance(code, str):
            raise InvalidFormat(f"region code must be a string, got {type(code).__name__}", code)
        custom = self.config.custom_regions.get(code)
        if custom is not None:
            return Region(code, custom.name or code, tuple(custom.coordinates))
        try:
            return BUILTIN_REGIONS[code]
        except KeyError:
            raise UnknownRegion(code) from None

    def lookup(self, code) -> LatLon:
        return self.region(code).coordinates

    def name(self, code) -> str:
        return self.region(code).name

    def is_valid(self, code) -> bool:
        return isinstance(code, str) and (
            code in self.config.custom_regions or code in BUILTIN_REGIONS
        )

    def all(self) -> Dict[str, LatLon]:
        out = {code: r.coordinates for code, r in BUILTIN_REGIONS.items()}
        for code, entry in self.config.custom_regions.items():
            out[code] = tuple(entry.coordinates)
        return out

    def codes(self) -> List[str]:
        return list(self.all())

    def count(self) -> int:
        return len(self.all())

    def regions(self) -> List[Region]:
        return [self.region(code) for code in self.all()]

    def display_name(self, codes: Iterable[str]) -> str:
        """Human-readable summary of a set of region codes."""
        codes = list(codes)
        if not codes:
            return "your computer"
        if len(codes) == 1:
            code = codes[0]
            return self.name(code) if self.is_valid(code) else code
        return ", ".join(codes)


__all__ = ["Region", "RegionCatalog", "BUILTIN_REGIONS"]
