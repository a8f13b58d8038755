"""Input contracts: node specification variants and raw marker groups.

Loose caller input (strings, pairs, mappings) is parsed into one of the four
node variants by :func:`markermap.nodes.parse_node_spec`; callers may also
build the variants directly.  Raw groups are validated into :class:`RawGroup`
before normalisation.
"""

from __future__ import annotations

import numbers
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, field_validator


def _real(v: Any) -> float:
    if isinstance(v, bool) or not isinstance(v, numbers.Real):
        raise ValueError(f"expected a real number, got {type(v).__name__}")
    return float(v)


class RegionCode(BaseModel):
    code: str

    model_config = ConfigDict(extra="forbid", frozen=True)


class CoordinatePair(BaseModel):
    lat: float
    lon: float

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def _check_real(cls, v: Any) -> float:
        return _real(v)


class LabeledRegion(BaseModel):
    label: str
    code: str

    model_config = ConfigDict(extra="forbid", frozen=True)


class LabeledCoordinates(BaseModel):
    label: str
    lat: float
    lon: float

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def _check_real(cls, v: Any) -> float:
        return _real(v)


NodeSpec = Union[RegionCode, CoordinatePair, LabeledRegion, LabeledCoordinates]


class RawGroup(BaseModel):
    """A marker group as supplied by the caller.

    ``nodes`` stays ``None`` when the caller gave no node list (this changes the
    synthesized label).  Passing ``group_label=None`` explicitly marks the
    group as always visible; see :attr:`explicit_ungrouped`.
    """

    nodes: list[Any] | None = None
    style: Any = None
    label: str | None = None
    group_label: str | None = None
    machine_count: int | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("nodes", mode="before")
    @classmethod
    def _coerce_nodes(cls, v: Any) -> Any:
        if v is None or isinstance(v, list):
            return v
        if isinstance(v, tuple):
            return list(v)
        # a lone spec ("sjc", {"label": ...}) is a one-node list
        return [v]

    @field_validator("label", "group_label", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("machine_count", mode="before")
    @classmethod
    def _coerce_count(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, numbers.Integral) or v < 0:
            return None
        return int(v)

    @property
    def explicit_ungrouped(self) -> bool:
        return "group_label" in self.model_fields_set and self.group_label is None


__all__ = [
    "RegionCode",
    "CoordinatePair",
    "LabeledRegion",
    "LabeledCoordinates",
    "NodeSpec",
    "RawGroup",
]
