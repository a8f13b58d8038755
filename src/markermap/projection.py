"""Equirectangular projection of (lat, lon) into the map's plotting box."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from .types import BBoxTuple


@dataclass(frozen=True)
class BBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_tuple(cls, t: BBoxTuple) -> "BBox":
        return cls(*(float(v) for v in t))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


DEFAULT_BBOX = BBox(0.0, 0.0, 800.0, 391.0)
# visible window of the world-map artwork
DEFAULT_VIEWBOX = "0 10 800 320"


def project(lat: float, lon: float, bbox: BBox = DEFAULT_BBOX) -> Tuple[float, float]:
    """Map (lat, lon) to (x, y); y grows downward.  No clipping."""
    x_pct = (lon + 180.0) / 360.0
    y_pct = 1.0 - (lat + 90.0) / 180.0
    return x_pct * bbox.width + bbox.min_x, y_pct * bbox.height + bbox.min_y


def project_many(latlon, bbox: BBox = DEFAULT_BBOX) -> np.ndarray:
    """Vectorised :func:`project` over an ``(N, 2)`` array of (lat, lon)."""
    a = np.asarray(latlon, dtype=float).reshape(-1, 2)
    out = np.empty_like(a)
    out[:, 0] = (a[:, 1] + 180.0) / 360.0 * bbox.width + bbox.min_x
    out[:, 1] = (1.0 - (a[:, 0] + 90.0) / 180.0) * bbox.height + bbox.min_y
    return out


def inside_mask(xy: np.ndarray, bbox: BBox = DEFAULT_BBOX) -> np.ndarray:
    """Boolean mask of projected points lying inside ``bbox``."""
    xy = np.asarray(xy, dtype=float).reshape(-1, 2)
    return (
        (xy[:, 0] >= bbox.min_x)
        & (xy[:, 0] <= bbox.max_x)
        & (xy[:, 1] >= bbox.min_y)
        & (xy[:, 1] <= bbox.max_y)
    )


def project_points(points: Iterable[Tuple[float, float]], bbox: BBox = DEFAULT_BBOX):
    return [tuple(row) for row in project_many(list(points), bbox).tolist()]


__all__ = [
    "BBox",
    "DEFAULT_BBOX",
    "DEFAULT_VIEWBOX",
    "project",
    "project_many",
    "project_points",
    "inside_mask",
]
