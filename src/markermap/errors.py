"""Errors raised while resolving node specifications.

Only node resolution raises; style and theme resolution always fall back.
"""
from __future__ import annotations


class NodeResolutionError(ValueError):
    """A node specification could not be turned into a :class:`~markermap.nodes.Node`."""

    reason = "invalid_format"

    def __init__(self, message: str, spec=None):
        super().__init__(message)
        self.spec = spec


class UnknownRegion(NodeResolutionError):
    reason = "unknown_region"

    def __init__(self, code, spec=None):
        super().__init__(f"unknown region code {code!r}", spec if spec is not None else code)
        self.code = code


class InvalidCoordinates(NodeResolutionError):
    reason = "invalid_coordinates"


class InvalidFormat(NodeResolutionError):
    reason = "invalid_format"


__all__ = ["NodeResolutionError", "UnknownRegion", "InvalidCoordinates", "InvalidFormat"]
