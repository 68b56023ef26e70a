# _errors.py
"""Exceptions raised by the index and status codes returned by the flat API."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class QuadtreeError(Exception):
    """Base class for all quadtree errors."""


class OutOfBoundsError(QuadtreeError, ValueError):
    """
    A point lies outside the boundary of the node asked to store it.

    Attributes:
        point: The rejected point.
        boundary: The rectangle that rejected it.
    """

    def __init__(self, point: Any, boundary: Any):
        self.point = point
        self.boundary = boundary
        super().__init__(
            f"Point ({point.x}, {point.y}) is outside bounds {tuple(boundary)}"
        )


class DepthLimitError(QuadtreeError, RuntimeError):
    """A full node at the depth cutoff was asked to subdivide."""

    def __init__(self, point: Any, depth: int):
        self.point = point
        self.depth = depth
        super().__init__(
            f"Cannot place point {point!r}: node at max depth {depth} is full"
        )


class Status(IntEnum):
    """Return codes of the flat handle API."""

    OK = 0
    NULL_HANDLE = -1
    OUT_OF_BOUNDS = -2
    DEPTH_LIMIT = -3
    INVALID_PAYLOAD = -4
