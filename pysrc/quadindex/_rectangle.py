# _rectangle.py
"""Axis-aligned rectangle stored as a center and half extents."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from ._common import Extent

if TYPE_CHECKING:
    from ._point import Point


class Rectangle(NamedTuple):
    """
    Axis-aligned rectangle.

    Attributes:
        x: Center x.
        y: Center y.
        w: Half width.
        h: Half height.

    Containment is half-open: the low edges are excluded and the high edges
    included, so a point on a shared edge belongs to exactly one quadrant.
    """

    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_extent(
        cls, min_x: float, min_y: float, max_x: float, max_y: float
    ) -> Rectangle:
        """Build a rectangle from its corner coordinates."""
        w = (max_x - min_x) / 2
        h = (max_y - min_y) / 2
        return cls(min_x + w, min_y + h, w, h)

    @property
    def extent(self) -> Extent:
        """Return the rectangle as (min_x, min_y, max_x, max_y)."""
        return (self.x - self.w, self.y - self.h, self.x + self.w, self.y + self.h)

    def contains(self, point: Point) -> bool:
        return (
            self.x - self.w < point.x <= self.x + self.w
            and self.y - self.h < point.y <= self.y + self.h
        )
