# _point.py
"""Stored points and the radius predicates used by queries."""

from __future__ import annotations

from typing import Any, Callable


class Point:
    """
    A stored coordinate with its payload.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        payload: The caller's object, or None.

    Notes:
        - The payload is held by reference and handed back unchanged.
          The index never inspects or copies it.
        - Two points are equal when their coordinates match and they carry
          the very same payload object.
    """

    __slots__ = ("payload", "x", "y")

    def __init__(self, x: float, y: float, payload: Any = None):
        self.x = x
        self.y = y
        self.payload = payload

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.payload is other.payload

    def __hash__(self) -> int:
        return hash((self.x, self.y, id(self.payload)))

    def __repr__(self) -> str:
        if self.payload is None:
            return f"Point({self.x!r}, {self.y!r})"
        return f"Point({self.x!r}, {self.y!r}, payload={self.payload!r})"

    @property
    def coords(self) -> tuple[float, float]:
        return (self.x, self.y)

    def within(self, center: Point, radius: float) -> bool:
        """Compat proximity test, see within_compat."""
        return within_compat(self, center, radius)


def within_compat(point: Point, center: Point, radius: float) -> bool:
    """
    Proximity test kept numerically identical to the legacy index.

    A point whose Manhattan offset is at most radius**2 is accepted before
    the circle test runs. For radii above 1 this admits points outside the
    circle; up to a radius of 1 it agrees with within_euclidean.
    """
    dx = abs(point.x - center.x)
    dy = abs(point.y - center.y)
    r_sq = radius * radius

    if dx + dy <= r_sq:
        return True
    if dx > radius:
        return False
    return dx * dx + dy * dy <= r_sq


def within_euclidean(point: Point, center: Point, radius: float) -> bool:
    """True when point lies in the closed disc of the given radius."""
    dx = point.x - center.x
    dy = point.y - center.y
    return dx * dx + dy * dy <= radius * radius


PROXIMITY_MAP: dict[str, Callable[[Point, Point, float], bool]] = {
    "compat": within_compat,
    "euclidean": within_euclidean,
}
"""Proximity predicates selectable by name."""


def resolve_proximity(name: str) -> Callable[[Point, Point, float], bool]:
    """
    Look up a proximity predicate by name.

    Raises:
        ValueError: If the name is unknown.
    """
    predicate = PROXIMITY_MAP.get(name)
    if predicate is None:
        raise ValueError(
            f"Unknown proximity {name!r}, expected one of {sorted(PROXIMITY_MAP)}"
        )
    return predicate
