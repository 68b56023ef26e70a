# _subdivision.py
"""The four child nodes created when a node overflows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from ._rectangle import Rectangle

if TYPE_CHECKING:
    from ._node import QuadtreeNode


class QuadtreeSubdivisions:
    """
    Bundle of the NW, NE, SW and SE children of one node.

    Each child covers a quadrant of the parent's rectangle at half the
    parent's half extents and starts empty with the parent's capacity.
    Iteration always yields NW, NE, SW, SE; insertion and query both walk
    the children in that order.

    The quadrant names follow the legacy layout, where the "west" children
    sit on the positive x side of the parent's center.

    Args:
        boundary: The parent's rectangle.
        capacity: Capacity copied into every child.
        depth: Depth of the children (parent depth + 1).
        max_depth: Depth cutoff shared with the parent.
    """

    __slots__ = ("ne", "nw", "se", "sw")

    def __init__(
        self,
        boundary: Rectangle,
        capacity: int,
        *,
        depth: int = 1,
        max_depth: int | None = None,
    ):
        # Deferred: _node imports this module at load time.
        from ._node import QuadtreeNode

        new_w = boundary.w / 2
        new_h = boundary.h / 2

        def child(x: float, y: float) -> QuadtreeNode:
            return QuadtreeNode(
                Rectangle(x, y, new_w, new_h),
                capacity,
                depth=depth,
                max_depth=max_depth,
            )

        self.nw = child(boundary.x + new_w, boundary.y - new_h)
        self.ne = child(boundary.x - new_w, boundary.y - new_h)
        self.sw = child(boundary.x + new_w, boundary.y + new_h)
        self.se = child(boundary.x - new_w, boundary.y + new_h)

    def __iter__(self) -> Iterator[QuadtreeNode]:
        yield self.nw
        yield self.ne
        yield self.sw
        yield self.se
