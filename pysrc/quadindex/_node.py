# _node.py
"""Recursive quadtree node: the engine behind QuadTree."""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from ._common import DEFAULT_CAPACITY
from ._errors import DepthLimitError, OutOfBoundsError
from ._point import Point, within_compat
from ._rectangle import Rectangle
from ._subdivision import QuadtreeSubdivisions

logger = logging.getLogger(__name__)

Predicate = Callable[[Point, Point, float], bool]


class QuadtreeNode:
    """
    One node of the tree.

    A node buffers up to ``capacity`` points. When one more point arrives it
    creates its four children (once) and routes that point, and every later
    one, into the child whose boundary contains it. Points buffered before
    the split stay where they are.

    Attributes:
        boundary: Region this node is responsible for.
        capacity: Points buffered before subdividing.
        points: Buffered points in insertion order.
        children: None, or the four children once the node has overflowed.
        depth: 0 for the root.
        max_depth: Deepest level allowed to subdivide into, or None.
    """

    __slots__ = ("boundary", "capacity", "children", "depth", "max_depth", "points")

    def __init__(
        self,
        boundary: Rectangle,
        capacity: int = DEFAULT_CAPACITY,
        *,
        depth: int = 0,
        max_depth: int | None = None,
    ):
        self.boundary = boundary
        self.capacity = capacity
        self.points: list[Point] = []
        self.children: QuadtreeSubdivisions | None = None
        self.depth = depth
        self.max_depth = max_depth

    # ---- Insertion ----

    def insert(self, point: Point) -> None:
        """
        Store a point in this node or one of its descendants.

        Raises:
            OutOfBoundsError: If the point is outside this node's boundary.
            DepthLimitError: If the point would have to go below max_depth.
        """
        if not self.boundary.contains(point):
            raise OutOfBoundsError(point, self.boundary)

        if len(self.points) < self.capacity:
            self.points.append(point)
            return

        if self.children is None:
            if self.max_depth is not None and self.depth >= self.max_depth:
                raise DepthLimitError(point, self.depth)
            self.subdivide()

        error: OutOfBoundsError | None = None
        for child in self.children:
            try:
                child.insert(point)
                return
            except OutOfBoundsError as exc:
                error = exc
        raise error

    def subdivide(self) -> QuadtreeSubdivisions:
        """Create the four children if they do not exist yet and return them."""
        if self.children is None:
            self.children = QuadtreeSubdivisions(
                self.boundary,
                self.capacity,
                depth=self.depth + 1,
                max_depth=self.max_depth,
            )
            logger.debug("Subdivided node %r at depth %d", self.boundary, self.depth)
        return self.children

    # ---- Queries ----

    def query(
        self, center: Point, radius: float, predicate: Predicate = within_compat
    ) -> list[Point]:
        """
        Return the points near ``center`` held by this subtree.

        Nothing is returned when ``center`` itself is outside this node's
        boundary, even if stored points lie within ``radius`` of it. Below
        this node every descendant is scanned; children are not pruned
        against the query radius.
        """
        if not self.boundary.contains(center):
            return []

        found: list[Point] = []
        self._collect(center, radius, predicate, found)
        return found

    def _collect(
        self, center: Point, radius: float, predicate: Predicate, out: list[Point]
    ) -> None:
        out.extend(p for p in self.points if predicate(p, center, radius))
        if self.children is not None:
            for child in self.children:
                child._collect(center, radius, predicate, out)

    # ---- Traversal ----

    def iter_nodes(self) -> Iterator[QuadtreeNode]:
        """Yield this node and every descendant, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children is not None:
                stack.extend(reversed(list(node.children)))

    def __iter__(self) -> Iterator[Point]:
        for node in self.iter_nodes():
            yield from node.points

    def __len__(self) -> int:
        return sum(len(node.points) for node in self.iter_nodes())

    def __repr__(self) -> str:
        return (
            f"QuadtreeNode(boundary={self.boundary!r}, capacity={self.capacity}, "
            f"depth={self.depth}, points={len(self.points)}, "
            f"divided={self.children is not None})"
        )
