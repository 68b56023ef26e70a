# quadtree.py
"""QuadTree - point spatial index with radius queries and opaque payloads."""

from __future__ import annotations

import logging
import pickle
from typing import Any, Iterable, Iterator

import numpy as np

from ._common import (
    DEFAULT_CAPACITY,
    DEFAULT_DTYPE,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PROXIMITY,
    QUADTREE_DTYPE_TO_NP_DTYPE,
    Bounds,
    Coord,
    Extent,
    resolve_capacity,
    validate_bounds,
    validate_dtype,
    validate_np_dtype,
)
from ._errors import OutOfBoundsError
from ._insert_result import InsertResult
from ._node import QuadtreeNode
from ._point import Point, resolve_proximity, within_euclidean
from ._rectangle import Rectangle

logger = logging.getLogger(__name__)


class QuadTree:
    """
    Spatial index for 2D points carrying opaque payloads.

    Points are buffered per node until a node holds ``capacity`` of them;
    the next point makes the node split into four quadrants. A radius query
    returns every stored point near a center, provided the center itself
    lies inside the tree's bounds.

    Thread-safety:
        Instances are not thread-safe. Use external synchronization if you
        share a tree between threads.

    Args:
        bounds: World bounds as (center_x, center_y, half_width, half_height),
            or a Rectangle.
        capacity: Max number of points per node before splitting. 0 selects
            the default of 10.
        max_depth: Deepest level a node may split into. None removes the
            cutoff, in which case many coincident points recurse until the
            interpreter's recursion limit.
        dtype: Coordinate precision, 'f32' (default) or 'f64'.
        proximity: Radius test, 'compat' (default) or 'euclidean'.

    Raises:
        ValueError: If bounds, capacity or proximity are invalid.
        TypeError: If dtype is unsupported.

    Example:
        ```python
        qt = QuadTree((50.0, 50.0, 50.0, 50.0), capacity=4)
        qt.insert((10.0, 20.0), payload="a")
        for point in qt.query((12.0, 18.0), radius=5.0):
            print(point.x, point.y, point.payload)
        ```
    """

    __slots__ = (
        "_bounds",
        "_capacity",
        "_coerce",
        "_count",
        "_dtype",
        "_max_depth",
        "_predicate",
        "_proximity",
        "_root",
    )

    # ---- Initialization ----

    def __init__(
        self,
        bounds: Bounds | Rectangle,
        capacity: int = DEFAULT_CAPACITY,
        *,
        max_depth: int | None = DEFAULT_MAX_DEPTH,
        dtype: str = DEFAULT_DTYPE,
        proximity: str = DEFAULT_PROXIMITY,
    ):
        self._coerce = validate_dtype(dtype)
        self._dtype = dtype
        self._bounds = Rectangle(*map(self._coerce, validate_bounds(bounds)))
        self._capacity = resolve_capacity(capacity)
        self._max_depth = max_depth
        self._proximity = proximity
        self._predicate = resolve_proximity(proximity)

        self._root = self._new_root()
        self._count = 0
        logger.debug(
            "Created quadtree over %r (capacity=%d, max_depth=%s, dtype=%s, proximity=%s)",
            self._bounds,
            self._capacity,
            max_depth,
            dtype,
            proximity,
        )

    def _new_root(self) -> QuadtreeNode:
        return QuadtreeNode(self._bounds, self._capacity, max_depth=self._max_depth)

    def _make_point(self, xy: Iterable[float], payload: Any = None) -> Point:
        x, y = xy
        return Point(self._coerce(x), self._coerce(y), payload)

    # ---- Properties ----

    @property
    def bounds(self) -> Rectangle:
        return self._bounds

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def max_depth(self) -> int | None:
        return self._max_depth

    @property
    def dtype(self) -> str:
        return self._dtype

    @property
    def proximity(self) -> str:
        return self._proximity

    @property
    def root(self) -> QuadtreeNode:
        """The root node. Exposed for inspection; mutate through QuadTree."""
        return self._root

    @property
    def subdivision_count(self) -> int:
        """Number of nodes that have split."""
        return sum(1 for node in self._root.iter_nodes() if node.children is not None)

    # ---- Insertion ----

    def insert(self, point: Coord, payload: Any = None) -> Point:
        """
        Insert a single point.

        Args:
            point: Coordinates (x, y).
            payload: Any object to attach. It is stored by reference and
                returned as-is by queries.

        Returns:
            The stored Point.

        Raises:
            OutOfBoundsError: If the point is outside the tree bounds.
            DepthLimitError: If placing the point needs a node below max_depth.
        """
        stored = self._make_point(point, payload)
        self._root.insert(stored)
        self._count += 1
        return stored

    def insert_many(
        self, points: Iterable[Coord], payloads: list[Any] | None = None
    ) -> InsertResult:
        """
        Bulk insert points.

        Every point is checked against the tree bounds before any is stored,
        so an out-of-bounds point leaves the tree untouched.

        Args:
            points: Iterable of (x, y) coordinates.
            payloads: Optional list of payloads aligned with points.

        Returns:
            InsertResult with the number of points stored and of nodes split.

        Raises:
            ValueError: If payloads length doesn't match.
            OutOfBoundsError: If any point is outside the tree bounds.
            DepthLimitError: If a point needs a node below max_depth. Points
                earlier in the batch stay inserted.
        """
        points = list(points)
        if payloads is None:
            staged = [self._make_point(xy) for xy in points]
        else:
            if len(payloads) != len(points):
                raise ValueError("payloads length must match points length")
            staged = [self._make_point(xy, obj) for xy, obj in zip(points, payloads)]

        if not staged:
            return InsertResult(count=0, subdivisions=0)

        for p in staged:
            if not self._bounds.contains(p):
                raise OutOfBoundsError(p, self._bounds)

        before = self.subdivision_count
        insert = self._root.insert
        for p in staged:
            insert(p)
            self._count += 1

        result = InsertResult(
            count=len(staged), subdivisions=self.subdivision_count - before
        )
        logger.debug(
            "Bulk inserted %d points (%d subdivisions)", result.count, result.subdivisions
        )
        return result

    def insert_many_np(
        self, points: Any, payloads: list[Any] | None = None
    ) -> InsertResult:
        """
        Bulk insert points from a NumPy array of shape (N, 2).

        Args:
            points: NumPy array with dtype matching the tree's dtype.
            payloads: Optional list of payloads aligned with the rows.

        Returns:
            InsertResult with the number of points stored and of nodes split.

        Raises:
            TypeError: If points is not a NumPy array or dtype doesn't match.
            ValueError: If the array shape is wrong, payloads length doesn't
                match, or any point is outside bounds.
        """
        if not isinstance(points, np.ndarray):
            raise TypeError("insert_many_np requires a NumPy array")

        if points.size == 0:
            return InsertResult(count=0, subdivisions=0)

        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(f"expected an array of shape (N, 2), got {points.shape}")

        validate_np_dtype(points, self._dtype)
        return self.insert_many(points.tolist(), payloads)

    # ---- Queries ----

    def query(self, center: Coord, radius: float) -> list[Point]:
        """
        Return the stored points within ``radius`` of ``center``.

        The result is empty when ``center`` lies outside the tree bounds,
        whatever the radius. Within one node points come back in insertion
        order; across nodes the order is an implementation detail.

        Raises:
            ValueError: If radius is negative.
        """
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        return self._root.query(
            self._make_point(center), self._coerce(radius), self._predicate
        )

    def query_payloads(self, center: Coord, radius: float) -> list[Any]:
        """Return only the payloads of query(center, radius)."""
        return [p.payload for p in self.query(center, radius)]

    def query_np(self, center: Coord, radius: float) -> Any:
        """
        Return the coordinates of query(center, radius) as a NumPy array.

        Returns:
            NDArray with shape (N, 2) and dtype matching the tree.
        """
        np_dtype = QUADTREE_DTYPE_TO_NP_DTYPE[self._dtype]
        found = self.query(center, radius)
        if not found:
            return np.empty((0, 2), dtype=np_dtype)
        return np.array([p.coords for p in found], dtype=np_dtype)

    # ---- Utilities ----

    def __len__(self) -> int:
        """Return the number of points in the tree."""
        return self._count

    def __iter__(self) -> Iterator[Point]:
        """Iterate over every stored point, parents before children."""
        return iter(self._root)

    def __contains__(self, point: Coord) -> bool:
        """True if at least one stored point sits exactly at these coordinates."""
        probe = self._make_point(point)
        return bool(self._root.query(probe, 0.0, within_euclidean))

    def get_all_node_boundaries(self) -> list[Extent]:
        """
        Return every node's region as (min_x, min_y, max_x, max_y).
        Useful for visualization.
        """
        return [node.boundary.extent for node in self._root.iter_nodes()]

    def get_inner_max_depth(self) -> int:
        """Return the depth of the deepest node (0 for an unsplit tree)."""
        return max(node.depth for node in self._root.iter_nodes())

    def clear(self) -> None:
        """
        Empty the tree in place, preserving bounds, capacity and settings.
        """
        self._root = self._new_root()
        self._count = 0

    # ---- Serialization ----

    def to_bytes(self) -> bytes:
        """
        Serialize the quadtree to bytes.

        Payloads are pickled along with the points, so they must be picklable.
        """
        data = {
            "root": self._root,
            "bounds": tuple(self._bounds),
            "capacity": self._capacity,
            "max_depth": self._max_depth,
            "dtype": self._dtype,
            "proximity": self._proximity,
            "count": self._count,
        }

        return pickle.dumps(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> QuadTree:
        """
        Deserialize a quadtree from bytes.

        Only load data from a trusted source: this unpickles it.

        Args:
            data: Bytes from to_bytes().

        Returns:
            A new instance.
        """
        in_dict = pickle.loads(data)

        qt = cls(
            in_dict["bounds"],
            in_dict["capacity"],
            max_depth=in_dict["max_depth"],
            dtype=in_dict["dtype"],
            proximity=in_dict["proximity"],
        )
        qt._root = in_dict["root"]
        qt._count = in_dict["count"]
        return qt

    def __repr__(self) -> str:
        return (
            f"QuadTree(bounds={tuple(self._bounds)!r}, capacity={self._capacity}, "
            f"len={self._count})"
        )
