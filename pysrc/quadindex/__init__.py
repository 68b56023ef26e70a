"""quadindex - point quadtree with radius queries and opaque payloads."""

from ._errors import DepthLimitError, OutOfBoundsError, QuadtreeError, Status
from ._insert_result import InsertResult
from ._node import QuadtreeNode
from ._point import Point, within_compat, within_euclidean
from ._rectangle import Rectangle
from ._subdivision import QuadtreeSubdivisions
from .quadtree import QuadTree

__all__ = [
    "DepthLimitError",
    "InsertResult",
    "OutOfBoundsError",
    "Point",
    "QuadTree",
    "QuadtreeError",
    "QuadtreeNode",
    "QuadtreeSubdivisions",
    "Rectangle",
    "Status",
    "within_compat",
    "within_euclidean",
]
