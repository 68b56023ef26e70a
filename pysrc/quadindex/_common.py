# _common.py
"""Common utilities and constants shared across the quadtree modules."""

from __future__ import annotations

import math
from typing import Any, Callable

import numpy as np

# Type aliases
Bounds = tuple[float, float, float, float]
"""Axis-aligned rectangle as (center_x, center_y, half_width, half_height)."""

Extent = tuple[float, float, float, float]
"""Axis-aligned rectangle as (min_x, min_y, max_x, max_y)."""

Coord = tuple[float, float]
"""2D coordinate as (x, y)."""

DEFAULT_CAPACITY = 10
"""Points buffered per node before it subdivides."""

DEFAULT_MAX_DEPTH = 32
"""Deepest level a node may subdivide to. None disables the cutoff."""

DEFAULT_DTYPE = "f32"
DEFAULT_PROXIMITY = "compat"

# Dtype mappings
QUADTREE_DTYPE_TO_NP_DTYPE = {
    "f32": "float32",
    "f64": "float64",
}
"""Mapping from quadtree dtype strings to NumPy dtype strings."""


def _round_f32(value: float) -> float:
    return float(np.float32(value))


DTYPE_COERCE: dict[str, Callable[[float], float]] = {
    "f32": _round_f32,
    "f64": float,
}
"""Scalar converters that bring a coordinate to the tree's precision."""


def resolve_capacity(capacity: int | None) -> int:
    """
    Normalize a node capacity.

    Zero and None both select DEFAULT_CAPACITY.

    Raises:
        ValueError: If capacity is negative.
    """
    if not capacity:
        return DEFAULT_CAPACITY
    if capacity < 0:
        raise ValueError(f"capacity must be non-negative, got {capacity}")
    return int(capacity)


def validate_bounds(bounds: Any) -> Bounds:
    """
    Validate and normalize bounds to a tuple.

    Args:
        bounds: Bounds as sequence of 4 numbers.

    Returns:
        Validated bounds as tuple.

    Raises:
        ValueError: If bounds are invalid, non-finite or have negative extents.
    """
    if type(bounds) is not tuple:
        bounds = tuple(bounds)
    if len(bounds) != 4:
        raise ValueError(
            "bounds must be a tuple of four numeric values "
            "(center x, center y, half width, half height)"
        )
    if not all(math.isfinite(v) for v in bounds):
        raise ValueError(f"bounds must be finite, got {bounds!r}")
    if bounds[2] < 0 or bounds[3] < 0:
        raise ValueError(f"bounds half extents must be non-negative, got {bounds!r}")
    return bounds  # type: ignore[return-value]


def validate_dtype(dtype: str) -> Callable[[float], float]:
    """
    Look up the scalar converter for a quadtree dtype.

    Raises:
        TypeError: If dtype is not supported.
    """
    coerce = DTYPE_COERCE.get(dtype)
    if coerce is None:
        raise TypeError(f"Unsupported dtype: {dtype}")
    return coerce


def validate_np_dtype(geoms: Any, expected_dtype: str) -> None:
    """
    Validate that a NumPy array's dtype matches expected dtype.

    Args:
        geoms: NumPy array to validate.
        expected_dtype: Expected quadtree dtype ('f32', 'f64').

    Raises:
        TypeError: If dtype doesn't match.
    """
    expected_np_dtype = QUADTREE_DTYPE_TO_NP_DTYPE.get(expected_dtype)
    if geoms.dtype != expected_np_dtype:
        raise TypeError(
            f"NumPy array dtype {geoms.dtype} does not match quadtree dtype {expected_dtype}"
        )
