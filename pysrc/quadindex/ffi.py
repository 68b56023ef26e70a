# ffi.py
"""
Flat, handle-based entry points for embedding hosts.

These functions mirror a C ABI: trees are addressed by integer handles,
failures are reported as Status codes instead of exceptions, payloads are
raw addresses, and query results are handed over as a contiguous ctypes
buffer of ``c_void_p`` with the match count written through an out
parameter.

Ownership:
    - A handle returned by quadtree_new belongs to the caller and must be
      released exactly once with quadtree_free. Using a freed handle is a
      caller error; it is reported as NULL_HANDLE.
    - Payload addresses are stored verbatim. The index never dereferences
      or frees them; their lifetime is the caller's business.
    - The buffer returned by quadtree_query belongs to the caller. The index
      keeps no reference to it; the Python allocator reclaims it once the
      caller drops its last reference, so it must not be passed to C free().

The handle table is module state and is not thread-safe.
"""

from __future__ import annotations

import ctypes
import itertools
import logging
from typing import Any

from ._errors import DepthLimitError, OutOfBoundsError, Status
from .quadtree import QuadTree

logger = logging.getLogger(__name__)

NULL_HANDLE = 0

_trees: dict[int, QuadTree] = {}
_handle_ids = itertools.count(1)


def _lookup(handle: int | None) -> QuadTree | None:
    if not handle:
        return None
    return _trees.get(handle)


def _as_address(payload: Any) -> int | None:
    """
    Reduce an opaque payload to the address it refers to.

    Raises:
        TypeError: If payload is not None, an int, or a ctypes pointer.
        ValueError: If payload is a negative int.
    """
    message = f"payload must be an address or ctypes pointer, got {type(payload).__name__}"
    if isinstance(payload, (str, bytes, bytearray)):
        raise TypeError(message)
    if isinstance(payload, int) and payload < 0:
        raise ValueError(f"payload address must be non-negative, got {payload}")
    try:
        return ctypes.cast(payload, ctypes.c_void_p).value
    except ctypes.ArgumentError as exc:
        raise TypeError(message) from exc


def _write_count(count: Any, value: int) -> None:
    if count is None:
        return
    # byref() wraps the object it refers to
    target = getattr(count, "_obj", count)
    if hasattr(target, "contents"):
        target = target.contents
    target.value = value


def quadtree_new(
    x: float = 10.0,
    y: float = 10.0,
    w: float = 10.0,
    h: float = 10.0,
    capacity: int = 0,
) -> int:
    """
    Allocate a tree over the rectangle centered at (x, y) with half extents
    (w, h) and return its handle. A capacity of 0 selects the default (10).

    Returns NULL_HANDLE if the rectangle or capacity is invalid.
    """
    try:
        tree = QuadTree((x, y, w, h), capacity)
    except (TypeError, ValueError) as exc:
        logger.warning("quadtree_new rejected its arguments: %s", exc)
        return NULL_HANDLE
    handle = next(_handle_ids)
    _trees[handle] = tree
    logger.debug("Allocated quadtree handle %d", handle)
    return handle


def quadtree_free(handle: int | None) -> None:
    """Release a tree and everything it holds."""
    if _trees.pop(handle, None) is None:
        logger.warning("quadtree_free called with invalid handle %r", handle)
        return
    logger.debug("Released quadtree handle %d", handle)


def quadtree_insert_point(
    handle: int | None, x: float, y: float, payload: Any = None
) -> int:
    """
    Insert a point carrying an opaque payload.

    Returns:
        Status.OK, or the Status describing why nothing was stored.
    """
    tree = _lookup(handle)
    if tree is None:
        logger.warning("quadtree_insert_point called with invalid handle %r", handle)
        return Status.NULL_HANDLE

    try:
        address = _as_address(payload)
    except (TypeError, ValueError) as exc:
        logger.warning("Rejected payload: %s", exc)
        return Status.INVALID_PAYLOAD

    try:
        tree.insert((x, y), address)
    except OutOfBoundsError as exc:
        logger.warning("Rejected insert: %s", exc)
        return Status.OUT_OF_BOUNDS
    except DepthLimitError as exc:
        logger.warning("Rejected insert: %s", exc)
        return Status.DEPTH_LIMIT
    return Status.OK


def quadtree_query(
    handle: int | None, x: float, y: float, r: float, count: Any = None
) -> Any:
    """
    Collect the payload addresses of the points near (x, y).

    Args:
        handle: Tree handle.
        x, y: Query center.
        r: Query radius.
        count: Out parameter receiving the number of matches, either a
            ``ctypes.c_size_t``, ``ctypes.pointer(c_size_t)`` or
            ``ctypes.byref(c_size_t)``.

    Returns:
        A new ``(c_void_p * n)`` array owned by the caller, or None for an
        invalid handle (count is then set to 0). Null payloads read back
        as None.
    """
    tree = _lookup(handle)
    if tree is None:
        logger.warning("quadtree_query called with invalid handle %r", handle)
        _write_count(count, 0)
        return None

    if r < 0:
        logger.warning("quadtree_query called with negative radius %r", r)
        addresses = []
    else:
        addresses = tree.query_payloads((x, y), r)

    buffer = (ctypes.c_void_p * len(addresses))(*addresses)
    _write_count(count, len(addresses))
    return buffer


def quadtree_len(handle: int | None) -> int:
    """Return the number of stored points, or -1 for an invalid handle."""
    tree = _lookup(handle)
    if tree is None:
        return -1
    return len(tree)
