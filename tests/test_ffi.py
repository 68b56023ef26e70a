import ctypes
import logging

import pytest

from quadindex import Status, ffi


@pytest.fixture
def handle():
    h = ffi.quadtree_new()
    yield h
    if ffi.quadtree_len(h) >= 0:
        ffi.quadtree_free(h)


def test_c_api(handle):
    assert handle != ffi.NULL_HANDLE
    assert ffi.quadtree_insert_point(handle, 1.0, 2.0, None) == 0
    assert ffi.quadtree_len(handle) == 1


def test_embedding_host_round_trip(handle):
    values = [ctypes.c_int(42), ctypes.c_int(27), ctypes.c_int(-1)]
    coords = [(1.0, 1.0), (2.0, 1.0), (1.0, 2.0)]
    for (x, y), value in zip(coords, values):
        assert ffi.quadtree_insert_point(handle, x, y, ctypes.pointer(value)) == Status.OK

    count = ctypes.c_size_t()
    result = ffi.quadtree_query(handle, 1.0, 2.0, 3.0, count)
    assert count.value == 3
    assert len(result) == 3

    ints = [ctypes.cast(result[i], ctypes.POINTER(ctypes.c_int)).contents.value for i in range(count.value)]
    assert sorted(ints) == [-1, 27, 42]


def test_payload_address_identity(handle):
    value = ctypes.c_double(3.5)
    ffi.quadtree_insert_point(handle, 5.0, 5.0, ctypes.addressof(value))
    ffi.quadtree_insert_point(handle, 15.0, 15.0, ctypes.c_void_p(1234))

    count = ctypes.c_size_t()
    result = ffi.quadtree_query(handle, 5.0, 5.0, 1.0, ctypes.pointer(count))
    assert count.value == 1
    assert result[0] == ctypes.addressof(value)

    result = ffi.quadtree_query(handle, 15.0, 15.0, 1.0, count)
    assert list(result) == [1234]


def test_null_payload_reads_back_as_none(handle):
    ffi.quadtree_insert_point(handle, 5.0, 5.0)
    count = ctypes.c_size_t()
    result = ffi.quadtree_query(handle, 5.0, 5.0, 1.0, count)
    assert count.value == 1
    assert result[0] is None


def test_status_codes(handle):
    assert ffi.quadtree_insert_point(ffi.NULL_HANDLE, 1.0, 1.0) == Status.NULL_HANDLE
    assert ffi.quadtree_insert_point(None, 1.0, 1.0) == -1
    assert ffi.quadtree_insert_point(handle, 100.0, 1.0) == Status.OUT_OF_BOUNDS == -2
    assert ffi.quadtree_insert_point(handle, 1.0, 1.0, "not an address") == Status.INVALID_PAYLOAD
    assert ffi.quadtree_insert_point(handle, 1.0, 1.0, ctypes.c_int(5)) == Status.INVALID_PAYLOAD
    assert ffi.quadtree_len(handle) == 0


def test_depth_limit_status():
    h = ffi.quadtree_new(capacity=1)
    try:
        # one coincident point fits at each depth from 0 to 32
        for _ in range(33):
            assert ffi.quadtree_insert_point(h, 1.0, 1.0) == Status.OK
        assert ffi.quadtree_insert_point(h, 1.0, 1.0) == Status.DEPTH_LIMIT
        assert ffi.quadtree_len(h) == 33
    finally:
        ffi.quadtree_free(h)


def test_query_outside_region_is_empty(handle):
    ffi.quadtree_insert_point(handle, 19.0, 19.0, 7)
    count = ctypes.c_size_t(99)
    result = ffi.quadtree_query(handle, 25.0, 25.0, 100.0, count)
    assert count.value == 0
    assert len(result) == 0


def test_query_with_invalid_handle():
    count = ctypes.c_size_t(5)
    assert ffi.quadtree_query(ffi.NULL_HANDLE, 1.0, 1.0, 1.0, count) is None
    assert count.value == 0


def test_free_releases_handle(caplog):
    h = ffi.quadtree_new(0.0, 0.0, 50.0, 50.0, 4)
    ffi.quadtree_free(h)
    assert ffi.quadtree_len(h) == -1
    assert ffi.quadtree_insert_point(h, 1.0, 1.0) == Status.NULL_HANDLE

    with caplog.at_level(logging.WARNING, logger="quadindex.ffi"):
        ffi.quadtree_free(h)
    assert "invalid handle" in caplog.text


def test_new_rejects_negative_extent():
    assert ffi.quadtree_new(0.0, 0.0, -1.0, 1.0) == ffi.NULL_HANDLE


def test_handles_are_independent():
    a = ffi.quadtree_new()
    b = ffi.quadtree_new()
    try:
        assert a != b
        ffi.quadtree_insert_point(a, 1.0, 1.0)
        assert ffi.quadtree_len(a) == 1
        assert ffi.quadtree_len(b) == 0
    finally:
        ffi.quadtree_free(a)
        ffi.quadtree_free(b)


def test_query_count_through_byref(handle):
    ffi.quadtree_insert_point(handle, 5.0, 5.0, 11)
    ffi.quadtree_insert_point(handle, 5.5, 5.0, 12)

    count = ctypes.c_size_t()
    result = ffi.quadtree_query(handle, 5.0, 5.0, 1.0, ctypes.byref(count))
    assert count.value == 2
    assert list(result) == [11, 12]

    missing = ctypes.c_size_t(7)
    assert ffi.quadtree_query(ffi.NULL_HANDLE, 5.0, 5.0, 1.0, ctypes.byref(missing)) is None
    assert missing.value == 0


def test_negative_payload_address_is_rejected(handle):
    assert ffi.quadtree_insert_point(handle, 5.0, 5.0, -1) == Status.INVALID_PAYLOAD
    assert ffi.quadtree_len(handle) == 0


@pytest.mark.parametrize(
    "args",
    [
        (float("nan"), 0.0, 1.0, 1.0, 0),
        (0.0, 0.0, float("inf"), 1.0, 0),
        (0.0, 0.0, 1.0, float("nan"), 0),
        (0.0, 0.0, 1.0, 1.0, "x"),
        (0.0, 0.0, 1.0, 1.0, -3),
    ],
)
def test_new_rejects_invalid_arguments(args):
    assert ffi.quadtree_new(*args) == ffi.NULL_HANDLE
