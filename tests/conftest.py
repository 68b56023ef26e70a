import pytest


@pytest.fixture(params=["f32", "f64"])
def dtype(request):
    return request.param


@pytest.fixture
def bounds():
    # center (10, 10), half extents (10, 10): covers (0, 20] x (0, 20]
    return (10.0, 10.0, 10.0, 10.0)


@pytest.fixture
def three_points():
    # One per quadrant once a capacity-1 node splits: root, NE, SE.
    return [(1.0, 1.0), (9.0, 1.0), (1.0, 11.0)]
