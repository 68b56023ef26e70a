from quadindex import QuadtreeSubdivisions, Rectangle


def test_new():
    boundary = Rectangle(100.0, 200.0, 300.0, 400.0)
    sd = QuadtreeSubdivisions(boundary, 10)
    assert sd.sw.boundary == Rectangle(250.0, 400.0, 150.0, 200.0)
    assert sd.se.boundary == Rectangle(-50.0, 400.0, 150.0, 200.0)
    assert sd.nw.boundary == Rectangle(250.0, 0.0, 150.0, 200.0)
    assert sd.ne.boundary == Rectangle(-50.0, 0.0, 150.0, 200.0)


def test_children_start_empty_with_parent_settings():
    sd = QuadtreeSubdivisions(
        Rectangle(0.0, 0.0, 8.0, 8.0), 3, depth=2, max_depth=5
    )
    for child in sd:
        assert child.points == []
        assert child.children is None
        assert child.capacity == 3
        assert child.depth == 2
        assert child.max_depth == 5


def test_iteration_order_is_nw_ne_sw_se():
    sd = QuadtreeSubdivisions(Rectangle(0.0, 0.0, 8.0, 8.0), 3)
    assert list(sd) == [sd.nw, sd.ne, sd.sw, sd.se]
