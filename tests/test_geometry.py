import pytest

from lane_windows.errors import DegenerateSegment, ParallelLines
from lane_windows.geometry import LineSegment, Point, direction, intersect, normalize, project


def seg(x1, y1, x2, y2):
    return LineSegment.from_line((x1, y1, x2, y2))


def test_normalize_puts_bottom_point_first_and_is_idempotent():
    s = seg(10, 20, 30, 400)
    n = normalize(s)
    assert n.p1 == Point(30, 400)
    assert n.p1.y >= n.p2.y
    assert normalize(n) == n


def test_normalize_keeps_canonical_segment():
    s = seg(30, 400, 10, 20)
    assert normalize(s) is s


def test_direction_of_zero_length_segment_is_degenerate():
    with pytest.raises(DegenerateSegment):
        direction(seg(5, 5, 5, 5))


def test_direction_points_toward_horizon_after_normalize():
    d = normalize(seg(0, 0, 100, 200)).direction
    assert d == Point(-100, -200)


def test_uncropped_projection_lands_on_target_row():
    p = project(seg(100, 400, 200, 300), 480, 640)
    assert p.y == 480
    assert p.x == pytest.approx(20.0)


def test_projection_of_horizontal_segment_is_degenerate():
    with pytest.raises(DegenerateSegment):
        project(seg(0, 100, 50, 100), 480, 640)


def test_cropped_projection_inside_frame_is_unchanged():
    s = seg(100, 400, 200, 300)
    assert project(s, 480, 640, crop=True) == project(s, 480, 640)


def test_cropped_projection_follows_horizontal_travel_to_right_edge():
    p = project(seg(10, 700, 20, 690), 720, 640, crop=True)
    assert p.x == 640
    assert p.y == pytest.approx(70.0)


def test_cropped_projection_follows_horizontal_travel_to_left_edge():
    p = project(seg(630, 700, 620, 690), 720, 640, crop=True)
    assert p.x == 0
    assert p.y == pytest.approx(70.0)


def test_cropped_projection_clamps_to_corner_of_travel_edge():
    assert project(seg(100, 400, 200, 300), 720, 640, crop=True) == Point(640, 720)
    assert project(seg(600, 400, 400, 200), 480, 640, crop=True) == Point(0, 480)


def test_cropped_projection_clamps_to_corner_when_edge_crossing_is_past_target():
    p = project(seg(100, 400, 0, 300), 100, 640, crop=True)
    assert p == Point(0, 100)


def test_cropped_projection_of_vertical_line_outside_frame():
    assert project(seg(700, 400, 700, 300), 480, 640, crop=True) == Point(0, 480)


def test_intersect_known_lines():
    a = normalize(seg(0, 0, 100, 100))  # y = x
    b = normalize(seg(0, 100, 100, 0))  # y = -x + 100
    p = intersect(a, b)
    assert p.x == pytest.approx(50.0)
    assert p.y == pytest.approx(50.0)


def test_intersect_uses_unbounded_lines():
    a = seg(120, 480, 300, 300)
    b = seg(520, 480, 340, 300)
    p = intersect(a, b)
    assert p.x == pytest.approx(320.0)
    assert p.y == pytest.approx(280.0)


def test_intersect_vertical_lines_are_parallel():
    with pytest.raises(ParallelLines):
        intersect(seg(10, 400, 10, 300), seg(50, 400, 50, 200))


def test_intersect_slanted_parallel_lines():
    with pytest.raises(ParallelLines):
        intersect(seg(0, 100, 100, 0), seg(50, 100, 150, 0))


def test_intersect_horizontal_first_line_is_degenerate():
    with pytest.raises(DegenerateSegment):
        intersect(seg(0, 100, 50, 100), seg(0, 200, 50, 100))
    with pytest.raises(DegenerateSegment):
        intersect(seg(0, 100, 50, 100), seg(0, 200, 50, 200))
