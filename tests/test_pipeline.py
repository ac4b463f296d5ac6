import numpy as np
import pytest

cv2 = pytest.importorskip("cv2")

from lane_windows.config import DetectionSettings
from lane_windows.errors import NoBoundaryFound
from lane_windows.geometry import LineSegment
from lane_windows.pipeline import (
    _auto_canny_thresholds,
    compute_windows,
    detect_segments,
    generate_synthetic_lane,
    render_overlay,
)
from lane_windows.selection import DetectionResult


def test_auto_canny_thresholds_produce_non_degenerate_range():
    gray = np.zeros((32, 32), dtype=np.uint8)
    low, high = _auto_canny_thresholds(gray)
    assert 0 <= low < high <= 255


def test_detects_steep_segments_on_synthetic():
    img = generate_synthetic_lane(width=320, height=240)
    det = detect_segments(img)
    assert len(det.solid) >= 2
    for s in det.solid:
        x1, y1, x2, y2 = s.as_line()
        assert x1 != x2 or y1 != y2
        assert abs(y2 - y1) >= 0.4 * abs(x2 - x1)


def test_empty_frame_is_rejected():
    with pytest.raises(ValueError):
        detect_segments(np.zeros((0, 0, 3), dtype=np.uint8))


def test_region_of_interest_excludes_masked_rows():
    img = generate_synthetic_lane(width=320, height=240)
    det = detect_segments(img, DetectionSettings(up_margin=180))
    for s in det.solid:
        assert min(s.p1.y, s.p2.y) >= 180


def test_windows_on_synthetic_frame():
    img = generate_synthetic_lane(width=320, height=240)
    det = detect_segments(img)
    ws = compute_windows(det, 320, 240)

    assert len(ws) == 5
    widths = [w.width for w in ws]
    assert all(a > b for a, b in zip(widths, widths[1:]))
    assert 0.3 * 320 < ws.vanishing_point.x < 0.7 * 320
    assert ws.vanishing_point.y < 0.6 * 240


def test_blank_frame_has_no_boundaries():
    img = np.full((240, 320, 3), 60, dtype=np.uint8)
    with pytest.raises(NoBoundaryFound):
        compute_windows(detect_segments(img), 320, 240)


def test_render_overlay_keeps_frame_shape():
    img = generate_synthetic_lane(width=320, height=240)
    det = DetectionResult(
        solid=(
            LineSegment.from_line((32, 239, 144, 132)),
            LineSegment.from_line((288, 239, 176, 132)),
        )
    )
    ws = compute_windows(det, 320, 240)
    overlay = render_overlay(img, det, ws)
    assert overlay.shape == img.shape
    assert not np.array_equal(overlay, img)
