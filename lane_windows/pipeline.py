from typing import Iterable, List, Optional, Sequence, Tuple

import cv2
import numpy as np
import structlog

from .config import DetectionSettings, WindowSettings
from .geometry import Line, LineSegment
from .selection import DetectionResult, candidates, select_boundaries
from .windows import Window, WindowSet, generate_windows

log = structlog.get_logger(__name__)

Color = Tuple[int, int, int]

SOLID_COLOR: Color = (0, 0, 255)
DASHED_COLOR: Color = (0, 255, 0)
WINDOW_COLOR: Color = (255, 0, 0)
MARKER_COLOR: Color = (255, 248, 240)


def _to_gray(bgr: np.ndarray) -> np.ndarray:
    if bgr.ndim == 2:
        return bgr
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2GRAY)


def _blur(gray: np.ndarray, k: int) -> np.ndarray:
    k = int(k)
    if k <= 0 or k % 2 == 0:
        raise ValueError("gaussian_kernel must be a positive odd integer")
    return cv2.GaussianBlur(gray, (k, k), 0)


def _canny(gray: np.ndarray, low: int, high: int) -> np.ndarray:
    return cv2.Canny(gray, int(low), int(high))


def _auto_canny_thresholds(gray: np.ndarray, sigma: float = 0.33) -> Tuple[int, int]:
    median = float(np.median(gray))
    lower = int(max(0, (1.0 - sigma) * median))
    upper = int(min(255, (1.0 + sigma) * median))
    # Ensure we always have a valid, non-zero range
    if lower == upper:
        upper = min(255, lower + 1)
    return lower, upper


def _hough_lines(
    edges: np.ndarray,
    rho: float,
    theta: float,
    threshold: int,
    min_line_length: int,
    max_line_gap: int,
) -> Optional[np.ndarray]:
    return cv2.HoughLinesP(
        edges,
        rho=float(rho),
        theta=float(theta),
        threshold=int(threshold),
        minLineLength=int(min_line_length),
        maxLineGap=int(max_line_gap),
    )


def _is_steep(line: Sequence[float], slope_threshold: float) -> bool:
    x1, y1, x2, y2 = line
    if x2 == x1:
        return y2 != y1
    return abs((y2 - y1) / (x2 - x1)) >= slope_threshold


def _roi(shape: Tuple[int, ...], settings: DetectionSettings) -> Tuple[int, int, int, int]:
    h, w = shape[:2]
    top = min(settings.up_margin, h)
    bottom = max(top, h - settings.down_margin)
    left = min(settings.side_margin, w)
    right = max(left, w - settings.side_margin)
    return top, bottom, left, right


def detect_segments(image: np.ndarray, settings: Optional[DetectionSettings] = None) -> DetectionResult:
    """
    Extract candidate lane segments from a BGR (or grayscale) frame.

    Canny edges inside the margin-defined region of interest go through a
    probabilistic Hough transform; near-horizontal segments are dropped and
    the rest are returned as solid segments in frame coordinates.
    """
    if image is None or image.size == 0:
        raise ValueError("Empty image provided")
    settings = settings or DetectionSettings()

    gray = _to_gray(image)
    blurred = _blur(gray, settings.gaussian_kernel)
    if settings.canny_low is not None and settings.canny_high is not None:
        low, high = settings.canny_low, settings.canny_high
    else:
        low, high = _auto_canny_thresholds(blurred, sigma=settings.auto_canny_sigma)
    edges = _canny(blurred, low, high)

    top, bottom, left, right = _roi(edges.shape, settings)
    segments = _hough_lines(
        np.ascontiguousarray(edges[top:bottom, left:right]),
        settings.hough_rho,
        np.pi / 180.0,
        settings.hough_threshold,
        settings.min_line_length,
        settings.max_line_gap,
    )

    solid: List[LineSegment] = []
    if segments is not None:
        for x1, y1, x2, y2 in segments.reshape((-1, 4)):
            line = (x1 + left, y1 + top, x2 + left, y2 + top)
            if _is_steep(line, settings.slope_threshold):
                solid.append(LineSegment.from_line(line))

    log.debug("segments_detected", count=len(solid), canny=(low, high))
    return DetectionResult(solid=tuple(solid))


def compute_windows(
    detection: DetectionResult,
    width: int,
    height: int,
    settings: Optional[WindowSettings] = None,
) -> WindowSet:
    settings = settings or WindowSettings()
    left, right = select_boundaries(candidates(detection), width, height)
    result = generate_windows(
        left,
        right,
        width,
        height,
        scale_step=settings.scale_step,
        min_scale=settings.min_scale,
        aspect_ratio=settings.aspect_ratio,
    )
    log.info(
        "windows_generated",
        count=len(result),
        vanishing_point=tuple(round(v, 2) for v in result.vanishing_point),
        left=left.as_line(),
        right=right.as_line(),
    )
    return result


def _pt(x: float, y: float) -> Tuple[int, int]:
    return int(x), int(y)


def draw_lines(image: np.ndarray, lines: Iterable[Line], color: Color = SOLID_COLOR, thickness: int = 3) -> np.ndarray:
    line_img = np.zeros_like(image)
    for x1, y1, x2, y2 in lines:
        cv2.line(line_img, _pt(x1, y1), _pt(x2, y2), color, int(thickness))
    return line_img


def draw_detection(image: np.ndarray, detection: DetectionResult, thickness: int = 3) -> np.ndarray:
    line_img = draw_lines(image, (s.as_line() for s in detection.solid), SOLID_COLOR, thickness)
    dashed: List[Line] = []
    for d in detection.dashed:
        dashed.extend(e.as_line() for e in d.elements)
        dashed.append(d.as_solid.as_line())
    return cv2.add(line_img, draw_lines(image, dashed, DASHED_COLOR, thickness))


def draw_windows(image: np.ndarray, windows: Iterable[Window], color: Color = WINDOW_COLOR, thickness: int = 2) -> np.ndarray:
    out = image.copy()
    for w in windows:
        cv2.rectangle(out, (w.x, w.y), (w.x + w.width, w.y + w.height), color, int(thickness))
    return out


def combine_overlay(base: np.ndarray, line_img: np.ndarray) -> np.ndarray:
    return cv2.addWeighted(base, 0.8, line_img, 1.0, 1.0)


def render_overlay(image: np.ndarray, detection: DetectionResult, window_set: Optional[WindowSet] = None) -> np.ndarray:
    """Detected segments, search windows and anchor points drawn over the frame."""
    if image.ndim == 2:
        image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    overlay = combine_overlay(image, draw_detection(image, detection))
    if window_set is None:
        return overlay

    overlay = draw_windows(overlay, window_set)
    for p in (window_set.vanishing_point, window_set.window_middle):
        if np.isfinite(p.x) and np.isfinite(p.y):
            cv2.circle(overlay, _pt(p.x, p.y), 5, MARKER_COLOR, 3)
    return overlay


def generate_synthetic_lane(width: int = 640, height: int = 360, curvature_px: int = 0, thickness: int = 4) -> np.ndarray:
    """
    Synthetic road frame: two white boundaries converging toward the horizon.

    ``curvature_px`` shifts the far ends of both boundaries sideways.
    """
    img = np.full((height, width, 3), 60, dtype=np.uint8)
    top_y = int(height * 0.55)
    half_gap = int(width * 0.05)
    mid = width // 2 + int(curvature_px)

    left = ((int(width * 0.1), height - 1), (mid - half_gap, top_y))
    right = ((int(width * 0.9), height - 1), (mid + half_gap, top_y))
    for p1, p2 in (left, right):
        cv2.line(img, p1, p2, (255, 255, 255), int(thickness))
    return img
