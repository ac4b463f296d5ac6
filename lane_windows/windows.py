from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .errors import DegenerateSegment
from .geometry import LineSegment, Point, direction, distance, intersect, project


@dataclass(frozen=True)
class Window:
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_float(cls, x: float, y: float, width: float, height: float) -> "Window":
        # int() truncates toward zero
        return cls(int(x), int(y), int(width), int(height))

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


@dataclass(frozen=True)
class WindowSet:
    """Search windows for one frame, nearest first, with the anchors used to build them."""

    windows: Tuple[Window, ...]
    vanishing_point: Point
    window_middle: Point
    left: LineSegment
    right: LineSegment

    def __iter__(self) -> Iterator[Window]:
        return iter(self.windows)

    def __len__(self) -> int:
        return len(self.windows)

    def __getitem__(self, i: int) -> Window:
        return self.windows[i]


def step_count(min_scale: float, scale_step: float) -> int:
    """Number of scale_step multiplications that keep the scale above min_scale."""
    if not 0 < scale_step < 1:
        raise ValueError("scale_step must be in (0, 1)")
    if min_scale <= 0:
        raise ValueError("min_scale must be positive")

    count = 0
    temp = min_scale
    while True:
        temp /= scale_step
        count += 1
        if temp >= 1:
            return count


def window_direction(
    left: LineSegment,
    right: LineSegment,
    toward: Optional[Point] = None,
    origin: Optional[Point] = None,
) -> Point:
    """
    Unit vector along which windows recede.

    Blends both boundary slopes: ``(-(d1.x + d2.x * d1.y / d2.y) / 2, -d1.y)``.
    The blended vector keeps its slope but, for canonical segments (d.y < 0),
    points down and away from the vanishing point. Windows must converge on
    the vanishing point as they shrink, so when ``toward`` and ``origin`` are
    given the vector is reversed if it points away from ``toward``.
    """
    d1 = direction(left)
    d2 = direction(right)
    if d2.y == 0:
        raise DegenerateSegment("Right boundary is horizontal")

    v = np.array([-(d1.x + d2.x * d1.y / d2.y) / 2, -d1.y], dtype=float)
    norm = float(np.hypot(v[0], v[1]))
    if norm == 0:
        raise DegenerateSegment("Left boundary is horizontal")
    v /= norm

    if toward is not None and origin is not None:
        if v[0] * (toward.x - origin.x) + v[1] * (toward.y - origin.y) < 0:
            v = -v
    return Point(float(v[0]), float(v[1]))


def generate_windows(
    left: LineSegment,
    right: LineSegment,
    width: int,
    height: int,
    scale_step: float = 0.5,
    min_scale: float = 0.05,
    aspect_ratio: float = 1.5,
) -> WindowSet:
    """
    Build the multiscale window sequence between two lane boundaries.

    The first window spans the lane at the lowest row where both boundaries
    are inside the frame. Each next window is ``scale_step`` times smaller
    and moved toward the vanishing point by the distance the scale lost.
    """
    if width <= 0 or height <= 0:
        raise ValueError("Frame width and height must be positive")
    if aspect_ratio <= 0:
        raise ValueError("aspect_ratio must be positive")
    steps = step_count(min_scale, scale_step)

    horizon_y = min(
        project(left, height, width, crop=True).y,
        project(right, height, width, crop=True).y,
    )
    left_point = project(left, horizon_y, width)
    right_point = project(right, horizon_y, width)

    vanishing_point = intersect(left, right)

    width0 = right_point.x - left_point.x
    middle = Point(left_point.x + width0 / 2, left_point.y)
    u = window_direction(left, right, toward=vanishing_point, origin=middle)
    coefficient = distance(middle, vanishing_point)

    windows: List[Window] = []
    scale = 1.0
    for _ in range(steps):
        w = width0 * scale
        h = w / aspect_ratio
        length = (1.0 - scale) * coefficient
        px = middle.x + u.x * length
        py = middle.y + u.y * length
        windows.append(Window.from_float(px - w / 2, py - h, w, h))
        scale *= scale_step

    return WindowSet(
        windows=tuple(windows),
        vanishing_point=vanishing_point,
        window_middle=middle,
        left=left,
        right=right,
    )
