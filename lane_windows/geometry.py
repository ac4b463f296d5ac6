from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Sequence, Tuple

import numpy as np

from .errors import DegenerateSegment, ParallelLines

Line = Tuple[float, float, float, float]  # x1, y1, x2, y2

PARALLEL_EPS = 1e-9


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class LineSegment:
    """
    Oriented 2D segment.

    In canonical form P1 is the end nearer the bottom of the image
    (``p1.y >= p2.y``) and the direction ``p2 - p1`` points toward the horizon.
    """

    p1: Point
    p2: Point

    @classmethod
    def from_line(cls, line: Sequence[float]) -> "LineSegment":
        x1, y1, x2, y2 = line
        return cls(Point(float(x1), float(y1)), Point(float(x2), float(y2)))

    @property
    def direction(self) -> Point:
        return direction(self)

    def normalized(self) -> "LineSegment":
        return normalize(self)

    def as_line(self) -> Line:
        return self.p1.x, self.p1.y, self.p2.x, self.p2.y


def normalize(segment: LineSegment) -> LineSegment:
    if segment.p1.y < segment.p2.y:
        return LineSegment(segment.p2, segment.p1)
    return segment


def direction(segment: LineSegment) -> Point:
    dx = segment.p2.x - segment.p1.x
    dy = segment.p2.y - segment.p1.y
    if dx == 0 and dy == 0:
        raise DegenerateSegment(f"Zero-length segment at {tuple(segment.p1)}")
    return Point(dx, dy)


def distance(a: Point, b: Point) -> float:
    return float(np.hypot(a.x - b.x, a.y - b.y))


def project(segment: LineSegment, target_y: float, max_x: float, crop: bool = False) -> Point:
    """
    Extrapolate the segment's line to the row ``target_y``.

    With ``crop`` the result is kept inside the frame: when ``x`` falls
    outside ``[0, max_x)`` the line is intersected with the vertical edge in
    its horizontal travel direction (``max_x`` when ``d.x > 0``, else ``0``).
    That crossing is returned when it lies in ``[0, target_y)``, otherwise the
    corner on that edge.
    """
    d = direction(segment)
    if d.y == 0:
        raise DegenerateSegment("Horizontal segment never reaches the target row")

    p1 = segment.p1
    x = (target_y - p1.y) / d.y * d.x + p1.x
    if not crop or 0 <= x < max_x:
        return Point(x, target_y)

    edge_x = float(max_x) if d.x > 0 else 0.0
    if d.x == 0:
        return Point(edge_x, target_y)

    y = (edge_x - p1.x) / d.x * d.y + p1.y
    if 0 <= y < target_y:
        return Point(edge_x, y)
    return Point(edge_x, target_y)


def intersect(a: LineSegment, b: LineSegment, eps: float = PARALLEL_EPS) -> Point:
    """Intersection of the unbounded lines through ``a`` and ``b``."""
    d1 = direction(a)
    d2 = direction(b)
    if d1.y == 0:
        raise DegenerateSegment("First line is horizontal")

    denom = d1.y * d2.x - d2.y * d1.x
    if abs(denom) <= eps:
        raise ParallelLines("Lines are parallel, no vanishing point")

    y = (d1.y * d2.y * (a.p1.x - b.p1.x) - d1.x * d2.y * a.p1.y + d1.y * d2.x * b.p1.y) / denom
    x = d1.x * (y - a.p1.y) / d1.y + a.p1.x
    return Point(x, y)
