from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import structlog

from .errors import DegenerateSegment, NoBoundaryFound
from .geometry import LineSegment, normalize, project

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DashedLine:
    elements: Tuple[LineSegment, ...]
    as_solid: LineSegment


@dataclass(frozen=True)
class DetectionResult:
    """Output of a line-detection stage for one frame."""

    solid: Tuple[LineSegment, ...] = ()
    dashed: Tuple[DashedLine, ...] = ()

    def candidates(self) -> List[LineSegment]:
        return candidates(self)


def candidates(detection: DetectionResult) -> List[LineSegment]:
    """
    Flatten a detection into normalized boundary candidates.

    Dashed representatives come first, then solid segments; exact duplicates
    keep their first occurrence.
    """
    out: List[LineSegment] = []
    seen = set()
    for seg in [d.as_solid for d in detection.dashed] + list(detection.solid):
        seg = normalize(seg)
        if seg in seen:
            continue
        seen.add(seg)
        out.append(seg)
    return out


def select_boundaries(
    segments: Iterable[LineSegment],
    width: int,
    height: int,
) -> Tuple[LineSegment, LineSegment]:
    """
    Pick the boundaries closest to the centerline on each side.

    Each segment is extrapolated to the bottom row. Left is the largest
    bottom x at or left of ``width / 2``, right the smallest bottom x strictly
    right of it. On equal bottom x the later segment wins.
    """
    view_x = width / 2
    left = right = None
    left_x = float("-inf")
    right_x = float("inf")

    for seg in segments:
        try:
            x0 = project(seg, height, width).x
        except DegenerateSegment:
            log.debug("skip_candidate", segment=seg.as_line(), reason="degenerate")
            continue

        if left_x <= x0 <= view_x:
            left, left_x = seg, x0
        elif view_x < x0 <= right_x:
            right, right_x = seg, x0

    if left is None:
        raise NoBoundaryFound("left")
    if right is None:
        raise NoBoundaryFound("right")
    return left, right
