"""Lane-boundary geometry for multiscale vehicle search windows (segments → vanishing point → windows)."""

from .errors import DegenerateSegment, GeometryError, NoBoundaryFound, ParallelLines
from .geometry import LineSegment, Point, direction, intersect, normalize, project
from .selection import DashedLine, DetectionResult, candidates, select_boundaries
from .windows import Window, WindowSet, generate_windows, step_count

__all__ = [
    "DegenerateSegment",
    "GeometryError",
    "NoBoundaryFound",
    "ParallelLines",
    "LineSegment",
    "Point",
    "direction",
    "intersect",
    "normalize",
    "project",
    "DashedLine",
    "DetectionResult",
    "candidates",
    "select_boundaries",
    "Window",
    "WindowSet",
    "generate_windows",
    "step_count",
]
