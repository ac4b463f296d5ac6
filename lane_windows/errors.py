"""Frame-local failures raised by the window geometry."""


class GeometryError(ValueError):
    """Base class for geometry failures; all are recoverable per frame."""


class DegenerateSegment(GeometryError):
    """Zero-length segment, or a horizontal one where a slope is required."""


class NoBoundaryFound(GeometryError):
    def __init__(self, side: str):
        super().__init__(f"No {side} lane boundary candidate found")
        self.side = side


class ParallelLines(GeometryError):
    """Boundary lines are (nearly) parallel, so there is no vanishing point."""
