from typing import List, Tuple

from pydantic import BaseModel, Field

from .geometry import LineSegment
from .selection import DashedLine, DetectionResult
from .windows import WindowSet

Segment = Tuple[float, float, float, float]


class DashedLineIn(BaseModel):
    elements: List[Segment] = Field(default_factory=list)
    as_solid: Segment


class DetectionIn(BaseModel):
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    solid: List[Segment] = Field(default_factory=list)
    dashed: List[DashedLineIn] = Field(default_factory=list)

    def to_result(self) -> DetectionResult:
        return DetectionResult(
            solid=tuple(LineSegment.from_line(s) for s in self.solid),
            dashed=tuple(
                DashedLine(
                    elements=tuple(LineSegment.from_line(e) for e in d.elements),
                    as_solid=LineSegment.from_line(d.as_solid),
                )
                for d in self.dashed
            ),
        )


class WindowSetOut(BaseModel):
    windows: List[Tuple[int, int, int, int]]
    vanishing_point: Tuple[float, float]
    window_middle: Tuple[float, float]
    left: Segment
    right: Segment

    @classmethod
    def from_window_set(cls, ws: WindowSet) -> "WindowSetOut":
        return cls(
            windows=[w.as_tuple() for w in ws],
            vanishing_point=tuple(ws.vanishing_point),
            window_middle=tuple(ws.window_middle),
            left=ws.left.as_line(),
            right=ws.right.as_line(),
        )
