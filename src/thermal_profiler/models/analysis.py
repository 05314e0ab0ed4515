"""
Analysis Models
===============

Line segments and the results of profiling them.

Coordinates are in IMAGE SPACE (pixels), origin at the top-left corner.
X increases rightward, Y increases downward.
"""

from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel, Field


class LineSegment(BaseModel):
    """
    Line segment between two pixel coordinates.

    Endpoints may lie outside the frame; the rasterizer clips them.

    Attributes:
        x1: Horizontal coordinate of the first endpoint
        y1: Vertical coordinate of the first endpoint
        x2: Horizontal coordinate of the second endpoint
        y2: Vertical coordinate of the second endpoint
    """

    x1: int = Field(..., description="First endpoint x (pixels)")
    y1: int = Field(..., description="First endpoint y (pixels)")
    x2: int = Field(..., description="Second endpoint x (pixels)")
    y2: int = Field(..., description="Second endpoint y (pixels)")

    def __str__(self) -> str:
        return f"({self.x1},{self.y1}) -> ({self.x2},{self.y2})"


@dataclass(frozen=True, slots=True)
class LineStats:
    """
    Summary statistics over the valid readings of a line.

    Readings of 0.0 mark unresolved pixels and are excluded.

    Attributes:
        avg: Mean temperature (C)
        max: Maximum temperature (C)
        min: Minimum temperature (C)
        count: Number of valid readings
    """

    avg: float = 0.0
    max: float = 0.0
    min: float = 0.0
    count: int = 0

    def to_dict(self) -> dict:
        """Export as dictionary for logging/serialization."""
        return {
            "avg": round(self.avg, 3),
            "max": round(self.max, 3),
            "min": round(self.min, 3),
            "count": self.count,
        }


@dataclass(frozen=True)
class LineProfile:
    """
    Temperature readings along one line of one frame.

    Attributes:
        frame_index: Frame the readings were taken from (after clamping)
        segment: The requested line segment
        temperatures: One reading per in-bounds pixel, in line order
        stats: Summary of the valid readings
    """

    frame_index: int
    segment: LineSegment
    temperatures: List[float] = field(default_factory=list)
    stats: LineStats = field(default_factory=LineStats)

    def __repr__(self) -> str:
        """Compact repr that doesn't dump every reading."""
        return (
            f"LineProfile(frame_index={self.frame_index}, "
            f"segment={self.segment}, "
            f"samples={len(self.temperatures)}, "
            f"avg={self.stats.avg:.2f})"
        )
