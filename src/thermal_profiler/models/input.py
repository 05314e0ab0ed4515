"""
Query Schemas
=============

Pydantic models for validating caller input before it reaches the engine.

Out-of-range values (negative frame indices, channels outside 0-255)
are rejected HERE, at the boundary. The engine itself never raises
for them; it degrades to an empty or absent result instead.

Example:
    from thermal_profiler.models.input import PixelQuery

    query = PixelQuery.model_validate({"r": 255, "g": 128, "b": 0})
    temperature = engine.get_pixel_temperature(query.r, query.g, query.b)
"""

from typing import List

from pydantic import BaseModel, Field

from thermal_profiler.models.analysis import LineSegment


class PixelQuery(BaseModel):
    """
    A single color to resolve to a temperature.

    Attributes:
        r: Red channel
        g: Green channel
        b: Blue channel
    """

    r: int = Field(..., ge=0, le=255, description="Red channel (0-255)")
    g: int = Field(..., ge=0, le=255, description="Green channel (0-255)")
    b: int = Field(..., ge=0, le=255, description="Blue channel (0-255)")


class LineQuery(BaseModel):
    """
    One or more lines to profile on a single frame.

    Attributes:
        frame: Zero-based frame index
        lines: Segments to profile (at least one)
    """

    frame: int = Field(..., ge=0, description="Zero-based frame index")
    lines: List[LineSegment] = Field(
        ...,
        min_length=1,
        description="Line segments to profile",
    )

    class Config:
        """Pydantic model configuration."""

        json_schema_extra = {
            "example": {
                "frame": 42,
                "lines": [
                    {"x1": 10, "y1": 120, "x2": 300, "y2": 120},
                    {"x1": 160, "y1": 10, "x2": 160, "y2": 230},
                ],
            }
        }
