"""
Video Models
============

Metadata describing the currently open video source.
"""

from pydantic import BaseModel, Field


class VideoMetadata(BaseModel):
    """
    Properties of an opened video source.

    Populated once when a source is opened. Opening a new source
    replaces the whole object rather than mutating it.

    Attributes:
        frame_count: Total number of frames reported by the container
        fps: Frame rate reported by the container
        width: Frame width in pixels
        height: Frame height in pixels
        loaded: Whether a source is open
    """

    model_config = {"frozen": True}

    frame_count: int = Field(default=0, ge=0, description="Total frame count")
    fps: float = Field(default=0.0, ge=0, description="Frames per second")
    width: int = Field(default=0, ge=0, description="Frame width (pixels)")
    height: int = Field(default=0, ge=0, description="Frame height (pixels)")
    loaded: bool = Field(default=False, description="Whether a source is open")
