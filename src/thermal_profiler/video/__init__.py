"""
Video Module
============

Frame access for thermal videos.

This module provides the decoding layer for the profiler:
    - VideoSource: Protocol for seekable frame sources
    - OpenCVVideoSource: cv2.VideoCapture implementation with decode timeout
    - FrameCache: Single-slot cache of the last decoded frame

Example:
    from thermal_profiler.video import FrameCache, OpenCVVideoSource

    source = OpenCVVideoSource(decode_timeout=5.0)
    source.open("./videos/demo_vid.avi")

    cache = FrameCache(source)
    frame = cache.get_frame(0)
"""

from thermal_profiler.video.source import (
    FrameDecodeError,
    OpenCVVideoSource,
    VideoSource,
)
from thermal_profiler.video.cache import FrameCache, FrameCacheMetrics


__all__ = [
    "FrameCache",
    "FrameCacheMetrics",
    "FrameDecodeError",
    "OpenCVVideoSource",
    "VideoSource",
]
