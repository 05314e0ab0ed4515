"""
Frame Cache
===========

Single-slot cache in front of a seekable video source.

Holds the most recently decoded frame and its index. Repeated requests
for the same frame never touch the source; any other index costs one
seek plus one decode.

Design Rules:
    - One slot only; this is not an LRU
    - Requested indices are clamped to [0, frame_count - 1]
    - A failed decode leaves the slot untouched, so the next request
      for that index retries instead of returning stale data
    - Random access defeats the cache entirely; scrubbing frame by
      frame (or re-querying one frame) is what it is for
"""

import logging
from typing import Optional

import numpy as np

from thermal_profiler.models.error_codes import ErrorKind
from thermal_profiler.video.source import FrameDecodeError, VideoSource


logger = logging.getLogger(__name__)


class FrameCacheMetrics:
    """Metrics for FrameCache observability."""

    __slots__ = (
        "hits",
        "misses",
        "decode_failures",
    )

    def __init__(self) -> None:
        self.hits: int = 0
        self.misses: int = 0
        self.decode_failures: int = 0

    def to_dict(self) -> dict:
        """Export metrics as dict."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "decode_failures": self.decode_failures,
        }


class FrameCache:
    """
    Single-slot frame cache.

    Attributes:
        source: Video source frames are decoded from
        metrics: Hit/miss/failure counters

    Example:
        cache = FrameCache(source)
        frame = cache.get_frame(10)   # decodes
        frame = cache.get_frame(10)   # cache hit
    """

    def __init__(self, source: VideoSource) -> None:
        """
        Initialize an empty cache.

        Args:
            source: Opened (or unopened) video source
        """
        self.source = source
        self.metrics = FrameCacheMetrics()
        self._frame: Optional[np.ndarray] = None
        self._index: Optional[int] = None

    @property
    def cached_index(self) -> Optional[int]:
        """Index of the cached frame, or None if empty."""
        return self._index

    def clamp_index(self, index: int) -> int:
        """Clamp a frame index into the source's valid range."""
        last = self.source.frame_count() - 1
        return max(0, min(int(index), last))

    def get_frame(self, index: int) -> Optional[np.ndarray]:
        """
        Return the frame at an index, decoding only on a cache miss.

        Args:
            index: Requested frame index (clamped)

        Returns:
            BGR frame, or None if no source is open or the decode failed
        """
        if not self.source.is_open():
            logger.warning(f"[{ErrorKind.DECODE_FAILURE.value}] Video not loaded")
            return None

        index = self.clamp_index(index)

        if self._index == index and self._frame is not None:
            self.metrics.hits += 1
            return self._frame

        self.metrics.misses += 1

        try:
            frame = self.source.seek_and_decode(index)
            reason = f"Could not read frame {index}"
        except FrameDecodeError as e:
            frame = None
            reason = str(e)

        if frame is None:
            self.metrics.decode_failures += 1
            logger.warning(
                f"[{ErrorKind.DECODE_FAILURE.value}] {reason}; "
                f"keeping cached frame {self._index}"
            )
            return None

        self._frame = frame
        self._index = index
        return frame

    def invalidate(self) -> None:
        """Drop the cached frame."""
        self._frame = None
        self._index = None
