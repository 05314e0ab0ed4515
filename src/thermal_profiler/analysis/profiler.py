"""
Line Temperature Profiler
=========================

Samples temperatures along a line segment of one video frame.

Pipeline per request:
    1. FrameCache        -> decoded BGR frame (or nothing)
    2. rasterize()       -> in-bounds pixels along the segment
    3. pixel sampling    -> BGR reordered to RGB ColorKey
    4. resolver          -> temperature, or the miss sentinel

Guarantees:
    - len(output) == number of in-bounds pixels on the line
    - An unavailable frame yields an empty list, not an exception
    - Frame indices are clamped, so out-of-range requests read the
      first or last frame
"""

import logging
from typing import Dict, List

from thermal_profiler.analysis.stats import compute_line_stats
from thermal_profiler.calibration.resolver import NearestColorResolver
from thermal_profiler.geometry.rasterizer import rasterize
from thermal_profiler.models.analysis import LineProfile, LineSegment
from thermal_profiler.models.color import ColorKey
from thermal_profiler.models.error_codes import ErrorKind
from thermal_profiler.video.cache import FrameCache


logger = logging.getLogger(__name__)


MISSING_TEMPERATURE = 0.0


class LineTemperatureProfiler:
    """
    Composes frame access, rasterization and color resolution.

    Attributes:
        cache: Frame cache to read frames from
        resolver: Color resolver
        missing_temperature: Reading used when a color cannot be resolved

    Example:
        profiler = LineTemperatureProfiler(cache, resolver)
        temps = profiler.profile_line(42, 10, 120, 300, 120)
    """

    def __init__(
        self,
        cache: FrameCache,
        resolver: NearestColorResolver,
        missing_temperature: float = MISSING_TEMPERATURE,
    ) -> None:
        self.cache = cache
        self.resolver = resolver
        self.missing_temperature = missing_temperature

    def profile_line(
        self,
        frame_index: int,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
    ) -> List[float]:
        """
        Read temperatures along a line of one frame.

        Args:
            frame_index: Requested frame (clamped to the video's range)
            x1, y1: First endpoint (pixels)
            x2, y2: Second endpoint (pixels)

        Returns:
            One temperature per in-bounds pixel, in line order.
            Empty if the frame is unavailable.
        """
        frame = self.cache.get_frame(frame_index)
        if frame is None:
            logger.warning(
                f"[{ErrorKind.DECODE_FAILURE.value}] Could not get frame "
                f"{frame_index} for analysis"
            )
            return []

        height, width = frame.shape[:2]
        pixels = rasterize(x1, y1, x2, y2, width, height)

        # Resolve each distinct color once per request
        resolved: Dict[ColorKey, float] = {}
        temperatures: List[float] = []
        misses = 0

        for x, y in pixels:
            color = ColorKey.from_bgr(frame[y, x])

            temperature = resolved.get(color)
            if temperature is None:
                result = self.resolver.resolve(color)
                if result is None:
                    misses += 1
                    result = self.missing_temperature
                temperature = resolved[color] = result

            temperatures.append(temperature)

        if misses:
            logger.debug(
                f"[{ErrorKind.NOT_FOUND.value}] {misses} of {len(pixels)} colors "
                f"unresolved on frame {frame_index}"
            )

        return temperatures

    def profile(self, frame_index: int, segment: LineSegment) -> LineProfile:
        """
        Profile a segment and summarize it.

        Args:
            frame_index: Requested frame (clamped)
            segment: Line to profile

        Returns:
            LineProfile with readings and statistics
        """
        temperatures = self.profile_line(
            frame_index,
            segment.x1,
            segment.y1,
            segment.x2,
            segment.y2,
        )
        clamped_index = (
            self.cache.clamp_index(frame_index)
            if self.cache.source.is_open()
            else frame_index
        )
        return LineProfile(
            frame_index=clamped_index,
            segment=segment,
            temperatures=temperatures,
            stats=compute_line_stats(temperatures),
        )
