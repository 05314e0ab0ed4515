"""
Thermal Engine
==============

Session object owning one video source and one calibration table.

The engine is the public surface consumed by whatever exposes the
profiler to users. It is an explicit object created by the caller;
there is no module-level engine.

Operations:
    load_video(path)            -> bool
    load_calibration(path)      -> bool   (cumulative)
    clear_calibration()         -> None
    analyze_line(frame, ...)    -> List[float]
    analyze_lines(frame, segs)  -> List[LineProfile]
    get_video_info()            -> VideoMetadata
    get_pixel_temperature(rgb)  -> Optional[float]
    is_ready()                  -> bool
    get_frame(index)            -> Optional[np.ndarray]

Failure Model:
    No exception crosses this surface. Unopenable sources give False,
    unavailable frames give empty results, unresolvable colors give None.

Thread Safety:
    Every public operation holds one re-entrant lock. Opening a new
    video swaps source, metadata and cache together under that lock,
    so no caller sees them half-updated.
"""

import logging
import threading
from typing import Callable, List, Optional, Sequence

import numpy as np

from thermal_profiler.analysis.profiler import MISSING_TEMPERATURE, LineTemperatureProfiler
from thermal_profiler.calibration.resolver import DEFAULT_EARLY_EXIT_DISTANCE, NearestColorResolver
from thermal_profiler.calibration.table import CalibrationSourceError, ColorTemperatureTable
from thermal_profiler.config import Settings
from thermal_profiler.models.analysis import LineProfile, LineSegment
from thermal_profiler.models.color import ColorKey, is_valid_channel
from thermal_profiler.models.error_codes import ErrorKind
from thermal_profiler.models.video import VideoMetadata
from thermal_profiler.video.cache import FrameCache
from thermal_profiler.video.source import OpenCVVideoSource, VideoSource


logger = logging.getLogger(__name__)


SourceFactory = Callable[[], VideoSource]


class ThermalEngine:
    """
    Thermal video line-profiling engine.

    Attributes:
        table: Calibration table (grows with every load_calibration)
        resolver: Color resolver over the table

    Example:
        with ThermalEngine() as engine:
            engine.load_video("./videos/demo_vid.avi")
            engine.load_calibration("./data/temp_mapping.csv")

            if engine.is_ready():
                temps = engine.analyze_line(0, 10, 120, 300, 120)
    """

    def __init__(
        self,
        source_factory: Optional[SourceFactory] = None,
        early_exit_distance: float = DEFAULT_EARLY_EXIT_DISTANCE,
        missing_temperature: float = MISSING_TEMPERATURE,
        calibration_delimiter: str = ",",
    ) -> None:
        """
        Initialize an engine with no video and an empty table.

        Args:
            source_factory: Builds a fresh VideoSource for each load_video
            early_exit_distance: Resolver early-exit threshold
            missing_temperature: Reading for unresolved pixels
            calibration_delimiter: Field delimiter of calibration files
        """
        self._source_factory: SourceFactory = source_factory or OpenCVVideoSource
        self._lock = threading.RLock()

        self.table = ColorTemperatureTable(delimiter=calibration_delimiter)
        self.resolver = NearestColorResolver(self.table, early_exit_distance=early_exit_distance)
        self.missing_temperature = missing_temperature

        self._source: VideoSource = self._source_factory()
        self._metadata = VideoMetadata()
        self._cache = FrameCache(self._source)
        self._profiler = LineTemperatureProfiler(
            self._cache,
            self.resolver,
            missing_temperature=missing_temperature,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        source_factory: Optional[SourceFactory] = None,
    ) -> "ThermalEngine":
        """Build an engine from loaded settings."""
        if source_factory is None:
            timeout = settings.video.decode_timeout_seconds

            def source_factory() -> VideoSource:
                return OpenCVVideoSource(decode_timeout=timeout)

        return cls(
            source_factory=source_factory,
            early_exit_distance=settings.resolver.early_exit_distance,
            missing_temperature=settings.resolver.missing_temperature,
            calibration_delimiter=settings.calibration.delimiter,
        )

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_video(self, path: str) -> bool:
        """
        Open a video, replacing any previously open one.

        On failure the previous video (if any) stays loaded.

        Args:
            path: Path to the video file

        Returns:
            True if the video opened
        """
        source = self._source_factory()
        try:
            opened = source.open(path)
        except Exception as e:
            logger.error(f"[{ErrorKind.SOURCE_UNAVAILABLE.value}] Exception loading video {path}: {e}")
            opened = False

        if not opened:
            source.release()
            return False

        metadata = VideoMetadata(
            frame_count=source.frame_count(),
            fps=source.frame_rate(),
            width=source.frame_width(),
            height=source.frame_height(),
            loaded=True,
        )

        with self._lock:
            previous = self._source
            self._source = source
            self._metadata = metadata
            self._cache = FrameCache(source)
            self._profiler = LineTemperatureProfiler(
                self._cache,
                self.resolver,
                missing_temperature=self.missing_temperature,
            )
            previous.release()

        logger.info(
            f"Video loaded: {path} "
            f"(frames={metadata.frame_count}, fps={metadata.fps:.2f}, "
            f"resolution={metadata.width}x{metadata.height})"
        )
        return True

    def load_calibration(self, path: str) -> bool:
        """
        Add a calibration file to the table.

        Loading is cumulative: existing entries are kept, and colors
        present in the new file overwrite their earlier temperatures.

        Args:
            path: Path to the calibration CSV

        Returns:
            True if at least one valid row was ingested
        """
        with self._lock:
            try:
                self.table.ingest(path)
            except CalibrationSourceError as e:
                logger.error(f"[{e.kind.value}] Failed to load calibration: {e}")
                return False
        return True

    def clear_calibration(self) -> None:
        """Remove all calibration entries."""
        with self._lock:
            self.table.clear()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def analyze_line(self, frame: int, x1: int, y1: int, x2: int, y2: int) -> List[float]:
        """
        Temperatures along a line of a frame.

        Args:
            frame: Frame index (clamped to the video's range)
            x1, y1, x2, y2: Segment endpoints in pixels

        Returns:
            One reading per in-bounds pixel; empty if the frame is unavailable
        """
        with self._lock:
            return self._profiler.profile_line(frame, x1, y1, x2, y2)

    def analyze_lines(self, frame: int, segments: Sequence[LineSegment]) -> List[LineProfile]:
        """
        Profile several lines of the same frame.

        The frame is decoded at most once.

        Args:
            frame: Frame index (clamped)
            segments: Lines to profile

        Returns:
            One LineProfile per segment, in order
        """
        with self._lock:
            profiles = [self._profiler.profile(frame, segment) for segment in segments]

        for profile in profiles:
            logger.info(
                f"Frame {profile.frame_index} line {profile.segment}: "
                f"samples={len(profile.temperatures)}, stats={profile.stats.to_dict()}"
            )
        return profiles

    def get_video_info(self) -> VideoMetadata:
        """Metadata of the open video."""
        with self._lock:
            return self._metadata.model_copy(update={"loaded": self._source.is_open()})

    def get_pixel_temperature(self, r: int, g: int, b: int) -> Optional[float]:
        """
        Resolve one RGB color to a temperature.

        Args:
            r, g, b: Channels in [0, 255]

        Returns:
            Temperature in Celsius, or None if a channel is out of range
            or no calibration is loaded
        """
        if not (is_valid_channel(r) and is_valid_channel(g) and is_valid_channel(b)):
            logger.warning(f"[{ErrorKind.OUT_OF_RANGE.value}] Invalid RGB values: ({r}, {g}, {b})")
            return None

        with self._lock:
            return self.resolver.resolve(ColorKey(red=r, green=g, blue=b))

    def is_ready(self) -> bool:
        """True iff a video is open and has at least one frame."""
        with self._lock:
            return self._source.is_open() and self._metadata.frame_count > 0

    def get_frame(self, index: int) -> Optional[np.ndarray]:
        """
        Decoded BGR frame at an index (clamped).

        Returns:
            Frame array, or None if unavailable
        """
        with self._lock:
            return self._cache.get_frame(index)

    def metrics(self) -> dict:
        """Engine metrics for observability."""
        with self._lock:
            return {
                "video_loaded": self._source.is_open(),
                "calibration_entries": len(self.table),
                "calibration_skipped_rows": self.table.skipped_rows,
                "cached_frame": self._cache.cached_index,
                **{f"cache_{k}": v for k, v in self._cache.metrics.to_dict().items()},
            }

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Release the video source."""
        with self._lock:
            self._source.release()
            self._cache.invalidate()
            self._metadata = VideoMetadata()

    def __enter__(self) -> "ThermalEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
