"""
Video Source
============

Sequential, seekable frame source backed by OpenCV.

This is the ONLY place in the codebase that touches cv2.VideoCapture.
Everything downstream works on decoded BGR numpy arrays.

Design Rules:
    - Seeking and reading happen on one dedicated worker thread, so the
      capture's read position is never touched from two threads
    - Each seek+read is bounded by an optional timeout; media I/O can hang
    - Failures raise FrameDecodeError; callers decide how to degrade
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Optional, Protocol

import cv2
import numpy as np

from thermal_profiler.models.error_codes import ErrorKind


logger = logging.getLogger(__name__)


class FrameDecodeError(Exception):
    """Raised when a frame cannot be seeked to or decoded."""

    kind = ErrorKind.DECODE_FAILURE


class VideoSource(Protocol):
    """
    Protocol for frame sources.

    Implemented by:
        - OpenCVVideoSource (production)
        - test doubles that count decode calls
    """

    def open(self, path: str) -> bool:
        ...

    def is_open(self) -> bool:
        ...

    def frame_count(self) -> int:
        ...

    def frame_rate(self) -> float:
        ...

    def frame_width(self) -> int:
        ...

    def frame_height(self) -> int:
        ...

    def seek_and_decode(self, index: int) -> Optional[np.ndarray]:
        """
        Seek to a frame and decode it.

        Args:
            index: Zero-based frame index

        Returns:
            BGR image as np.ndarray (H, W, 3), dtype=uint8

        Raises:
            FrameDecodeError: If the frame cannot be read
        """
        ...

    def release(self) -> None:
        ...


class OpenCVVideoSource:
    """
    VideoSource backed by cv2.VideoCapture.

    Attributes:
        decode_timeout: Max seconds to wait for one seek+read (None = no limit)

    Example:
        source = OpenCVVideoSource(decode_timeout=5.0)
        if source.open("./videos/demo_vid.avi"):
            frame = source.seek_and_decode(120)
    """

    def __init__(self, decode_timeout: Optional[float] = None) -> None:
        """
        Initialize an unopened source.

        Args:
            decode_timeout: Seconds allowed per decode, None to wait forever
        """
        if decode_timeout is not None and decode_timeout <= 0:
            raise ValueError("decode_timeout must be positive or None")

        self.decode_timeout = decode_timeout
        self._capture: Optional[cv2.VideoCapture] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._path: Optional[str] = None

    @property
    def path(self) -> Optional[str]:
        """Path of the open video, if any."""
        return self._path

    def open(self, path: str) -> bool:
        """
        Open a video file.

        Args:
            path: Path to a video container readable by OpenCV

        Returns:
            True if the capture opened
        """
        self.release()

        capture = cv2.VideoCapture(path)
        if not capture.isOpened():
            logger.error(f"[{ErrorKind.SOURCE_UNAVAILABLE.value}] Could not open video file: {path}")
            capture.release()
            return False

        self._capture = capture
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="video_decode")
        self._path = path
        return True

    def is_open(self) -> bool:
        return self._capture is not None and self._capture.isOpened()

    def frame_count(self) -> int:
        if not self.is_open():
            return 0
        return max(0, int(self._capture.get(cv2.CAP_PROP_FRAME_COUNT)))

    def frame_rate(self) -> float:
        if not self.is_open():
            return 0.0
        return max(0.0, float(self._capture.get(cv2.CAP_PROP_FPS)))

    def frame_width(self) -> int:
        if not self.is_open():
            return 0
        return max(0, int(self._capture.get(cv2.CAP_PROP_FRAME_WIDTH)))

    def frame_height(self) -> int:
        if not self.is_open():
            return 0
        return max(0, int(self._capture.get(cv2.CAP_PROP_FRAME_HEIGHT)))

    def _read_at(self, index: int) -> Optional[np.ndarray]:
        """Seek and read on the decode thread."""
        self._capture.set(cv2.CAP_PROP_POS_FRAMES, index)
        ok, frame = self._capture.read()
        if not ok or frame is None:
            return None
        return frame

    def seek_and_decode(self, index: int) -> Optional[np.ndarray]:
        """
        Seek to a frame and decode it.

        Args:
            index: Zero-based frame index

        Returns:
            BGR image as np.ndarray (H, W, 3), dtype=uint8

        Raises:
            FrameDecodeError: If not open, the read fails, or it times out
        """
        if not self.is_open() or self._executor is None:
            raise FrameDecodeError("Video not loaded")

        future = self._executor.submit(self._read_at, index)
        try:
            frame = future.result(timeout=self.decode_timeout)
        except FutureTimeoutError:
            future.cancel()
            raise FrameDecodeError(
                f"Timed out after {self.decode_timeout}s reading frame {index}"
            )
        except cv2.error as e:
            raise FrameDecodeError(f"OpenCV error reading frame {index}: {e}")

        if frame is None:
            raise FrameDecodeError(f"Could not read frame {index}")

        if frame.ndim != 3 or frame.shape[2] != 3:
            raise FrameDecodeError(f"Invalid frame shape for frame {index}: {frame.shape}")

        return frame

    def release(self) -> None:
        """Release the capture and its decode thread."""
        capture, executor = self._capture, self._executor
        self._capture = None
        self._executor = None
        self._path = None

        if executor is not None:
            # Release on the decode thread, after any read still in flight
            if capture is not None:
                executor.submit(capture.release)
            executor.shutdown(wait=False)
        elif capture is not None:
            capture.release()
