"""
Test Configuration
==================

Pytest fixtures and test doubles for the thermal profiler.
"""

from typing import List, Optional, Set

import numpy as np
import pytest


FRAME_HEIGHT = 4
FRAME_WIDTH = 6

# RGB colors used by the sample calibration
RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


def make_frame(rgb, height: int = FRAME_HEIGHT, width: int = FRAME_WIDTH) -> np.ndarray:
    """Build a BGR frame filled with one RGB color."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, :] = (rgb[2], rgb[1], rgb[0])
    return frame


class FakeVideoSource:
    """
    In-memory VideoSource that counts decode calls.

    Attributes:
        frames: Frames served by index
        decode_calls: Number of seek_and_decode calls
        fail_indices: Indices whose decode returns None
    """

    def __init__(
        self,
        frames: List[np.ndarray],
        fps: float = 30.0,
        fail_indices: Optional[Set[int]] = None,
    ) -> None:
        self.frames = frames
        self.fps = fps
        self.fail_indices = set(fail_indices or ())
        self.decode_calls = 0
        self.decoded_indices: List[int] = []
        self.released = False
        self._open = False

    def open(self, path: str) -> bool:
        self._open = not path.startswith("missing")
        return self._open

    def is_open(self) -> bool:
        return self._open

    def frame_count(self) -> int:
        return len(self.frames) if self._open else 0

    def frame_rate(self) -> float:
        return self.fps if self._open else 0.0

    def frame_width(self) -> int:
        return self.frames[0].shape[1] if self._open and self.frames else 0

    def frame_height(self) -> int:
        return self.frames[0].shape[0] if self._open and self.frames else 0

    def seek_and_decode(self, index: int) -> Optional[np.ndarray]:
        self.decode_calls += 1
        self.decoded_indices.append(index)
        if index in self.fail_indices:
            return None
        return self.frames[index]

    def release(self) -> None:
        self.released = True
        self._open = False


@pytest.fixture
def sample_frames() -> List[np.ndarray]:
    """Three frames: all red, blue/green halves, all black."""
    split = make_frame(BLUE)
    split[:, FRAME_WIDTH // 2:] = (GREEN[2], GREEN[1], GREEN[0])
    return [
        make_frame(RED),
        split,
        make_frame((0, 0, 0)),
    ]


@pytest.fixture
def fake_source(sample_frames) -> FakeVideoSource:
    """Opened FakeVideoSource over the sample frames."""
    source = FakeVideoSource(sample_frames)
    source.open("clip.avi")
    return source


@pytest.fixture
def calibration_csv(tmp_path):
    """Calibration file with red=100C, green=50C, blue=20C."""
    path = tmp_path / "temp_mapping.csv"
    path.write_text(
        "X,Y,R,G,B,Temperature_C\n"
        "0,0,255,0,0,100.0\n"
        "1,0,0,255,0,50.0\n"
        "2,0,0,0,255,20.0\n"
    )
    return path


@pytest.fixture
def source_factory(sample_frames):
    """Factory producing fresh FakeVideoSources; keeps every one it built."""
    built: List[FakeVideoSource] = []

    def factory() -> FakeVideoSource:
        source = FakeVideoSource(sample_frames)
        built.append(source)
        return source

    factory.built = built
    return factory
