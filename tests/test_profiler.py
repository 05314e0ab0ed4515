"""
Profiler Tests
==============

Line sampling over cached frames.
"""

import pytest

from thermal_profiler.analysis import LineTemperatureProfiler, compute_line_stats
from thermal_profiler.calibration import ColorTemperatureTable, NearestColorResolver
from thermal_profiler.geometry import rasterize
from thermal_profiler.models.analysis import LineSegment
from thermal_profiler.video import FrameCache

from conftest import FRAME_HEIGHT, FRAME_WIDTH, FakeVideoSource


@pytest.fixture
def resolver(calibration_csv):
    table = ColorTemperatureTable()
    table.ingest(str(calibration_csv))
    return NearestColorResolver(table)


@pytest.fixture
def profiler(fake_source, resolver):
    return LineTemperatureProfiler(FrameCache(fake_source), resolver)


class TestProfileLine:
    """Tests for LineTemperatureProfiler.profile_line."""

    def test_reads_rgb_not_bgr(self, profiler):
        """Pixels are looked up as RGB."""
        # Frame 0 is red, stored as BGR (0, 0, 255); blue would read 20C
        assert profiler.profile_line(0, 0, 0, 5, 0) == [100.0] * 6

    def test_follows_line_order(self, profiler):
        """Readings follow the direction of the line."""
        # Frame 1: left half blue (20C), right half green (50C)
        assert profiler.profile_line(1, 0, 1, 5, 1) == [20.0, 20.0, 20.0, 50.0, 50.0, 50.0]
        assert profiler.profile_line(1, 5, 1, 0, 1) == [50.0, 50.0, 50.0, 20.0, 20.0, 20.0]

    def test_length_matches_clipped_pixels(self, profiler):
        """One reading per in-bounds pixel."""
        temps = profiler.profile_line(0, -4, -1, 10, 6)
        expected = rasterize(-4, -1, 10, 6, FRAME_WIDTH, FRAME_HEIGHT)
        assert len(temps) == len(expected)

    def test_frame_index_clamped(self, profiler):
        """Out-of-range frames read the nearest valid frame."""
        assert profiler.profile_line(500, 0, 0, 5, 3) == profiler.profile_line(2, 0, 0, 5, 3)
        assert profiler.profile_line(-3, 0, 0, 5, 3) == profiler.profile_line(0, 0, 0, 5, 3)

    def test_unresolved_pixels_become_zero(self, fake_source):
        """Unresolved pixels read 0.0."""
        profiler = LineTemperatureProfiler(
            FrameCache(fake_source),
            NearestColorResolver(ColorTemperatureTable()),
        )
        assert profiler.profile_line(0, 0, 0, 3, 0) == [0.0, 0.0, 0.0, 0.0]

    def test_custom_missing_temperature(self, fake_source):
        """The missing-pixel value is configurable."""
        profiler = LineTemperatureProfiler(
            FrameCache(fake_source),
            NearestColorResolver(ColorTemperatureTable()),
            missing_temperature=-273.15,
        )
        assert profiler.profile_line(0, 0, 0, 1, 0) == [-273.15, -273.15]

    def test_unavailable_frame_gives_empty(self, sample_frames, resolver):
        """A frame that cannot be decoded gives no readings."""
        source = FakeVideoSource(sample_frames, fail_indices={0})
        source.open("clip.avi")
        profiler = LineTemperatureProfiler(FrameCache(source), resolver)
        assert profiler.profile_line(0, 0, 0, 5, 0) == []

    def test_line_outside_frame_gives_empty(self, profiler):
        """A line outside the frame gives no readings."""
        assert profiler.profile_line(0, 20, 20, 30, 30) == []

    def test_one_decode_per_frame(self, profiler, fake_source):
        """Several lines on one frame decode it once."""
        profiler.profile_line(1, 0, 0, 5, 0)
        profiler.profile_line(1, 0, 3, 5, 3)
        profiler.profile_line(1, 2, 0, 2, 3)
        assert fake_source.decode_calls == 1


class TestProfile:
    """Tests for LineTemperatureProfiler.profile."""

    def test_profile_includes_stats(self, profiler):
        """profile() bundles readings with their statistics."""
        segment = LineSegment(x1=0, y1=0, x2=5, y2=0)
        profile = profiler.profile(1, segment)
        assert profile.frame_index == 1
        assert profile.segment == segment
        assert profile.stats.count == 6
        assert profile.stats.avg == pytest.approx(35.0)
        assert profile.stats.min == 20.0
        assert profile.stats.max == 50.0

    def test_profile_reports_clamped_index(self, profiler):
        """profile() reports the frame actually read."""
        profile = profiler.profile(40, LineSegment(x1=0, y1=0, x2=1, y2=0))
        assert profile.frame_index == 2


class TestLineStats:
    """Tests for compute_line_stats."""

    def test_excludes_zero_readings(self):
        """Zero readings are left out of the statistics."""
        stats = compute_line_stats([0.0, 30.0, 0.0, 50.0])
        assert stats.count == 2
        assert stats.avg == pytest.approx(40.0)
        assert stats.min == 30.0

    def test_empty(self):
        """No readings give all-zero statistics."""
        stats = compute_line_stats([])
        assert stats.count == 0
        assert stats.avg == 0.0
        assert stats.max == 0.0

    def test_all_missing(self):
        """Only-missing readings count as zero valid readings."""
        assert compute_line_stats([0.0, 0.0]).count == 0
