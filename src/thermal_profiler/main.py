"""
ThermalLineProfiler Command Line
================================

Operator entry point for profiling lines of a thermal video.

Loads the video and calibration named in config (or on the command
line), reports the video properties, and prints temperature statistics
for each requested line.

Usage:
    thermal-profiler --frame 120 --line 10 120 300 120 --line 160 10 160 230
    python -m thermal_profiler.main --video clip.avi --calibration map.csv --frame 0 --line 0 0 50 50

Exit Codes:
    0 - success
    1 - engine not ready (video or calibration failed to load)
    2 - invalid arguments (e.g. a negative frame index)
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from thermal_profiler.config import load_config, setup_logging
from thermal_profiler.engine import ThermalEngine
from thermal_profiler.models.analysis import LineSegment
from thermal_profiler.models.input import LineQuery


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Per-pixel temperatures along lines of a false-color thermal video"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config.yaml (default: search common locations)",
    )
    parser.add_argument(
        "--video",
        type=str,
        default=None,
        help="Video path (overrides config)",
    )
    parser.add_argument(
        "--calibration",
        type=str,
        action="append",
        default=None,
        help="Calibration CSV path; repeat to load several (overrides config)",
    )
    parser.add_argument(
        "--frame",
        type=int,
        default=0,
        help="Frame index to analyze (default: 0)",
    )
    parser.add_argument(
        "--line",
        type=int,
        nargs=4,
        action="append",
        metavar=("X1", "Y1", "X2", "Y2"),
        default=None,
        help="Line segment to profile; repeat for several lines",
    )
    parser.add_argument(
        "--show-readings",
        action="store_true",
        help="Print every reading, not just statistics",
    )
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    query = None
    if args.line:
        try:
            query = LineQuery(
                frame=args.frame,
                lines=[LineSegment(x1=x1, y1=y1, x2=x2, y2=y2) for x1, y1, x2, y2 in args.line],
            )
        except ValidationError as e:
            parser.error(f"invalid line query: {e.errors()[0]['msg']}")

    settings = load_config(args.config)
    setup_logging(settings)

    video_path = args.video or settings.video.path
    calibration_paths = args.calibration or [settings.calibration.path]

    with ThermalEngine.from_settings(settings) as engine:
        if not engine.load_video(video_path):
            logger.error(f"Failed to load video file: {video_path}")
            return 1

        loaded = [path for path in calibration_paths if engine.load_calibration(path)]
        if not loaded:
            logger.error("Failed to load temperature mapping")
            return 1

        if not engine.is_ready():
            logger.error("Engine not ready after initialization")
            return 1

        info = engine.get_video_info()
        print(
            f"Video: {info.frame_count} frames @ {info.fps:.2f} fps, "
            f"{info.width}x{info.height}"
        )

        if query is None:
            return 0

        for profile in engine.analyze_lines(query.frame, query.lines):
            stats = profile.stats
            print(
                f"frame {profile.frame_index} {profile.segment}: "
                f"n={len(profile.temperatures)} valid={stats.count} "
                f"avg={stats.avg:.2f}C min={stats.min:.2f}C max={stats.max:.2f}C"
            )
            if args.show_readings:
                print("  " + " ".join(f"{t:.2f}" for t in profile.temperatures))

    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
