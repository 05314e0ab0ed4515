"""
Line Statistics
===============

Summary statistics over a line's temperature readings.

Readings equal to the miss sentinel (0.0) or below it are excluded, so
an unresolved pixel never drags the average down.
"""

from typing import Sequence

import numpy as np

from thermal_profiler.models.analysis import LineStats


def compute_line_stats(temperatures: Sequence[float]) -> LineStats:
    """
    Compute avg/max/min/count over readings greater than zero.

    Args:
        temperatures: Readings along a line

    Returns:
        LineStats, all zero when no reading is valid
    """
    values = np.asarray(temperatures, dtype=np.float64)
    valid = values[values > 0]

    if valid.size == 0:
        return LineStats()

    return LineStats(
        avg=float(np.mean(valid)),
        max=float(np.max(valid)),
        min=float(np.min(valid)),
        count=int(valid.size),
    )
