"""
Analysis Module
===============

Temperature sampling along lines and summary statistics.
"""

from thermal_profiler.analysis.profiler import (
    MISSING_TEMPERATURE,
    LineTemperatureProfiler,
)
from thermal_profiler.analysis.stats import compute_line_stats

__all__ = [
    "LineTemperatureProfiler",
    "MISSING_TEMPERATURE",
    "compute_line_stats",
]
