"""
Calibration Module
==================

Color to temperature calibration.

Components:
    - ColorTemperatureTable: Cumulative lookup table built from CSV files
    - NearestColorResolver: Exact-then-nearest color resolution
"""

from thermal_profiler.calibration.table import (
    CalibrationSourceError,
    ColorTemperatureTable,
)
from thermal_profiler.calibration.resolver import (
    DEFAULT_EARLY_EXIT_DISTANCE,
    NearestColorResolver,
)

__all__ = [
    "CalibrationSourceError",
    "ColorTemperatureTable",
    "DEFAULT_EARLY_EXIT_DISTANCE",
    "NearestColorResolver",
]
