"""
Data Models
===========

Typed models for the thermal profiler.

This module re-exports all data models for convenient access.

Models:
    Color:
        - ColorKey: Packed RGB lookup key
        - CalibrationEntry: Color and its calibrated temperature

    Video:
        - VideoMetadata: Properties of the open video source

    Analysis:
        - LineSegment: Two pixel endpoints
        - LineStats: Summary of valid readings
        - LineProfile: Readings along one line of one frame

    Input:
        - PixelQuery, LineQuery: Boundary validation schemas

    Errors:
        - ErrorKind: Failure taxonomy
"""

from thermal_profiler.models.color import CalibrationEntry, ColorKey
from thermal_profiler.models.video import VideoMetadata
from thermal_profiler.models.analysis import LineProfile, LineSegment, LineStats
from thermal_profiler.models.input import LineQuery, PixelQuery
from thermal_profiler.models.error_codes import ErrorKind

__all__ = [
    # Color
    "ColorKey",
    "CalibrationEntry",
    # Video
    "VideoMetadata",
    # Analysis
    "LineSegment",
    "LineStats",
    "LineProfile",
    # Input
    "PixelQuery",
    "LineQuery",
    # Errors
    "ErrorKind",
]
