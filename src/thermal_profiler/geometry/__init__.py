"""
Geometry Module
===============

Pixel-space geometry for line profiling.
"""

from thermal_profiler.geometry.rasterizer import (
    LineRasterizer,
    iter_line_points,
    rasterize,
)

__all__ = [
    "LineRasterizer",
    "iter_line_points",
    "rasterize",
]
