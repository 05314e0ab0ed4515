"""
ThermalLineProfiler
===================

Per-pixel temperatures along line segments of false-color thermal video.

A thermal camera that records to an ordinary video file renders each
temperature as a palette color. Given a calibration table mapping those
colors back to degrees Celsius, this package samples any line of any
frame and returns one temperature per pixel.

Components:
    - calibration: Color/temperature table and nearest-color resolver
    - geometry: Bresenham line rasterization with frame clipping
    - video: OpenCV frame source and single-slot frame cache
    - analysis: Line profiler and statistics
    - engine: Session object tying the above together

Example:
    from thermal_profiler.engine import ThermalEngine

    with ThermalEngine() as engine:
        engine.load_video("./videos/demo_vid.avi")
        engine.load_calibration("./data/temp_mapping.csv")
        temps = engine.analyze_line(120, 10, 120, 300, 120)
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
