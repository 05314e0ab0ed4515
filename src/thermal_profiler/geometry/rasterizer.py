"""
Line Rasterizer
===============

Converts a line segment into the ordered pixel coordinates it covers.

Uses integer Bresenham stepping in all octants:
    dx = |x2 - x1|, dy = |y2 - y1|
    sx, sy = unit steps toward the second endpoint
    err = dx - dy

Clipping:
    Points outside [0, width) x [0, height) are DROPPED, never used as a
    stop condition. The walk always runs from the first endpoint to the
    second, so a line entering the frame from outside still yields the
    in-bounds part of its true trajectory.
"""

from typing import Iterator, List, Tuple


Pixel = Tuple[int, int]


def iter_line_points(x1: int, y1: int, x2: int, y2: int) -> Iterator[Pixel]:
    """
    Yield every point of a Bresenham line, unclipped.

    Args:
        x1, y1: First endpoint
        x2, y2: Second endpoint

    Yields:
        (x, y) tuples from the first endpoint to the second, inclusive
    """
    x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1
    while True:
        yield x, y

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def rasterize(
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    width: int,
    height: int,
) -> List[Pixel]:
    """
    Rasterize a line segment, keeping only in-bounds pixels.

    Args:
        x1, y1: First endpoint
        x2, y2: Second endpoint
        width: Frame width in pixels
        height: Frame height in pixels

    Returns:
        Ordered list of (x, y) inside [0, width) x [0, height).
        Identical endpoints give a single point, or nothing if outside.
    """
    return [
        (x, y)
        for x, y in iter_line_points(x1, y1, x2, y2)
        if 0 <= x < width and 0 <= y < height
    ]


class LineRasterizer:
    """
    Rasterizer bound to fixed frame dimensions.

    Attributes:
        width: Frame width in pixels
        height: Frame height in pixels
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must be non-negative")
        self.width = width
        self.height = height

    def rasterize(self, x1: int, y1: int, x2: int, y2: int) -> List[Pixel]:
        """Rasterize a segment against this rasterizer's bounds."""
        return rasterize(x1, y1, x2, y2, self.width, self.height)

    def contains(self, x: int, y: int) -> bool:
        """Check whether a pixel lies inside the frame."""
        return 0 <= x < self.width and 0 <= y < self.height
