"""
Nearest Color Resolver
======================

Resolves an arbitrary observed color to a calibrated temperature.

Resolution Order:
    1. Exact match on the packed color key (O(1))
    2. Nearest neighbor by Euclidean distance in RGB space

Nearest-Neighbor Semantics:
    Entries are scanned in table insertion order. The running minimum
    is replaced only on a strictly smaller distance, so the FIRST entry
    at the minimum wins ties. As soon as a new minimum falls below the
    early-exit distance (10.0 by default) the scan stops and that entry
    is returned, even when a closer entry exists later in scan order.
    Callers relying on true-nearest results must set the threshold to 0.

Vectorization:
    The scan is evaluated with numpy over arrays mirroring the table.
    The result equals the sequential scan:
        - if any distance is below the threshold, the first such entry
          (any earlier entry is farther and would not have stopped the scan)
        - otherwise the first entry at the global minimum
    Arrays are rebuilt whenever the table's version changes.
"""

import logging
from typing import Optional

import numpy as np

from thermal_profiler.calibration.table import ColorTemperatureTable
from thermal_profiler.models.color import ColorKey


logger = logging.getLogger(__name__)


DEFAULT_EARLY_EXIT_DISTANCE = 10.0


class NearestColorResolver:
    """
    Exact-then-nearest color to temperature resolver.

    Attributes:
        table: Calibration table to resolve against
        early_exit_distance: Distance below which the scan stops

    Example:
        resolver = NearestColorResolver(table)
        temperature = resolver.resolve(ColorKey(250, 20, 3))
        if temperature is None:
            print("No calibration loaded")
    """

    def __init__(
        self,
        table: ColorTemperatureTable,
        early_exit_distance: float = DEFAULT_EARLY_EXIT_DISTANCE,
    ) -> None:
        """
        Initialize resolver.

        Args:
            table: Calibration table (read on every call, never copied)
            early_exit_distance: Early-exit threshold in channel units
        """
        if early_exit_distance < 0:
            raise ValueError("early_exit_distance must be non-negative")

        self.table = table
        self.early_exit_distance = early_exit_distance

        self._indexed_version: int = -1
        self._colors: np.ndarray = np.empty((0, 3), dtype=np.float64)
        self._temperatures: np.ndarray = np.empty((0,), dtype=np.float64)

    def _refresh_index(self) -> None:
        """Rebuild the color/temperature arrays if the table changed."""
        if self._indexed_version == self.table.version:
            return

        size = len(self.table)
        colors = np.empty((size, 3), dtype=np.float64)
        temperatures = np.empty((size,), dtype=np.float64)

        for i, (packed, temperature) in enumerate(self.table.packed_items()):
            colors[i, 0] = (packed >> 16) & 0xFF
            colors[i, 1] = (packed >> 8) & 0xFF
            colors[i, 2] = packed & 0xFF
            temperatures[i] = temperature

        self._colors = colors
        self._temperatures = temperatures
        self._indexed_version = self.table.version

        logger.debug(f"Resolver index rebuilt: {size} entries (version {self._indexed_version})")

    def resolve(self, color: ColorKey) -> Optional[float]:
        """
        Resolve a color to a temperature.

        Args:
            color: Observed color in RGB order

        Returns:
            Temperature in degrees Celsius, or None if the table is empty
        """
        exact = self.table.lookup(color)
        if exact is not None:
            return exact

        return self.nearest(color)

    def nearest(self, color: ColorKey) -> Optional[float]:
        """
        Nearest-neighbor search with early exit, skipping the exact lookup.

        Args:
            color: Observed color in RGB order

        Returns:
            Temperature of the selected entry, or None if the table is empty
        """
        self._refresh_index()

        if self._colors.shape[0] == 0:
            return None

        query = np.array(color.as_tuple(), dtype=np.float64)
        distances = np.sqrt(np.sum((self._colors - query) ** 2, axis=1))

        close = np.flatnonzero(distances < self.early_exit_distance)
        if close.size:
            index = int(close[0])
        else:
            index = int(np.argmin(distances))

        return float(self._temperatures[index])
