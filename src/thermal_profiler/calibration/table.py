"""
Color Temperature Table
=======================

Calibration lookup table mapping false-color pixels to temperatures.

This module handles:
    - Ingesting calibration samples from a delimited text file
    - Exact lookup by packed color key
    - Tracking a version counter so derived indexes can be rebuilt

Calibration File Format:
    X,Y,R,G,B,Temperature_C
    12,40,255,16,0,48.7
    13,40,250,30,0,47.9
    ...

    The header row is always skipped. Only columns 2-5 are used:
    red, green, blue, temperature. Rows that are short, unparsable,
    or carry a channel outside 0-255 are skipped without aborting.
    Channels written as whole-number decimals ("255.0") are accepted;
    fractional channels ("12.5") are not.

    Files are read as UTF-8. Undecodable bytes are replaced, so a
    legacy-encoded header or a stray byte only spoils its own row.

Ingestion is CUMULATIVE: each call adds to the table and a later
sample for the same color overwrites the earlier one. Use clear()
for a full reload.

Example:
    from thermal_profiler.calibration import ColorTemperatureTable

    table = ColorTemperatureTable()
    count = table.ingest("./data/temp_mapping.csv")
    print(f"{count} samples, {len(table)} distinct colors")
"""

import csv
import math
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from thermal_profiler.models.color import CalibrationEntry, ColorKey, is_valid_channel
from thermal_profiler.models.error_codes import ErrorKind


logger = logging.getLogger(__name__)


# Column positions in the calibration file
RED_COLUMN = 2
GREEN_COLUMN = 3
BLUE_COLUMN = 4
TEMPERATURE_COLUMN = 5
MIN_COLUMNS = 6


class CalibrationSourceError(Exception):
    """Raised when a calibration source cannot be opened or yields no samples."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.SOURCE_UNAVAILABLE) -> None:
        super().__init__(message)
        self.kind = kind


def parse_channel(text: str) -> Optional[int]:
    """
    Parse a color channel, accepting whole-number floats such as "255.0".

    Returns:
        Channel value in [0, 255], or None if the text is not a valid channel
    """
    try:
        value = float(text.strip())
    except ValueError:
        return None

    if not value.is_integer():
        return None

    channel = int(value)
    if not is_valid_channel(channel):
        return None
    return channel


def parse_calibration_row(row: List[str]) -> Optional[Tuple[ColorKey, float]]:
    """
    Parse one data row into a color key and temperature.

    Args:
        row: Fields of a single data row

    Returns:
        (ColorKey, temperature) or None if the row must be skipped
    """
    if len(row) < MIN_COLUMNS:
        return None

    red = parse_channel(row[RED_COLUMN])
    green = parse_channel(row[GREEN_COLUMN])
    blue = parse_channel(row[BLUE_COLUMN])
    if red is None or green is None or blue is None:
        return None

    try:
        temperature = float(row[TEMPERATURE_COLUMN].strip())
    except ValueError:
        return None

    if not math.isfinite(temperature):
        return None

    return ColorKey(red=red, green=green, blue=blue), temperature


class ColorTemperatureTable:
    """
    Mapping from ColorKey to temperature (degrees Celsius).

    Keys are stored packed. Iteration follows the order in which each
    color was FIRST inserted; overwriting a color keeps its position.

    Attributes:
        version: Incremented on every mutation
        skipped_rows: Cumulative number of rows skipped during ingestion
    """

    def __init__(self, delimiter: str = ",") -> None:
        """
        Initialize an empty table.

        Args:
            delimiter: Field delimiter of calibration files
        """
        self.delimiter = delimiter
        self._entries: Dict[int, float] = {}
        self._version: int = 0
        self._skipped_rows: int = 0

    @property
    def version(self) -> int:
        """Mutation counter."""
        return self._version

    @property
    def skipped_rows(self) -> int:
        """Rows skipped across all ingestion calls."""
        return self._skipped_rows

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, color: ColorKey) -> bool:
        return color.packed in self._entries

    def insert(self, color: ColorKey, temperature: float) -> None:
        """Insert or overwrite a single sample."""
        self._entries[color.packed] = float(temperature)
        self._version += 1

    def lookup(self, color: ColorKey) -> Optional[float]:
        """Exact lookup. Returns None when the color is not calibrated."""
        return self._entries.get(color.packed)

    def items(self) -> Iterator[CalibrationEntry]:
        """Iterate calibration entries in insertion order."""
        for packed, temperature in self._entries.items():
            yield CalibrationEntry(color=ColorKey.from_packed(packed), temperature=temperature)

    def packed_items(self) -> Iterator[Tuple[int, float]]:
        """Iterate (packed key, temperature) pairs in insertion order."""
        return iter(self._entries.items())

    def clear(self) -> None:
        """Remove every sample."""
        self._entries.clear()
        self._version += 1
        logger.info("Calibration table cleared")

    def ingest(self, path: str) -> int:
        """
        Add samples from a calibration file to the table.

        The file is decoded as UTF-8 with undecodable bytes replaced, so
        a stray legacy-encoded byte only spoils the row it sits in.

        Args:
            path: Path to the delimited calibration file

        Returns:
            Number of rows ingested from this file

        Raises:
            CalibrationSourceError: If the file cannot be opened or read,
                or contains no valid rows
        """
        file_path = Path(path)
        logger.info(f"Loading calibration from: {path}")

        try:
            f = open(file_path, "r", encoding="utf-8", errors="replace", newline="")
        except OSError as e:
            logger.error(f"[{ErrorKind.SOURCE_UNAVAILABLE.value}] Cannot open calibration file {path}: {e}")
            raise CalibrationSourceError(f"Cannot open calibration file: {path}") from e

        count = 0
        skipped = 0
        try:
            with f:
                reader = csv.reader(f, delimiter=self.delimiter)
                line_number = 0

                while True:
                    line_number += 1
                    try:
                        row = next(reader)
                    except StopIteration:
                        break
                    except csv.Error as e:
                        if line_number > 1:
                            skipped += 1
                        logger.debug(
                            f"[{ErrorKind.PARSE_SKIPPED.value}] {file_path.name}:{line_number} "
                            f"skipped: {e}"
                        )
                        continue

                    if line_number == 1:
                        continue  # header

                    parsed = parse_calibration_row(row)
                    if parsed is None:
                        skipped += 1
                        logger.debug(
                            f"[{ErrorKind.PARSE_SKIPPED.value}] {file_path.name}:{line_number} "
                            f"skipped: {row!r}"
                        )
                        continue

                    color, temperature = parsed
                    self._entries[color.packed] = temperature
                    count += 1
        except OSError as e:
            logger.error(f"[{ErrorKind.SOURCE_UNAVAILABLE.value}] Error reading calibration file {path}: {e}")
            raise CalibrationSourceError(f"Error reading calibration file: {path}") from e
        finally:
            self._skipped_rows += skipped
            if count:
                self._version += 1

        logger.info(
            f"Calibration loaded: {count} entries from {file_path.name} "
            f"({skipped} skipped, {len(self._entries)} distinct colors)"
        )

        if count == 0:
            raise CalibrationSourceError(
                f"No valid calibration rows in: {path}",
                kind=ErrorKind.PARSE_SKIPPED,
            )

        return count
