"""
Error Codes
===========

Fixed set of machine-readable failure kinds.

Every failure inside the engine maps to exactly ONE of these kinds.
None of them aborts the engine: each one degrades to a value-level
signal (boolean, empty sequence, or None) at the public surface.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """
    Machine-readable failure codes.

    Attributes:
        SOURCE_UNAVAILABLE: Video or calibration path cannot be opened
        PARSE_SKIPPED: Malformed calibration row, skipped locally
        DECODE_FAILURE: A specific frame could not be read
        OUT_OF_RANGE: Frame index or channel value outside its domain
        NOT_FOUND: No calibration entry resolves a color
    """

    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
    PARSE_SKIPPED = "PARSE_SKIPPED"
    DECODE_FAILURE = "DECODE_FAILURE"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    NOT_FOUND = "NOT_FOUND"
