"""
Color Models
============

Color keys and calibration samples for the thermal lookup table.

A false-color thermal camera renders each temperature as an RGB color.
The calibration table maps those colors back to degrees Celsius, keyed
by a packed 24-bit integer:

    packed = (red << 16) | (green << 8) | blue

Channel Order:
    ColorKey is ALWAYS in RGB order, matching the calibration file.
    OpenCV frames are BGR and must be reordered before building a key.
"""

from dataclasses import dataclass


CHANNEL_MIN = 0
CHANNEL_MAX = 255


def is_valid_channel(value: int) -> bool:
    """Check that a channel value fits in 8 bits."""
    return CHANNEL_MIN <= value <= CHANNEL_MAX


@dataclass(frozen=True, slots=True)
class ColorKey:
    """
    Canonical RGB triple used as a lookup key.

    Two keys are equal iff all three channels match.

    Attributes:
        red: Red channel (0-255)
        green: Green channel (0-255)
        blue: Blue channel (0-255)
    """

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        """Validate invariants."""
        for name in ("red", "green", "blue"):
            if not is_valid_channel(getattr(self, name)):
                raise ValueError(
                    f"{name} must be in [{CHANNEL_MIN}, {CHANNEL_MAX}], "
                    f"got {getattr(self, name)}"
                )

    @property
    def packed(self) -> int:
        """24-bit packed representation."""
        return (self.red << 16) | (self.green << 8) | self.blue

    @classmethod
    def from_packed(cls, packed: int) -> "ColorKey":
        """Unpack a 24-bit integer into a ColorKey."""
        return cls(
            red=(packed >> 16) & 0xFF,
            green=(packed >> 8) & 0xFF,
            blue=packed & 0xFF,
        )

    @classmethod
    def from_bgr(cls, bgr) -> "ColorKey":
        """Build a key from an OpenCV (blue, green, red) pixel."""
        return cls(red=int(bgr[2]), green=int(bgr[1]), blue=int(bgr[0]))

    def as_tuple(self) -> tuple:
        return (self.red, self.green, self.blue)

    def __repr__(self) -> str:
        return f"ColorKey(r={self.red}, g={self.green}, b={self.blue})"


@dataclass(frozen=True, slots=True)
class CalibrationEntry:
    """
    One calibration sample: an observed color and its temperature.

    Attributes:
        color: Observed false-color value
        temperature: Temperature in degrees Celsius
    """

    color: ColorKey
    temperature: float
