"""
8-bit RGB color type.

Channels are stored as a numpy uint8 array. Addition saturates at 255.
Scaling by a real factor truncates toward zero and keeps only the low 8 bits,
so factors outside [0, 1] wrap around instead of clamping. `scale_clamped`
is the saturating alternative used when a render asks for it.
"""

from __future__ import annotations
import math
from typing import BinaryIO
import numpy as np

CHANNEL_MAX = 255


def _check_channel(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"Color channel {name} must be an integer, got {value!r}")
    if not 0 <= value <= CHANNEL_MAX:
        raise ValueError(f"Color channel {name} out of range [0, 255]: {value}")
    return int(value)


def _check_factor(factor: float) -> float:
    factor = float(factor)
    if not math.isfinite(factor):
        raise ValueError(f"Color scale factor must be finite, got {factor}")
    return factor


class Color:
    """An RGB color with one byte per channel."""

    __slots__ = ('_data',)

    def __init__(self, red: int = 0, green: int = 0, blue: int = 0):
        self._data = np.array(
            [_check_channel('red', red), _check_channel('green', green), _check_channel('blue', blue)],
            dtype=np.uint8,
        )

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Color:
        """Create a Color from a length-3 array already in channel range."""
        c = cls.__new__(cls)
        c._data = np.asarray(arr, dtype=np.uint8).copy()
        return c

    @property
    def red(self) -> int:
        return int(self._data[0])

    @property
    def green(self) -> int:
        return int(self._data[1])

    @property
    def blue(self) -> int:
        return int(self._data[2])

    # Short aliases
    r = red
    g = green
    b = blue

    def __repr__(self) -> str:
        return f"Color({self.red}, {self.green}, {self.blue})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash(bytes(self))

    def __iter__(self):
        return iter((self.red, self.green, self.blue))

    def __bytes__(self) -> bytes:
        return self._data.tobytes()

    def add(self, other: Color) -> Color:
        """Add two colors, saturating each channel at 255."""
        total = self._data.astype(np.uint16) + other._data.astype(np.uint16)
        return Color.from_array(np.minimum(total, CHANNEL_MAX))

    def scale(self, factor: float) -> Color:
        """Multiply each channel by factor, truncating to the low 8 bits.

        A factor above 1 or below 0 wraps around rather than clamping,
        e.g. Color(200, 0, 0).scale(2.0) == Color(144, 0, 0).
        """
        product = np.trunc(self._data.astype(np.float64) * _check_factor(factor))
        return Color.from_array(product.astype(np.int64) & 0xFF)

    def scale_clamped(self, factor: float) -> Color:
        """Multiply each channel by factor, truncating and clamping to [0, 255]."""
        product = np.trunc(self._data.astype(np.float64) * _check_factor(factor))
        return Color.from_array(np.clip(product, 0, CHANNEL_MAX))

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return self.add(other)

    def __mul__(self, factor: float) -> Color:
        if isinstance(factor, Color):
            return NotImplemented
        return self.scale(factor)

    def __rmul__(self, factor: float) -> Color:
        return self.__mul__(factor)

    def write(self, sink: BinaryIO) -> None:
        """Write the three channel bytes (red, green, blue) to a binary stream."""
        sink.write(bytes(self))

    def to_array(self) -> np.ndarray:
        return self._data.copy()


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
RED = Color(255, 0, 0)
SKY_BLUE = Color(128, 180, 255)
