"""
Vector3 class for 3D math operations.

Used for points, directions and the camera basis. Colors have their own
8-bit type in color.py.
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np


class DegenerateVectorError(ValueError):
    """Raised when an operation needs a vector of non-zero length."""
    pass


def _check_divisor(value: float) -> float:
    if value == 0:
        raise ZeroDivisionError("Vec3 division by zero")
    return value


class Vec3:
    """A 3D vector class supporting common vector operations.

    Uses numpy internally for efficient computation while providing
    a clean, Pythonic API.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Create Vec3 from numpy array."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __str__(self) -> str:
        return f"<{self.x:f}, {self.y:f}, {self.z:f}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    # Tolerant equality has no consistent hash, so Vec3 stays unhashable
    __hash__ = None

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __neg__(self) -> Vec3:
        return Vec3.from_array(-self._data)

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3.from_array(self._data + other._data)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3.from_array(self._data - other._data)

    def __mul__(self, other: float) -> Vec3:
        if isinstance(other, Vec3):
            return NotImplemented
        return Vec3.from_array(self._data * float(other))

    def __rmul__(self, other: float) -> Vec3:
        return self.__mul__(other)

    def __truediv__(self, other: float) -> Vec3:
        if isinstance(other, Vec3):
            return NotImplemented
        return Vec3.from_array(self._data * (1.0 / _check_divisor(float(other))))

    # In-place variants mutate the receiver
    def __iadd__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        self._data += other._data
        return self

    def __isub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        self._data -= other._data
        return self

    def __imul__(self, other: float) -> Vec3:
        if isinstance(other, Vec3):
            return NotImplemented
        self._data *= float(other)
        return self

    def __itruediv__(self, other: float) -> Vec3:
        if isinstance(other, Vec3):
            return NotImplemented
        self._data *= 1.0 / _check_divisor(float(other))
        return self

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def length(self) -> float:
        """Return the magnitude (Euclidean norm) of the vector."""
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def rho(self) -> float:
        """Return the length of the projection onto the xy-plane."""
        return math.sqrt(self.rho_squared())

    def rho_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def dot(self, other: Vec3) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        """Compute cross product with another vector."""
        return Vec3.from_array(np.cross(self._data, other._data))

    def unit(self) -> Vec3:
        """Return a unit vector in the same direction.

        Raises:
            DegenerateVectorError: if the vector has zero length
        """
        length = self.length()
        if length == 0:
            raise DegenerateVectorError(f"Cannot normalize zero-length vector {self!r}")
        return self / length

    def normalize(self) -> None:
        """Scale this vector to unit length in place (see unit())."""
        self._data = self.unit()._data

    def is_zero(self) -> bool:
        return not np.any(self._data)

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


# Convenience type alias
Point3 = Vec3
