"""
Point and field-vector value types.

Both are plain frozen dataclasses: a ``Point2`` is used as an observation
coordinate and as the container of a 2D field value.

Example:
    >>> from magfield.points import Point2
    >>> total = Point2.zero()
    >>> total += Point2(0.5, 0.0)
    >>> total += 2.0 * Point2(0.0, 0.25)
    >>> total
    Point2(x=0.5, y=0.5)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from magfield.constants import ERR_CUTOFF
from magfield.types import FloatArray


def nearly_equal(a: float, b: float, tol: float = ERR_CUTOFF) -> bool:
    """Absolute comparison near zero, relative comparison otherwise."""
    if a == b:
        return True
    scale = max(1.0, abs(a), abs(b))
    return abs(a - b) <= tol * scale


@dataclass(frozen=True)
class Point2:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> Point2:
        return cls(0.0, 0.0)

    @classmethod
    def from_array(cls, values: ArrayLike) -> Point2:
        arr = np.asarray(values, dtype=np.float64).ravel()
        if arr.size != 2:
            raise ValueError(f"expected 2 components, got {arr.size}")
        return cls(float(arr[0]), float(arr[1]))

    def __add__(self, other: Point2) -> Point2:
        return Point2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point2) -> Point2:
        return Point2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Point2:
        return Point2(-self.x, -self.y)

    def __mul__(self, k: float) -> Point2:
        return Point2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def rotate(self, angle: float) -> Point2:
        """Rotate counter-clockwise by ``angle`` radians about the origin."""
        c = math.cos(angle)
        s = math.sin(angle)
        return Point2(c * self.x - s * self.y, s * self.x + c * self.y)

    def nearly_equal(self, other: Point2, tol: float = ERR_CUTOFF) -> bool:
        return nearly_equal(self.x, other.x, tol) and nearly_equal(self.y, other.y, tol)

    def as_array(self) -> FloatArray:
        return np.array([self.x, self.y], dtype=np.float64)


@dataclass(frozen=True)
class Point3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> Point3:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values: ArrayLike) -> Point3:
        arr = np.asarray(values, dtype=np.float64).ravel()
        if arr.size != 3:
            raise ValueError(f"expected 3 components, got {arr.size}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def __add__(self, other: Point3) -> Point3:
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point3) -> Point3:
        return Point3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Point3:
        return Point3(-self.x, -self.y, -self.z)

    def __mul__(self, k: float) -> Point3:
        return Point3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def rotate_z(self, angle: float) -> Point3:
        """Rotate counter-clockwise about the z axis by ``angle`` radians."""
        c = math.cos(angle)
        s = math.sin(angle)
        return Point3(c * self.x - s * self.y, s * self.x + c * self.y, self.z)

    def nearly_equal(self, other: Point3, tol: float = ERR_CUTOFF) -> bool:
        return (
            nearly_equal(self.x, other.x, tol)
            and nearly_equal(self.y, other.y, tol)
            and nearly_equal(self.z, other.z, tol)
        )

    def as_array(self) -> FloatArray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


def rotate_xy(pts: FloatArray, angle: float) -> FloatArray:
    """Rotate the first two columns of an (N, d) array by ``angle`` radians."""
    out = np.array(pts, dtype=np.float64, copy=True)
    if angle == 0.0:
        return out
    c = math.cos(angle)
    s = math.sin(angle)
    x = pts[:, 0]
    y = pts[:, 1]
    out[:, 0] = c * x - s * y
    out[:, 1] = s * x + c * y
    return out


__all__ = ["Point2", "Point3", "nearly_equal", "rotate_xy"]
