from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

from magfield.errors import DomainError, InvalidGeometryError, InvalidMagnetizationError
from magfield.magnet2d import circle_field, rectangle_field
from magfield.points import Point2, rotate_xy
from magfield.types import Axis, BoolArray, FloatArray

__all__ = ["Circle", "Rectangle"]


def _check_size(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidGeometryError(f"{name} must be a finite value > 0, got {value!r}")


def _check_magnetization(jr: float, *angles: float) -> None:
    if not math.isfinite(jr) or jr <= 0.0:
        raise InvalidMagnetizationError(f"jr must be a finite value > 0, got {jr!r}")
    for angle in angles:
        if not math.isfinite(angle):
            raise InvalidMagnetizationError(f"magnetization angle must be finite, got {angle!r}")


def _require_point2(point: Point2) -> Point2:
    if not isinstance(point, Point2):
        raise DomainError(f"2D magnet expects a Point2, got {type(point).__name__}")
    return point


@dataclass(frozen=True)
class Rectangle:
    """
    Uniformly magnetized rectangle.

    ``width``/``height`` are full extents; ``a``/``b`` are the derived half
    extents. ``alpha`` rotates the body counter-clockwise about its center and
    ``theta`` is the magnetization angle in the body frame, both in degrees.
    """

    dims: ClassVar[int] = 2

    width: float
    height: float
    center: Point2 = field(default_factory=Point2.zero)
    alpha: float = 0.0
    jr: float = 1.0
    theta: float = 0.0
    a: float = field(init=False)
    b: float = field(init=False)
    jx: float = field(init=False)
    jy: float = field(init=False)
    alpha_rad: float = field(init=False)

    def __post_init__(self) -> None:
        _check_size("width", self.width)
        _check_size("height", self.height)
        if not math.isfinite(self.alpha):
            raise InvalidGeometryError(f"alpha must be finite, got {self.alpha!r}")
        _check_magnetization(self.jr, self.theta)
        theta_rad = math.radians(self.theta)
        object.__setattr__(self, "a", self.width / 2.0)
        object.__setattr__(self, "b", self.height / 2.0)
        object.__setattr__(self, "jx", self.jr * math.cos(theta_rad))
        object.__setattr__(self, "jy", self.jr * math.sin(theta_rad))
        object.__setattr__(self, "alpha_rad", math.radians(self.alpha))

    def zero(self) -> Point2:
        return Point2.zero()

    def magnetization_axes(self) -> tuple[tuple[Axis, float], ...]:
        return (("x", self.jx), ("y", self.jy))

    def to_local(self, point: Point2) -> Point2:
        local = _require_point2(point) - self.center
        if self.alpha_rad != 0.0:
            local = local.rotate(-self.alpha_rad)
        return local

    def to_global(self, value: Point2) -> Point2:
        if self.alpha_rad != 0.0:
            return value.rotate(self.alpha_rad)
        return value

    def axis_field(self, axis: Axis, local: Point2) -> tuple[float, float]:
        if axis == "x":
            return rectangle_field.rectangle_field_x_mag(
                local.x, local.y, self.a, self.b, self.jx
            )
        if axis == "y":
            return rectangle_field.rectangle_field_y_mag(
                local.x, local.y, self.a, self.b, self.jy
            )
        raise DomainError(f"Rectangle has no magnetization axis {axis!r}")

    def field_batch(
        self, points: FloatArray, active: tuple[bool, ...]
    ) -> tuple[FloatArray, BoolArray]:
        local = rotate_xy(points - self.center.as_array()[None, :], -self.alpha_rad)
        bx, by, singular = rectangle_field.rectangle_field_batch(
            np.ascontiguousarray(local[:, 0]),
            np.ascontiguousarray(local[:, 1]),
            self.a,
            self.b,
            self.jx,
            self.jy,
            bool(active[0]),
            bool(active[1]),
        )
        field_local = np.column_stack([bx, by])
        return rotate_xy(field_local, self.alpha_rad), np.asarray(singular, dtype=np.bool_)


@dataclass(frozen=True)
class Circle:
    """Cross-section of an infinite cylinder magnetized at ``theta`` degrees."""

    dims: ClassVar[int] = 2

    radius: float
    center: Point2 = field(default_factory=Point2.zero)
    jr: float = 1.0
    theta: float = 0.0
    jx: float = field(init=False)
    jy: float = field(init=False)

    def __post_init__(self) -> None:
        _check_size("radius", self.radius)
        _check_magnetization(self.jr, self.theta)
        theta_rad = math.radians(self.theta)
        object.__setattr__(self, "jx", self.jr * math.cos(theta_rad))
        object.__setattr__(self, "jy", self.jr * math.sin(theta_rad))

    def zero(self) -> Point2:
        return Point2.zero()

    def magnetization_axes(self) -> tuple[tuple[Axis, float], ...]:
        return (("x", self.jx), ("y", self.jy))

    def to_local(self, point: Point2) -> Point2:
        return _require_point2(point) - self.center

    def to_global(self, value: Point2) -> Point2:
        return value

    def axis_field(self, axis: Axis, local: Point2) -> tuple[float, float]:
        if axis == "x":
            return (
                circle_field.field_in_x_for_x_mag(local.x, local.y, self.radius, self.jx),
                circle_field.field_in_y_for_x_mag(local.x, local.y, self.radius, self.jx),
            )
        if axis == "y":
            return (
                circle_field.field_in_x_for_y_mag(local.x, local.y, self.radius, self.jy),
                circle_field.field_in_y_for_y_mag(local.x, local.y, self.radius, self.jy),
            )
        raise DomainError(f"Circle has no magnetization axis {axis!r}")

    def field_batch(
        self, points: FloatArray, active: tuple[bool, ...]
    ) -> tuple[FloatArray, BoolArray]:
        local = points - self.center.as_array()[None, :]
        bx, by, singular = circle_field.circle_field_batch(
            np.ascontiguousarray(local[:, 0]),
            np.ascontiguousarray(local[:, 1]),
            self.radius,
            self.jx,
            self.jy,
            bool(active[0]),
            bool(active[1]),
        )
        return np.column_stack([bx, by]), np.asarray(singular, dtype=np.bool_)
