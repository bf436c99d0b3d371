from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

from magfield.errors import DomainError, InvalidGeometryError, InvalidMagnetizationError
from magfield.magnet3d import prism_field, sphere_field
from magfield.points import Point3, rotate_xy
from magfield.types import Axis, BoolArray, FloatArray

__all__ = ["Prism", "Sphere", "magnetization_components"]

_AXIS_INDEX: dict[str, int] = {"x": 0, "y": 1, "z": 2}


def _check_size(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidGeometryError(f"{name} must be a finite value > 0, got {value!r}")


def _require_point3(point: Point3) -> Point3:
    if not isinstance(point, Point3):
        raise DomainError(f"3D magnet expects a Point3, got {type(point).__name__}")
    return point


def magnetization_components(jr: float, theta: float, phi: float) -> tuple[float, float, float]:
    """(jx, jy, jz) for polar angle ``theta`` from +z and azimuth ``phi`` from +x, in degrees."""
    if not math.isfinite(jr) or jr <= 0.0:
        raise InvalidMagnetizationError(f"jr must be a finite value > 0, got {jr!r}")
    if not (math.isfinite(theta) and math.isfinite(phi)):
        raise InvalidMagnetizationError(f"angles must be finite, got theta={theta!r}, phi={phi!r}")
    th = math.radians(theta)
    ph = math.radians(phi)
    return (
        jr * math.sin(th) * math.cos(ph),
        jr * math.sin(th) * math.sin(ph),
        jr * math.cos(th),
    )


@dataclass(frozen=True)
class Prism:
    """
    Uniformly magnetized cuboid.

    ``width``, ``depth``, ``height`` are full extents along x, y, z. ``alpha``
    rotates the body about the z axis through its center (degrees); the
    magnetization angles are given in the body frame.
    """

    dims: ClassVar[int] = 3

    width: float
    depth: float
    height: float
    center: Point3 = field(default_factory=Point3.zero)
    alpha: float = 0.0
    jr: float = 1.0
    theta: float = 0.0
    phi: float = 0.0
    a: float = field(init=False)
    b: float = field(init=False)
    c: float = field(init=False)
    jx: float = field(init=False)
    jy: float = field(init=False)
    jz: float = field(init=False)
    alpha_rad: float = field(init=False)

    def __post_init__(self) -> None:
        _check_size("width", self.width)
        _check_size("depth", self.depth)
        _check_size("height", self.height)
        if not math.isfinite(self.alpha):
            raise InvalidGeometryError(f"alpha must be finite, got {self.alpha!r}")
        jx, jy, jz = magnetization_components(self.jr, self.theta, self.phi)
        object.__setattr__(self, "a", self.width / 2.0)
        object.__setattr__(self, "b", self.depth / 2.0)
        object.__setattr__(self, "c", self.height / 2.0)
        object.__setattr__(self, "jx", jx)
        object.__setattr__(self, "jy", jy)
        object.__setattr__(self, "jz", jz)
        object.__setattr__(self, "alpha_rad", math.radians(self.alpha))

    def zero(self) -> Point3:
        return Point3.zero()

    def magnetization_axes(self) -> tuple[tuple[Axis, float], ...]:
        return (("x", self.jx), ("y", self.jy), ("z", self.jz))

    def to_local(self, point: Point3) -> Point3:
        local = _require_point3(point) - self.center
        if self.alpha_rad != 0.0:
            local = local.rotate_z(-self.alpha_rad)
        return local

    def to_global(self, value: Point3) -> Point3:
        if self.alpha_rad != 0.0:
            return value.rotate_z(self.alpha_rad)
        return value

    def axis_field(self, axis: Axis, local: Point3) -> tuple[float, float, float]:
        args = (local.x, local.y, local.z, self.a, self.b, self.c)
        if axis == "x":
            return prism_field.prism_field_for_x_mag(*args, self.jx)
        if axis == "y":
            return prism_field.prism_field_for_y_mag(*args, self.jy)
        if axis == "z":
            return prism_field.prism_field_for_z_mag(*args, self.jz)
        raise DomainError(f"Prism has no magnetization axis {axis!r}")

    def field_batch(
        self, points: FloatArray, active: tuple[bool, ...]
    ) -> tuple[FloatArray, BoolArray]:
        local = rotate_xy(points - self.center.as_array()[None, :], -self.alpha_rad)
        out, singular = prism_field.prism_field_batch(
            np.ascontiguousarray(local[:, 0]),
            np.ascontiguousarray(local[:, 1]),
            np.ascontiguousarray(local[:, 2]),
            self.a,
            self.b,
            self.c,
            self.jx,
            self.jy,
            self.jz,
            bool(active[0]),
            bool(active[1]),
            bool(active[2]),
        )
        return rotate_xy(out, self.alpha_rad), np.asarray(singular, dtype=np.bool_)


@dataclass(frozen=True)
class Sphere:
    dims: ClassVar[int] = 3

    radius: float
    center: Point3 = field(default_factory=Point3.zero)
    jr: float = 1.0
    theta: float = 0.0
    phi: float = 0.0
    jx: float = field(init=False)
    jy: float = field(init=False)
    jz: float = field(init=False)

    def __post_init__(self) -> None:
        _check_size("radius", self.radius)
        jx, jy, jz = magnetization_components(self.jr, self.theta, self.phi)
        object.__setattr__(self, "jx", jx)
        object.__setattr__(self, "jy", jy)
        object.__setattr__(self, "jz", jz)

    def zero(self) -> Point3:
        return Point3.zero()

    def magnetization_axes(self) -> tuple[tuple[Axis, float], ...]:
        return (("x", self.jx), ("y", self.jy), ("z", self.jz))

    def to_local(self, point: Point3) -> Point3:
        return _require_point3(point) - self.center

    def to_global(self, value: Point3) -> Point3:
        return value

    def axis_field(self, axis: Axis, local: Point3) -> tuple[float, float, float]:
        idx = _AXIS_INDEX.get(axis)
        if idx is None:
            raise DomainError(f"Sphere has no magnetization axis {axis!r}")
        j = (self.jx, self.jy, self.jz)[idx]
        return sphere_field.sphere_axis_field(local.x, local.y, local.z, self.radius, j, idx)

    def field_batch(
        self, points: FloatArray, active: tuple[bool, ...]
    ) -> tuple[FloatArray, BoolArray]:
        local = points - self.center.as_array()[None, :]
        out, singular = sphere_field.sphere_field_batch(
            np.ascontiguousarray(local[:, 0]),
            np.ascontiguousarray(local[:, 1]),
            np.ascontiguousarray(local[:, 2]),
            self.radius,
            self.jx,
            self.jy,
            self.jz,
            bool(active[0]),
            bool(active[1]),
            bool(active[2]),
        )
        return out, np.asarray(singular, dtype=np.bool_)
