"""
Field of a uniformly magnetized sphere: ``2J/3`` inside, a point dipole of
moment ``J V / mu0`` outside. Points on the surface take the outside branch.
"""

from __future__ import annotations

import math

import numpy as np

from magfield.numba_compat import njit, prange
from magfield.types import BoolArray, FloatArray

__all__ = ["sphere_axis_field", "sphere_field_batch"]


@njit(cache=True)
def sphere_axis_field(
    x: float, y: float, z: float, radius: float, j: float, axis: int
) -> tuple[float, float, float]:
    """Field due to magnetization ``j`` along ``axis`` (0, 1, 2 for x, y, z)."""
    r2 = x * x + y * y + z * z
    if r2 < radius * radius:
        inside = 2.0 * j / 3.0
        if axis == 0:
            return inside, 0.0, 0.0
        if axis == 1:
            return 0.0, inside, 0.0
        return 0.0, 0.0, inside
    k = j * radius * radius * radius / 3.0
    r5 = r2 * r2 * math.sqrt(r2)
    ri = x if axis == 0 else (y if axis == 1 else z)
    bx = 3.0 * ri * x
    by = 3.0 * ri * y
    bz = 3.0 * ri * z
    if axis == 0:
        bx -= r2
    elif axis == 1:
        by -= r2
    else:
        bz -= r2
    return k * bx / r5, k * by / r5, k * bz / r5


@njit(cache=True, parallel=True)
def sphere_field_batch(
    x: FloatArray,
    y: FloatArray,
    z: FloatArray,
    radius: float,
    jx: float,
    jy: float,
    jz: float,
    use_x: bool,
    use_y: bool,
    use_z: bool,
) -> tuple[FloatArray, BoolArray]:
    n = x.shape[0]
    out = np.zeros((n, 3), dtype=np.float64)
    singular = np.zeros((n, 3), dtype=np.bool_)
    js = (jx, jy, jz)
    use = (use_x, use_y, use_z)
    for i in prange(n):
        for axis in range(3):
            if use[axis]:
                fx, fy, fz = sphere_axis_field(x[i], y[i], z[i], radius, js[axis], axis)
                if math.isfinite(fx) and math.isfinite(fy) and math.isfinite(fz):
                    out[i, 0] += fx
                    out[i, 1] += fy
                    out[i, 2] += fz
                else:
                    singular[i, axis] = True
    return out, singular
