"""
Closed-form field of a uniformly magnetized rectangle.

The rectangle has width ``2a`` and height ``2b`` and is centered at the origin
of its local frame. Each kernel gives one field component due to one
magnetization component ``j``. Kernels return ``nan`` where the closed form is
indeterminate (observation point on a corner).

``atan2`` follows IEEE-754: a ``+0`` numerator over a negative denominator is
``+pi``, so points on an edge take the interior value.
"""

from __future__ import annotations

import math

import numpy as np

from magfield.constants import I_2PI, I_4PI, NAN
from magfield.numba_compat import njit, prange
from magfield.types import BoolArray, FloatArray

__all__ = [
    "field_in_x_for_x_mag",
    "field_in_y_for_x_mag",
    "field_in_x_for_y_mag",
    "field_in_y_for_y_mag",
    "rectangle_field_x_mag",
    "rectangle_field_y_mag",
    "rectangle_field_batch",
]


@njit(cache=True)
def _atan2_checked(top: float, bottom: float) -> float:
    if top == 0.0 and bottom == 0.0:
        return NAN
    return math.atan2(top, bottom)


@njit(cache=True)
def _log_ratio(top: float, bottom: float) -> float:
    if top <= 0.0 or bottom <= 0.0:
        return NAN
    return math.log(top / bottom)


@njit(cache=True)
def field_in_x_for_x_mag(x: float, y: float, a: float, b: float, j: float) -> float:
    # atan2(t, 0.0) = pi/2, so at the center of a square Bxx = j/2
    b_plus_y = b + y
    b_minus_y = b - y
    xsq_minus_asq = x * x - a * a
    a2 = 2.0 * a

    top_1 = a2 * b_plus_y
    bottom_1 = xsq_minus_asq + b_plus_y * b_plus_y

    top_2 = a2 * b_minus_y
    bottom_2 = xsq_minus_asq + b_minus_y * b_minus_y

    return j * I_2PI * (_atan2_checked(top_1, bottom_1) + _atan2_checked(top_2, bottom_2))


@njit(cache=True)
def field_in_y_for_x_mag(x: float, y: float, a: float, b: float, j: float) -> float:
    # symmetric in x about the center line, so Byx = 0 at x = 0
    x_plus_a_sq = (x + a) * (x + a)
    x_minus_a_sq = (x - a) * (x - a)
    y_plus_b_sq = (y + b) * (y + b)
    y_minus_b_sq = (y - b) * (y - b)

    top_1 = x_minus_a_sq + y_minus_b_sq
    bottom_1 = x_plus_a_sq + y_minus_b_sq

    top_2 = x_minus_a_sq + y_plus_b_sq
    bottom_2 = x_plus_a_sq + y_plus_b_sq

    return -j * I_4PI * (_log_ratio(top_1, bottom_1) - _log_ratio(top_2, bottom_2))


@njit(cache=True)
def field_in_x_for_y_mag(x: float, y: float, a: float, b: float, j: float) -> float:
    x_plus_a_sq = (x + a) * (x + a)
    x_minus_a_sq = (x - a) * (x - a)
    y_plus_b_sq = (y + b) * (y + b)
    y_minus_b_sq = (y - b) * (y - b)

    top_1 = x_plus_a_sq + y_minus_b_sq
    bottom_1 = x_plus_a_sq + y_plus_b_sq

    top_2 = x_minus_a_sq + y_minus_b_sq
    bottom_2 = x_minus_a_sq + y_plus_b_sq

    return j * I_4PI * (_log_ratio(top_1, bottom_1) - _log_ratio(top_2, bottom_2))


@njit(cache=True)
def field_in_y_for_y_mag(x: float, y: float, a: float, b: float, j: float) -> float:
    x_plus_a = x + a
    x_minus_a = x - a
    ysq_minus_bsq = y * y - b * b
    b2 = 2.0 * b

    top_1 = b2 * x_plus_a
    bottom_1 = x_plus_a * x_plus_a + ysq_minus_bsq

    top_2 = b2 * x_minus_a
    bottom_2 = x_minus_a * x_minus_a + ysq_minus_bsq

    return j * I_2PI * (_atan2_checked(top_1, bottom_1) - _atan2_checked(top_2, bottom_2))


@njit(cache=True)
def rectangle_field_x_mag(x: float, y: float, a: float, b: float, j: float) -> tuple[float, float]:
    return (
        field_in_x_for_x_mag(x, y, a, b, j),
        field_in_y_for_x_mag(x, y, a, b, j),
    )


@njit(cache=True)
def rectangle_field_y_mag(x: float, y: float, a: float, b: float, j: float) -> tuple[float, float]:
    return (
        field_in_x_for_y_mag(x, y, a, b, j),
        field_in_y_for_y_mag(x, y, a, b, j),
    )


@njit(cache=True, parallel=True)
def rectangle_field_batch(
    x: FloatArray,
    y: FloatArray,
    a: float,
    b: float,
    jx: float,
    jy: float,
    use_x: bool,
    use_y: bool,
) -> tuple[FloatArray, FloatArray, BoolArray]:
    """
    Field at many local points; singular axis contributions are zeroed and flagged.
    """
    n = x.shape[0]
    bx = np.zeros(n, dtype=np.float64)
    by = np.zeros(n, dtype=np.float64)
    singular = np.zeros((n, 2), dtype=np.bool_)
    for i in prange(n):
        if use_x:
            fx = field_in_x_for_x_mag(x[i], y[i], a, b, jx)
            fy = field_in_y_for_x_mag(x[i], y[i], a, b, jx)
            if math.isfinite(fx) and math.isfinite(fy):
                bx[i] += fx
                by[i] += fy
            else:
                singular[i, 0] = True
        if use_y:
            fx = field_in_x_for_y_mag(x[i], y[i], a, b, jy)
            fy = field_in_y_for_y_mag(x[i], y[i], a, b, jy)
            if math.isfinite(fx) and math.isfinite(fy):
                bx[i] += fx
                by[i] += fy
            else:
                singular[i, 1] = True
    return bx, by, singular
