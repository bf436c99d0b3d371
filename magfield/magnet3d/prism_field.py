"""
Closed-form field of a uniformly magnetized cuboid (prism).

The prism spans ``|x| <= a``, ``|y| <= b``, ``|z| <= c`` in its local frame.
A magnetization ``j`` along one axis is replaced by two charge sheets of
density ``+j`` and ``-j`` on the faces normal to that axis; ``j`` itself is
added inside the body so the result is ``B`` and not ``mu0 H``. Magnetization
along x and y reuses the z-axis kernel with cyclically permuted coordinates.

Kernels return ``nan`` on edges, corners and magnetized faces.
"""

from __future__ import annotations

import math

import numpy as np

from magfield.constants import I_4PI, NAN
from magfield.numba_compat import njit, prange
from magfield.types import BoolArray, FloatArray

__all__ = [
    "prism_field_for_x_mag",
    "prism_field_for_y_mag",
    "prism_field_for_z_mag",
    "prism_field_batch",
]


@njit(cache=True)
def _log_pair(v1: float, v2: float, t2: float) -> float:
    """ln(v1 + r1) - ln(v2 + r2) with r_i = sqrt(t2 + v_i^2) and v1 > v2."""
    r1 = math.sqrt(t2 + v1 * v1)
    r2 = math.sqrt(t2 + v2 * v2)
    if v2 >= 0.0:
        den = v2 + r2
        if den <= 0.0:
            return NAN
        return math.log((v1 + r1) / den)
    if v1 < 0.0:
        # v + r = t2 / (r - v) for v < 0; t2 cancels in the difference
        return math.log((r2 - v2) / (r1 - v1))
    if t2 <= 0.0:
        return NAN
    return math.log((v1 + r1) * (r2 - v2) / t2)


@njit(cache=True)
def _charge_sheet(p: float, q: float, w: float, hp: float, hq: float) -> tuple[float, float, float]:
    """4*pi times the field of a unit sheet on |p'| <= hp, |q'| <= hq at height w = 0."""
    in_plane = w == 0.0
    if in_plane and abs(p) <= hp and abs(q) <= hq:
        return NAN, NAN, NAN
    w2 = w * w
    fp = 0.0
    fq = 0.0
    fw = 0.0
    for i in range(2):
        s = 1.0 if i == 0 else -1.0
        u = p + s * hp
        v = q + s * hq
        fp -= s * _log_pair(q + hq, q - hq, u * u + w2)
        fq -= s * _log_pair(p + hp, p - hp, v * v + w2)
    if not in_plane:
        for i in range(2):
            su = 1.0 if i == 0 else -1.0
            u = p + su * hp
            for k in range(2):
                sv = 1.0 if k == 0 else -1.0
                v = q + sv * hq
                r = math.sqrt(u * u + v * v + w2)
                fw += su * sv * math.atan(u * v / (w * r))
    return fp, fq, fw


@njit(cache=True)
def _axis_sheets(
    p: float, q: float, r: float, hp: float, hq: float, hr: float, j: float
) -> tuple[float, float, float]:
    top_p, top_q, top_r = _charge_sheet(p, q, r - hr, hp, hq)
    bot_p, bot_q, bot_r = _charge_sheet(p, q, r + hr, hp, hq)
    k = j * I_4PI
    bp = k * (top_p - bot_p)
    bq = k * (top_q - bot_q)
    br = k * (top_r - bot_r)
    if abs(p) < hp and abs(q) < hq and abs(r) < hr:
        br += j
    return bp, bq, br


@njit(cache=True)
def prism_field_for_z_mag(
    x: float, y: float, z: float, a: float, b: float, c: float, j: float
) -> tuple[float, float, float]:
    bx, by, bz = _axis_sheets(x, y, z, a, b, c, j)
    return bx, by, bz


@njit(cache=True)
def prism_field_for_x_mag(
    x: float, y: float, z: float, a: float, b: float, c: float, j: float
) -> tuple[float, float, float]:
    by, bz, bx = _axis_sheets(y, z, x, b, c, a, j)
    return bx, by, bz


@njit(cache=True)
def prism_field_for_y_mag(
    x: float, y: float, z: float, a: float, b: float, c: float, j: float
) -> tuple[float, float, float]:
    bz, bx, by = _axis_sheets(z, x, y, c, a, b, j)
    return bx, by, bz


@njit(cache=True)
def _accumulate(
    out: FloatArray,
    singular: BoolArray,
    i: int,
    axis: int,
    fx: float,
    fy: float,
    fz: float,
) -> None:
    if math.isfinite(fx) and math.isfinite(fy) and math.isfinite(fz):
        out[i, 0] += fx
        out[i, 1] += fy
        out[i, 2] += fz
    else:
        singular[i, axis] = True


@njit(cache=True, parallel=True)
def prism_field_batch(
    x: FloatArray,
    y: FloatArray,
    z: FloatArray,
    a: float,
    b: float,
    c: float,
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
    for i in prange(n):
        if use_x:
            fx, fy, fz = prism_field_for_x_mag(x[i], y[i], z[i], a, b, c, jx)
            _accumulate(out, singular, i, 0, fx, fy, fz)
        if use_y:
            fx, fy, fz = prism_field_for_y_mag(x[i], y[i], z[i], a, b, c, jy)
            _accumulate(out, singular, i, 1, fx, fy, fz)
        if use_z:
            fx, fy, fz = prism_field_for_z_mag(x[i], y[i], z[i], a, b, c, jz)
            _accumulate(out, singular, i, 2, fx, fy, fz)
    return out, singular
