"""
Bulk evaluation over many observation points.

Each point is independent, so the per-shape numba kernels map over the points
with ``prange``; magnets are combined by plain addition in any order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from magfield.errors import DomainError, SingularityError
from magfield.field import DEFAULT_OPTIONS, EvaluationOptions, FieldSource, active_axes
from magfield.types import BoolArray, FloatArray

logger = logging.getLogger(__name__)

__all__ = ["BatchField", "field_at_points", "field_from_magnets", "grid_points_2d"]


@dataclass(frozen=True)
class BatchField:
    field: FloatArray
    singular: BoolArray


def _as_points(points: ArrayLike, dims: int) -> FloatArray:
    pts = np.asarray(points, dtype=np.float64)
    if pts.ndim == 1 and pts.shape[0] == dims:
        pts = pts[None, :]
    if pts.ndim != 2 or pts.shape[1] != dims:
        raise DomainError(f"points must have shape (N, {dims}), got {pts.shape}")
    return np.ascontiguousarray(pts)


def field_at_points(
    magnet: FieldSource,
    points: ArrayLike,
    options: EvaluationOptions | None = None,
) -> BatchField:
    opts = options or DEFAULT_OPTIONS
    pts = _as_points(points, magnet.dims)
    active = active_axes(magnet, opts.cutoff)
    logger.debug("evaluating %s at %d points", type(magnet).__name__, pts.shape[0])
    field, singular_axes = magnet.field_batch(pts, active)
    singular = np.asarray(singular_axes.any(axis=1), dtype=np.bool_)
    if opts.on_singular == "raise" and singular.any():
        axes = tuple(
            name
            for (name, _), hit in zip(
                magnet.magnetization_axes(), singular_axes.any(axis=0), strict=True
            )
            if hit
        )
        raise SingularityError(
            f"{int(singular.sum())} of {pts.shape[0]} points are indeterminate "
            f"for {type(magnet).__name__}",
            axes=axes,
        )
    return BatchField(field=np.asarray(field, dtype=np.float64), singular=singular)


def field_from_magnets(
    magnets: Iterable[FieldSource],
    points: ArrayLike,
    options: EvaluationOptions | None = None,
) -> BatchField:
    """Superposed field of several magnets sharing one dimension."""
    total: FloatArray | None = None
    singular: BoolArray | None = None
    dims: int | None = None
    for magnet in magnets:
        if dims is None:
            dims = magnet.dims
        elif magnet.dims != dims:
            raise DomainError("cannot superpose 2D and 3D magnets")
        res = field_at_points(magnet, points, options)
        if total is None or singular is None:
            total = res.field.copy()
            singular = res.singular.copy()
        else:
            total += res.field
            singular |= res.singular
    if total is None or singular is None:
        raise ValueError("field_from_magnets needs at least one magnet")
    return BatchField(field=total, singular=singular)


def grid_points_2d(
    x_lim: tuple[float, float],
    y_lim: tuple[float, float],
    nx: int,
    ny: int,
) -> tuple[FloatArray, FloatArray, FloatArray]:
    """Return (X, Y, pts) where pts is the flattened (nx*ny, 2) grid."""
    if nx <= 0 or ny <= 0:
        raise ValueError("nx and ny must be >= 1")
    xs = np.linspace(x_lim[0], x_lim[1], nx)
    ys = np.linspace(y_lim[0], y_lim[1], ny)
    X, Y = np.meshgrid(xs, ys, indexing="xy")
    pts = np.stack([X.ravel(), Y.ravel()], axis=1).astype(np.float64)
    return X, Y, np.ascontiguousarray(pts)
