"""
Shape-agnostic field evaluation.

Every source implements ``FieldSource``; ``evaluate`` applies the axis cutoff,
guards each per-axis contribution and sums them.

Example:
    >>> from magfield import Point2, Rectangle, get_field
    >>> magnet = Rectangle(2.0, 2.0, center=Point2(0.0, -0.5), jr=1.0, theta=0.0)
    >>> field = get_field(magnet, Point2(0.0, -0.5))
    >>> round(field.x, 12), round(field.y, 12)
    (0.5, 0.0)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Literal, Protocol, TypeVar

from magfield.constants import FP_CUTOFF
from magfield.errors import SingularityError
from magfield.guard import Singular, guard_components
from magfield.points import Point2, Point3
from magfield.types import Axis, BoolArray, FloatArray, SingularPolicy

logger = logging.getLogger(__name__)

P = TypeVar("P", Point2, Point3)

ContributionStatus = Literal["finite", "singular", "skipped"]

__all__ = [
    "AxisContribution",
    "DEFAULT_OPTIONS",
    "EvaluationOptions",
    "FieldEvaluation",
    "FieldSource",
    "active_axes",
    "evaluate",
    "get_field",
    "superpose",
]


class FieldSource(Protocol):
    """Anything that can produce a field vector at a point."""

    dims: ClassVar[int]
    jr: float

    def zero(self) -> Any: ...

    def magnetization_axes(self) -> tuple[tuple[Axis, float], ...]: ...

    def to_local(self, point: Any) -> Any: ...

    def to_global(self, value: Any) -> Any: ...

    def axis_field(self, axis: Axis, local: Any) -> tuple[float, ...]: ...

    def field_batch(
        self, points: FloatArray, active: tuple[bool, ...]
    ) -> tuple[FloatArray, BoolArray]: ...


@dataclass(frozen=True)
class EvaluationOptions:
    cutoff: float = FP_CUTOFF
    on_singular: SingularPolicy = "zero"

    def __post_init__(self) -> None:
        if not (0.0 <= self.cutoff < 1.0):
            raise ValueError(f"cutoff must be in [0, 1), got {self.cutoff!r}")
        if self.on_singular not in ("zero", "raise"):
            raise ValueError(f"Unsupported on_singular policy: {self.on_singular}")


DEFAULT_OPTIONS = EvaluationOptions()


@dataclass(frozen=True)
class AxisContribution:
    axis: Axis
    field: Point2 | Point3
    status: ContributionStatus


@dataclass(frozen=True)
class FieldEvaluation:
    field: Point2 | Point3
    contributions: tuple[AxisContribution, ...]

    @property
    def singular(self) -> bool:
        """True when at least one axis was indeterminate and replaced by zero."""
        return any(c.status == "singular" for c in self.contributions)

    @property
    def singular_axes(self) -> tuple[Axis, ...]:
        return tuple(c.axis for c in self.contributions if c.status == "singular")


def active_axes(magnet: FieldSource, cutoff: float) -> tuple[bool, ...]:
    """Which magnetization components are large enough to evaluate."""
    return tuple(abs(j / magnet.jr) > cutoff for _, j in magnet.magnetization_axes())


def evaluate(
    magnet: FieldSource,
    point: P,
    options: EvaluationOptions | None = None,
) -> FieldEvaluation:
    opts = options or DEFAULT_OPTIONS
    local = magnet.to_local(point)
    total = magnet.zero()
    point_type = type(total)
    contributions: list[AxisContribution] = []

    axes = magnet.magnetization_axes()
    for (axis, _), active in zip(axes, active_axes(magnet, opts.cutoff), strict=True):
        if not active:
            contributions.append(AxisContribution(axis, magnet.zero(), "skipped"))
            continue
        guarded = guard_components(magnet.axis_field(axis, local))
        if isinstance(guarded, Singular):
            if opts.on_singular == "raise":
                raise SingularityError(
                    f"{type(magnet).__name__} field along {axis} is indeterminate at {point}",
                    axes=(axis,),
                )
            logger.debug(
                "singular %s-axis contribution of %s at %s replaced by zero",
                axis,
                type(magnet).__name__,
                point,
            )
            contributions.append(AxisContribution(axis, magnet.zero(), "singular"))
            continue
        value = point_type(*guarded)
        total += value
        contributions.append(AxisContribution(axis, magnet.to_global(value), "finite"))

    return FieldEvaluation(field=magnet.to_global(total), contributions=tuple(contributions))


def get_field(
    magnet: FieldSource,
    point: P,
    options: EvaluationOptions | None = None,
) -> P:
    """Field vector at ``point``; singular axis contributions count as zero."""
    res = evaluate(magnet, point, options)
    out: P = res.field  # type: ignore[assignment]
    return out


def superpose(
    magnets: Iterable[FieldSource],
    point: P,
    options: EvaluationOptions | None = None,
) -> P:
    """Vector sum of the fields of independent magnets at ``point``."""
    sources: Sequence[FieldSource] = list(magnets)
    if not sources:
        raise ValueError("superpose needs at least one magnet")
    total = sources[0].zero()
    for magnet in sources:
        total += get_field(magnet, point, options)
    out: P = total
    return out
