"""
Tagged kernel results.

Kernels return ``nan`` where their closed form is indeterminate. The guard
turns raw values into ``Finite`` or ``Singular`` so the evaluator decides what
a degenerate point means instead of the kernel layer.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias

__all__ = ["Finite", "GuardResult", "Singular", "guard", "guard_components"]


@dataclass(frozen=True)
class Finite:
    value: float


@dataclass(frozen=True)
class Singular:
    reason: str = "indeterminate closed form"


GuardResult: TypeAlias = Finite | Singular


def guard(value: float) -> GuardResult:
    if math.isfinite(value):
        return Finite(float(value))
    return Singular(f"non-finite kernel value {value!r}")


def guard_components(values: Sequence[float]) -> tuple[float, ...] | Singular:
    """Guard every component; one singular component makes the vector singular."""
    out: list[float] = []
    for value in values:
        res = guard(value)
        if isinstance(res, Singular):
            return res
        out.append(res.value)
    return tuple(out)
