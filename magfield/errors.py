from __future__ import annotations

__all__ = [
    "DomainError",
    "InvalidGeometryError",
    "InvalidMagnetizationError",
    "MagfieldError",
    "SingularityError",
]


class MagfieldError(Exception):
    """Base class for magfield errors."""


class InvalidGeometryError(MagfieldError, ValueError):
    """Non-positive or non-finite magnet dimensions."""


class InvalidMagnetizationError(MagfieldError, ValueError):
    """Non-positive remanence or non-finite magnetization angles."""


class DomainError(MagfieldError, ValueError):
    """Input outside the domain a source can evaluate (e.g. wrong dimension)."""


class SingularityError(MagfieldError, ArithmeticError):
    """A closed form is indeterminate at the requested point."""

    def __init__(self, message: str, *, axes: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.axes = axes
