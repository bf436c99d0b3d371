"""Analytical magnetic fields of uniformly magnetized sources."""

from magfield.batch import BatchField, field_at_points, field_from_magnets, grid_points_2d
from magfield.constants import ERR_CUTOFF, FP_CUTOFF
from magfield.errors import (
    DomainError,
    InvalidGeometryError,
    InvalidMagnetizationError,
    MagfieldError,
    SingularityError,
)
from magfield.field import (
    EvaluationOptions,
    FieldEvaluation,
    FieldSource,
    evaluate,
    get_field,
    superpose,
)
from magfield.magnet2d import Circle, Rectangle
from magfield.magnet3d import Prism, Sphere
from magfield.points import Point2, Point3, nearly_equal

__all__ = [
    "BatchField",
    "Circle",
    "DomainError",
    "ERR_CUTOFF",
    "EvaluationOptions",
    "FP_CUTOFF",
    "FieldEvaluation",
    "FieldSource",
    "InvalidGeometryError",
    "InvalidMagnetizationError",
    "MagfieldError",
    "Point2",
    "Point3",
    "Prism",
    "Rectangle",
    "SingularityError",
    "Sphere",
    "evaluate",
    "field_at_points",
    "field_from_magnets",
    "get_field",
    "grid_points_2d",
    "nearly_equal",
    "superpose",
]
