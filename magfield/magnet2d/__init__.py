"""2D sources: rectangles and circles (infinitely long prisms and cylinders)."""

from .magnets import Circle, Rectangle

__all__ = ["Circle", "Rectangle"]
