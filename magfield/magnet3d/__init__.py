"""3D sources: cuboids and spheres."""

from .magnets import Prism, Sphere, magnetization_components

__all__ = ["Prism", "Sphere", "magnetization_components"]
