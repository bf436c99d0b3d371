import math

import pytest

from magfield.errors import InvalidGeometryError, InvalidMagnetizationError
from magfield.magnet2d import Circle, Rectangle
from magfield.magnet3d import Prism, Sphere
from magfield.points import Point2, nearly_equal


def test_rectangle_derives_half_extents_and_components() -> None:
    magnet = Rectangle(2.0, 1.0, Point2(0.0, -0.5), alpha=0.0, jr=1.2, theta=30.0)
    assert magnet.a == 1.0
    assert magnet.b == 0.5
    assert nearly_equal(magnet.jx, 1.2 * math.cos(math.radians(30.0)))
    assert nearly_equal(magnet.jy, 1.2 * math.sin(math.radians(30.0)))


@pytest.mark.parametrize("theta", [0.0, 45.0, 90.0, 200.0, -30.0, 725.0])
def test_magnetization_norm_is_remanence(theta: float) -> None:
    magnet = Rectangle(1.0, 1.0, jr=0.8, theta=theta)
    assert nearly_equal(math.hypot(magnet.jx, magnet.jy), magnet.jr)


def test_angle_is_periodic() -> None:
    m1 = Rectangle(1.0, 1.0, theta=30.0)
    m2 = Rectangle(1.0, 1.0, theta=390.0)
    assert nearly_equal(m1.jx, m2.jx)
    assert nearly_equal(m1.jy, m2.jy)


@pytest.mark.parametrize(("width", "height"), [(0.0, 1.0), (1.0, -2.0), (math.nan, 1.0)])
def test_rectangle_rejects_bad_geometry(width: float, height: float) -> None:
    with pytest.raises(InvalidGeometryError):
        Rectangle(width, height)


def test_rejects_bad_magnetization() -> None:
    with pytest.raises(InvalidMagnetizationError):
        Rectangle(1.0, 1.0, jr=0.0)
    with pytest.raises(InvalidMagnetizationError):
        Circle(1.0, jr=-1.0)
    with pytest.raises(InvalidMagnetizationError):
        Sphere(1.0, theta=math.inf)


def test_other_shapes_reject_bad_geometry() -> None:
    with pytest.raises(InvalidGeometryError):
        Circle(0.0)
    with pytest.raises(InvalidGeometryError):
        Prism(1.0, 0.0, 1.0)
    with pytest.raises(InvalidGeometryError):
        Sphere(-1.0)
    with pytest.raises(InvalidGeometryError):
        Rectangle(1.0, 1.0, alpha=math.inf)
    with pytest.raises(InvalidGeometryError):
        Prism(1.0, 1.0, 1.0, alpha=math.nan)


def test_geometry_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        Rectangle(-1.0, 1.0)


def test_descriptor_is_immutable() -> None:
    magnet = Rectangle(1.0, 1.0)
    with pytest.raises(AttributeError):
        magnet.jr = 2.0  # type: ignore[misc]


def test_prism_spherical_angles() -> None:
    along_z = Prism(1.0, 1.0, 1.0)
    assert (along_z.jx, along_z.jy, along_z.jz) == (0.0, 0.0, 1.0)
    along_y = Prism(1.0, 1.0, 1.0, jr=2.0, theta=90.0, phi=90.0)
    assert abs(along_y.jx) < 1e-15
    assert nearly_equal(along_y.jy, 2.0)
    assert abs(along_y.jz) < 1e-15
