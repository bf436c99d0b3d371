import math

import numpy as np
import pytest

from magfield.field import evaluate, get_field
from magfield.magnet3d import Prism, Sphere
from magfield.magnet3d.prism_field import prism_field_for_z_mag
from magfield.points import Point3


@pytest.mark.parametrize(
    ("theta", "phi", "axis"),
    [(0.0, 0.0, 2), (90.0, 0.0, 0), (90.0, 90.0, 1)],
)
def test_cube_center_is_two_thirds_remanence(theta: float, phi: float, axis: int) -> None:
    magnet = Prism(2.0, 2.0, 2.0, Point3(0.5, -1.0, 0.25), jr=1.5, theta=theta, phi=phi)
    field = get_field(magnet, Point3(0.5, -1.0, 0.25)).as_array()
    expected = np.zeros(3)
    expected[axis] = 2.0 * 1.5 / 3.0
    np.testing.assert_allclose(field, expected, rtol=0.0, atol=1e-12)


def test_permuted_axes_agree_on_cube() -> None:
    along_z = Prism(2.0, 2.0, 2.0, jr=1.0)
    along_x = Prism(2.0, 2.0, 2.0, jr=1.0, theta=90.0, phi=0.0)
    bz = get_field(along_z, Point3(0.0, 0.0, 5.0)).z
    bx = get_field(along_x, Point3(5.0, 0.0, 0.0)).x
    assert abs(bz - bx) < 1e-12
    assert bz > 0.0


def test_rotation_about_z() -> None:
    point = Point3(0.3, 1.7, 0.4)
    rotated = Prism(1.0, 1.0, 2.0, alpha=90.0, jr=1.0, theta=90.0, phi=0.0)
    along_y = Prism(1.0, 1.0, 2.0, jr=1.0, theta=90.0, phi=90.0)
    np.testing.assert_allclose(
        get_field(rotated, point).as_array(),
        get_field(along_y, point).as_array(),
        rtol=0.0,
        atol=1e-12,
    )


def test_far_field_matches_sphere_of_equal_volume() -> None:
    side = 2.0
    radius = (3.0 * side**3 / (4.0 * math.pi)) ** (1.0 / 3.0)
    prism = Prism(side, side, side, jr=1.0, theta=35.0, phi=20.0)
    sphere = Sphere(radius, jr=1.0, theta=35.0, phi=20.0)
    point = Point3(20.0, -25.0, 30.0)
    np.testing.assert_allclose(
        get_field(prism, point).as_array(),
        get_field(sphere, point).as_array(),
        rtol=1e-2,
        atol=1e-8,
    )


def test_far_field_decays_as_inverse_cube() -> None:
    prism = Prism(1.0, 2.0, 0.5, jr=1.0, theta=0.0)
    direction = Point3(0.48, 0.6, 0.64)
    near = get_field(prism, direction * 40.0).norm()
    far = get_field(prism, direction * 80.0).norm()
    assert 7.8 < near / far < 8.2


def test_face_plane_outside_footprint_is_regular() -> None:
    prism = Prism(2.0, 2.0, 2.0, jr=1.0)
    on_plane = evaluate(prism, Point3(3.0, 0.5, 1.0))
    assert not on_plane.singular
    nearby = get_field(prism, Point3(3.0, 0.5, 1.0 + 1e-9))
    np.testing.assert_allclose(
        on_plane.field.as_array(), nearby.as_array(), rtol=0.0, atol=1e-6
    )


def test_magnetized_face_and_edges_are_singular() -> None:
    bx, by, bz = prism_field_for_z_mag(0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 1.0)
    assert math.isnan(bz)
    prism = Prism(2.0, 2.0, 2.0, jr=1.0, theta=60.0, phi=30.0)
    for point in (Point3(1.0, 1.0, 1.0), Point3(1.0, 0.0, 1.0), Point3(0.0, 0.0, 1.0)):
        res = evaluate(prism, point)
        assert res.singular
        assert res.field.is_finite()


def test_unmagnetized_face_is_regular() -> None:
    prism = Prism(2.0, 2.0, 2.0, jr=1.0, theta=90.0, phi=0.0)
    res = evaluate(prism, Point3(0.0, 0.0, 1.0))
    assert not res.singular
    assert res.field.is_finite()


def test_edge_extension_is_regular() -> None:
    prism = Prism(2.0, 2.0, 2.0, jr=1.0)
    res = evaluate(prism, Point3(1.0, -3.0, 1.0))
    assert not res.singular
    nearby = get_field(prism, Point3(1.0 + 1e-9, -3.0, 1.0 + 1e-9))
    np.testing.assert_allclose(res.field.as_array(), nearby.as_array(), rtol=0.0, atol=1e-6)
