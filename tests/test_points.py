import math

import numpy as np

from magfield.points import Point2, Point3, nearly_equal, rotate_xy


def test_zero_is_additive_identity() -> None:
    p = Point2(1.25, -3.5)
    assert p + Point2.zero() == p
    q = Point3(0.5, 2.0, -1.0)
    assert Point3.zero() + q == q


def test_accumulate_and_scale() -> None:
    total = Point2.zero()
    total += Point2(0.5, 0.0)
    total += 2.0 * Point2(0.0, 0.25)
    assert total == Point2(0.5, 0.5)
    assert Point3(1.0, 2.0, 3.0) * 2.0 == Point3(2.0, 4.0, 6.0)
    assert -Point2(1.0, -1.0) == Point2(-1.0, 1.0)


def test_addition_commutes() -> None:
    a = Point3(0.1, 0.2, 0.3)
    b = Point3(-0.7, 1.1, 4.0)
    assert a + b == b + a


def test_nearly_equal_relative_and_absolute() -> None:
    assert nearly_equal(0.0, 1e-13)
    assert not nearly_equal(0.0, 1e-9)
    assert nearly_equal(1e6, 1e6 * (1.0 + 1e-13))
    assert not nearly_equal(1e6, 1e6 * (1.0 + 1e-9))
    assert Point2(0.5, 0.0).nearly_equal(Point2(0.5 + 1e-14, -1e-14))


def test_rotate_matches_array_rotation() -> None:
    p = Point2(0.3, -1.2)
    angle = math.radians(37.0)
    arr = rotate_xy(p.as_array()[None, :], angle)[0]
    np.testing.assert_allclose(arr, p.rotate(angle).as_array(), rtol=0.0, atol=1e-15)

    q = Point3(0.3, -1.2, 2.0)
    arr3 = rotate_xy(q.as_array()[None, :], angle)[0]
    np.testing.assert_allclose(arr3, q.rotate_z(angle).as_array(), rtol=0.0, atol=1e-15)


def test_is_finite_and_from_array() -> None:
    assert Point2.from_array([1.0, 2.0]) == Point2(1.0, 2.0)
    assert Point3.from_array(np.array([1.0, 2.0, 3.0])) == Point3(1.0, 2.0, 3.0)
    assert not Point2(math.nan, 0.0).is_finite()
    assert not Point3(0.0, math.inf, 0.0).is_finite()
    assert Point3(1.0, 2.0, 2.0).norm() == 3.0
