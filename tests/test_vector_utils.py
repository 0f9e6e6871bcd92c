import numpy as np

from planet_builder.math_utils.vector_utils import rotation_mat_x, rotate_vector, deg2rad, tilted_axis


def test_rotation_mat_x():
    np.testing.assert_allclose(np.dot(rotation_mat_x(np.pi / 2), [0, 1, 0]), [0, 0, 1], atol=1e-12)


def test_rotate_vector():
    np.testing.assert_allclose(rotate_vector(np.array([1.0, 0, 0]), np.array([0, 0, 2.0]), np.pi / 2),
                               [0, 1, 0], atol=1e-12)


def test_deg2rad():
    assert np.isclose(deg2rad(180), np.pi)


def test_tilted_axis_is_unit_length():
    for tilt in (0, 23.5, 97.8, 177.4):
        assert np.isclose(np.linalg.norm(tilted_axis(tilt, 30)), 1.0)


def test_tilted_axis_azimuth():
    np.testing.assert_allclose(tilted_axis(90, 90), [1, 0, 0], atol=1e-12)
