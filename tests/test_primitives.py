import math

import numpy as np
import pytest

from photowall.model.primitives import Vector3, euler_xyz_matrix, transform_matrix


def test_vector_arithmetic():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(0.5, -1.0, 2.0)
    assert a + b == Vector3(1.5, 1.0, 5.0)
    assert a - b == Vector3(0.5, 3.0, 1.0)
    assert a * 2 == Vector3(2.0, 4.0, 6.0)
    assert -a == Vector3(-1.0, -2.0, -3.0)
    assert Vector3(3.0, 4.0, 0.0).magnitude == 5.0


def test_zero_rotation_is_identity():
    np.testing.assert_allclose(euler_xyz_matrix(Vector3()), np.eye(3))


def test_rotation_about_x_maps_y_to_z():
    m = euler_xyz_matrix(Vector3(math.pi / 2, 0.0, 0.0))
    np.testing.assert_allclose(m @ [0.0, 1.0, 0.0], [0.0, 0.0, 1.0], atol=1e-12)


def test_rotation_about_y_maps_x_to_minus_z():
    m = euler_xyz_matrix(Vector3(0.0, math.pi / 2, 0.0))
    np.testing.assert_allclose(m @ [1.0, 0.0, 0.0], [0.0, 0.0, -1.0], atol=1e-12)


def test_euler_order_is_x_then_y_then_z():
    rot = Vector3(0.3, -0.7, 1.1)
    m = euler_xyz_matrix(rot)
    expected = (
        euler_xyz_matrix(Vector3(0.3, 0.0, 0.0))
        @ euler_xyz_matrix(Vector3(0.0, -0.7, 0.0))
        @ euler_xyz_matrix(Vector3(0.0, 0.0, 1.1))
    )
    np.testing.assert_allclose(m, expected)


def test_transform_matrix_translation_and_scale():
    m = transform_matrix(Vector3(1.0, -2.0, 3.0), Vector3(), scale=2.0)
    assert m.shape == (4, 4)
    np.testing.assert_allclose(m[:3, 3], [1.0, -2.0, 3.0])
    np.testing.assert_allclose(m[:3, :3], 2.0 * np.eye(3))
    assert m[3].tolist() == pytest.approx([0.0, 0.0, 0.0, 1.0])
