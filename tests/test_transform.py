"""Tests for model-matrix composition and local axes."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.spatial.transform import Rotation

from scenekit.core import Transform, compose_model, local_axes, math3d, view_axes
from scenekit.core.transform import rotation_matrix

POSITIONS = [
    (0.0, 0.0, 0.0),
    (1.0, 2.0, 3.0),
    (-4.5, 0.25, 10.0),
    (1e3, -1e3, 7.0),
]


@pytest.mark.parametrize("position", POSITIONS)
def test_zero_rotation_unit_scale_is_pure_translation(position):
    m = compose_model(position, (0, 0, 0), (1, 1, 1))
    assert_allclose(m, math3d.translation(position))


@pytest.mark.parametrize("factory,index", [
    (math3d.rotation_x, 0),
    (math3d.rotation_y, 1),
    (math3d.rotation_z, 2),
])
@pytest.mark.parametrize("start", [0.0, 0.7, -2.1, 5.0])
def test_full_turn_about_single_axis_is_identity(factory, index, start):
    full = factory(start + 2 * math.pi) @ np.linalg.inv(factory(start))
    assert_allclose(full, np.eye(4), atol=1e-12)

    angles = [0.0, 0.0, 0.0]
    angles[index] = 2 * math.pi
    assert_allclose(rotation_matrix(angles), np.eye(4), atol=1e-12)


def test_rotation_order_is_x_then_y_then_z_fixed_axes():
    angles = [0.3, -0.9, 1.4]
    expected = Rotation.from_euler("XYZ", angles).as_matrix()
    assert_allclose(rotation_matrix(angles)[:3, :3], expected, atol=1e-12)


def test_compose_model_rotates_after_translating():
    """Translation happens in object space, so rotation moves the position."""
    position = [1.0, 0.0, 0.0]
    rotation = [0.0, 0.0, math.pi / 2]
    m = compose_model(position, rotation, (1, 1, 1))

    # Origin ends up at R·p, not at p
    assert_allclose(math3d.transform_point(m, [0, 0, 0]), [0, 1, 0], atol=1e-12)


def test_compose_model_scales_first():
    m = compose_model([0, 0, 1], [0, 0, 0], [2, 3, 4])
    assert_allclose(math3d.transform_point(m, [1, 1, 1]), [2, 3, 5])


def test_compose_model_order_matches_r_t_s():
    position, rotation, scale = [1, -2, 3], [0.2, 0.4, -0.6], [1, 2, 0.5]
    expected = (
        rotation_matrix(rotation)
        @ math3d.translation(position)
        @ math3d.scaling(scale)
    )
    assert_allclose(compose_model(position, rotation, scale), expected)


def test_local_axes_are_rotation_columns():
    rotation = [0.5, -0.25, 1.0]
    r = rotation_matrix(rotation)
    axes = local_axes(rotation)

    assert_allclose(axes.x, r[:3, 0])
    assert_allclose(axes.y, r[:3, 1])
    assert_allclose(axes.z, r[:3, 2])


def test_local_axes_identity_at_zero_rotation():
    axes = local_axes([0, 0, 0])
    assert_allclose(axes.x, [1, 0, 0])
    assert_allclose(axes.y, [0, 1, 0])
    assert_allclose(axes.z, [0, 0, 1])


def test_view_axes_are_rotation_rows():
    rotation = [0.5, -0.25, 1.0]
    r = rotation_matrix(rotation)
    axes = view_axes(rotation)

    assert_allclose(axes.x, r[0, :3])
    assert_allclose(axes.y, r[1, :3])
    assert_allclose(axes.z, r[2, :3])
    # Each row is mapped onto its own basis vector by R
    assert_allclose(r[:3, :3] @ axes.z, [0, 0, 1], atol=1e-12)


def test_transform_defaults_and_copy():
    t = Transform()
    assert_allclose(t.scale, [1, 1, 1])
    assert_allclose(t.to_matrix(), np.eye(4))

    t.position[0] = 5.0
    c = t.copy()
    c.position[0] = 9.0
    assert t.position[0] == 5.0


def test_transform_rejects_wrong_shape():
    with pytest.raises(ValueError):
        Transform(position=[1.0, 2.0])
