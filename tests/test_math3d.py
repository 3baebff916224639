"""Tests for the vector, matrix and quaternion kernel."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from scenekit.core import math3d


def test_vector_arithmetic():
    a = math3d.vec3(1, 2, 3)
    b = math3d.vec3(4, -5, 6)

    assert_allclose(math3d.add(a, b), [5, -3, 9])
    assert_allclose(math3d.subtract(a, b), [-3, 7, -3])
    assert_allclose(math3d.scale(a, 2.0), [2, 4, 6])
    assert_allclose(math3d.negate(a), [-1, -2, -3])
    assert math3d.dot(a, b) == pytest.approx(12.0)
    assert_allclose(math3d.cross(math3d.WORLD_X, math3d.WORLD_Y), math3d.WORLD_Z)


def test_normalize_unit_length():
    v = math3d.normalize([3.0, 0.0, 4.0])
    assert_allclose(v, [0.6, 0.0, 0.8])
    assert math3d.length(v) == pytest.approx(1.0)


def test_normalize_zero_vector_returns_zero():
    """A zero-length vector resolves to zero instead of NaN."""
    v = math3d.normalize([0.0, 0.0, 0.0])
    assert not np.isnan(v).any()
    assert_allclose(v, [0.0, 0.0, 0.0])


def test_multiply_applies_right_operand_first():
    a = math3d.translation([1, 0, 0])
    b = math3d.rotation_z(math.pi / 2)
    v = np.array([1.0, 0.0, 0.0, 1.0])

    assert_allclose(math3d.multiply(a, b) @ v, a @ (b @ v))
    # Rotate (1,0,0) to (0,1,0), then translate by +x
    assert_allclose(math3d.multiply(a, b) @ v, [1, 1, 0, 1], atol=1e-12)


def test_translate_rotate_scale_post_multiply():
    m = math3d.identity()
    m = math3d.translate(m, [1, 2, 3])
    m = math3d.scale_matrix(m, [2, 2, 2])
    assert_allclose(math3d.transform_point(m, [1, 1, 1]), [3, 4, 5])

    r = math3d.rotate(math3d.identity(), math.pi / 2, [0, 0, 1])
    assert_allclose(r, math3d.rotation_z(math.pi / 2), atol=1e-12)


@pytest.mark.parametrize("axis,factory", [
    ([1, 0, 0], math3d.rotation_x),
    ([0, 1, 0], math3d.rotation_y),
    ([0, 0, 1], math3d.rotation_z),
])
def test_axis_angle_matches_axis_rotations(axis, factory):
    for angle in (0.3, -1.2, 2.5):
        assert_allclose(math3d.rotation(angle, axis), factory(angle), atol=1e-12)


def test_rotation_with_zero_axis_is_identity():
    assert_allclose(math3d.rotation(1.0, [0, 0, 0]), np.eye(4))


def test_perspective_depth_range_zero_to_one():
    near, far = 0.5, 50.0
    p = math3d.perspective(math.radians(60), 1.5, near, far)

    assert math3d.transform_point(p, [0, 0, -near])[2] == pytest.approx(0.0, abs=1e-9)
    assert math3d.transform_point(p, [0, 0, -far])[2] == pytest.approx(1.0)
    # Halfway in view space lands between the planes
    mid = math3d.transform_point(p, [0, 0, -(near + far) / 2])[2]
    assert 0.0 < mid < 1.0


def test_perspective_field_of_view():
    p = math3d.perspective(math.pi / 2, 2.0, 0.1, 100.0)
    assert p[1, 1] == pytest.approx(1.0)
    assert p[0, 0] == pytest.approx(0.5)
    assert p[3, 2] == -1.0


def test_perspective_infinite_far():
    p = math3d.perspective(math.pi / 2, 1.0, 0.1, math.inf)
    assert math3d.transform_point(p, [0, 0, -0.1])[2] == pytest.approx(0.0, abs=1e-9)
    assert math3d.transform_point(p, [0, 0, -1e9])[2] == pytest.approx(1.0)


def test_perspective_zero_aspect_falls_back():
    assert_allclose(
        math3d.perspective(1.0, 0.0, 0.1, 10.0),
        math3d.perspective(1.0, 1.0, 0.1, 10.0),
    )


@pytest.mark.parametrize("fov,clamped", [
    (0.0, math3d.MIN_FOV),
    (-1.0, math3d.MIN_FOV),
    (math.pi, math.pi - math3d.MIN_FOV),
])
def test_perspective_clamps_degenerate_fov(fov, clamped):
    p = math3d.perspective(fov, 1.0, 0.1, 100.0)

    assert np.isfinite(p).all()
    assert_allclose(p, math3d.perspective(clamped, 1.0, 0.1, 100.0))


def test_perspective_equal_near_far_uses_infinite_far():
    p = math3d.perspective(1.0, 1.0, 1.0, 1.0)

    assert np.isfinite(p).all()
    assert_allclose(p, math3d.perspective(1.0, 1.0, 1.0, math.inf))


def test_look_at_maps_target_onto_negative_z():
    eye = np.array([3.0, 2.0, 5.0])
    target = np.array([0.0, 0.5, 0.0])
    view = math3d.look_at(eye, target, [0, 1, 0])

    assert_allclose(math3d.transform_point(view, eye), [0, 0, 0], atol=1e-12)
    in_view = math3d.transform_point(view, target)
    assert_allclose(in_view[:2], [0, 0], atol=1e-12)
    assert in_view[2] == pytest.approx(-np.linalg.norm(target - eye))
    # Rotation part stays orthonormal
    r = view[:3, :3]
    assert_allclose(r @ r.T, np.eye(3), atol=1e-12)


@pytest.mark.parametrize("target,up", [
    ([1.0, 2.0, 3.0], [0, 1, 0]),  # target == eye
    ([1.0, 7.0, 3.0], [0, 1, 0]),  # up parallel to forward
])
def test_look_at_degenerate_uses_identity_rotation(target, up):
    eye = [1.0, 2.0, 3.0]
    view = math3d.look_at(eye, target, up)

    assert not np.isnan(view).any()
    assert_allclose(view[:3, :3], np.eye(3))
    assert_allclose(view[:3, 3], [-1.0, -2.0, -3.0])


def test_column_major_layout():
    m = math3d.translation([7, 8, 9])
    flat = math3d.to_column_major(m)

    assert flat.dtype == np.float32
    assert flat.shape == (16,)
    assert_allclose(flat[12:15], [7, 8, 9])
    assert_allclose(math3d.from_column_major(flat), m)


def test_from_column_major_rejects_wrong_size():
    with pytest.raises(ValueError):
        math3d.from_column_major([1.0] * 9)


def test_quaternion_axis_angle_matches_matrix():
    axis = np.array([1.0, 2.0, -0.5])
    angle = 0.8
    q = math3d.quat_from_axis_angle(axis, angle)

    assert np.linalg.norm(q) == pytest.approx(1.0)
    assert_allclose(math3d.quat_to_matrix(q), math3d.rotation(angle, axis), atol=1e-12)
    assert_allclose(math3d.quat_to_matrix(math3d.quat_identity()), np.eye(4))


def test_quaternion_from_euler_matches_fixed_axis_order():
    angles = [0.4, -1.1, 2.0]
    expected = (
        math3d.rotation_x(angles[0])
        @ math3d.rotation_y(angles[1])
        @ math3d.rotation_z(angles[2])
    )
    assert_allclose(math3d.quat_to_matrix(math3d.quat_from_euler(angles)), expected, atol=1e-12)


def test_model_view_projection_order():
    model = math3d.translation([1, 0, 0])
    view = math3d.translation([0, 0, -5])
    projection = math3d.perspective(1.0, 1.0, 0.1, 10.0)

    assert_allclose(
        math3d.model_view_projection(model, view, projection),
        projection @ view @ model,
    )
