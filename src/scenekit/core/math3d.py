"""Vector, matrix and quaternion helpers.

Conventions used throughout scenekit:

- Vectors are float64 arrays of shape (3,).
- Matrices are float64 arrays of shape (4, 4), indexed ``[row, col]`` and
  applied to column vectors, so ``multiply(a, b) @ v == a @ (b @ v)``.
  The renderer receives them as 16 floats in column-major order
  (see :func:`to_column_major`).
- Quaternions are ``(x, y, z, w)``.
- Projection is right-handed (view looks down -Z) with clip-space depth in
  ``[0, 1]``.

Degenerate inputs (zero-length vectors, a zero aspect ratio or field of
view, equal near and far planes, a look-at with coincident eye and target)
resolve to fixed fallbacks instead of raising, so per-frame updates stay
exception free.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)

EPSILON = 1e-10
# Smallest field of view perspective() accepts, in radians
MIN_FOV = 1e-3

WORLD_X = np.array([1.0, 0.0, 0.0])
WORLD_Y = np.array([0.0, 1.0, 0.0])
WORLD_Z = np.array([0.0, 0.0, 1.0])


# Vectors


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> NDArray[np.float64]:
    """Create a 3-component vector."""
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(value: ArrayLike) -> NDArray[np.float64]:
    """Coerce a sequence of three numbers to a fresh vector."""
    v = np.array(value, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {v.shape}")
    return v


def add(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    return np.add(a, b, dtype=np.float64)


def subtract(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    return np.subtract(a, b, dtype=np.float64)


def scale(v: ArrayLike, factor: float) -> NDArray[np.float64]:
    return np.multiply(v, factor, dtype=np.float64)


def negate(v: ArrayLike) -> NDArray[np.float64]:
    return np.negative(np.asarray(v, dtype=np.float64))


def dot(a: ArrayLike, b: ArrayLike) -> float:
    return float(np.dot(a, b))


def cross(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    return np.cross(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64))


def length(v: ArrayLike) -> float:
    return float(np.linalg.norm(v))


def normalize(v: ArrayLike) -> NDArray[np.float64]:
    """Return the unit vector in the direction of ``v``.

    A zero-length vector has no direction; the zero vector is returned
    rather than a vector of NaNs.
    """
    v = np.asarray(v, dtype=np.float64)
    norm = np.linalg.norm(v)
    if norm < EPSILON:
        logger.debug("normalize() called with a zero-length vector")
        return np.zeros_like(v)
    return v / norm


# Matrices


def identity() -> NDArray[np.float64]:
    return np.eye(4, dtype=np.float64)


def multiply(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Compose two matrices: the result applies ``b`` first, then ``a``."""
    return a @ b


def translation(offset: ArrayLike) -> NDArray[np.float64]:
    """Pure translation matrix T(offset)."""
    m = identity()
    m[:3, 3] = np.asarray(offset, dtype=np.float64)
    return m


def scaling(factors: ArrayLike) -> NDArray[np.float64]:
    """Pure scale matrix S(factors)."""
    return np.diag([*np.asarray(factors, dtype=np.float64), 1.0])


def rotation_x(angle: float) -> NDArray[np.float64]:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [1, 0, 0, 0],
        [0, c, -s, 0],
        [0, s, c, 0],
        [0, 0, 0, 1],
    ], dtype=np.float64)


def rotation_y(angle: float) -> NDArray[np.float64]:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [c, 0, s, 0],
        [0, 1, 0, 0],
        [-s, 0, c, 0],
        [0, 0, 0, 1],
    ], dtype=np.float64)


def rotation_z(angle: float) -> NDArray[np.float64]:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [c, -s, 0, 0],
        [s, c, 0, 0],
        [0, 0, 1, 0],
        [0, 0, 0, 1],
    ], dtype=np.float64)


def rotation(angle: float, axis: ArrayLike) -> NDArray[np.float64]:
    """Rotation of ``angle`` radians about ``axis`` (right-hand rule).

    The axis does not need to be normalized. A zero-length axis yields the
    identity matrix.
    """
    axis = normalize(axis)
    if not axis.any():
        return identity()

    x, y, z = axis
    c, s = math.cos(angle), math.sin(angle)
    t = 1.0 - c

    m = identity()
    m[:3, :3] = [
        [x * x * t + c, x * y * t - z * s, x * z * t + y * s],
        [y * x * t + z * s, y * y * t + c, y * z * t - x * s],
        [z * x * t - y * s, z * y * t + x * s, z * z * t + c],
    ]
    return m


def translate(m: NDArray[np.float64], offset: ArrayLike) -> NDArray[np.float64]:
    """Return ``m · T(offset)``."""
    return m @ translation(offset)


def rotate(m: NDArray[np.float64], angle: float, axis: ArrayLike) -> NDArray[np.float64]:
    """Return ``m · R(angle, axis)``."""
    return m @ rotation(angle, axis)


def scale_matrix(m: NDArray[np.float64], factors: ArrayLike) -> NDArray[np.float64]:
    """Return ``m · S(factors)``."""
    return m @ scaling(factors)


def transform_point(m: NDArray[np.float64], point: ArrayLike) -> NDArray[np.float64]:
    """Apply ``m`` to a point (w=1) and return the perspective-divided xyz."""
    homogeneous = m @ np.append(np.asarray(point, dtype=np.float64), 1.0)
    w = homogeneous[3]
    if abs(w) < EPSILON:
        return homogeneous[:3]
    return homogeneous[:3] / w


def perspective(
    fov_y: float,
    aspect: float,
    near: float,
    far: float,
) -> NDArray[np.float64]:
    """Build a right-handed perspective projection with depth in [0, 1].

    Points on the near plane map to depth 0 and points on the far plane to
    depth 1. Passing ``far=math.inf`` produces an infinite far plane.

    Args:
        fov_y: Vertical field of view in radians
        aspect: Width / height of the viewport. Zero falls back to 1.0.
        near: Distance to the near clip plane (positive)
        far: Distance to the far clip plane (positive, may be infinite).
            A far plane equal to ``near`` falls back to infinity.

    Returns:
        4x4 projection matrix
    """
    if abs(aspect) < EPSILON:
        logger.debug("perspective() called with zero aspect ratio, using 1.0")
        aspect = 1.0

    # Outside (0, π) the half-angle tangent is zero, negative or unbounded
    clamped = min(max(fov_y, MIN_FOV), math.pi - MIN_FOV)
    if clamped != fov_y:
        logger.debug("perspective() fov %r out of range, clamped to %r", fov_y, clamped)
        fov_y = clamped

    if not math.isinf(far) and abs(near - far) < EPSILON:
        logger.debug("perspective() called with near == far, using an infinite far plane")
        far = math.inf

    f = 1.0 / math.tan(fov_y / 2.0)

    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[3, 2] = -1.0

    if math.isinf(far):
        m[2, 2] = -1.0
        m[2, 3] = -near
    else:
        range_inv = 1.0 / (near - far)
        m[2, 2] = far * range_inv
        m[2, 3] = far * near * range_inv
    return m


def look_at(eye: ArrayLike, target: ArrayLike, up: ArrayLike) -> NDArray[np.float64]:
    """Build a right-handed view matrix looking from ``eye`` towards ``target``.

    The camera basis is derived from the normalized ``target - eye``
    direction and its cross products with ``up``. When ``target`` equals
    ``eye``, or ``up`` is parallel to the viewing direction, no basis can be
    derived and the rotation part falls back to identity; the view still
    translates by ``-eye``.
    """
    eye = np.asarray(eye, dtype=np.float64)
    forward = normalize(np.subtract(target, eye))
    right = normalize(np.cross(forward, np.asarray(up, dtype=np.float64)))

    if not forward.any() or not right.any():
        logger.debug("look_at() has no well-defined basis, using identity rotation")
        return translation(-eye)

    true_up = np.cross(right, forward)

    m = identity()
    m[0, :3] = right
    m[1, :3] = true_up
    m[2, :3] = -forward
    m[:3, 3] = -m[:3, :3] @ eye
    return m


def model_view_projection(
    model: NDArray[np.float64],
    view: NDArray[np.float64],
    projection: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Combine model, view and projection into ``P · V · M``."""
    return projection @ view @ model


def to_column_major(m: NDArray[np.float64]) -> NDArray[np.float32]:
    """Flatten a matrix into 16 float32 values, one column after another."""
    return np.asarray(m, dtype=np.float32).flatten(order="F")


def from_column_major(values: Sequence[float] | NDArray) -> NDArray[np.float64]:
    """Inverse of :func:`to_column_major`."""
    flat = np.asarray(values, dtype=np.float64)
    if flat.size != 16:
        raise ValueError(f"Expected 16 values, got {flat.size}")
    return flat.reshape((4, 4), order="F")


# Quaternions


def quat_identity() -> NDArray[np.float64]:
    return np.array([0.0, 0.0, 0.0, 1.0])


def quat_from_axis_angle(axis: ArrayLike, angle: float) -> NDArray[np.float64]:
    """Quaternion rotating ``angle`` radians about ``axis``."""
    axis = normalize(axis)
    if not axis.any():
        return quat_identity()
    half = angle / 2.0
    return np.array([*(axis * math.sin(half)), math.cos(half)])


def quat_multiply(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    """Hamilton product ``a * b`` (rotation ``b`` first, then ``a``)."""
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array([
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    ])


def quat_from_euler(rotation_xyz: ArrayLike) -> NDArray[np.float64]:
    """Quaternion equivalent of ``Rx · Ry · Rz`` for the given Euler angles."""
    rx, ry, rz = rotation_xyz
    qx = quat_from_axis_angle(WORLD_X, rx)
    qy = quat_from_axis_angle(WORLD_Y, ry)
    qz = quat_from_axis_angle(WORLD_Z, rz)
    return quat_multiply(quat_multiply(qx, qy), qz)


def quat_to_matrix(q: ArrayLike) -> NDArray[np.float64]:
    """Rotation matrix for a (unit) quaternion."""
    x, y, z, w = np.asarray(q, dtype=np.float64)
    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z

    m = identity()
    m[:3, :3] = [
        [1 - 2 * (yy + zz), 2 * (xy - wz), 2 * (xz + wy)],
        [2 * (xy + wz), 1 - 2 * (xx + zz), 2 * (yz - wx)],
        [2 * (xz - wy), 2 * (yz + wx), 1 - 2 * (xx + yy)],
    ]
    return m
