"""Transform class and model-matrix composition."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from . import math3d


class LocalAxes(NamedTuple):
    """Object-space basis vectors expressed in world space."""

    x: NDArray[np.float64]
    y: NDArray[np.float64]
    z: NDArray[np.float64]


def rotation_matrix(rotation: ArrayLike) -> NDArray[np.float64]:
    """Build R = Rx · Ry · Rz from Euler angles (radians).

    Each factor rotates about a fixed world axis. Read right to left, a
    vector is rotated about Z first, then Y, then X.
    """
    rx, ry, rz = rotation
    return math3d.rotation_x(rx) @ math3d.rotation_y(ry) @ math3d.rotation_z(rz)


def compose_model(
    position: ArrayLike,
    rotation: ArrayLike,
    scale: ArrayLike,
) -> NDArray[np.float64]:
    """Compose a model matrix as M = R · T · S.

    Applied to a vector this scales, then translates, then rotates. The
    translation happens in object space before the rotation, so a rotated
    entity orbits the origin rather than spinning in place.

    Args:
        position: Translation (x, y, z)
        rotation: Euler angles (pitch, yaw, roll) in radians
        scale: Per-axis scale factors

    Returns:
        4x4 model matrix
    """
    r = rotation_matrix(rotation)
    t = math3d.translation(position)
    s = math3d.scaling(scale)
    return r @ t @ s


def local_axes(rotation: ArrayLike) -> LocalAxes:
    """Return the columns of R (see :func:`rotation_matrix`) as x/y/z axes."""
    r = rotation_matrix(rotation)
    return LocalAxes(r[:3, 0].copy(), r[:3, 1].copy(), r[:3, 2].copy())


def view_axes(rotation: ArrayLike) -> LocalAxes:
    """Return the rows of R as x/y/z axes.

    For a view matrix ``R · T(position)`` these are the camera's right, up
    and backward directions in world space (the columns of Rᵀ), so they
    are the basis that camera movement has to follow.
    """
    r = rotation_matrix(rotation)
    return LocalAxes(r[0, :3].copy(), r[1, :3].copy(), r[2, :3].copy())


@dataclass
class Transform:
    """Represents a 3D transformation with position, rotation, and scale.

    Rotation is stored as Euler angles (pitch, yaw, roll) in radians about
    the fixed world X, Y and Z axes.
    """

    position: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(3, dtype=np.float64)
    )
    rotation: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(3, dtype=np.float64)
    )
    scale: NDArray[np.float64] = field(
        default_factory=lambda: np.ones(3, dtype=np.float64)
    )

    def __post_init__(self) -> None:
        self.position = math3d.as_vec3(self.position)
        self.rotation = math3d.as_vec3(self.rotation)
        self.scale = math3d.as_vec3(self.scale)

    def to_matrix(self) -> NDArray[np.float64]:
        """Convert to a 4x4 model matrix (R · T · S)."""
        return compose_model(self.position, self.rotation, self.scale)

    def local_axes(self) -> LocalAxes:
        return local_axes(self.rotation)

    def copy(self) -> Transform:
        """Create a deep copy of this transform."""
        return Transform(
            position=self.position.copy(),
            rotation=self.rotation.copy(),
            scale=self.scale.copy(),
        )

    @staticmethod
    def identity() -> Transform:
        """Create an identity transform."""
        return Transform()
