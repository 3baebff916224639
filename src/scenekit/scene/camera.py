"""First-person camera component driven by logical input actions.

Each tick the camera:

1. turns by ``turn_rate`` degrees per second for every active Rotate action
   (left/right change yaw, up/down change pitch),
2. wraps each rotation component back by one revolution if it left
   [-2π, 2π],
3. moves by ``move_speed`` units per second along its local axes for every
   active Move action,
4. rebuilds its view matrix, either looking at a target entity or from its
   own Euler rotation, and its projection matrix if the lens changed.

Movement directions relative to ``view_axes(rotation)``, the rows of R:

========  ==========  ==========  =========  ========  =========
forward   backward    left        right      up        down
========  ==========  ==========  =========  ========  =========
``+z``    ``-z``      ``+x``      ``-x``     ``-y``    ``+y``
========  ==========  ==========  =========  ========  =========

The signs match the view matrix ``R · T(position)``: ``position`` is the
offset applied to the world, so moving "left" shifts the world towards +x.
Row 2 of R is the world direction the view maps onto +Z, so adding it to
``position`` brings whatever lies on the view's -Z axis closer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..core import math3d
from ..core.transform import compose_model, view_axes
from .input import Action, InputSource

if TYPE_CHECKING:
    from .scene import Scene

FULL_TURN = 2.0 * math.pi

DEFAULT_FOV = 2.0 * math.pi / 5.0
DEFAULT_ASPECT = 1.0
DEFAULT_NEAR = 0.1
DEFAULT_FAR = 100.0
# 5 * 0.5 degrees and 0.1 units per frame at 60 frames per second
DEFAULT_TURN_RATE = 150.0
DEFAULT_MOVE_SPEED = 6.0

# action -> (rotation component, sign)
ROTATION_ACTIONS: dict[Action, tuple[int, float]] = {
    Action.ROTATE_LEFT: (1, -1.0),
    Action.ROTATE_RIGHT: (1, 1.0),
    Action.ROTATE_UP: (0, 1.0),
    Action.ROTATE_DOWN: (0, -1.0),
}

# action -> (local axis name, sign)
MOVEMENT_ACTIONS: dict[Action, tuple[str, float]] = {
    Action.MOVE_FORWARD: ("z", 1.0),
    Action.MOVE_BACKWARD: ("z", -1.0),
    Action.MOVE_LEFT: ("x", 1.0),
    Action.MOVE_RIGHT: ("x", -1.0),
    Action.MOVE_UP: ("y", -1.0),
    Action.MOVE_DOWN: ("y", 1.0),
}

_UNIT_SCALE = np.ones(3, dtype=np.float64)


@dataclass
class Camera:
    """Camera state plus the matrices derived from it each tick.

    Attributes:
        id: Camera identifier
        position: World offset (x, y, z)
        rotation: Euler angles (pitch, yaw, roll) in radians
        target_id: Optional id of an entity to look at
        fov: Vertical field of view in radians
        aspect: Viewport width / height
        near: Near clip distance
        far: Far clip distance
        move_speed: Movement speed in units per second
        turn_rate: Turning speed in degrees per second
        up: World up direction used for look-at views
    """

    id: str
    position: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(3, dtype=np.float64)
    )
    rotation: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(3, dtype=np.float64)
    )
    target_id: str | None = None
    fov: float = DEFAULT_FOV
    aspect: float = DEFAULT_ASPECT
    near: float = DEFAULT_NEAR
    far: float = DEFAULT_FAR
    move_speed: float = DEFAULT_MOVE_SPEED
    turn_rate: float = DEFAULT_TURN_RATE
    up: NDArray[np.float64] = field(default_factory=lambda: math3d.WORLD_Y.copy())

    view_matrix: NDArray[np.float64] = field(
        default_factory=lambda: np.eye(4, dtype=np.float64), repr=False
    )
    projection_matrix: NDArray[np.float64] = field(
        default_factory=lambda: np.eye(4, dtype=np.float64), repr=False
    )
    _projection_key: tuple[float, float, float, float] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.position = math3d.as_vec3(self.position)
        self.rotation = math3d.as_vec3(self.rotation)
        self.up = math3d.as_vec3(self.up)
        self.update_projection()

    @property
    def view_projection(self) -> NDArray[np.float64]:
        """Projection · View for the most recent tick."""
        return self.projection_matrix @ self.view_matrix

    def update_projection(self) -> None:
        """Rebuild the projection matrix if fov/aspect/near/far changed."""
        key = (self.fov, self.aspect, self.near, self.far)
        if key == self._projection_key:
            return
        self.projection_matrix = math3d.perspective(*key)
        self._projection_key = key

    def uniform_data(self, model_matrix: NDArray[np.float64]) -> NDArray[np.float32]:
        """Model-view-projection for one draw as 16 column-major float32 values."""
        mvp = math3d.model_view_projection(model_matrix, self.view_matrix, self.projection_matrix)
        return math3d.to_column_major(mvp)


def wrap_rotation(rotation: NDArray[np.float64]) -> None:
    """Pull each component back by one full turn if it left [-2π, 2π].

    This is a single correction, not a modulo: a component more than one
    revolution out of range stays out of range after the call.
    """
    for i, angle in enumerate(rotation):
        if angle < -FULL_TURN:
            rotation[i] = angle + FULL_TURN
        elif angle > FULL_TURN:
            rotation[i] = angle - FULL_TURN


def apply_input(camera: Camera, actions: InputSource, dt_seconds: float) -> None:
    """Turn and move the camera for the actions active this tick."""
    turn = math.radians(camera.turn_rate * dt_seconds)
    for action, (component, sign) in ROTATION_ACTIONS.items():
        if actions.is_action_active(action):
            camera.rotation[component] += sign * turn

    wrap_rotation(camera.rotation)

    axes = view_axes(camera.rotation)._asdict()
    step = camera.move_speed * dt_seconds
    for action, (axis, sign) in MOVEMENT_ACTIONS.items():
        if actions.is_action_active(action):
            camera.position += axes[axis] * (sign * step)


def update_view(camera: Camera, scene: Scene | None = None) -> None:
    """Rebuild the view matrix, looking at the target entity when it resolves."""
    target = None
    if camera.target_id is not None and scene is not None:
        target = scene.find_entity(camera.target_id)

    if target is not None:
        camera.view_matrix = math3d.look_at(camera.position, target.position, camera.up)
    else:
        camera.view_matrix = compose_model(camera.position, camera.rotation, _UNIT_SCALE)


def update_camera(camera: Camera, scene: Scene, dt_ms: float) -> None:
    """Advance the camera by one tick of ``dt_ms`` milliseconds."""
    apply_input(camera, scene.input, dt_ms / 1000.0)
    update_view(camera, scene)
    camera.update_projection()
