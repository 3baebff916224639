"""Entity component: a transform plus an optional mesh reference."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from ..core.mesh import Mesh
from ..core.transform import Transform, compose_model


@dataclass
class Entity:
    """A drawable object in the scene.

    The model matrix is derived data: update_entity() rebuilds it from the
    transform every tick, so edits to the transform never accumulate drift.
    """

    id: str
    mesh: Mesh | None = None
    transform: Transform = field(default_factory=Transform)
    model_matrix: NDArray[np.float64] = field(
        default_factory=lambda: np.eye(4, dtype=np.float64), repr=False
    )

    @property
    def position(self) -> NDArray[np.float64]:
        return self.transform.position

    @property
    def rotation(self) -> NDArray[np.float64]:
        return self.transform.rotation

    @property
    def scale(self) -> NDArray[np.float64]:
        return self.transform.scale


def update_entity(entity: Entity) -> None:
    """Recompute the entity's model matrix from its transform."""
    t = entity.transform
    entity.model_matrix = compose_model(t.position, t.rotation, t.scale)
