"""Scene state and the per-tick update loop."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

from ..core import math3d
from .camera import Camera, update_camera
from .entity import Entity, update_entity
from .input import InputSnapshot, InputSource

logger = logging.getLogger(__name__)


@dataclass
class Scene:
    """Ordered entities and cameras plus the current input source.

    Example:
        scene = Scene()
        scene.add_entity(Entity("cube", mesh=cube_mesh))
        scene.add_camera(Camera("fpscam", position=[0, 0, -5]))
        scene.update(16.7, InputSnapshot.of(Action.MOVE_FORWARD))
    """

    entities: list[Entity] = field(default_factory=list)
    cameras: list[Camera] = field(default_factory=list)
    input: InputSource = field(default_factory=InputSnapshot.empty)

    def add_entity(self, entity: Entity) -> Entity:
        """Append an entity; ids must be unique within the scene.

        Returns:
            The added entity (for chaining)
        """
        if self.find_entity(entity.id) is not None:
            raise ValueError(f"Scene already has an entity with id '{entity.id}'")
        self.entities.append(entity)
        return entity

    def add_camera(self, camera: Camera) -> Camera:
        """Append a camera; ids must be unique within the scene."""
        if self.find_camera(camera.id) is not None:
            raise ValueError(f"Scene already has a camera with id '{camera.id}'")
        self.cameras.append(camera)
        return camera

    def find_entity(self, entity_id: str) -> Entity | None:
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        return None

    def find_camera(self, camera_id: str) -> Camera | None:
        for camera in self.cameras:
            if camera.id == camera_id:
                return camera
        return None

    def update(self, dt_ms: float, input: InputSource | None = None) -> None:
        """Advance the scene by one tick.

        Entities update first, in insertion order, so cameras that look at an
        entity see this tick's position.

        Args:
            dt_ms: Time since the previous tick in milliseconds
            input: Input state for this tick. Keeps the previous one if None.
        """
        if input is not None:
            self.input = input

        for entity in self.entities:
            update_entity(entity)
        for camera in self.cameras:
            update_camera(camera, self, dt_ms)

    def iter_draws(self, camera: Camera) -> Iterator[tuple[Entity, NDArray[np.float64]]]:
        """Yield (entity, model-view-projection) for every entity with a mesh."""
        for entity in self.entities:
            if entity.mesh is not None:
                yield entity, self.model_view_projection(entity, camera)

    def model_view_projection(self, entity: Entity, camera: Camera) -> NDArray[np.float64]:
        return math3d.model_view_projection(
            entity.model_matrix, camera.view_matrix, camera.projection_matrix
        )

    def __repr__(self) -> str:
        return f"Scene(entities={len(self.entities)}, cameras={len(self.cameras)})"
