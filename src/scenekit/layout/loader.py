"""YAML loader for scene descriptions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from ..core.transform import Transform
from ..scene.camera import Camera
from ..scene.entity import Entity
from ..scene.input import DEFAULT_KEY_BINDINGS, Action, parse_action
from ..scene.library import MeshLibrary
from ..scene.scene import Scene

logger = logging.getLogger(__name__)

# Camera keys copied straight from YAML, with the converter applied
CAMERA_SCALARS = {
    "aspect": float,
    "near": float,
    "far": float,
    "move_speed": float,
    "turn_rate": float,
}


@dataclass
class SceneSetup:
    """Everything a demo needs after loading a scene description.

    Attributes:
        name: Scene name from the YAML file
        scene: Scene with its entities and cameras
        meshes: Library of the meshes the scene references
        bindings: Action to key mapping for building input snapshots
    """

    name: str
    scene: Scene
    meshes: MeshLibrary
    bindings: dict[Action, str] = field(default_factory=lambda: dict(DEFAULT_KEY_BINDINGS))


class SceneLoader:
    """Loads scene descriptions from YAML files.

    YAML format:
    ```yaml
    name: mesh
    meshes:
      - model.obj            # relative to the YAML file
    entities:
      - id: monkey
        mesh: Suzanne        # name from the mesh's 'o' line
        position: [0, 0, 0]
        rotation: [0, 45, 0] # degrees
        scale: [1, 1, 1]
    cameras:
      - id: fpscam
        position: [0, 0, -5]
        rotation: [0, 0, 0]  # degrees
        fov: 72              # degrees
        aspect: 1.333
        near: 0.1
        far: 100
        move_speed: 6
        turn_rate: 150
        look_at: monkey      # optional entity id
    bindings:                # optional, merged over the defaults
      MoveForward: w
    ```
    """

    def load(self, path: str | Path) -> SceneSetup:
        """Load a scene description from a YAML file.

        Mesh paths are resolved relative to the YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            SceneSetup with a freshly built scene and mesh library

        Raises:
            FileNotFoundError: If the YAML file or a mesh file is missing
            ValueError: If the description is invalid
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Scene description not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        setup = self._build_setup(data, base_dir=path.parent)
        logger.info(
            "Loaded scene '%s' from %s (%d entities, %d cameras)",
            setup.name,
            path,
            len(setup.scene.entities),
            len(setup.scene.cameras),
        )
        return setup

    def load_string(self, yaml_string: str, base_dir: str | Path = ".") -> SceneSetup:
        """Load a scene description from a YAML string.

        Args:
            yaml_string: YAML content as a string
            base_dir: Directory mesh paths are resolved against
        """
        data = yaml.safe_load(yaml_string)
        return self._build_setup(data, base_dir=Path(base_dir))

    def _build_setup(self, data: Any, base_dir: Path) -> SceneSetup:
        if not isinstance(data, dict):
            raise ValueError("Scene description must be a mapping")

        meshes = MeshLibrary()
        for mesh_path in data.get("meshes", []):
            meshes.load(base_dir / mesh_path)

        scene = Scene()
        for entity_def in data.get("entities", []):
            scene.add_entity(self._parse_entity(entity_def, meshes))

        for camera_def in data.get("cameras", []):
            camera = self._parse_camera(camera_def)
            if camera.target_id is not None and scene.find_entity(camera.target_id) is None:
                raise ValueError(
                    f"Camera '{camera.id}' looks at unknown entity '{camera.target_id}'"
                )
            scene.add_camera(camera)

        return SceneSetup(
            name=data.get("name", "scene"),
            scene=scene,
            meshes=meshes,
            bindings=self._parse_bindings(data.get("bindings", {})),
        )

    def _parse_entity(self, entity_def: dict[str, Any], meshes: MeshLibrary) -> Entity:
        """Parse an entity definition from YAML data."""
        entity_id = entity_def.get("id")
        if entity_id is None:
            raise ValueError("Entity must have an 'id'")

        mesh = None
        mesh_name = entity_def.get("mesh")
        if mesh_name is not None:
            if mesh_name not in meshes:
                raise ValueError(f"Entity '{entity_id}' uses unknown mesh '{mesh_name}'")
            mesh = meshes.get(mesh_name)

        transform = Transform(
            position=_vector(entity_def, "position", 0.0),
            rotation=np.radians(_vector(entity_def, "rotation", 0.0)),
            scale=_vector(entity_def, "scale", 1.0),
        )
        return Entity(id=str(entity_id), mesh=mesh, transform=transform)

    def _parse_camera(self, camera_def: dict[str, Any]) -> Camera:
        """Parse a camera definition from YAML data."""
        camera_id = camera_def.get("id")
        if camera_id is None:
            raise ValueError("Camera must have an 'id'")

        kwargs: dict[str, Any] = {
            key: convert(camera_def[key])
            for key, convert in CAMERA_SCALARS.items()
            if key in camera_def
        }
        if "fov" in camera_def:
            kwargs["fov"] = float(np.radians(camera_def["fov"]))
        if "up" in camera_def:
            kwargs["up"] = np.array(camera_def["up"], dtype=np.float64)
        look_at = camera_def.get("look_at")

        return Camera(
            id=str(camera_id),
            position=_vector(camera_def, "position", 0.0),
            rotation=np.radians(_vector(camera_def, "rotation", 0.0)),
            target_id=str(look_at) if look_at is not None else None,
            **kwargs,
        )

    def _parse_bindings(self, bindings_def: dict[str, str]) -> dict[Action, str]:
        """Merge YAML key bindings over the defaults."""
        bindings = dict(DEFAULT_KEY_BINDINGS)
        for action_name, key in bindings_def.items():
            bindings[parse_action(action_name)] = str(key)
        return bindings


def _vector(definition: dict[str, Any], key: str, default: float) -> np.ndarray:
    value = definition.get(key)
    if value is None:
        return np.full(3, default, dtype=np.float64)
    vector = np.array(value, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"'{key}' must have 3 components, got {value!r}")
    return vector
