"""Demo scenes, each a YAML description over the shared scene core."""

from pathlib import Path

from ..layout import SceneLoader, SceneSetup


def assets_dir() -> Path:
    """Directory holding the bundled demo meshes and scene descriptions."""
    return Path(__file__).parent.parent / "assets"


def _load_demo(name: str) -> SceneSetup:
    return SceneLoader().load(assets_dir() / f"{name}.yaml")


def create_triangle_scene() -> SceneSetup:
    """Create a scene containing a single triangle and a fixed camera."""
    return _load_demo("triangle")


def create_cube_scene() -> SceneSetup:
    """Create a scene with a cube and a camera that keeps looking at it."""
    return _load_demo("cube")


def create_camera_scene() -> SceneSetup:
    """Create a scene with a cube and a free-flying first-person camera."""
    return _load_demo("camera")


def create_mesh_scene() -> SceneSetup:
    """Create a scene with a textured mesh loaded from an OBJ file."""
    return _load_demo("mesh")


# Scene registry - maps scene names to factory functions
SCENES = {
    "triangle": create_triangle_scene,
    "cube": create_cube_scene,
    "camera": create_camera_scene,
    "mesh": create_mesh_scene,
}
