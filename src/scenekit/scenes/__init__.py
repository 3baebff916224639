"""Pre-built demo scenes for scenekit."""

from .demos import (
    SCENES,
    assets_dir,
    create_camera_scene,
    create_cube_scene,
    create_mesh_scene,
    create_triangle_scene,
)

__all__ = [
    "SCENES",
    "assets_dir",
    "create_camera_scene",
    "create_cube_scene",
    "create_mesh_scene",
    "create_triangle_scene",
]
