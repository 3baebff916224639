"""Entities, cameras, input and the scene update loop."""

from .camera import Camera, update_camera, wrap_rotation
from .clock import FrameClock, FrameTime
from .entity import Entity, update_entity
from .input import DEFAULT_KEY_BINDINGS, Action, InputSnapshot, InputSource
from .library import DuplicateMeshError, MeshLibrary, MeshNotFoundError
from .scene import Scene

__all__ = [
    "Action",
    "Camera",
    "DEFAULT_KEY_BINDINGS",
    "DuplicateMeshError",
    "Entity",
    "FrameClock",
    "FrameTime",
    "InputSnapshot",
    "InputSource",
    "MeshLibrary",
    "MeshNotFoundError",
    "Scene",
    "update_camera",
    "update_entity",
    "wrap_rotation",
]
