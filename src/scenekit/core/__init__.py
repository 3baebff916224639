"""Core math, transform and mesh components."""

from .transform import LocalAxes, Transform, compose_model, local_axes, view_axes
from .mesh import Mesh
from . import math3d

__all__ = ["LocalAxes", "Transform", "compose_model", "local_axes", "view_axes", "Mesh", "math3d"]
