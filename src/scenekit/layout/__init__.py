"""Data-driven scene setup from YAML descriptions."""

from .loader import SceneLoader, SceneSetup

__all__ = ["SceneLoader", "SceneSetup"]
