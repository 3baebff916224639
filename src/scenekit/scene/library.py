"""Caller-owned table of parsed meshes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from ..core.mesh import Mesh
from ..core.transform import Transform
from ..io.wavefront import load_wavefront, parse_wavefront
from .entity import Entity

logger = logging.getLogger(__name__)


class MeshNotFoundError(KeyError):
    """No mesh with the requested name has been loaded."""


class DuplicateMeshError(ValueError):
    """A mesh with the same name is already in the library."""


class MeshLibrary:
    """Maps mesh names to parsed meshes.

    Each loader owns its own library, so independent loads never share
    state.
    """

    def __init__(self) -> None:
        self._meshes: dict[str, Mesh] = {}

    def add(self, mesh: Mesh, replace: bool = False) -> Mesh:
        """Register a mesh under its own name.

        Raises:
            DuplicateMeshError: If the name is taken and replace is False
        """
        if mesh.name in self._meshes and not replace:
            raise DuplicateMeshError(f"Mesh '{mesh.name}' is already loaded")
        self._meshes[mesh.name] = mesh
        return mesh

    def parse(self, text: str, replace: bool = False) -> Mesh:
        """Parse mesh text and register the result."""
        return self.add(parse_wavefront(text), replace=replace)

    def load(self, path: str | Path, replace: bool = False) -> Mesh:
        """Read and parse a mesh file and register the result."""
        mesh = self.add(load_wavefront(path), replace=replace)
        logger.info("Loaded mesh '%s' from %s", mesh.name, path)
        return mesh

    def get(self, name: str) -> Mesh:
        """Look up a mesh by name.

        Raises:
            MeshNotFoundError: If the mesh has not been loaded
        """
        try:
            return self._meshes[name]
        except KeyError:
            raise MeshNotFoundError(f"Model not found: {name}") from None

    def create_entity(self, name: str, entity_id: str | None = None) -> Entity:
        """Create an entity at the origin that draws the named mesh."""
        return Entity(
            id=entity_id or name,
            mesh=self.get(name),
            transform=Transform(),
        )

    def names(self) -> list[str]:
        return list(self._meshes)

    def __contains__(self, name: object) -> bool:
        return name in self._meshes

    def __iter__(self) -> Iterator[Mesh]:
        return iter(self._meshes.values())

    def __len__(self) -> int:
        return len(self._meshes)
