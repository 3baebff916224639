"""Mesh class for geometry data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

if TYPE_CHECKING:
    import trimesh


def _frozen(values: ArrayLike | None, dtype: type) -> NDArray:
    array = np.array([] if values is None else values, dtype=dtype).ravel()
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class Mesh:
    """Immutable container for renderer-ready mesh data.

    All attribute arrays are flat, matching what the renderer uploads as
    vertex buffers: positions and normals hold 3 floats per vertex, texcoords
    2 floats per vertex. A single index array references the vertices, so
    every attribute stream must already be co-indexed.

    Attributes:
        name: Mesh identifier (unique within a MeshLibrary)
        positions: Flat float32 array, 3 per vertex
        normals: Flat float32 array, 3 per vertex, may be empty
        texcoords: Flat float32 array, 2 per vertex, may be empty
        indices: Flat uint32 array of 0-based vertex indices
    """

    name: str
    positions: NDArray[np.float32] = field(default_factory=lambda: _frozen(None, np.float32))
    normals: NDArray[np.float32] = field(default_factory=lambda: _frozen(None, np.float32))
    texcoords: NDArray[np.float32] = field(default_factory=lambda: _frozen(None, np.float32))
    indices: NDArray[np.uint32] = field(default_factory=lambda: _frozen(None, np.uint32))

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", _frozen(self.positions, np.float32))
        object.__setattr__(self, "normals", _frozen(self.normals, np.float32))
        object.__setattr__(self, "texcoords", _frozen(self.texcoords, np.float32))
        object.__setattr__(self, "indices", _frozen(self.indices, np.uint32))

    @property
    def vertex_count(self) -> int:
        """Number of position vertices in the mesh."""
        return len(self.positions) // 3

    @property
    def index_count(self) -> int:
        return len(self.indices)

    @property
    def is_triangle_list(self) -> bool:
        """Whether the index array can be drawn as a plain triangle list."""
        return self.index_count % 3 == 0

    @property
    def face_count(self) -> int:
        """Number of whole triangles described by the index array."""
        return self.index_count // 3

    def vertices(self) -> NDArray[np.float32]:
        """Positions reshaped to an Nx3 array (read-only view)."""
        return self.positions.reshape(-1, 3)

    def faces(self) -> NDArray[np.uint32]:
        """Indices reshaped to an Mx3 triangle array.

        Raises:
            ValueError: If the index count is not a multiple of 3
        """
        if not self.is_triangle_list:
            raise ValueError(
                f"Mesh '{self.name}' has {self.index_count} indices, "
                "which is not a triangle list"
            )
        return self.indices.reshape(-1, 3)

    def to_trimesh(self) -> trimesh.Trimesh:
        """Convert to a trimesh.Trimesh object for export.

        Normals and texture coordinates are carried over when they match the
        vertex count.
        """
        import trimesh as tm

        vertices = np.array(self.vertices(), dtype=np.float64)
        mesh = tm.Trimesh(
            vertices=vertices,
            faces=np.array(self.faces(), dtype=np.int64),
            process=False,  # Keep vertex order as parsed
        )

        if len(self.normals) == len(self.positions):
            mesh.vertex_normals = self.normals.reshape(-1, 3)

        if len(self.texcoords) // 2 == self.vertex_count and self.vertex_count:
            mesh.visual = tm.visual.TextureVisuals(uv=self.texcoords.reshape(-1, 2))

        return mesh

    def __repr__(self) -> str:
        return (
            f"Mesh({self.name!r}, vertices={self.vertex_count}, "
            f"indices={self.index_count})"
        )
