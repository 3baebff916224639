"""Parser for the WaveFront OBJ subset used by the demo scenes.

Supported keywords:

- ``o name``: object name (required, the last one wins)
- ``v x y z [w]``: vertex position (``w`` is ignored)
- ``vt u v [w]``: texture coordinate (``w`` is ignored)
- ``vn x y z``: vertex normal
- ``f a[/b[/c]] ...``: face, using only the 1-based position index of each
  corner

Every other keyword (comments, ``mtllib``, ``usemtl``, ``g``, ``s``, ...) is
skipped. Texture and normal sub-indices of faces are read and discarded, so
the output has a single index stream and is only correct for files whose
attributes are already co-indexed per vertex. Faces with more than three
corners are appended as-is, without triangulation.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ..core.mesh import Mesh
from .errors import MalformedNumber, MissingObjectName
from .resources import read_resource

logger = logging.getLogger(__name__)

# keyword -> (required components, maximum accepted components)
VERTEX_COMPONENTS = {
    "v": (3, 4),
    "vt": (2, 3),
    "vn": (3, 3),
}

# Plain ASCII decimals only: no "nan", "inf", digit separators or other scripts
FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
INDEX_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

# Largest 1-based index that still fits the uint32 index buffer
MAX_INDEX = 2**32


class _ParseState:
    """Accumulates attribute data while lines are read."""

    def __init__(self) -> None:
        self.name = ""
        self.positions: list[float] = []
        self.texcoords: list[float] = []
        self.normals: list[float] = []
        self.indices: list[int] = []
        self.skipped: set[str] = set()

    def target(self, keyword: str) -> list[float]:
        if keyword == "v":
            return self.positions
        if keyword == "vt":
            return self.texcoords
        return self.normals


def _parse_floats(
    keyword: str,
    tokens: list[str],
    line_number: int,
    line: str,
) -> list[float]:
    required, maximum = VERTEX_COMPONENTS[keyword]
    if len(tokens) < required:
        raise MalformedNumber(
            line_number, line, f"'{keyword}' needs {required} values, got {len(tokens)}"
        )
    if len(tokens) > maximum:
        raise MalformedNumber(
            line_number, line, f"'{keyword}' takes at most {maximum} values, got {len(tokens)}"
        )

    # Optional trailing component is checked and dropped
    for token in tokens:
        if not FLOAT_PATTERN.fullmatch(token):
            raise MalformedNumber(line_number, line, f"not a number: {token!r}")
    return [float(token) for token in tokens[:required]]


def _parse_face(tokens: list[str], line_number: int, line: str) -> list[int]:
    if not tokens:
        raise MalformedNumber(line_number, line, "face has no vertices")

    indices = []
    for token in tokens:
        position_token = token.split("/")[0]
        if not INDEX_PATTERN.fullmatch(position_token):
            raise MalformedNumber(
                line_number, line, f"not an integer index: {position_token!r}"
            )
        index = int(position_token)
        if index < 1:
            raise MalformedNumber(
                line_number, line, f"index must be a positive 1-based integer, got {index}"
            )
        if index > MAX_INDEX:
            raise MalformedNumber(
                line_number, line, f"index {index} does not fit a 32-bit index buffer"
            )
        indices.append(index - 1)
    return indices


def parse_wavefront(text: str) -> Mesh:
    """Parse mesh-description text into a Mesh.

    Args:
        text: Full contents of a WaveFront-style mesh file

    Returns:
        Mesh holding the object name and its flat attribute/index arrays

    Raises:
        MalformedNumber: If a ``v``/``vt``/``vn``/``f`` line holds a
            non-numeric token, too few or too many values, or a
            face index that is not positive or does not fit 32 bits
        MissingObjectName: If no ``o`` line with a name was found
    """
    state = _ParseState()

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        tokens = raw_line.split()
        if not tokens:
            continue

        keyword, args = tokens[0], tokens[1:]

        if keyword == "o":
            state.name = raw_line.strip()[1:].strip()
        elif keyword in VERTEX_COMPONENTS:
            state.target(keyword).extend(_parse_floats(keyword, args, line_number, raw_line))
        elif keyword == "f":
            face = _parse_face(args, line_number, raw_line)
            if len(face) != 3:
                logger.debug(
                    "line %d: face with %d vertices is not triangulated",
                    line_number,
                    len(face),
                )
            state.indices.extend(face)
        elif not keyword.startswith("#"):
            state.skipped.add(keyword)

    if not state.name:
        raise MissingObjectName()

    if state.skipped:
        logger.debug(
            "Mesh '%s': ignored unsupported keywords %s",
            state.name,
            ", ".join(sorted(state.skipped)),
        )

    mesh = Mesh(
        name=state.name,
        positions=state.positions,
        normals=state.normals,
        texcoords=state.texcoords,
        indices=state.indices,
    )
    logger.debug("Parsed %r", mesh)
    return mesh


def load_wavefront(path: str | Path) -> Mesh:
    """Read a mesh file from disk and parse it."""
    return parse_wavefront(read_resource(path))
