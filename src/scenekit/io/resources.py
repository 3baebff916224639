"""Text resource loading."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def read_resource(path: str | Path) -> str:
    """Read a text resource (mesh, scene description) from disk.

    Raises:
        FileNotFoundError: If the resource does not exist
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Resource not found: {path}")

    logger.debug("Loading resource %s", path)
    return path.read_text(encoding="utf-8")
