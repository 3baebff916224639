"""Mesh text parsing and resource loading."""

from .errors import MalformedNumber, MissingObjectName, WavefrontError
from .resources import read_resource
from .wavefront import load_wavefront, parse_wavefront

__all__ = [
    "MalformedNumber",
    "MissingObjectName",
    "WavefrontError",
    "load_wavefront",
    "parse_wavefront",
    "read_resource",
]
