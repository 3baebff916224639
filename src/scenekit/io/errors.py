"""Errors raised while reading mesh descriptions."""

from __future__ import annotations


class WavefrontError(ValueError):
    """Base class for mesh text that cannot be turned into a Mesh."""


class MissingObjectName(WavefrontError):
    """The mesh text never declared an object name with an ``o`` line."""

    def __init__(self) -> None:
        super().__init__("No name for wavefront object: expected an 'o <name>' line")


class MalformedNumber(WavefrontError):
    """A ``v``, ``vt``, ``vn`` or ``f`` line holds an unusable value.

    Attributes:
        line_number: 1-based line number in the parsed text
        line: The offending line, without its line terminator
        reason: Short description of what was wrong
    """

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")
