"""Frame timing."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class FrameTime:
    """Elapsed time of one frame."""

    ms: float
    fps: float


@dataclass
class FrameClock:
    """Measures the time between successive ticks.

    Args:
        clock: Monotonic time source in seconds (injectable for tests)
    """

    clock: Callable[[], float] = time.perf_counter
    _last: float | None = field(default=None, init=False, repr=False)

    def tick(self) -> FrameTime:
        """Return the time since the previous tick.

        The first tick reports zero elapsed time.
        """
        now = self.clock()
        elapsed_ms = 0.0 if self._last is None else (now - self._last) * 1000.0
        self._last = now
        fps = 1000.0 / elapsed_ms if elapsed_ms > 0 else 0.0
        return FrameTime(ms=elapsed_ms, fps=fps)

    def reset(self) -> None:
        self._last = None
