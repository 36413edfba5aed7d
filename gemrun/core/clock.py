"""
Frame clock.

Turns successive wall-clock readings (milliseconds) into per-frame
delta times in seconds. The clock never clamps: a host clock that goes
backwards yields a non-positive delta, and the consumers of that delta
decide how to treat it.
"""

from __future__ import annotations

from gemrun.core.errors import LoopStateError


class FrameClock:
    """
    Delta-time source for the game loop.

    Usage:
        clock = FrameClock()
        clock.start(1000.0)
        dt = clock.tick(1016.0)   # 0.016
    """

    def __init__(self):
        self._last_timestamp: float | None = None

    @property
    def last_timestamp(self) -> float | None:
        """Timestamp (ms) of the previous tick, or None before start()."""
        return self._last_timestamp

    @property
    def started(self) -> bool:
        return self._last_timestamp is not None

    def start(self, now: float) -> None:
        """Anchor the clock. Called once, after assets are ready."""
        self._last_timestamp = now

    def tick(self, now: float) -> float:
        """
        Advance the clock to ``now``.

        Args:
            now: Current wall-clock time in milliseconds

        Returns:
            Seconds elapsed since the previous tick (or since start())
        """
        if self._last_timestamp is None:
            raise LoopStateError("FrameClock.tick() called before start()")

        dt = (now - self._last_timestamp) / 1000.0
        self._last_timestamp = now
        return dt
