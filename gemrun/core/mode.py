"""
Mode gate: gameplay vs. start screen.

Game content owns and flips the gate; the engine only reads it, once
per update phase and once per render phase.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gemrun.core.events import LoopEvent

if TYPE_CHECKING:
    from gemrun.core.events import EventBus


class ModeGate:
    """Single boolean flag selecting the gameplay or start-screen branch."""

    def __init__(self, gameplay_active: bool = False, event_bus: EventBus | None = None):
        self._gameplay_active = gameplay_active
        self.event_bus = event_bus

    @property
    def gameplay_active(self) -> bool:
        return self._gameplay_active

    def activate(self) -> None:
        """Switch to gameplay."""
        self._set(True)

    def deactivate(self) -> None:
        """Switch back to the start screen."""
        self._set(False)

    def _set(self, value: bool) -> None:
        if value == self._gameplay_active:
            return
        self._gameplay_active = value
        if self.event_bus:
            self.event_bus.publish(LoopEvent.MODE_CHANGED, gameplay_active=value)

    def __bool__(self) -> bool:
        return self._gameplay_active

    def __repr__(self) -> str:
        mode = "gameplay" if self._gameplay_active else "start"
        return f"ModeGate({mode})"
