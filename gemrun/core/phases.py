"""
Per-frame update and render phases.

Both phases read the mode gate once per call and pick exactly one
branch. Entity calls are isolated: an ordinary exception raised by one
entity is logged and the phase moves on to the next entity, while
EngineError (a missing asset, for instance) propagates and stops the
frame.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from gemrun.core.entity import Renderable, TimedEntity
from gemrun.core.errors import EngineError
from gemrun.core.events import LoopEvent

if TYPE_CHECKING:
    from gemrun.core.entity import EntityRegistry
    from gemrun.core.events import EventBus
    from gemrun.core.mode import ModeGate
    from gemrun.graphics.surface import RenderSurface
    from gemrun.graphics.tilegrid import TileGrid

logger = logging.getLogger(__name__)


class _Phase:
    """Shared entity-call isolation."""

    name = "phase"

    def __init__(self, registry: EntityRegistry, mode_gate: ModeGate, event_bus: EventBus | None = None):
        self.registry = registry
        self.mode_gate = mode_gate
        self.event_bus = event_bus

    def _call(self, entity: Any, method: Callable[..., None], *args: Any) -> None:
        try:
            method(*args)
        except EngineError:
            raise
        except Exception as e:
            logger.exception(f"{self.name} failed for {entity!r}")
            if self.event_bus:
                self.event_bus.publish(
                    LoopEvent.ENTITY_FAILED, phase=self.name, entity=entity, error=e
                )


class UpdatePhase(_Phase):
    """
    Advances entity state by one frame.

    Order: every time-scaled autonomous entity (groups in declaration
    order), then the collision hook, then the controlled entity.
    Nothing runs while the start screen is showing.
    """

    name = "update"

    def run(self, dt: float) -> None:
        if not self.mode_gate.gameplay_active:
            return

        for entity in self.registry.autonomous():
            if isinstance(entity, TimedEntity):
                self._call(entity, entity.update, dt)

        self.check_collisions()

        controlled = self.registry.controlled
        if controlled is not None:
            self._call(controlled, controlled.update)

    def check_collisions(self) -> None:
        """Extension point for engine-level collision handling. Empty by default."""
        pass


class RenderPhase(_Phase):
    """
    Draws one frame.

    Gameplay: background tiles, every group in declaration order, then
    the controlled entity on top. Start screen: only the start
    presentation. Never both.
    """

    name = "render"

    def __init__(
        self,
        surface: RenderSurface,
        registry: EntityRegistry,
        mode_gate: ModeGate,
        tile_grid: TileGrid | None = None,
        start_screen: Renderable | None = None,
        event_bus: EventBus | None = None,
    ):
        super().__init__(registry, mode_gate, event_bus)
        self.surface = surface
        self.tile_grid = tile_grid
        self.start_screen = start_screen

    def run(self) -> None:
        self.surface.clear()
        if self.mode_gate.gameplay_active:
            self.render_level()
            self.render_entities()
        else:
            self.render_start_screen()

    def render_level(self) -> None:
        if self.tile_grid is not None:
            self.tile_grid.draw(self.surface)

    def render_entities(self) -> None:
        for entity in self.registry.autonomous():
            if isinstance(entity, Renderable):
                self._call(entity, entity.render, self.surface)

        controlled = self.registry.controlled
        if controlled is not None:
            self._call(controlled, controlled.render, self.surface)

    def render_start_screen(self) -> None:
        if self.start_screen is not None:
            self._call(self.start_screen, self.start_screen.render, self.surface)
