"""
Game: the composition root of the engine.

The Game class wires the engine together. It handles:
- Window creation (or an off-screen surface when headless)
- The render surface, resource provider and frame scheduler
- The update and render phases and the game loop
- Fatal startup errors (assets that failed to load)

Game content supplies the manifest, the entity registry, the mode gate,
the background tile grid and the start screen.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

import pygame
from pydantic import BaseModel, ConfigDict, Field

from gemrun.core.entity import EntityRegistry
from gemrun.core.events import EventBus
from gemrun.core.loop import GameLoop, LoopState
from gemrun.core.mode import ModeGate
from gemrun.core.phases import RenderPhase, UpdatePhase
from gemrun.core.scheduler import FrameScheduler, ManualFrameScheduler, PygameFrameScheduler
from gemrun.graphics.surface import RenderSurface
from gemrun.resources.provider import AssetLoader, ResourceProvider

if TYPE_CHECKING:
    from gemrun.core.entity import Renderable
    from gemrun.core.errors import AssetLoadError
    from gemrun.graphics.tilegrid import TileGrid

logger = logging.getLogger(__name__)


class GameConfig(BaseModel):
    """Configuration for the game engine."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    title: str = "Gem Run"
    width: int = Field(default=808, gt=0)
    height: int = Field(default=808, gt=0)
    target_fps: int = Field(default=60, gt=0)
    background: tuple[int, int, int] = (255, 255, 255)
    asset_root: Path | None = None
    load_workers: int = Field(default=4, ge=1)
    headless: bool = False
    max_frames: int | None = Field(default=None, ge=0)


class Game:
    """
    Main engine object.

    Usage:
        config = GameConfig(title="My Game")
        game = Game(config, manifest, registry, mode_gate, loader,
                    tile_grid=grid, start_screen=StartScreen())
        game.run()
    """

    def __init__(
        self,
        config: GameConfig | None,
        manifest: Iterable[str],
        registry: EntityRegistry,
        mode_gate: ModeGate,
        loader: AssetLoader,
        tile_grid: TileGrid | None = None,
        start_screen: Renderable | None = None,
        scheduler: FrameScheduler | None = None,
        event_bus: EventBus | None = None,
    ):
        self.config = config or GameConfig()
        self.event_bus = event_bus or EventBus()
        self.registry = registry
        self.mode_gate = mode_gate
        if self.mode_gate.event_bus is None:
            self.mode_gate.event_bus = self.event_bus
        self._fatal_error: AssetLoadError | None = None

        pygame.init()
        self.window = self._create_window()

        self.scheduler = scheduler or self._create_scheduler()
        self.resources = ResourceProvider(
            loader,
            dispatch=self.scheduler.call_soon,
            max_workers=self.config.load_workers,
            event_bus=self.event_bus,
        )
        self.resources.on_error(self._on_assets_failed)

        self.surface = RenderSurface(self.window, self.resources, self.config.background)
        self.update_phase = UpdatePhase(registry, mode_gate, self.event_bus)
        self.render_phase = RenderPhase(
            self.surface,
            registry,
            mode_gate,
            tile_grid=tile_grid,
            start_screen=start_screen,
            event_bus=self.event_bus,
        )
        self.loop = GameLoop(
            manifest,
            self.resources,
            self.scheduler,
            self.update_phase,
            self.render_phase,
            event_bus=self.event_bus,
        )

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height

    def run(self) -> None:
        """
        Load assets and run the loop until quit.

        Raises:
            AssetLoadError: If any manifest asset failed to load
        """
        self.loop.initialize()
        try:
            self.scheduler.run()
            if self.loop.state is LoopState.WAITING_FOR_ASSETS:
                logger.warning("Scheduler stopped before the assets were ready, nothing was drawn.")
        finally:
            self._shutdown()

        if self._fatal_error is not None:
            raise self._fatal_error

    def quit(self) -> None:
        """Request game shutdown."""
        self.loop.stop()
        self.scheduler.stop()

    def _create_window(self) -> pygame.Surface:
        size = (self.config.width, self.config.height)
        if self.config.headless:
            return pygame.Surface(size)
        window = pygame.display.set_mode(size)
        pygame.display.set_caption(self.config.title)
        return window

    def _create_scheduler(self) -> FrameScheduler:
        if self.config.headless:
            return ManualFrameScheduler(max_frames=self.config.max_frames)
        return PygameFrameScheduler(self.config.target_fps, on_quit=self.quit)

    def _on_assets_failed(self, error: AssetLoadError) -> None:
        logger.error(f"Startup aborted: {error}")
        self._fatal_error = error
        self.quit()

    def _shutdown(self) -> None:
        self.loop.stop()
        self.resources.shutdown()
        pygame.quit()
