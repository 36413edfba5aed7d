"""
Gem Run Engine

A small frame-timed engine for 2D arcade games: assets load in the
background, then a display-synchronized loop updates and draws the
playfield every frame.

Quick Start:
    from gemrun import Game, GameConfig, EntityRegistry, ModeGate
    from gemrun.resources import PlaceholderLoader

    registry = EntityRegistry(controlled=player, groups={"enemies": bugs})
    game = Game(GameConfig(title="My Game"), manifest, registry,
                ModeGate(gameplay_active=True), PlaceholderLoader())
    game.run()
"""

__version__ = "0.1.0"

from gemrun.core import (
    EntityRegistry,
    EventBus,
    FrameClock,
    Game,
    GameConfig,
    GameLoop,
    LoopEvent,
    LoopState,
    ModeGate,
)
from gemrun.graphics import RenderSurface, TileGrid
from gemrun.resources import AssetManifest, ResourceProvider

__all__ = [
    # Core
    "Game",
    "GameConfig",
    "GameLoop",
    "LoopState",
    "FrameClock",
    "ModeGate",
    "EntityRegistry",
    # Events
    "EventBus",
    "LoopEvent",
    # Graphics
    "RenderSurface",
    "TileGrid",
    # Resources
    "AssetManifest",
    "ResourceProvider",
]
