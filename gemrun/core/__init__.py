"""
Core engine module.

Exports:
- Game, GameConfig: Composition root and configuration
- GameLoop, LoopState: Asset-gated update/render loop
- FrameClock: Delta-time source
- ModeGate: Gameplay vs. start screen switch
- EntityRegistry, TimedEntity, SteppedEntity, Renderable: Entities
- UpdatePhase, RenderPhase: Per-frame phases
- FrameScheduler, PygameFrameScheduler, ManualFrameScheduler: Host schedulers
- EventBus, Event, LoopEvent: Event system
- Engine errors
"""

from gemrun.core.clock import FrameClock
from gemrun.core.entity import EntityRegistry, Renderable, SteppedEntity, TimedEntity
from gemrun.core.errors import (
    AssetLoadError,
    AssetNotLoadedError,
    EngineError,
    LoopStateError,
    ManifestError,
    SchedulerUnavailableError,
)
from gemrun.core.events import Event, EventBus, LoopEvent
from gemrun.core.game import Game, GameConfig
from gemrun.core.loop import GameLoop, LoopState
from gemrun.core.mode import ModeGate
from gemrun.core.phases import RenderPhase, UpdatePhase
from gemrun.core.scheduler import FrameScheduler, ManualFrameScheduler, PygameFrameScheduler

__all__ = [
    # Game
    "Game",
    "GameConfig",
    # Loop
    "GameLoop",
    "LoopState",
    "FrameClock",
    "ModeGate",
    "UpdatePhase",
    "RenderPhase",
    # Scheduling
    "FrameScheduler",
    "PygameFrameScheduler",
    "ManualFrameScheduler",
    # Entities
    "EntityRegistry",
    "TimedEntity",
    "SteppedEntity",
    "Renderable",
    # Events
    "EventBus",
    "Event",
    "LoopEvent",
    # Errors
    "EngineError",
    "AssetNotLoadedError",
    "AssetLoadError",
    "ManifestError",
    "SchedulerUnavailableError",
    "LoopStateError",
]
