"""
Game loop controller.

Lifecycle:
    UNINITIALIZED --initialize()--> WAITING_FOR_ASSETS
    WAITING_FOR_ASSETS --assets ready--> RUNNING
    any state --stop()--> STOPPED

While RUNNING every tick reads the clock, runs the update phase, then
the render phase, and finally asks the scheduler for the next frame.
Ticks never overlap: the next one is only requested after the current
render has finished, and a stopped loop requests nothing.
"""

from __future__ import annotations

import logging
import time
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Iterable

from gemrun.core.clock import FrameClock
from gemrun.core.errors import LoopStateError, SchedulerUnavailableError
from gemrun.core.events import LoopEvent

if TYPE_CHECKING:
    from gemrun.core.events import EventBus
    from gemrun.core.phases import RenderPhase, UpdatePhase
    from gemrun.core.scheduler import FrameScheduler
    from gemrun.resources.provider import ResourceProvider

logger = logging.getLogger(__name__)


def wall_clock_ms() -> float:
    """Monotonic wall-clock time in milliseconds."""
    return time.perf_counter() * 1000.0


class LoopState(Enum):
    UNINITIALIZED = auto()
    WAITING_FOR_ASSETS = auto()
    RUNNING = auto()
    STOPPED = auto()


class GameLoop:
    """
    Asset-gated, self-rescheduling update/render loop.

    Usage:
        loop = GameLoop(manifest, resources, scheduler, update_phase, render_phase)
        loop.initialize()
        scheduler.run()
    """

    def __init__(
        self,
        manifest: Iterable[str],
        resources: ResourceProvider,
        scheduler: FrameScheduler | None,
        update_phase: UpdatePhase,
        render_phase: RenderPhase,
        clock: FrameClock | None = None,
        time_source: Callable[[], float] = wall_clock_ms,
        event_bus: EventBus | None = None,
    ):
        self.manifest = manifest
        self.resources = resources
        self.scheduler = scheduler
        self.update_phase = update_phase
        self.render_phase = render_phase
        self.clock = clock or FrameClock()
        self.time_source = time_source
        self.event_bus = event_bus

        self._state = LoopState.UNINITIALIZED
        self._setup_hooks: list[Callable[[], None]] = []
        self.frame_count = 0

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is LoopState.RUNNING

    def add_setup_hook(self, hook: Callable[[], None]) -> None:
        """Register one-time setup that needs loaded assets; runs before the first tick."""
        self._setup_hooks.append(hook)

    def initialize(self) -> None:
        """
        Request every manifest asset and wait for them.

        Raises:
            LoopStateError: If the loop was already initialized
            SchedulerUnavailableError: If no frame scheduler was supplied
        """
        if self._state is not LoopState.UNINITIALIZED:
            raise LoopStateError(f"Cannot initialize loop in state {self._state.name}")
        if self.scheduler is None:
            raise SchedulerUnavailableError("GameLoop needs a frame scheduler")

        self._state = LoopState.WAITING_FOR_ASSETS
        logger.info("Waiting for assets.")
        self.resources.load(self.manifest)
        self.resources.on_ready(self._on_assets_ready)

    def reset(self) -> None:
        """Extension point for game reset states. Called once when assets are ready."""
        pass

    def tick(self) -> None:
        """Run one frame and schedule the next."""
        if self._state is not LoopState.RUNNING:
            return

        now = self.time_source()
        dt = self.clock.tick(now)
        if dt < 0:
            logger.warning(f"Clock went backwards by {-dt:.4f}s")

        self.update_phase.run(dt)
        self.render_phase.run()
        self.frame_count += 1

        if self._state is LoopState.RUNNING:
            self.scheduler.request_frame(self.tick)

    def stop(self) -> None:
        """Stop the loop. Any already requested frame becomes a no-op."""
        if self._state is LoopState.STOPPED:
            return
        previous = self._state
        self._state = LoopState.STOPPED
        logger.info(f"Loop stopped after {self.frame_count} frames.")
        if self.event_bus:
            self.event_bus.publish(LoopEvent.STOPPED, frames=self.frame_count, previous=previous)

    def _on_assets_ready(self) -> None:
        if self._state is not LoopState.WAITING_FOR_ASSETS:
            logger.debug(f"Assets ready ignored in state {self._state.name}")
            return

        self._state = LoopState.RUNNING
        self.reset()
        for hook in self._setup_hooks:
            hook()
        self.clock.start(self.time_source())

        logger.info("Assets ready, loop started.")
        if self.event_bus:
            self.event_bus.publish(LoopEvent.STARTED)

        self.tick()
