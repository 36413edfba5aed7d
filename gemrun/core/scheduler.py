"""
Host frame schedulers.

The game loop never loops by itself: each tick asks the host for the
next display frame with request_frame(), the way a browser loop calls
requestAnimationFrame. A scheduler also owns a thread-safe task queue
(call_soon) used to bring asset-loader callbacks back onto the main
thread.

- PygameFrameScheduler drives a real window: one pending frame callback
  is run per display refresh, paced by pygame.time.Clock.
- ManualFrameScheduler runs frames only when told to, for headless runs
  and tests.
"""

from __future__ import annotations

import logging
import queue
import threading
from abc import ABC, abstractmethod
from typing import Callable

import pygame

from gemrun.core.errors import LoopStateError

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler(ABC):
    """
    Base class for frame schedulers.

    At most one frame callback can be pending; the loop requests the
    next frame only after the current one has finished.
    """

    def __init__(self):
        self._frame_callback: FrameCallback | None = None
        self._tasks: queue.SimpleQueue[FrameCallback] = queue.SimpleQueue()
        self._running = False
        self._holds = 0
        self._holds_lock = threading.Lock()
        self.frames_run = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def frame_pending(self) -> bool:
        return self._frame_callback is not None

    def request_frame(self, callback: FrameCallback) -> None:
        """
        Run ``callback`` at the next display frame.

        Raises:
            LoopStateError: If a frame is already pending
        """
        if self._frame_callback is not None:
            raise LoopStateError("A frame is already pending")
        self._frame_callback = callback

    def call_soon(self, callback: FrameCallback) -> None:
        """Queue a task for the main thread. Safe to call from any thread."""
        self._tasks.put(callback)

    @property
    def busy(self) -> bool:
        """True while a task announced with hold() is still outstanding."""
        return self._holds > 0

    def hold(self) -> None:
        """Announce a task that will arrive later through call_soon."""
        with self._holds_lock:
            self._holds += 1

    def release(self) -> None:
        with self._holds_lock:
            if self._holds:
                self._holds -= 1

    def stop(self) -> None:
        self._running = False

    def run_pending(self) -> int:
        """Run every queued task. Returns how many ran."""
        count = 0
        while True:
            try:
                task = self._tasks.get_nowait()
            except queue.Empty:
                return count
            task()
            count += 1

    def _wait_for_task(self, timeout: float | None) -> bool:
        try:
            task = self._tasks.get(timeout=timeout)
        except queue.Empty:
            return False
        task()
        return True

    def _run_frame(self) -> bool:
        callback, self._frame_callback = self._frame_callback, None
        if callback is None:
            return False
        callback()
        self.frames_run += 1
        return True

    @abstractmethod
    def run(self) -> None:
        """Drive frames until stopped."""
        pass


class PygameFrameScheduler(FrameScheduler):
    """
    Display-synchronized scheduler for a pygame window.

    Each iteration drains the task queue, pumps window events, runs the
    pending frame, flips the display and waits for the next frame slot.
    With no frame pending (still loading assets) it sleeps on the task
    queue while keeping the window responsive.
    """

    idle_timeout = 0.05

    def __init__(self, target_fps: int = 60, on_quit: Callable[[], None] | None = None):
        super().__init__()
        self.target_fps = target_fps
        self.on_quit = on_quit
        self._clock = pygame.time.Clock()

    def run(self) -> None:
        self._running = True
        logger.info(f"Frame scheduler running at up to {self.target_fps} fps.")

        while self._running:
            self.run_pending()
            self._process_events()
            if not self._running:
                break

            if self._run_frame():
                pygame.display.flip()
                self._clock.tick(self.target_fps)
            else:
                self._wait_for_task(self.idle_timeout)

        logger.info(f"Frame scheduler stopped after {self.frames_run} frames.")

    def _process_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.info("Window close requested.")
                if self.on_quit:
                    self.on_quit()
                else:
                    self.stop()


class ManualFrameScheduler(FrameScheduler):
    """
    Scheduler that only advances when asked.

    Usage:
        scheduler = ManualFrameScheduler()
        loop = GameLoop(..., scheduler=scheduler)
        loop.initialize()
        scheduler.run_pending()   # delivers the assets-ready callback
        scheduler.step()          # one more frame
    """

    def __init__(self, max_frames: int | None = None, idle_timeout: float = 1.0):
        super().__init__()
        self.max_frames = max_frames
        self.idle_timeout = idle_timeout

    def step(self) -> bool:
        """Run queued tasks, then the pending frame. Returns False if none was pending."""
        self.run_pending()
        return self._run_frame()

    def run(self, max_frames: int | None = None) -> None:
        """
        Run frames back to back until stopped or out of frames.

        While no frame is pending it waits for a queued task (an asset-ready
        callback). It gives up after idle_timeout without one, unless a
        task is still announced with hold().

        Args:
            max_frames: Frame limit for this call (defaults to the constructor value)
        """
        limit = max_frames if max_frames is not None else self.max_frames
        self._running = True
        ran = 0
        while self._running and (limit is None or ran < limit):
            if self.step():
                ran += 1
            elif not self._wait_for_task(self.idle_timeout) and not self.busy:
                break
        self._running = False
