"""
Resource provider.

Loads every asset of a manifest on a thread pool and signals readiness
exactly once, through a single ready callback, when the whole batch is
available. Lookups after that are synchronous dictionary reads.

Callbacks are handed to ``dispatch`` instead of being called on the
worker thread that finished last. Game passes the frame scheduler's
thread-safe ``call_soon`` so the loop starts on the main thread. When
``dispatch`` is a scheduler's ``call_soon``, the provider also holds
that scheduler while a batch is in flight, so a headless scheduler
keeps waiting for slow loads.

Usage:
    provider = ResourceProvider(ImageLoader("assets"), dispatch=scheduler.call_soon)
    provider.load(["images/stone-block.png", "images/enemy-bug.png"])
    provider.on_ready(start_game)
    ...
    image = provider.get("images/enemy-bug.png")
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Iterable

from gemrun.core.errors import AssetLoadError, AssetNotLoadedError
from gemrun.core.events import EventBus, LoopEvent
from gemrun.core.scheduler import FrameScheduler
from gemrun.resources.manifest import AssetManifest

logger = logging.getLogger(__name__)

AssetLoader = Callable[[str], Any]
ReadyCallback = Callable[[], None]
ErrorCallback = Callable[[AssetLoadError], None]


def _call_now(callback: Callable[[], None]) -> None:
    callback()


class ResourceProvider:
    """
    Asynchronous asset cache with a one-shot completion signal.

    Features:
    - Concurrent loading through any concurrent.futures Executor
    - Ready callbacks fire once per load() batch, whatever the completion order
    - Callbacks registered after readiness still fire (once)
    - Ready callbacks of a batch that failed are dropped, not carried over
    - Load failures are collected and reported together as AssetLoadError
    - Fail-fast lookups (AssetNotLoadedError names the missing identifier)
    """

    def __init__(
        self,
        loader: AssetLoader,
        executor: Executor | None = None,
        dispatch: Callable[[Callable[[], None]], None] | None = None,
        max_workers: int = 4,
        event_bus: EventBus | None = None,
    ):
        self._loader = loader
        self._executor = executor
        self._owns_executor = executor is None
        self._max_workers = max_workers
        self._dispatch = dispatch or _call_now
        owner = getattr(dispatch, "__self__", None)
        self._scheduler = owner if isinstance(owner, FrameScheduler) else None
        self._holding = False
        self.event_bus = event_bus

        self._lock = threading.Lock()
        self._assets: dict[str, Any] = {}
        self._batch = 0
        self._pending: set[str] = set()
        self._failures: dict[str, BaseException] = {}
        self._ready = False
        self._error: AssetLoadError | None = None
        self._ready_callbacks: list[ReadyCallback] = []
        self._error_callbacks: list[ErrorCallback] = []

    @property
    def is_ready(self) -> bool:
        """True once every asset of the latest load() batch is available."""
        return self._ready

    @property
    def error(self) -> AssetLoadError | None:
        return self._error

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._assets

    def __len__(self) -> int:
        return len(self._assets)

    # --- Loading ---

    def load(self, identifiers: Iterable[str]) -> None:
        """
        Start loading a batch of assets.

        Identifiers already cached are not fetched again. An empty batch
        is ready immediately.
        """
        manifest = identifiers if isinstance(identifiers, AssetManifest) else AssetManifest(identifiers)

        with self._lock:
            self._batch += 1
            batch = self._batch
            self._ready = False
            self._error = None
            self._failures = {}
            to_fetch = [name for name in manifest if name not in self._assets]
            self._pending = set(to_fetch)
            self._hold()

        logger.info(f"Loading {len(to_fetch)} of {len(manifest)} assets.")
        if self.event_bus:
            self.event_bus.publish(LoopEvent.ASSETS_REQUESTED, count=len(manifest))

        if not to_fetch:
            self._settle(batch)
            return

        executor = self._get_executor()
        for identifier in to_fetch:
            future = executor.submit(self._loader, identifier)
            future.add_done_callback(partial(self._on_loaded, batch, identifier))

    def on_ready(self, callback: ReadyCallback) -> None:
        """Register a callback fired once when the current batch is ready."""
        with self._lock:
            fire_now = self._ready
            if self._error is not None:
                logger.debug("Batch failed, ready callback dropped")
                return
            if not fire_now:
                self._ready_callbacks.append(callback)
        if fire_now:
            self._dispatch(callback)

    def on_error(self, callback: ErrorCallback) -> None:
        """Register a callback fired once if the current batch fails."""
        with self._lock:
            error = self._error
            if error is None:
                self._error_callbacks.append(callback)
        if error is not None:
            self._dispatch(partial(callback, error))

    # --- Lookup ---

    def get(self, identifier: str) -> Any:
        """
        Get a loaded asset.

        Raises:
            AssetNotLoadedError: If the identifier was never loaded
        """
        try:
            return self._assets[identifier]
        except KeyError:
            raise AssetNotLoadedError(identifier) from None

    def shutdown(self) -> None:
        """Stop the internal worker pool, dropping queued loads."""
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        with self._lock:
            self._release()

    # --- Internals ---

    def _get_executor(self) -> Executor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="asset-loader",
            )
        return self._executor

    def _on_loaded(self, batch: int, identifier: str, future: Future) -> None:
        """Done-callback of one load future; runs on a worker thread."""
        try:
            asset = future.result()
            failure = None
        except Exception as e:
            failure = e

        with self._lock:
            if failure is None:
                self._assets[identifier] = asset
            if batch != self._batch:
                return
            if failure is not None:
                self._failures[identifier] = failure
            self._pending.discard(identifier)
            finished = not self._pending

        if failure is None:
            logger.debug(f"Loaded asset {identifier}")
        else:
            logger.error(f"Failed to load asset {identifier}: {failure}")

        if finished:
            self._settle(batch)

    def _settle(self, batch: int) -> None:
        """Resolve a finished batch as ready or failed."""
        with self._lock:
            if batch != self._batch:
                return
            failed = bool(self._failures)
            if failed:
                self._error = AssetLoadError(self._failures)
            else:
                self._ready = True

        if failed:
            self._dispatch(partial(self._deliver_error, batch))
        else:
            self._dispatch(partial(self._deliver_ready, batch))

    def _hold(self) -> None:
        """Keep the scheduler waiting for a delivery. Call with the lock held."""
        if self._scheduler is not None and not self._holding:
            self._holding = True
            self._scheduler.hold()

    def _release(self) -> None:
        if self._holding:
            self._holding = False
            self._scheduler.release()

    def _deliver_ready(self, batch: int) -> None:
        with self._lock:
            if batch != self._batch or not self._ready:
                return
            callbacks, self._ready_callbacks = self._ready_callbacks, []
            self._release()

        logger.info(f"All {len(self._assets)} assets ready.")
        if self.event_bus:
            self.event_bus.publish(LoopEvent.ASSETS_READY, count=len(self._assets))

        for callback in callbacks:
            callback()

    def _deliver_error(self, batch: int) -> None:
        with self._lock:
            if batch != self._batch or self._error is None:
                return
            callbacks, self._error_callbacks = self._error_callbacks, []
            self._ready_callbacks = []
            error = self._error
            self._release()

        logger.error(str(error))
        if self.event_bus:
            self.event_bus.publish(LoopEvent.ASSETS_FAILED, error=error)

        for callback in callbacks:
            callback(error)
