import os
import sys
from concurrent.futures import Executor, Future
from unittest.mock import MagicMock, patch

import pytest

# Ensure engine modules can be imported
sys.path.append(os.getcwd())
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture
def mock_pygame():
    """
    Mock for pygame's window and event functions to allow headless testing.
    Surfaces stay real so drawing can be checked pixel by pixel.
    """
    with patch('pygame.init'), \
         patch('pygame.quit'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'):

        import pygame
        pygame.event.get.return_value = []

        yield pygame


class DeferredExecutor(Executor):
    """Executor that only runs submitted jobs when told to, in any order."""

    def __init__(self):
        self.jobs = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.jobs.append((future, fn, args, kwargs))
        return future

    def run(self, order=None):
        jobs = self.jobs if order is None else [self.jobs[i] for i in order]
        self.jobs = [job for job in self.jobs if job not in jobs]
        for future, fn, args, kwargs in jobs:
            try:
                future.set_result(fn(*args, **kwargs))
            except Exception as e:
                future.set_exception(e)

    def shutdown(self, wait=True, *, cancel_futures=False):
        pass


class RecordingSurface:
    """Stand-in for RenderSurface that records what was drawn."""

    def __init__(self, width=808, height=808):
        self.width = width
        self.height = height
        self.calls = []

    def clear(self):
        self.calls.append(("clear",))

    def draw_image(self, identifier, x, y):
        self.calls.append(("image", identifier, x, y))

    def draw_text(self, text, x, y, **kwargs):
        self.calls.append(("text", text, x, y))

    @property
    def images(self):
        return [call[1] for call in self.calls if call[0] == "image"]

    @property
    def texts(self):
        return [call[1] for call in self.calls if call[0] == "text"]


class Tracer:
    """Shared call log for ordering assertions."""

    def __init__(self):
        self.calls = []

    def timed(self, name):
        tracer = self

        class _Timed:
            def __init__(self):
                self.dts = []

            def update(self, dt):
                self.dts.append(dt)
                tracer.calls.append(("update", name))

            def render(self, surface):
                tracer.calls.append(("render", name))

            def __repr__(self):
                return name

        return _Timed()

    def static(self, name):
        tracer = self

        class _Static:
            def render(self, surface):
                tracer.calls.append(("render", name))

            def __repr__(self):
                return name

        return _Static()

    def stepped(self, name):
        tracer = self

        class _Stepped:
            def __init__(self):
                self.steps = 0

            def update(self):
                self.steps += 1
                tracer.calls.append(("update", name))

            def render(self, surface):
                tracer.calls.append(("render", name))

            def __repr__(self):
                return name

        return _Stepped()

    def of(self, kind):
        return [name for k, name in self.calls if k == kind]


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from gemrun.core.events import EventBus
    return EventBus()


@pytest.fixture
def executor():
    return DeferredExecutor()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def tracer():
    return Tracer()


@pytest.fixture
def gate():
    from gemrun.core.mode import ModeGate
    return ModeGate(gameplay_active=True)


@pytest.fixture
def scheduler():
    from gemrun.core.scheduler import ManualFrameScheduler
    return ManualFrameScheduler(idle_timeout=0.01)


@pytest.fixture
def fake_loader():
    """Loader returning a sentinel per identifier; fails for names containing 'missing'."""
    def load(identifier):
        if "missing" in identifier:
            raise FileNotFoundError(identifier)
        return MagicMock(name=identifier)
    return load
