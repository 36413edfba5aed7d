"""
Engine error hierarchy.

Anything derived from EngineError signals a broken invariant of the
engine itself (missing assets, misuse of the loop lifecycle, no host
scheduler). These are never swallowed by the per-entity isolation in
the update and render phases.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for all engine errors."""


class AssetNotLoadedError(EngineError, KeyError):
    """An asset identifier was requested that was never loaded."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(identifier)

    def __str__(self) -> str:
        return f"Asset not loaded: {self.identifier!r}"


class AssetLoadError(EngineError):
    """One or more assets of a manifest failed to load."""

    def __init__(self, failures: dict[str, BaseException]):
        self.failures = dict(failures)
        names = ", ".join(repr(name) for name in self.failures)
        super().__init__(f"Failed to load {len(self.failures)} asset(s): {names}")

    @property
    def identifiers(self) -> list[str]:
        return list(self.failures)


class ManifestError(EngineError):
    """An asset manifest file is missing or malformed."""


class SchedulerUnavailableError(EngineError):
    """The loop was started without a host frame scheduler."""


class LoopStateError(EngineError):
    """An operation was called in the wrong loop lifecycle state."""
