"""
Asset loaders for the resource provider.

A loader is any callable taking an identifier and returning a drawable
pygame.Surface. Loaders run on the provider's worker threads and must
raise on failure rather than return a stand-in.
"""

from __future__ import annotations

import logging
import zlib
from pathlib import Path

import pygame

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]


class ImageLoader:
    """Loads image files relative to an asset root directory."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def resolve(self, identifier: str) -> Path:
        return self.root / identifier

    def __call__(self, identifier: str) -> pygame.Surface:
        path = self.resolve(identifier)
        if not path.is_file():
            raise FileNotFoundError(f"Image file not found: {path}")
        return pygame.image.load(str(path))


class PlaceholderLoader:
    """
    Generates flat-colour surfaces instead of reading files.

    Used when a game ships no art: every identifier becomes a filled
    rectangle whose colour is either configured or derived from the
    identifier, so the same name always looks the same.
    """

    def __init__(
        self,
        colors: dict[str, Color] | None = None,
        sizes: dict[str, tuple[int, int]] | None = None,
        default_size: tuple[int, int] = (101, 83),
    ):
        self.colors = dict(colors or {})
        self.sizes = dict(sizes or {})
        self.default_size = default_size

    def color_for(self, identifier: str) -> Color:
        if identifier in self.colors:
            return self.colors[identifier]
        digest = zlib.crc32(identifier.encode("utf-8"))
        return ((digest >> 16) & 0xFF, (digest >> 8) & 0xFF, digest & 0xFF)

    def size_for(self, identifier: str) -> tuple[int, int]:
        return self.sizes.get(identifier, self.default_size)

    def __call__(self, identifier: str) -> pygame.Surface:
        surface = pygame.Surface(self.size_for(identifier))
        surface.fill(self.color_for(identifier))
        logger.debug(f"Generated placeholder for {identifier}")
        return surface
