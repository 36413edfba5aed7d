"""
Render surface.

Wraps the single pygame.Surface the engine draws into each frame and
resolves asset identifiers through the resource provider, so entity
code can say ``surface.draw_image("images/Rock1.png", x, y)``.

The surface is created once by Game and passed explicitly to every
render call; there is no global drawing context.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from gemrun.resources.provider import ResourceProvider

Color = tuple[int, int, int]


class RenderSurface:
    """
    Fixed-size drawing target.

    Text drawing mimics a centred, outlined canvas label: the text is
    horizontally centred on ``x`` and sits on the baseline ``y``.
    """

    def __init__(
        self,
        surface: pygame.Surface,
        resources: ResourceProvider,
        background: Color = (255, 255, 255),
    ):
        self._surface = surface
        self.resources = resources
        self.background = background
        self._fonts: dict[tuple[str, int, bool], pygame.font.Font] = {}

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    @property
    def width(self) -> int:
        return self._surface.get_width()

    @property
    def height(self) -> int:
        return self._surface.get_height()

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def clear(self) -> None:
        """Fill the whole surface with the background colour."""
        self._surface.fill(self.background)

    def draw_image(self, identifier: str, x: float, y: float) -> None:
        """
        Blit a loaded asset with its top-left corner at (x, y).

        Raises:
            AssetNotLoadedError: If the identifier was never loaded
        """
        image = self.resources.get(identifier)
        self._surface.blit(image, (round(x), round(y)))

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        size: int = 20,
        color: Color = (0x55, 0x6B, 0x2F),
        outline: Color | None = (0xCC, 0xCC, 0xCC),
        font_name: str = "verdana",
        bold: bool = True,
    ) -> None:
        """Draw ``text`` centred on x with its baseline at y."""
        font = self._font(font_name, size, bold)
        label = font.render(text, True, color)
        rect = label.get_rect()
        rect.midbottom = (round(x), round(y))

        if outline is not None:
            edge = font.render(text, True, outline)
            for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
                self._surface.blit(edge, rect.move(dx, dy))

        self._surface.blit(label, rect)

    def _font(self, name: str, size: int, bold: bool) -> pygame.font.Font:
        key = (name, size, bold)
        if key not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[key] = pygame.font.SysFont(name, size, bold=bold)
        return self._fonts[key]
