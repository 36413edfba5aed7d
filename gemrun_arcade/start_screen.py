"""
Start screen.

Drawn instead of the playfield while the mode gate is inactive: the
game description, the movement arrows, the difficulty buttons and the
row of selectable characters with the selector under the chosen one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from gemrun_arcade import assets
from gemrun_arcade.entities import Selector
from gemrun_arcade.level import BOARD_WIDTH, STONE, TILE_WIDTH

if TYPE_CHECKING:
    from gemrun.graphics.surface import RenderSurface

DESCRIPTION = [
    (78, "Collect all Gems and reach the Water to win!"),
    (110, "Avoid the Bugs! Collect Hearts to gain lives"),
    (145, "...Good Luck!"),
]
CONTROLS_TITLE = (204, "Move your Player")
DIFFICULTY_TITLE = (417, "Choose your Difficulty")
CHARACTER_TITLE = (490, "Choose your Player")

ARROW_POSITIONS = {
    "up": (364, 220),
    "left": (292, 295),
    "down": (369, 295),
    "right": (440, 295),
}
BUTTONS_Y = 430
CHARACTERS_X = 152
CHARACTERS_Y = 504
BLOCKS_Y = 540
BACKGROUND_Y = 680


class StartScreen:
    """Static start presentation with a character selection row."""

    def __init__(self, characters: Sequence[str] = assets.CHARACTERS, selected: int = 0):
        if not characters:
            raise ValueError("StartScreen needs at least one character")
        self.characters = list(characters)
        self.selected = selected

    @property
    def selected(self) -> int:
        return self._selected

    @selected.setter
    def selected(self, index: int) -> None:
        self._selected = index % len(self.characters)

    @property
    def selected_character(self) -> str:
        return self.characters[self._selected]

    def render(self, surface: RenderSurface) -> None:
        center = BOARD_WIDTH / 2
        surface.draw_image(assets.BACKGROUND, 0, BACKGROUND_Y)

        for y, line in DESCRIPTION:
            surface.draw_text(line, center, y)

        surface.draw_text(CONTROLS_TITLE[1], center, CONTROLS_TITLE[0])
        for name, (x, y) in ARROW_POSITIONS.items():
            surface.draw_image(assets.ARROWS[name], x, y)

        surface.draw_text(DIFFICULTY_TITLE[1], center, DIFFICULTY_TITLE[0])
        self._render_buttons(surface)

        surface.draw_text(CHARACTER_TITLE[1], center, CHARACTER_TITLE[0])
        self._render_characters(surface)

    def _render_buttons(self, surface: RenderSurface) -> None:
        spacing = BOARD_WIDTH / (len(assets.DIFFICULTY_BUTTONS) + 1)
        for i, button in enumerate(assets.DIFFICULTY_BUTTONS, start=1):
            surface.draw_image(button, spacing * i - 60, BUTTONS_Y)

    def _render_characters(self, surface: RenderSurface) -> None:
        for col in range(len(self.characters)):
            surface.draw_image(STONE, col * TILE_WIDTH + CHARACTERS_X, BLOCKS_Y)

        Selector(self._selected * TILE_WIDTH + CHARACTERS_X, CHARACTERS_Y).render(surface)

        for i, character in enumerate(self.characters):
            surface.draw_image(character, i * TILE_WIDTH + CHARACTERS_X, CHARACTERS_Y)
