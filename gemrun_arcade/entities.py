"""
Arcade entities.

Bugs crawl along the grass lanes and wrap around the board edges; gems,
hearts and rocks sit still; the player hops one tile per step. Every
entity draws itself through ``surface.draw_image``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gemrun_arcade import assets
from gemrun_arcade.level import BOARD_WIDTH, COLUMNS, ROWS, START_ROW, TILE_WIDTH, tile_origin

if TYPE_CHECKING:
    from gemrun.graphics.surface import RenderSurface

# Offset that centres a sprite inside its tile
SPRITE_OFFSET = (15, 12)


class Sprite:
    """Something drawn at a pixel position with one image."""

    sprite = ""

    def __init__(self, x: float, y: float, sprite: str | None = None):
        self.x = x
        self.y = y
        if sprite is not None:
            self.sprite = sprite

    @classmethod
    def on_tile(cls, col: int, row: int, **kwargs) -> Sprite:
        x, y = tile_origin(col, row)
        return cls(x + SPRITE_OFFSET[0], y + SPRITE_OFFSET[1], **kwargs)

    def render(self, surface: RenderSurface) -> None:
        surface.draw_image(self.sprite, self.x, self.y)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x={self.x:.0f}, y={self.y:.0f})"


class Enemy(Sprite):
    """
    A bug crawling along a lane.

    Positive speed moves right, negative speed moves left (and uses the
    mirrored sprite). Leaving the board on one side re-enters it on the
    other. A non-positive dt means no time has passed.
    """

    def __init__(self, x: float, y: float, speed: float, board_width: int = BOARD_WIDTH):
        super().__init__(x, y, assets.ENEMY if speed >= 0 else assets.ENEMY_REVERSED)
        self.speed = speed
        self.board_width = board_width

    def update(self, dt: float) -> None:
        if dt <= 0:
            return
        self.x += self.speed * dt
        if self.speed >= 0 and self.x > self.board_width:
            self.x = -TILE_WIDTH
        elif self.speed < 0 and self.x < -TILE_WIDTH:
            self.x = self.board_width


class Gem(Sprite):
    sprite = assets.GEM


class Heart(Sprite):
    sprite = assets.HEART


class Rock(Sprite):
    sprite = assets.ROCK


class Selector(Sprite):
    sprite = assets.SELECTOR


class Player:
    """
    The controlled character.

    Moves are queued with move() and applied one tile at a time by
    update(), which also keeps the player on the board.
    """

    def __init__(self, sprite: str = assets.CHARACTERS[0], col: int = COLUMNS // 2, row: int = START_ROW):
        self.sprite = sprite
        self.col = col
        self.row = row
        self._moves: list[tuple[int, int]] = []

    @property
    def position(self) -> tuple[float, float]:
        x, y = tile_origin(self.col, self.row)
        return (x + SPRITE_OFFSET[0], y + SPRITE_OFFSET[1])

    def move(self, dcol: int, drow: int) -> None:
        self._moves.append((dcol, drow))

    def update(self) -> None:
        if self._moves:
            dcol, drow = self._moves.pop(0)
            self.col += dcol
            self.row += drow
        self.col = min(max(self.col, 0), COLUMNS - 1)
        self.row = min(max(self.row, 0), ROWS - 1)

    def render(self, surface: RenderSurface) -> None:
        x, y = self.position
        surface.draw_image(self.sprite, x, y)

    def __repr__(self) -> str:
        return f"Player(col={self.col}, row={self.row})"
