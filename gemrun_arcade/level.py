"""
Playfield layout.

An 808x808 board of 8 x 8 tiles, each 101 wide on an 83 pixel row
pitch: water on top, six rows of grass, stone at the bottom.
"""

from __future__ import annotations

from gemrun.graphics.tilegrid import TileGrid

BOARD_WIDTH = 808
BOARD_HEIGHT = 808
TILE_WIDTH = 101
TILE_HEIGHT = 83
COLUMNS = 8

WATER = "images/water-block.png"
GRASS = "images/grass-block.png"
STONE = "images/stone-block.png"

ROW_IMAGES = [
    WATER,  # Top row is water
    GRASS,
    GRASS,
    GRASS,
    GRASS,
    GRASS,
    GRASS,
    STONE,  # Bottom row is stone
]

ROWS = len(ROW_IMAGES)
WATER_ROW = 0
START_ROW = ROWS - 1
LANES = range(1, ROWS - 1)


def build_tile_grid() -> TileGrid:
    return TileGrid(ROW_IMAGES, COLUMNS, TILE_WIDTH, TILE_HEIGHT)


def tile_origin(col: int, row: int) -> tuple[int, int]:
    """Top-left pixel of a tile."""
    return (col * TILE_WIDTH, row * TILE_HEIGHT)
