"""
Background tile grid.

The playfield is a fixed rows x columns grid of uniform tiles drawn
every gameplay frame before any entity. Each row is described either
by one asset identifier (the whole row uses that tile) or by a list
with one identifier per column.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Sequence

if TYPE_CHECKING:
    from gemrun.graphics.surface import RenderSurface


@dataclass(frozen=True)
class Tile:
    """A single placed tile."""
    row: int
    col: int
    identifier: str
    x: int
    y: int


@dataclass
class TileGrid:
    """
    Row-major tile layout.

    Tiles are placed at (col * tile_width, row * tile_height), so
    neighbouring tiles neither overlap nor leave gaps on the grid
    pitch. Tile images taller than the pitch (the classic 101x171
    blocks) simply overdraw the row below, which is why the draw
    order is row-major and fixed.
    """
    rows: Sequence[str | Sequence[str]]
    columns: int
    tile_width: int = 101
    tile_height: int = 83
    _layout: list[list[str]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.columns < 0:
            raise ValueError(f"columns must be >= 0, got {self.columns}")
        if self.tile_width <= 0 or self.tile_height <= 0:
            raise ValueError("tile size must be positive")

        self._layout = []
        for index, row in enumerate(self.rows):
            if isinstance(row, str):
                self._layout.append([row] * self.columns)
                continue
            cells = list(row)
            if len(cells) != self.columns:
                raise ValueError(
                    f"Row {index} has {len(cells)} tiles, expected {self.columns}"
                )
            self._layout.append(cells)

    @property
    def row_count(self) -> int:
        return len(self._layout)

    @property
    def pixel_size(self) -> tuple[int, int]:
        return (self.columns * self.tile_width, self.row_count * self.tile_height)

    @property
    def identifiers(self) -> list[str]:
        """Distinct tile identifiers in first-use order."""
        return list(dict.fromkeys(tile.identifier for tile in self))

    def __iter__(self) -> Iterator[Tile]:
        for row, cells in enumerate(self._layout):
            for col, identifier in enumerate(cells):
                yield Tile(
                    row=row,
                    col=col,
                    identifier=identifier,
                    x=col * self.tile_width,
                    y=row * self.tile_height,
                )

    def draw(self, surface: RenderSurface) -> None:
        for tile in self:
            surface.draw_image(tile.identifier, tile.x, tile.y)
