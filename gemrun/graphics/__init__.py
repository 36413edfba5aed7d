"""Drawing: the render surface and the background tile grid."""

from gemrun.graphics.surface import RenderSurface
from gemrun.graphics.tilegrid import Tile, TileGrid

__all__ = [
    "RenderSurface",
    "Tile",
    "TileGrid",
]
