"""
Gem Run arcade content.

The playfield, entities, start screen and asset manifest of the demo
game, built on the gemrun engine.
"""

from gemrun_arcade.entities import Enemy, Gem, Heart, Player, Rock, Selector
from gemrun_arcade.level import build_tile_grid
from gemrun_arcade.start_screen import StartScreen
from gemrun_arcade.world import build_registry

__all__ = [
    "Enemy",
    "Gem",
    "Heart",
    "Rock",
    "Selector",
    "Player",
    "StartScreen",
    "build_registry",
    "build_tile_grid",
]
