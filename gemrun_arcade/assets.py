"""
Asset declarations for the arcade game.

The manifest lives in data/manifest.json. When no art directory is
given the game runs on placeholder surfaces sized and coloured here.
"""

from __future__ import annotations

from pathlib import Path

from gemrun.resources import AssetManifest, ImageLoader, PlaceholderLoader, load_manifest
from gemrun_arcade.level import GRASS, STONE, TILE_HEIGHT, TILE_WIDTH, WATER

DATA_DIR = Path(__file__).parent / "data"
MANIFEST_PATH = DATA_DIR / "manifest.json"

ENEMY = "images/enemy-bug.png"
ENEMY_REVERSED = "images/enemy-bug-r.png"
GEM = "images/Gem-Blue1.png"
HEART = "images/Heart1.png"
ROCK = "images/Rock1.png"
SELECTOR = "images/Selector.png"
BACKGROUND = "images/background-11.png"

CHARACTERS = [
    "images/char-boy.png",
    "images/char-cat-girl.png",
    "images/char-horn-girl.png",
    "images/char-pink-girl.png",
    "images/char-princess-girl.png",
]

ARROWS = {
    "up": "images/aUp.png",
    "left": "images/aLeft.png",
    "down": "images/aDown.png",
    "right": "images/aRight.png",
}

DIFFICULTY_BUTTONS = [
    "images/green_button02.png",
    "images/yellow_button02.png",
    "images/red_button01.png",
]

SPRITE_SIZE = (70, 60)

PLACEHOLDER_COLORS = {
    WATER: (64, 128, 224),
    GRASS: (96, 176, 72),
    STONE: (150, 150, 150),
    ENEMY: (200, 40, 40),
    ENEMY_REVERSED: (160, 30, 30),
    GEM: (40, 90, 230),
    HEART: (230, 60, 120),
    ROCK: (110, 100, 90),
    SELECTOR: (250, 220, 80),
    BACKGROUND: (200, 230, 200),
    DIFFICULTY_BUTTONS[0]: (60, 180, 60),
    DIFFICULTY_BUTTONS[1]: (230, 200, 40),
    DIFFICULTY_BUTTONS[2]: (210, 50, 40),
}

PLACEHOLDER_SIZES = {
    WATER: (TILE_WIDTH, TILE_HEIGHT),
    GRASS: (TILE_WIDTH, TILE_HEIGHT),
    STONE: (TILE_WIDTH, TILE_HEIGHT),
    SELECTOR: (TILE_WIDTH, TILE_HEIGHT),
    BACKGROUND: (808, 128),
    **{arrow: (48, 48) for arrow in ARROWS.values()},
    **{button: (120, 40) for button in DIFFICULTY_BUTTONS},
}


def default_manifest() -> AssetManifest:
    return load_manifest(MANIFEST_PATH)


def create_loader(asset_root: Path | str | None = None) -> ImageLoader | PlaceholderLoader:
    """Real images from ``asset_root``, or placeholders when it is None."""
    if asset_root is not None:
        return ImageLoader(asset_root)
    return PlaceholderLoader(
        colors=PLACEHOLDER_COLORS,
        sizes=PLACEHOLDER_SIZES,
        default_size=SPRITE_SIZE,
    )
