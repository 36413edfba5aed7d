"""
Populating the board.

Groups are declared in drawing order: rocks, hearts, gems, then the
bugs, so bugs crawl over everything lying on the grass. The player is
the controlled entity and is drawn last.
"""

from __future__ import annotations

import random

from gemrun.core.entity import EntityRegistry
from gemrun_arcade.entities import SPRITE_OFFSET, Enemy, Gem, Heart, Player, Rock
from gemrun_arcade.level import BOARD_WIDTH, COLUMNS, LANES, TILE_HEIGHT

GROUP_ORDER = ["rocks", "hearts", "gems", "enemies"]

# Bug speed range in pixels per second, per difficulty
SPEEDS = {
    "easy": (60.0, 140.0),
    "medium": (100.0, 220.0),
    "hard": (160.0, 320.0),
}


def spawn_enemies(rng: random.Random, difficulty: str = "easy") -> list[Enemy]:
    """One bug per lane, alternating direction lane by lane."""
    low, high = SPEEDS[difficulty]
    enemies = []
    for i, row in enumerate(LANES):
        speed = rng.uniform(low, high)
        if i % 2:
            speed = -speed
        x = rng.uniform(0, BOARD_WIDTH)
        enemies.append(Enemy(x, row * TILE_HEIGHT + SPRITE_OFFSET[1], speed))
    return enemies


def _free_tiles(rng: random.Random, count: int, taken: set[tuple[int, int]]) -> list[tuple[int, int]]:
    free = [(c, r) for r in LANES for c in range(COLUMNS) if (c, r) not in taken]
    picked = rng.sample(free, min(count, len(free)))
    taken.update(picked)
    return picked


def build_registry(
    character: str | None = None,
    difficulty: str = "easy",
    seed: int | None = None,
    gems: int = 3,
    hearts: int = 1,
    rocks: int = 2,
) -> EntityRegistry:
    """Create a freshly populated board."""
    if difficulty not in SPEEDS:
        raise ValueError(f"Unknown difficulty {difficulty!r}, expected one of {list(SPEEDS)}")

    rng = random.Random(seed)
    taken: set[tuple[int, int]] = set()
    player = Player(character) if character else Player()

    registry = EntityRegistry(controlled=player)
    registry.add_group("rocks", [Rock.on_tile(c, r) for c, r in _free_tiles(rng, rocks, taken)])
    registry.add_group("hearts", [Heart.on_tile(c, r) for c, r in _free_tiles(rng, hearts, taken)])
    registry.add_group("gems", [Gem.on_tile(c, r) for c, r in _free_tiles(rng, gems, taken)])
    registry.add_group("enemies", spawn_enemies(rng, difficulty))
    return registry
