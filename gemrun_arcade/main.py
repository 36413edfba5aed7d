"""
Gem Run: arcade demo.

Run: python -m gemrun_arcade [--play] [--headless --frames 120]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from gemrun.core import EngineError, Game, GameConfig, ModeGate
from gemrun.resources import load_manifest
from gemrun_arcade.assets import create_loader, default_manifest
from gemrun_arcade.level import BOARD_HEIGHT, BOARD_WIDTH, build_tile_grid
from gemrun_arcade.start_screen import StartScreen
from gemrun_arcade.world import SPEEDS, build_registry

logger = logging.getLogger("gemrun_arcade")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gemrun", description="Gem Run arcade demo")
    parser.add_argument("--play", action="store_true", help="skip the start screen")
    parser.add_argument("--headless", action="store_true", help="render off-screen, no window")
    parser.add_argument("--frames", type=int, default=None, help="stop after N frames (headless)")
    parser.add_argument("--assets", type=Path, default=None, help="directory holding the images/ folder")
    parser.add_argument("--manifest", type=Path, default=None, help="JSON asset manifest to load instead of the built-in one")
    parser.add_argument("--difficulty", choices=list(SPEEDS), default="easy")
    parser.add_argument("--character", type=int, default=0, help="index of the player character")
    parser.add_argument("--seed", type=int, default=None, help="seed for entity placement")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def create_game(args: argparse.Namespace) -> Game:
    config = GameConfig(
        title="Gem Run",
        width=BOARD_WIDTH,
        height=BOARD_HEIGHT,
        asset_root=args.assets,
        headless=args.headless,
        max_frames=args.frames,
    )
    manifest = load_manifest(args.manifest) if args.manifest else default_manifest()

    start_screen = StartScreen(selected=args.character)
    registry = build_registry(
        character=start_screen.selected_character,
        difficulty=args.difficulty,
        seed=args.seed,
    )

    return Game(
        config,
        manifest,
        registry,
        ModeGate(gameplay_active=args.play),
        create_loader(config.asset_root),
        tile_grid=build_tile_grid(),
        start_screen=start_screen,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        game = create_game(args)
        game.run()
    except EngineError as e:
        logger.error(f"Gem Run stopped: {e}")
        return 1

    logger.info(f"Gem Run finished after {game.loop.frame_count} frames.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
