"""
Play the arena shooter in an Arcade window.

Usage:
    python -m game.arena.play --seed 7
"""

import argparse
import logging

import arcade

from .config import GameConfig
from .frame_driver import Game
from .window import ArenaWindow


def main():
    parser = argparse.ArgumentParser(description="Play the arena shooter")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for spawns and particles")
    parser.add_argument("--width", type=int, default=None, help="Field width")
    parser.add_argument("--height", type=int, default=None, help="Field height")
    parser.add_argument("--verbose", action="store_true", help="Log round events")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    overrides = {k: v for k, v in (("width", args.width), ("height", args.height)) if v is not None}
    game = Game(GameConfig.from_dict(overrides), seed=args.seed)
    ArenaWindow(game)
    arcade.run()


if __name__ == "__main__":
    main()
