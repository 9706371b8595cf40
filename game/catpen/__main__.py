"""
Play the cat pen game in an Arcade window.

Usage:
    python -m game.catpen                # arrows/WASD to move, space to bark
    python -m game.catpen --random       # watch a random-policy episode
"""

import argparse

from .catpen_env import run_random_episode
from .level import DEFAULT_NUM_CATS, GAME_SIZE, Level
from .random_source import default_source
from .world import CatPenWorld


def main():
    parser = argparse.ArgumentParser(description="Herd the cats into the pen")
    parser.add_argument(
        "--cats",
        type=int,
        default=DEFAULT_NUM_CATS,
        help=f"Number of cats (default: {DEFAULT_NUM_CATS})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the level layout and cat behaviour (default: free running)",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=2,
        help="Window pixels per arena unit (default: 2)",
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Disable sound",
    )
    parser.add_argument(
        "--random",
        action="store_true",
        help="Run a random-policy episode of the RL environment instead",
    )

    args = parser.parse_args()

    if args.random:
        run_random_episode(render=True, seed=args.seed)
        return

    # arcade opens a display on import
    from .render import play

    rng = default_source(args.seed)
    level = Level.random(num_cats=args.cats, width=GAME_SIZE[0], height=GAME_SIZE[1], rng=rng)
    play(CatPenWorld(level, rng=rng), scale=args.scale, muted=args.mute)


if __name__ == "__main__":
    main()
