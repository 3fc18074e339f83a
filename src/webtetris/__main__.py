"""Command line entry point for the Tetris engine.

Run with: `python -m webtetris`

Without options this prints a single frame composed of the board plus the
active tetromino, useful as a minimal smoke test.  ``--play`` opens the pygame
window instead.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from . import GameState
from .view import TextView


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="webtetris", description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    parser.add_argument(
        "--drops",
        type=int,
        default=0,
        help="Let gravity act this many times before printing the frame.",
    )
    parser.add_argument("--play", action="store_true", help="Open the pygame front-end.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    rng = random.Random(args.seed)

    if args.play:
        from .run_pygame import GameRunner

        GameRunner(rng=rng).start()
        return

    gs = GameState(rng=rng)
    gs.start()
    for _ in range(args.drops):
        if gs.game_over:
            break
        gs.move_down()
    TextView().render(gs.snapshot(), gs.score, gs.level)


if __name__ == "__main__":
    main()
