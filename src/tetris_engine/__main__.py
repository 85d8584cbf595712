"""Simple ASCII demo for the Tetris engine.

Run with: `python -m tetris_engine`

Plays a seeded game with a random input policy for a fixed number of ticks
and prints the final frame (board plus active piece), useful as a smoke test
that the engine spawns, drops, locks and clears without a front-end.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from .config import GameConfig
from .game_state import GameState
from .utils import render_grid, tick_interval_ms


LOGGER = logging.getLogger(__name__)


def _print_grid(grid: list[list[int]]) -> None:
    for row in grid:
        print("".join("#" if cell else "." for cell in row))


def simulate(state: GameState, ticks: int, policy: random.Random) -> int:
    """Run up to ``ticks`` gravity steps, nudging the piece randomly between them."""

    actions = (state.move_left, state.move_right, state.rotate, lambda: None)
    played = 0
    for _ in range(ticks):
        if state.is_game_over():
            break
        policy.choice(actions)()
        state.tick()
        played += 1
    return played


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=0, help="Seed for pieces and input policy.")
    parser.add_argument("--ticks", type=int, default=200, help="Maximum number of ticks to play.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    gs = GameState(GameConfig(seed=args.seed))
    played = simulate(gs, args.ticks, random.Random(args.seed))
    LOGGER.info("Played %d tick(s)", played)

    _print_grid(render_grid(gs.board, gs.active))
    print(
        f"score={gs.score} lines={gs.lines_cleared} "
        f"game_over={gs.is_game_over()} interval_ms={tick_interval_ms(gs.lines_cleared, gs.config.base_interval_ms)}"
    )


if __name__ == "__main__":
    main()
