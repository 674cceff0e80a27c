"""Simple ASCII demo for the engine.

Run with: `python -m blockfall`

Starts a seeded session, lets gravity run for a number of ticks on a manual
clock and prints the board with the active piece overlaid.  Pass ``--pygame``
to open the playable window instead.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from .config import EngineConfig
from .engine import Engine
from .scheduler import ManualTimer


def format_grid(grid: List[List[int]]) -> str:
    return "\n".join("".join("#" if cell else "." for cell in row) for row in grid)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = EngineConfig.from_env()
    parser = argparse.ArgumentParser(prog="blockfall", description=__doc__)
    parser.add_argument("--seed", type=int, default=defaults.seed, help="Seed for piece selection.")
    parser.add_argument(
        "--gravity-ms",
        type=int,
        default=defaults.gravity_ms,
        help="Milliseconds between gravity ticks.",
    )
    parser.add_argument("--ticks", type=int, default=10, help="Gravity ticks to simulate in ASCII mode.")
    parser.add_argument("--pygame", action="store_true", help="Open the pygame window.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def run_ascii(config: EngineConfig, ticks: int) -> Engine:
    timer = ManualTimer()
    engine = Engine(config, timer=timer)
    engine.start()
    timer.advance(ticks * config.gravity_ms)
    return engine


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    config = replace(EngineConfig.from_env(), gravity_ms=args.gravity_ms, seed=args.seed)

    if args.pygame:
        from .run_pygame import main as run_window

        run_window(config)
        return

    snapshot = run_ascii(config, args.ticks).snapshot()
    print(format_grid(snapshot.active_piece_overlay))
    print(f"Score: {snapshot.score}  Status: {snapshot.status.value}")


if __name__ == "__main__":
    main()
