"""Command line entry point.

Run with: ``python -m tetris_autopilot --solver-url http://localhost:3000``

Pass ``--headless`` to play without a window, printing the final board as
ASCII.  Pass ``--help`` for the remaining options.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional, Sequence

from .autopilot import Autopilot
from .config import AutopilotConfig
from .solver import StackRabbitClient


LOGGER = logging.getLogger(__name__)


def format_grid(grid: Sequence[Sequence[int]]) -> str:
    return "\n".join("".join("#" if cell else "." for cell in row) for row in grid)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    defaults = AutopilotConfig()
    parser = argparse.ArgumentParser(description="Play Tetris from solver input sequences.")
    parser.add_argument("--solver-url", default=defaults.solver_url, help="Solver base URL")
    parser.add_argument("--solver-endpoint", default=defaults.solver_endpoint, help="Solver endpoint path")
    parser.add_argument("--solver-timeout", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--start-level", type=int, default=defaults.start_level)
    parser.add_argument("--reaction-time", type=int, default=defaults.reaction_time, help="Reaction time in frames")
    parser.add_argument("--tap-id", type=int, default=defaults.tap_id, help="Tap speed identifier")
    parser.add_argument("--warmup-frames", type=int, default=defaults.warmup_frames)
    parser.add_argument("--fps", type=int, default=defaults.fps)
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer")
    parser.add_argument("--headless", action="store_true", help="Run without a pygame window")
    parser.add_argument("--max-frames", type=int, default=None, help="Stop a headless run after this many frames")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AutopilotConfig:
    return AutopilotConfig(
        start_level=args.start_level,
        reaction_time=args.reaction_time,
        tap_id=args.tap_id,
        warmup_frames=args.warmup_frames,
        fps=args.fps,
        seed=args.seed,
        solver_url=args.solver_url,
        solver_endpoint=args.solver_endpoint,
        solver_timeout=args.solver_timeout,
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    config = build_config(args)
    solver = StackRabbitClient(
        config.solver_url, endpoint=config.solver_endpoint, timeout=config.solver_timeout
    )
    autopilot = Autopilot(solver, config)
    if args.headless:
        asyncio.run(autopilot.run(max_frames=args.max_frames))
        view = autopilot.snapshot()
        print(format_grid(view.grid))
        LOGGER.info("Finished: score=%d lines=%d level=%d", view.score, view.lines, view.level)
    else:
        from .run_pygame import main as run_window

        run_window(autopilot)


if __name__ == "__main__":
    main()
