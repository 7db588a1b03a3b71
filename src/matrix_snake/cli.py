"""Headless command-line simulator for Matrix Snake."""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from matrix_snake.config import PRESETS, GameConfig
from matrix_snake.display import FrameBuffer
from matrix_snake.food import NoFreeCellError
from matrix_snake.game import GameStatus, SnakeGame
from matrix_snake.snake import Direction

logger = logging.getLogger(__name__)

_MOVE_KEYS: dict[str, Direction] = {
    "L": Direction.LEFT,
    "R": Direction.RIGHT,
    "U": Direction.UP,
    "D": Direction.DOWN,
}


def _moves(text: str) -> str:
    moves = text.upper()
    unknown = sorted(set(moves) - set(_MOVE_KEYS) - {"."})
    if unknown:
        raise argparse.ArgumentTypeError(
            f"unknown move letters: {''.join(unknown)} (use L, R, U, D or .)"
        )
    return moves


def _frame_dtype(config: GameConfig) -> type:
    """Pick byte storage unless a color value needs more room."""
    values = [
        value
        for color in (*config.snake_colors, config.food_color)
        for value in (color if isinstance(color, tuple) else (color,))
    ]
    return np.uint8 if max(values) <= 0xFF else np.uint32


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matrix-snake",
        description="Run Matrix Snake headlessly and print the frames.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser("simulate", help="Run a game on an in-memory display.")
    source = sim_p.add_mutually_exclusive_group()
    source.add_argument(
        "--preset", type=str, default="8x8", choices=sorted(PRESETS),
    )
    source.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--ticks", type=int, default=20)
    sim_p.add_argument("--players", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--food-lifetime", type=int, default=None)
    sim_p.add_argument(
        "--moves", type=_moves, default="",
        help=(
            "Direction for player 0, one letter per tick (L, R, U, D; "
            "'.' keeps the current one)."
        ),
    )
    sim_p.add_argument(
        "--every", type=int, default=0,
        help="Print every N-th frame (0 prints only the last one).",
    )
    sim_p.add_argument(
        "--save-config", type=str, default=None,
        help="Write the effective config to this path.",
    )

    # --- presets ---
    sub.add_parser("presets", help="List the built-in display presets.")

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    if args.ticks < 1:
        raise SystemExit("--ticks must be at least 1.")
    if args.every < 0:
        raise SystemExit("--every must not be negative.")

    try:
        if args.config:
            config = GameConfig.load(args.config)
            logger.info("Loaded config from %s", args.config)
        else:
            config = PRESETS[args.preset]
        config = config.with_overrides(
            player_count=args.players,
            seed=args.seed,
            food_lifetime=args.food_lifetime,
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    if args.save_config:
        config.save(args.save_config)

    width, height = config.surface_size
    display = FrameBuffer(
        width, height, channels=config.channels, dtype=_frame_dtype(config),
    )
    try:
        game = SnakeGame.from_config(config)
    except NoFreeCellError as exc:
        raise SystemExit(str(exc)) from exc
    background = (0,) * config.channels if config.channels > 1 else 0

    status = GameStatus.CONTINUE
    ticks_run = 0
    frame = display.to_text()
    frame_tick = 0
    printed = True
    for tick in range(args.ticks):
        if tick < len(args.moves) and args.moves[tick] in _MOVE_KEYS:
            game.set_direction(0, _MOVE_KEYS[args.moves[tick]])
        display.clear(background)
        try:
            status = game.draw(display)
        except NoFreeCellError as exc:
            raise SystemExit(f"Board full on tick {tick + 1}: {exc}") from exc
        ticks_run = tick + 1
        if status is GameStatus.END:
            break
        # The last frame drawn is kept; an ending tick draws nothing.
        frame = display.to_text()
        frame_tick = ticks_run
        printed = False
        if args.every and ticks_run % args.every == 0:
            print(f"-- tick {ticks_run}")  # noqa: T201
            print(frame)  # noqa: T201
            printed = True

    if not printed:
        print(f"-- tick {frame_tick}")  # noqa: T201
        print(frame)  # noqa: T201

    lengths = ", ".join(str(len(s)) for s in game.snakes)
    print(  # noqa: T201
        f"Status: {status.value} after {ticks_run} ticks | lengths: {lengths}"
    )
    return 0


def _run_presets(args: argparse.Namespace) -> int:
    for name, cfg in sorted(PRESETS.items()):
        width, height = cfg.surface_size
        print(  # noqa: T201
            f"{name}: {cfg.grid_width}x{cfg.grid_height} cells, "
            f"scale {cfg.scale_x}x{cfg.scale_y}, display {width}x{height}"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``matrix-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "presets": _run_presets,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
