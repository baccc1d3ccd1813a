"""Command-line launcher for the terminal snake game."""

from __future__ import annotations

import argparse
import curses
import locale
import logging
import sys
from dataclasses import replace

from term_snake.config import GameConfig
from term_snake.controls import CursesInput
from term_snake.game import Game, Phase
from term_snake.renderer import CursesRenderer, Playfield
from term_snake.timing import Difficulty

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="term-snake",
        description="Play snake in the terminal.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for reproducible directions and target spawns.",
    )
    parser.add_argument(
        "--difficulty", type=str, default=None,
        choices=[d.label for d in Difficulty],
        help="Initial difficulty shown on the welcome screen.",
    )
    parser.add_argument(
        "--log-file", type=str, default=None,
        help="Write logs to this file (the terminal belongs to the game).",
    )
    parser.add_argument(
        "--no-first-move", action="store_true",
        help="Start moving right away instead of waiting for a key.",
    )
    return parser


def build_config(args: argparse.Namespace) -> GameConfig:
    """Merge the optional config file with command-line overrides."""
    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.difficulty is not None:
        overrides["difficulty"] = Difficulty[args.difficulty.upper()]
    if args.no_first_move:
        overrides["await_first_move"] = False
    return replace(config, **overrides) if overrides else config


def _configure_logging(log_file: str | None) -> None:
    if log_file is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _session(stdscr: curses.window, config: GameConfig) -> Phase:
    try:
        curses.curs_set(0)
    except curses.error:
        logger.debug("Terminal cannot hide the cursor.")
    rows, cols = stdscr.getmaxyx()
    playfield = Playfield.from_screen(rows, cols)
    game = Game(
        playfield.map_width,
        playfield.map_height,
        renderer=CursesRenderer(stdscr, playfield),
        keyboard=CursesInput(stdscr),
        config=config,
    )
    return game.run()


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``term-snake`` command."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_file)
    config = build_config(args)

    locale.setlocale(locale.LC_ALL, "")
    logger.info("Starting with %s", config.to_dict())
    try:
        curses.wrapper(_session, config)
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
