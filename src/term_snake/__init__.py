"""Terminal snake: gameplay engine and curses front end."""

from term_snake.config import DelayConfig, GameConfig
from term_snake.game import Game, GameState, Phase
from term_snake.grid import BoardSaturatedError, Grid
from term_snake.snake import Direction, Point, Segment, Snake
from term_snake.timing import Difficulty, tick_delay

__all__ = [
    "BoardSaturatedError",
    "DelayConfig",
    "Difficulty",
    "Direction",
    "Game",
    "GameConfig",
    "GameState",
    "Grid",
    "Phase",
    "Point",
    "Segment",
    "Snake",
    "tick_delay",
]
