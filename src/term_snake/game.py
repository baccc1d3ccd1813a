"""Game orchestrator: the welcome/play/game-over/win state machine."""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from term_snake.config import GameConfig
from term_snake.controls import Command, InputSource, dialog_action, play_action
from term_snake.grid import Grid
from term_snake.renderer import ColorTag, DialogKind, Renderer
from term_snake.snake import Direction, Point, Snake
from term_snake.timing import Difficulty, tick_delay

logger = logging.getLogger(__name__)

NO_COLLISION = Point(-1, -1)
FIRST_MOVE_PROMPT = "Move in any direction to start the game."


class Phase(enum.Enum):
    """States of the orchestrator."""

    WELCOME = "welcome"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    WIN = "win"
    QUIT = "quit"


@dataclass
class GameState:
    """Per-session state owned by :class:`Game`."""

    difficulty: Difficulty
    progress: float = 0.0
    collision: Point = NO_COLLISION
    phase: Phase = Phase.WELCOME

    def reset(self) -> None:
        """Forget the last round. The chosen difficulty is kept."""
        self.progress = 0.0
        self.collision = NO_COLLISION


class Game:
    """Drives a single-player session on a fixed-size field.

    The game owns the grid and the snake, reads keys from *keyboard*
    and sends all output to *renderer*. *sleep* takes seconds and is
    injectable so tests can run without waiting.
    """

    def __init__(
        self,
        map_width: int,
        map_height: int,
        renderer: Renderer,
        keyboard: InputSource,
        config: GameConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.map_width = map_width
        self.map_height = map_height
        self.renderer = renderer
        self.keyboard = keyboard
        self._sleep = sleep
        self.rng = np.random.default_rng(self.config.seed)
        self.state = GameState(difficulty=self.config.difficulty)
        self.grid: Grid
        self.snake: Snake
        self.reset()

    # ------------------------------------------------------------------
    # Session loop
    # ------------------------------------------------------------------

    def run(self) -> Phase:
        """Run the state machine until the player quits."""
        handlers: dict[Phase, Callable[[], Phase]] = {
            Phase.WELCOME: self._welcome,
            Phase.PLAYING: self._play,
            Phase.GAME_OVER: self._game_over,
            Phase.WIN: self._win,
        }
        while self.state.phase is not Phase.QUIT:
            self.state.phase = handlers[self.state.phase]()
        logger.info("Player quit with score %d.", self.snake.length)
        return self.state.phase

    def reset(self) -> None:
        """Start over with a fresh grid and a one-segment snake."""
        self.grid = Grid(
            self.map_width,
            self.map_height,
            rng=self.rng,
            max_spawn_attempts=self.config.max_spawn_attempts,
        )
        self.snake = Snake(self.grid.center, rng=self.rng)
        self.grid.mark_occupied(self.snake.head.pos)
        self.state.reset()

    def start_round(self) -> bool:
        """Reset, draw the field and wait for the first move if configured.

        Returns False if the player quit instead of moving.
        """
        self.reset()
        self.renderer.prepare_field()
        self.grid.spawn_target()
        self.renderer.draw_cell(self.grid.target, ColorTag.TARGET)
        self.renderer.show_score(self.snake.length)
        self.renderer.draw_cell(self.snake.head.pos, ColorTag.HEAD)
        logger.info(
            "Round started on a %dx%d field at difficulty %s.",
            self.map_width + 1, self.map_height + 1,
            self.state.difficulty.label,
        )

        if self.config.await_first_move:
            self.renderer.show_prompt(FIRST_MOVE_PROMPT)
            self.renderer.refresh()
            while True:
                action = play_action(self.keyboard.wait())
                if action is Command.QUIT:
                    return False
                if isinstance(action, Direction):
                    self.snake.direction = action
                    break
            self.renderer.hide_prompt()
        self.renderer.refresh()
        return True

    def tick(self) -> Phase:
        """Advance the game by one step and return the resulting phase."""
        action = play_action(self.keyboard.poll())
        if action is Command.QUIT:
            return Phase.QUIT
        if isinstance(action, Direction):
            self.snake.change_direction(action)

        tail = self.snake.advance()
        head = self.snake.head.pos

        # The mesh must not be indexed outside the field.
        if not self.grid.inside_boundaries(head):
            neck = self.snake.neck()
            return self._lose(neck.pos if neck is not None else tail.pos)

        growing = head == self.grid.target
        if growing:
            self.snake.grow(tail)
        else:
            self.grid.mark_free(tail.pos)
            self.renderer.clear_cell(tail.pos)
        self.grid.mark_occupied(head)

        self.renderer.draw_cell(head, ColorTag.HEAD)
        neck = self.snake.neck()
        if neck is not None:
            self.renderer.draw_cell(neck.pos, ColorTag.BODY)

        if growing:
            self.state.progress = self.snake.length / self.grid.total_cells
            self.renderer.show_score(self.snake.length)
            if self.snake.length == self.grid.total_cells:
                logger.info("Board filled with score %d.", self.snake.length)
                return Phase.WIN
            self.grid.spawn_target()
            self.renderer.draw_cell(self.grid.target, ColorTag.TARGET)

        collision = self.snake.self_collision()
        if collision is not None:
            return self._lose(collision)

        self.renderer.refresh()
        self._sleep(self.delay_us() / 1_000_000)
        return Phase.PLAYING

    def delay_us(self) -> int:
        """Delay before the next tick at the current difficulty and progress."""
        return tick_delay(
            self.state.difficulty, self.state.progress, self.config.delays,
        )

    # ------------------------------------------------------------------
    # Phase handlers
    # ------------------------------------------------------------------

    def _welcome(self) -> Phase:
        command = self._dialog(DialogKind.WELCOME)
        return Phase.PLAYING if command is Command.CONFIRM else Phase.QUIT

    def _play(self) -> Phase:
        if not self.start_round():
            return Phase.QUIT
        phase = Phase.PLAYING
        while phase is Phase.PLAYING:
            phase = self.tick()
        return phase

    def _game_over(self) -> Phase:
        command = self._dialog(DialogKind.GAME_OVER)
        return Phase.PLAYING if command is Command.CONFIRM else Phase.QUIT

    def _win(self) -> Phase:
        command = self._dialog(DialogKind.WIN)
        return Phase.WELCOME if command is Command.CONFIRM else Phase.QUIT

    def _dialog(self, kind: DialogKind) -> Command:
        """Show a modal dialog and block until it is confirmed or quit.

        Only the welcome dialog animates. It waits with a timeout and
        draws a frame on every pass, key or not. The others block until
        a key arrives.
        """
        collision = self.state.collision
        if collision == NO_COLLISION:
            collision = None
        self.renderer.open_dialog(
            kind, self.state.difficulty, self.snake.length, collision,
        )
        timeout = (
            self.config.animation_interval_us
            if kind is DialogKind.WELCOME else None
        )
        while True:
            command = dialog_action(self.keyboard.wait(timeout))
            if command in (Command.CONFIRM, Command.QUIT):
                return command
            if command is not None and kind is not DialogKind.WIN:
                self._adjust_difficulty(kind, command)
            if kind is DialogKind.WELCOME:
                self.renderer.animate()

    def _adjust_difficulty(self, kind: DialogKind, command: Command) -> None:
        difficulty = (
            self.state.difficulty.harder()
            if command is Command.HARDER
            else self.state.difficulty.easier()
        )
        if difficulty != self.state.difficulty:
            self.state.difficulty = difficulty
            self.renderer.update_difficulty(kind, difficulty)
            logger.debug("Difficulty set to %s.", difficulty.label)

    def _lose(self, collision: Point) -> Phase:
        self.state.collision = collision
        logger.info(
            "Game over at (%d, %d) with score %d.",
            collision.x, collision.y, self.snake.length,
        )
        return Phase.GAME_OVER
