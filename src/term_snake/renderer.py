"""Terminal output: the renderer contract and its curses implementation."""

from __future__ import annotations

import curses
import enum
import logging
from dataclasses import dataclass, field
from typing import Protocol

from term_snake.snake import Direction, Point, Snake
from term_snake.timing import Difficulty

logger = logging.getLogger(__name__)

_CELL = "██"
_DIALOG_WIDTH = 57
_DIALOG_HEIGHT = 16
# Welcome text is inset so the doodle can crawl along the box edge.
_WELCOME_INSET = 3


class ColorTag(enum.Enum):
    """Semantic colors the game asks for."""

    TEXT = "text"
    BODY = "body"
    HEAD = "head"
    TARGET = "target"
    WALL = "wall"
    COLLISION = "collision"


class DialogKind(enum.Enum):
    WELCOME = "welcome"
    GAME_OVER = "game_over"
    WIN = "win"


def difficulty_label(difficulty: Difficulty, adjustable: bool = True) -> str:
    """Render a difficulty with arrows hinting at the allowed moves."""
    left = "<" if adjustable and difficulty > Difficulty.INCREMENTAL else " "
    right = ">" if adjustable and difficulty < Difficulty.HARD else " "
    return f"{left} {difficulty.label:^11} {right}"


_WELCOME_LINES = (
    "",
    "",
    " ┌─┐┌─┐┬─┐┌┬┐   ┌─┐┌┐┌┌─┐┬┌─┌─┐",
    "  │ ├┤ ├┬┘│││───└─┐│││├─┤├┴┐├┤",
    "  ┴ └─┘┴└─┴ ┴   └─┘┘└┘┴ ┴┴ ┴└─┘",
    "",
    "",
    "    eat the orbs, keep off the walls",
    "    and never bite your own tail",
    "",
    "",
    "   Difficulty {difficulty}",
    "",
    "       Quit [q]      Play [⏎]",
    "",
    "",
)

_GAME_OVER_LINES = (
    "",
    "",
    "   ┌─┐┌─┐┌┬┐┌─┐   ┌─┐┬  ┬┌─┐┬─┐",
    "   │ ┬├─┤│││├┤    │ │└┐┌┘├┤ ├┬┘",
    "   └─┘┴ ┴┴ ┴└─┘   └─┘ └┘ └─┘┴└─",
    "",
    "",
    "",
    "",
    "   Your score was {score:<4}",
    "",
    "   Difficulty {difficulty}",
    "",
    "   Quit [q]      Play again [⏎]",
    "",
    "",
)

_WIN_LINES = (
    "",
    "",
    "   ┬ ┬┌─┐┬ ┬  ┬ ┬┌─┐┌┐┌",
    "   └┬┘│ ││ │  ││││ ││││",
    "    ┴ └─┘└─┘  └┴┘└─┘┘└┘",
    "",
    "",
    "",
    "",
    "   Your score was {score:<4}",
    "",
    "   Difficulty {difficulty}",
    "",
    "   Quit [q]      Return home [⏎]",
    "",
    "",
)


@dataclass(frozen=True)
class DialogText:
    """Text tables for every dialog.

    Lines may use the ``{score}`` and ``{difficulty}`` placeholders.
    Framed dialogs get a box drawn around them.
    """

    welcome: tuple[str, ...] = _WELCOME_LINES
    game_over: tuple[str, ...] = _GAME_OVER_LINES
    win: tuple[str, ...] = _WIN_LINES
    framed: frozenset[DialogKind] = field(
        default_factory=lambda: frozenset({DialogKind.GAME_OVER, DialogKind.WIN}),
    )

    def lines(self, kind: DialogKind) -> tuple[str, ...]:
        return {
            DialogKind.WELCOME: self.welcome,
            DialogKind.GAME_OVER: self.game_over,
            DialogKind.WIN: self.win,
        }[kind]

    def difficulty_row(self, kind: DialogKind) -> int:
        """Index of the line carrying the difficulty placeholder."""
        for i, line in enumerate(self.lines(kind)):
            if "{difficulty" in line:
                return i
        raise ValueError(f"Dialog {kind.value!r} has no difficulty line.")


@dataclass(frozen=True)
class Playfield:
    """Geometry mapping grid points to screen cells.

    Each grid cell is two columns wide, so x is doubled on screen.
    """

    map_width: int
    map_height: int
    offset: Point
    screen_width: int
    screen_height: int

    @classmethod
    def from_screen(cls, rows: int, cols: int) -> Playfield:
        """Derive the field from the terminal size, once at startup."""
        width, height = cols - 1, rows - 1
        map_width = width // 4
        map_height = height * 2 // 3
        if map_width < 3 or map_height < 3:
            raise ValueError(
                f"Terminal too small ({cols}x{rows}) for a 4×4 playing field.",
            )
        offset = Point((width - map_width * 2) // 2, (height - map_height) // 2)
        return cls(map_width, map_height, offset, width, height)

    def screen_x(self, x: int) -> int:
        return 2 * x + 1 + self.offset.x

    def screen_y(self, y: int) -> int:
        return y + self.offset.y

    @property
    def dialog_origin(self) -> Point:
        """Top-left screen cell of a dialog centred on the field."""
        return Point(
            self.offset.x + self.map_width - _DIALOG_WIDTH // 2 + 1,
            self.offset.y + self.map_height // 2 - _DIALOG_HEIGHT // 2 + 1,
        )


class BorderDoodle:
    """A decorative snake crawling counter-clockwise along a rectangle.

    Coordinates are in doodle cells: (0, 0) is the rectangle's top-left
    corner and x counts two-column cells.
    """

    def __init__(self, columns: int, rows: int, length: int = 7) -> None:
        if length > rows:
            raise ValueError("Doodle must fit along the rectangle's left edge.")
        self.columns = columns
        self.rows = rows
        self.snake = Snake.from_points(
            [(0, y) for y in range(length)], Direction.SOUTH,
        )

    def step(self) -> tuple[Point, Point | None, Point]:
        """Move one cell, returning the new head, its neck and the freed cell."""
        ahead = self.snake.head.pos + self.snake.direction.vector
        if not (0 <= ahead.x < self.columns and 0 <= ahead.y < self.rows):
            self.snake.change_direction(Direction((self.snake.direction - 1) % 4))
        freed = self.snake.advance()
        neck = self.snake.neck()
        return self.snake.head.pos, neck.pos if neck else None, freed.pos


class Renderer(Protocol):
    """Everything the game needs from a screen."""

    def prepare_field(self) -> None:
        """Clear the screen and draw the walls."""
        ...

    def draw_cell(self, point: Point, color: ColorTag) -> None: ...

    def clear_cell(self, point: Point) -> None: ...

    def show_score(self, score: int) -> None: ...

    def hide_score(self) -> None: ...

    def show_prompt(self, text: str) -> None: ...

    def hide_prompt(self) -> None: ...

    def open_dialog(
        self,
        kind: DialogKind,
        difficulty: Difficulty,
        score: int,
        collision: Point | None,
    ) -> None: ...

    def update_difficulty(self, kind: DialogKind, difficulty: Difficulty) -> None: ...

    def animate(self) -> None:
        """Advance the open dialog's animation by one frame."""
        ...

    def refresh(self) -> None: ...


_CURSES_COLORS: dict[ColorTag, int] = {
    ColorTag.TEXT: -1,
    ColorTag.BODY: curses.COLOR_GREEN,
    ColorTag.HEAD: -1,
    ColorTag.TARGET: curses.COLOR_MAGENTA,
    ColorTag.WALL: curses.COLOR_YELLOW,
    ColorTag.COLLISION: curses.COLOR_RED,
}


class CursesRenderer:
    """:class:`Renderer` drawing on a curses window."""

    def __init__(
        self,
        window: curses.window,
        playfield: Playfield,
        text: DialogText | None = None,
    ) -> None:
        self.window = window
        self.field = playfield
        self.text = text if text is not None else DialogText()
        self._attrs = self._init_colors()
        self._doodle: BorderDoodle | None = None

    @staticmethod
    def _init_colors() -> dict[ColorTag, int]:
        if not curses.has_colors():
            return {tag: curses.A_NORMAL for tag in ColorTag}
        curses.start_color()
        curses.use_default_colors()
        attrs: dict[ColorTag, int] = {}
        for pair, tag in enumerate(ColorTag, start=1):
            curses.init_pair(pair, _CURSES_COLORS[tag], -1)
            attrs[tag] = curses.color_pair(pair)
        return attrs

    def _put(self, y: int, x: int, text: str, color: ColorTag = ColorTag.TEXT) -> None:
        try:
            self.window.addstr(y, x, text, self._attrs[color])
        except curses.error:
            # Writing the bottom-right cell, or off-screen, is not fatal.
            logger.debug("Could not draw %r at (%d, %d).", text, x, y)

    def prepare_field(self) -> None:
        self.window.erase()
        self._doodle = None
        f = self.field
        left, top = f.offset.x, f.offset.y - 1
        right, bottom = f.screen_x(f.map_width) + 2, f.map_height + f.offset.y + 1
        self._put(top, left, "▄" * (right - left + 1), ColorTag.WALL)
        self._put(bottom, left, "▀" * (right - left + 1), ColorTag.WALL)
        for y in range(top + 1, bottom):
            self._put(y, left, "█", ColorTag.WALL)
            self._put(y, right, "█", ColorTag.WALL)

    def draw_cell(self, point: Point, color: ColorTag) -> None:
        f = self.field
        self._put(f.screen_y(point.y), f.screen_x(point.x), _CELL, color)

    def clear_cell(self, point: Point) -> None:
        f = self.field
        self._put(f.screen_y(point.y), f.screen_x(point.x), "  ")

    def show_score(self, score: int) -> None:
        self._put(self.field.offset.y - 2, self.field.offset.x, f"Score: {score}")

    def hide_score(self) -> None:
        f = self.field
        self._put(f.offset.y - 2, f.offset.x - 1, " " * f.screen_width)

    def show_prompt(self, text: str) -> None:
        self._put(self._prompt_row, self.field.offset.x, text)

    def hide_prompt(self) -> None:
        f = self.field
        self._put(self._prompt_row, f.offset.x, " " * (f.screen_width - f.offset.x))

    @property
    def _prompt_row(self) -> int:
        return self.field.offset.y + self.field.map_height + 2

    def open_dialog(
        self,
        kind: DialogKind,
        difficulty: Difficulty,
        score: int,
        collision: Point | None,
    ) -> None:
        if kind is DialogKind.WELCOME:
            self.window.erase()
        if kind is DialogKind.GAME_OVER:
            if collision is not None:
                self.draw_cell(collision, ColorTag.COLLISION)
            self.hide_score()
        label = difficulty_label(difficulty, adjustable=kind is not DialogKind.WIN)
        for i, line in enumerate(self.text.lines(kind)):
            row = self._dialog_row(kind, i, line.format(score=score, difficulty=label))
            self._put(self.field.dialog_origin.y + i, self._dialog_x(kind), row)
        if kind is DialogKind.WELCOME:
            self._doodle = BorderDoodle(_DIALOG_WIDTH // 2, _DIALOG_HEIGHT)
            for seg in self._doodle.snake:
                self._draw_doodle(seg.pos, ColorTag.BODY)
            self._draw_doodle(self._doodle.snake.head.pos, ColorTag.HEAD)
        else:
            self._doodle = None
        self.refresh()

    def update_difficulty(self, kind: DialogKind, difficulty: Difficulty) -> None:
        i = self.text.difficulty_row(kind)
        label = difficulty_label(difficulty, adjustable=kind is not DialogKind.WIN)
        line = self.text.lines(kind)[i].format(score=0, difficulty=label)
        row = self._dialog_row(kind, i, line)
        self._put(self.field.dialog_origin.y + i, self._dialog_x(kind), row)
        self.refresh()

    def animate(self) -> None:
        if self._doodle is None:
            return
        head, neck, freed = self._doodle.step()
        self._draw_doodle(head, ColorTag.HEAD)
        if neck is not None:
            self._draw_doodle(neck, ColorTag.BODY)
        origin = self.field.dialog_origin
        self._put(origin.y + freed.y, origin.x + 2 * freed.x, "  ")
        self.refresh()

    def refresh(self) -> None:
        self.window.refresh()

    def _draw_doodle(self, point: Point, color: ColorTag) -> None:
        origin = self.field.dialog_origin
        self._put(origin.y + point.y, origin.x + 2 * point.x, _CELL, color)

    def _dialog_x(self, kind: DialogKind) -> int:
        inset = _WELCOME_INSET if kind is DialogKind.WELCOME else 0
        return self.field.dialog_origin.x + inset

    def _dialog_row(self, kind: DialogKind, index: int, line: str) -> str:
        if kind not in self.text.framed:
            width = _DIALOG_WIDTH - 2 * _WELCOME_INSET
            return line[:width].ljust(width)
        inner = _DIALOG_WIDTH - 2
        if index == 0:
            return "┏" + "━" * inner + "┓"
        if index == len(self.text.lines(kind)) - 1:
            return "┗" + "━" * inner + "┛"
        return f"┃{line[:inner]:<{inner}}┃"
