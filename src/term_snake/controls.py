"""Keyboard mapping and the input source the game reads from."""

from __future__ import annotations

import curses
import enum
from typing import Protocol

from term_snake.snake import Direction


class Command(enum.Enum):
    """Non-movement actions a key can trigger."""

    QUIT = "quit"
    CONFIRM = "confirm"
    HARDER = "harder"
    EASIER = "easier"


_DIRECTION_KEYS: dict[int, Direction] = {
    ord("w"): Direction.NORTH,
    ord("k"): Direction.NORTH,
    curses.KEY_UP: Direction.NORTH,
    ord("d"): Direction.EAST,
    ord("l"): Direction.EAST,
    curses.KEY_RIGHT: Direction.EAST,
    ord("s"): Direction.SOUTH,
    ord("j"): Direction.SOUTH,
    curses.KEY_DOWN: Direction.SOUTH,
    ord("a"): Direction.WEST,
    ord("h"): Direction.WEST,
    curses.KEY_LEFT: Direction.WEST,
}

_DIALOG_KEYS: dict[int, Command] = {
    ord("\n"): Command.CONFIRM,
    ord("\r"): Command.CONFIRM,
    curses.KEY_ENTER: Command.CONFIRM,
    ord("y"): Command.CONFIRM,
    ord("q"): Command.QUIT,
    ord("n"): Command.QUIT,
    ord(">"): Command.HARDER,
    ord("d"): Command.HARDER,
    ord("l"): Command.HARDER,
    curses.KEY_RIGHT: Command.HARDER,
    ord("<"): Command.EASIER,
    ord("a"): Command.EASIER,
    ord("h"): Command.EASIER,
    curses.KEY_LEFT: Command.EASIER,
}


def direction_for_key(key: int | None) -> Direction | None:
    """Return the direction bound to *key*, if any."""
    if key is None:
        return None
    return _DIRECTION_KEYS.get(key)


def play_action(key: int | None) -> Direction | Command | None:
    """Map a key pressed during play. Unbound keys map to ``None``."""
    if key == ord("q"):
        return Command.QUIT
    return direction_for_key(key)


def dialog_action(key: int | None) -> Command | None:
    """Map a key pressed while a dialog is open."""
    if key is None:
        return None
    return _DIALOG_KEYS.get(key)


class InputSource(Protocol):
    """A single keyboard with two ways of waiting for it."""

    def poll(self) -> int | None:
        """Return a pending key without blocking, or ``None``."""
        ...

    def wait(self, timeout_us: int | None = None) -> int | None:
        """Block for the next key, or until *timeout_us* elapses."""
        ...


class CursesInput:
    """:class:`InputSource` backed by a curses window."""

    def __init__(self, window: curses.window) -> None:
        self.window = window
        self.window.keypad(True)

    def poll(self) -> int | None:
        self.window.nodelay(True)
        return self._read()

    def wait(self, timeout_us: int | None = None) -> int | None:
        self.window.nodelay(False)
        self.window.timeout(-1 if timeout_us is None else max(1, timeout_us // 1000))
        try:
            return self._read()
        finally:
            self.window.timeout(-1)

    def _read(self) -> int | None:
        key = self.window.getch()
        return None if key == -1 else key
