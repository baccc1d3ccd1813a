"""Shared test doubles for the game's renderer and keyboard."""

from __future__ import annotations

from collections import deque

import pytest

from term_snake.config import GameConfig
from term_snake.game import Game


class RecordingRenderer:
    """Renderer that records every call as ``(method, *args)``."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        def record(*args):
            self.calls.append((name, *args))

        return record

    def named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


class ScriptedKeyboard:
    """Keyboard replaying fixed key sequences.

    ``poll`` returns ``None`` once its script runs out. ``wait`` raises
    instead, so a test can never block forever.
    """

    def __init__(self, polls=(), waits=()) -> None:
        self.polls: deque[int | None] = deque(polls)
        self.waits: deque[int | None] = deque(waits)
        self.timeouts: list[int | None] = []

    def poll(self) -> int | None:
        return self.polls.popleft() if self.polls else None

    def wait(self, timeout_us: int | None = None) -> int | None:
        self.timeouts.append(timeout_us)
        if not self.waits:
            raise RuntimeError("Keyboard script exhausted.")
        return self.waits.popleft()


@pytest.fixture
def make_game():
    """Factory building a :class:`Game` wired to test doubles."""

    def factory(width=20, height=10, polls=(), waits=(), **config):
        config.setdefault("seed", 0)
        sleeps: list[float] = []
        game = Game(
            width,
            height,
            renderer=RecordingRenderer(),
            keyboard=ScriptedKeyboard(polls, waits),
            config=GameConfig(**config),
            sleep=sleeps.append,
        )
        game.sleeps = sleeps
        return game

    return factory
