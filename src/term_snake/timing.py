"""Difficulty levels and the per-tick delay they imply."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from term_snake.config import DelayConfig


class Difficulty(enum.IntEnum):
    """Difficulty levels, ordered so dialogs can step through them."""

    INCREMENTAL = 0
    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    def harder(self) -> Difficulty:
        """Return the next level, saturating at HARD."""
        return Difficulty(min(self + 1, Difficulty.HARD))

    def easier(self) -> Difficulty:
        """Return the previous level, saturating at INCREMENTAL."""
        return Difficulty(max(self - 1, Difficulty.INCREMENTAL))


def tick_delay(
    difficulty: Difficulty,
    progress: float,
    delays: DelayConfig,
) -> int:
    """Return the pause between two ticks, in microseconds.

    Fixed levels ignore *progress*. INCREMENTAL slides linearly from
    ``delays.max_us`` on an empty board to ``delays.min_us`` on a full one.
    """
    if difficulty == Difficulty.EASY:
        return delays.max_us
    if difficulty == Difficulty.MEDIUM:
        return delays.medium_us
    if difficulty == Difficulty.HARD:
        return delays.min_us
    progress = min(1.0, max(0.0, progress))
    return delays.max_us - int((delays.max_us - delays.min_us) * progress)
