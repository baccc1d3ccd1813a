"""Tests for difficulty levels and tick delays."""

import pytest

from term_snake.config import DelayConfig
from term_snake.timing import Difficulty, tick_delay

DELAYS = DelayConfig(min_us=33_333, medium_us=50_000, max_us=83_333)


class TestDifficulty:
    def test_order(self):
        assert list(Difficulty) == [
            Difficulty.INCREMENTAL, Difficulty.EASY,
            Difficulty.MEDIUM, Difficulty.HARD,
        ]

    def test_harder_saturates(self):
        assert Difficulty.EASY.harder() == Difficulty.MEDIUM
        assert Difficulty.HARD.harder() == Difficulty.HARD

    def test_easier_saturates(self):
        assert Difficulty.EASY.easier() == Difficulty.INCREMENTAL
        assert Difficulty.INCREMENTAL.easier() == Difficulty.INCREMENTAL

    def test_label(self):
        assert Difficulty.INCREMENTAL.label == "incremental"


class TestTickDelay:
    @pytest.mark.parametrize("progress", [0.0, 0.3, 1.0])
    def test_fixed_levels_ignore_progress(self, progress):
        assert tick_delay(Difficulty.EASY, progress, DELAYS) == 83_333
        assert tick_delay(Difficulty.MEDIUM, progress, DELAYS) == 50_000
        assert tick_delay(Difficulty.HARD, progress, DELAYS) == 33_333

    def test_incremental_endpoints(self):
        assert tick_delay(Difficulty.INCREMENTAL, 0.0, DELAYS) == 83_333
        assert tick_delay(Difficulty.INCREMENTAL, 1.0, DELAYS) == 33_333

    def test_incremental_midpoint(self):
        assert tick_delay(Difficulty.INCREMENTAL, 0.5, DELAYS) == 58_333

    def test_incremental_monotonic(self):
        delays = [
            tick_delay(Difficulty.INCREMENTAL, i / 1000, DELAYS)
            for i in range(1001)
        ]
        assert all(a >= b for a, b in zip(delays, delays[1:]))

    def test_progress_clamped(self):
        assert tick_delay(Difficulty.INCREMENTAL, -0.5, DELAYS) == 83_333
        assert tick_delay(Difficulty.INCREMENTAL, 1.5, DELAYS) == 33_333
