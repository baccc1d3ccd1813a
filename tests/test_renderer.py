"""Tests for playfield geometry, dialogs and the curses renderer."""

import curses

import pytest

from term_snake.renderer import (
    BorderDoodle,
    ColorTag,
    CursesRenderer,
    DialogKind,
    DialogText,
    Playfield,
    difficulty_label,
)
from term_snake.snake import Direction, Point
from term_snake.timing import Difficulty


class TestPlayfield:
    def test_from_screen(self):
        field = Playfield.from_screen(rows=31, cols=121)
        assert field.map_width == 30
        assert field.map_height == 20
        assert field.offset == Point(30, 5)

    def test_cells_are_two_columns_wide(self):
        field = Playfield.from_screen(rows=31, cols=121)
        assert field.screen_x(0) == 31
        assert field.screen_x(4) == 39
        assert field.screen_y(3) == 8

    def test_too_small(self):
        with pytest.raises(ValueError, match="too small"):
            Playfield.from_screen(rows=5, cols=80)


class TestDifficultyLabel:
    def test_arrows_follow_bounds(self):
        assert difficulty_label(Difficulty.INCREMENTAL).startswith(" ")
        assert difficulty_label(Difficulty.INCREMENTAL).endswith(">")
        assert difficulty_label(Difficulty.HARD).startswith("<")
        assert difficulty_label(Difficulty.HARD).endswith(" ")
        assert "medium" in difficulty_label(Difficulty.MEDIUM)

    def test_fixed_width(self):
        widths = {len(difficulty_label(d)) for d in Difficulty}
        assert len(widths) == 1

    def test_not_adjustable(self):
        assert "<" not in difficulty_label(Difficulty.HARD, adjustable=False)


class TestDialogText:
    def test_difficulty_rows(self):
        text = DialogText()
        for kind in DialogKind:
            assert text.difficulty_row(kind) == 11

    def test_missing_difficulty_row(self):
        text = DialogText(win=("no placeholder",))
        with pytest.raises(ValueError, match="win"):
            text.difficulty_row(DialogKind.WIN)


class TestBorderDoodle:
    def test_starts_down_left_edge(self):
        doodle = BorderDoodle(columns=5, rows=8, length=3)
        assert doodle.snake.positions() == [(0, 0), (0, 1), (0, 2)]
        assert doodle.snake.direction == Direction.SOUTH

    def test_step_frees_tail(self):
        doodle = BorderDoodle(columns=5, rows=8, length=3)
        head, neck, freed = doodle.step()
        assert head == (0, 3)
        assert neck == (0, 2)
        assert freed == (0, 0)
        assert doodle.snake.length == 3

    def test_circles_counter_clockwise(self):
        doodle = BorderDoodle(columns=4, rows=3, length=2)
        heads = [doodle.step()[0] for _ in range(10)]
        assert heads == [
            (0, 2), (1, 2), (2, 2), (3, 2), (3, 1),
            (3, 0), (2, 0), (1, 0), (0, 0), (0, 1),
        ]

    def test_must_fit(self):
        with pytest.raises(ValueError, match="fit"):
            BorderDoodle(columns=4, rows=3, length=7)


class FakeWindow:
    def __init__(self):
        self.writes = []
        self.refreshes = 0

    def addstr(self, y, x, text, attr=0):
        if y < 0 or x < 0:
            raise curses.error("off screen")
        self.writes.append((y, x, text))

    def erase(self):
        self.writes.clear()

    def refresh(self):
        self.refreshes += 1

    def text(self):
        return "\n".join(w[2] for w in self.writes)


@pytest.fixture
def renderer(monkeypatch):
    monkeypatch.setattr(curses, "has_colors", lambda: False)
    field = Playfield.from_screen(rows=31, cols=121)
    return CursesRenderer(FakeWindow(), field)


class TestCursesRenderer:
    def test_draw_cell(self, renderer):
        renderer.draw_cell(Point(2, 3), ColorTag.BODY)
        assert renderer.window.writes == [(8, 35, "██")]

    def test_clear_cell(self, renderer):
        renderer.clear_cell(Point(2, 3))
        assert renderer.window.writes == [(8, 35, "  ")]

    def test_off_screen_write_is_dropped(self, renderer):
        renderer._put(-1, 0, "x")
        assert renderer.window.writes == []

    def test_walls(self, renderer):
        renderer.prepare_field()
        rows = {w[0] for w in renderer.window.writes}
        assert min(rows) == 4
        assert max(rows) == 26

    def test_score(self, renderer):
        renderer.show_score(12)
        assert renderer.window.writes == [(3, 30, "Score: 12")]

    def test_game_over_dialog(self, renderer):
        renderer.open_dialog(
            DialogKind.GAME_OVER, Difficulty.EASY, 42, Point(1, 1),
        )
        text = renderer.window.text()
        assert "Your score was 42" in text
        assert "easy" in text
        assert (6, 33, "██") in renderer.window.writes
        framed = [w[2] for w in renderer.window.writes if w[2].startswith("┃")]
        assert all(len(line) == 57 for line in framed)
        assert renderer.window.refreshes == 1

    def test_win_dialog_without_arrows(self, renderer):
        renderer.open_dialog(DialogKind.WIN, Difficulty.MEDIUM, 10, None)
        line = next(w[2] for w in renderer.window.writes if "medium" in w[2])
        assert "<" not in line and ">" not in line

    def test_update_difficulty(self, renderer):
        renderer.open_dialog(DialogKind.WELCOME, Difficulty.EASY, 1, None)
        renderer.window.writes.clear()
        renderer.update_difficulty(DialogKind.WELCOME, Difficulty.HARD)
        assert len(renderer.window.writes) == 1
        assert "hard" in renderer.window.writes[0][2]

    def test_welcome_animates(self, renderer):
        renderer.open_dialog(DialogKind.WELCOME, Difficulty.EASY, 1, None)
        renderer.window.writes.clear()
        renderer.animate()
        assert [w[2] for w in renderer.window.writes] == ["██", "██", "  "]

    def test_animate_without_welcome_is_noop(self, renderer):
        renderer.open_dialog(DialogKind.GAME_OVER, Difficulty.EASY, 1, None)
        renderer.window.writes.clear()
        renderer.animate()
        assert renderer.window.writes == []
