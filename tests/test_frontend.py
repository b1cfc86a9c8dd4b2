import curses

import pytest

from brickgame.frontend import (
    INTRO_MESSAGE,
    YOU_LOSE,
    YOU_WON,
    Screen,
    key_to_action,
)
from brickgame.objects import GameInfo, UserAction


class FakeWindow:
    def __init__(self, keys=(), fail=False):
        self.cells = {}
        self.writes = []
        self.keys = list(keys)
        self.refreshes = 0
        self.fail = fail
        self.attempts = 0

    def addstr(self, y, x, text):
        self.attempts += 1
        if self.fail:
            raise curses.error("out of window")
        self.cells[(y, x)] = text
        self.writes.append(text)

    def addch(self, y, x, char):
        self.attempts += 1
        if self.fail:
            raise curses.error("out of window")
        self.cells[(y, x)] = char
        self.writes.append(char)

    def attron(self, attr):
        pass

    def attroff(self, attr):
        pass

    def refresh(self):
        self.refreshes += 1

    def getch(self):
        return self.keys.pop(0) if self.keys else -1


def _info(pause=0, field=None, next_block=None, level=1, score=0):
    return GameInfo(
        field=field, next=next_block, score=score, high_score=0,
        level=level, speed=3000, pause=pause,
    )


def _empty_field():
    return [[0] * 10 for _ in range(20)]


@pytest.mark.parametrize(
    "key, action",
    [
        (ord("\n"), UserAction.PAUSE),
        (27, UserAction.TERMINATE),
        (curses.KEY_UP, UserAction.UP),
        (ord(" "), UserAction.ACTION),
        (curses.KEY_LEFT, UserAction.LEFT),
        (curses.KEY_RIGHT, UserAction.RIGHT),
        (curses.KEY_DOWN, UserAction.DOWN),
        (-1, UserAction.START),
        (ord("q"), UserAction.START),
    ],
)
def test_key_to_action(key, action):
    assert key_to_action(key) == action


def test_read_action_uses_window_keys():
    screen = Screen(FakeWindow(keys=[curses.KEY_LEFT, 27]))
    assert screen.read_action() == UserAction.LEFT
    assert screen.read_action() == UserAction.TERMINATE
    assert screen.read_action() == UserAction.START


def test_draw_rectangle_outlines_perimeter():
    window = FakeWindow()
    Screen(window).draw_rectangle(0, 3, 0, 5)
    ys = {y for y, _ in window.cells}
    xs = {x for _, x in window.cells}
    assert min(ys) == min(xs)
    assert max(ys) - min(ys) == 3
    assert max(xs) - min(xs) == 5
    top = min(ys)
    left = min(xs)
    corners = {
        window.cells[(top, left)],
        window.cells[(top, left + 5)],
        window.cells[(top + 3, left)],
        window.cells[(top + 3, left + 5)],
    }
    assert len(corners) == 4
    horizontal = {window.cells[(top, left + k)] for k in range(1, 5)}
    horizontal |= {window.cells[(top + 3, left + k)] for k in range(1, 5)}
    assert len(horizontal) == 1
    vertical = {window.cells[(top + k, left)] for k in range(1, 3)}
    vertical |= {window.cells[(top + k, left + 5)] for k in range(1, 3)}
    assert len(vertical) == 1
    # interior stays blank
    assert (top + 1, left + 1) not in window.cells


def test_draw_overlay_writes_labels_and_intro():
    window = FakeWindow()
    Screen(window).draw_overlay()
    for text in ("LEVEL: ", "SCORE: ", "NEXT: ", "< > - move", "v - fall",
                 "space - rotate", "enter - pause", "esc - exit", INTRO_MESSAGE):
        assert text in window.writes


def test_draw_stats_writes_level_and_score():
    window = FakeWindow()
    Screen(window).draw_stats(_info(level=3, score=1500))
    assert "3" in window.writes
    assert "1500" in window.writes


def test_draw_field_marks_filled_and_empty_cells():
    field = _empty_field()
    field[0][0] = 5
    field[19][9] = 7
    window = FakeWindow()
    Screen(window).draw_field(field)
    assert window.writes.count("[]") == 2
    assert window.writes.count(".") == 198


def test_draw_field_none_draws_nothing():
    window = FakeWindow()
    Screen(window).draw_field(None)
    assert window.writes == []


def test_draw_next_draws_figure_cells():
    block = [[0] * 4 for _ in range(4)]
    for i, j in ((0, 1), (0, 2), (1, 1), (1, 2)):
        block[i][j] = 7
    window = FakeWindow()
    Screen(window).draw_next(block)
    assert window.writes.count("[]") == 4
    assert window.writes.count("  ") == 12


def test_draw_next_none_draws_nothing():
    window = FakeWindow()
    Screen(window).draw_next(None)
    assert window.writes == []


@pytest.mark.parametrize(
    "pause, banner",
    [(1, INTRO_MESSAGE), (-1, YOU_LOSE), (-3, YOU_WON)],
)
def test_draw_shows_banner_instead_of_field(pause, banner):
    window = FakeWindow()
    Screen(window).draw(_info(pause=pause, field=_empty_field()))
    assert banner in window.writes
    assert "." not in window.writes
    assert window.refreshes == 1


def test_draw_running_game_shows_field():
    window = FakeWindow()
    Screen(window).draw(_info(pause=0, field=_empty_field()))
    assert window.writes.count(".") == 200
    assert INTRO_MESSAGE not in window.writes
    assert window.refreshes == 1


def test_write_errors_are_ignored():
    window = FakeWindow(fail=True)
    Screen(window).draw_banner(YOU_WON)
    assert window.attempts == 1
    assert window.writes == []