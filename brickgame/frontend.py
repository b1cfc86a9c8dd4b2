"""Terminal interface that draws the game with curses and reads the keyboard."""

from __future__ import annotations

import curses
import time
from typing import Any, Optional

from brickgame.objects import GameInfo, Matrix, UserAction

YOU_WON = "   =) YOU WIN! =)   "
YOU_LOSE = "   =( YOU LOSE =(   "
INTRO_MESSAGE = "Press ENTER to start"
BANNER_LEN = 20

BOARDS_BEGIN = 2

BOARD_N = 20
BOARD_M = 20
HUD_WIDTH = 17

KEY_ESCAPE = 27
KEY_SPACE = ord(" ")
KEY_ENTER = ord("\n")

FRAME_DELAY = 0.01

EMPTY_CELL_PAIR = 8

_COLOR_PAIRS = (
    (1, "COLOR_YELLOW", "COLOR_YELLOW"),
    (2, "COLOR_MAGENTA", "COLOR_MAGENTA"),
    (3, "COLOR_GREEN", "COLOR_GREEN"),
    (4, "COLOR_CYAN", "COLOR_CYAN"),
    (5, "COLOR_RED", "COLOR_RED"),
    (6, "COLOR_BLUE", "COLOR_BLUE"),
    (7, "COLOR_WHITE", "COLOR_WHITE"),
    (EMPTY_CELL_PAIR, "COLOR_CYAN", "COLOR_BLACK"),
)

_KEY_ACTIONS = {
    KEY_ENTER: UserAction.PAUSE,
    KEY_ESCAPE: UserAction.TERMINATE,
    curses.KEY_UP: UserAction.UP,
    KEY_SPACE: UserAction.ACTION,
    curses.KEY_LEFT: UserAction.LEFT,
    curses.KEY_RIGHT: UserAction.RIGHT,
    curses.KEY_DOWN: UserAction.DOWN,
}

_HELP_LINES = (
    (15, "< > - move"),
    (16, "v - fall"),
    (18, "space - rotate"),
    (17, "enter - pause"),
    (19, "esc - exit"),
)


def _line_char(name: str, fallback: str) -> Any:
    """Curses line-drawing character, or a plain one before curses starts."""
    return getattr(curses, name, fallback)


def key_to_action(key: int) -> UserAction:
    """Map a key code to a user action; unknown keys mean nothing happened."""
    return _KEY_ACTIONS.get(key, UserAction.START)


def init_colors() -> None:
    """Set up the colour pairs used for figures and empty cells."""
    curses.start_color()
    for pair, foreground, background in _COLOR_PAIRS:
        curses.init_pair(pair, getattr(curses, foreground), getattr(curses, background))


class Screen:
    """Draws game frames into a curses window."""

    def __init__(self, window: Any, colors: bool = False) -> None:
        self.window = window
        self.colors = colors

    # -- low-level output --------------------------------------------------

    def _put(self, y: int, x: int, text: str) -> None:
        try:
            self.window.addstr(BOARDS_BEGIN + y, BOARDS_BEGIN + x, text)
        except curses.error:
            pass

    def _put_char(self, y: int, x: int, char: Any) -> None:
        try:
            self.window.addch(BOARDS_BEGIN + y, BOARDS_BEGIN + x, char)
        except curses.error:
            pass

    def _put_colored(self, y: int, x: int, text: str, pair: int) -> None:
        if self.colors:
            attr = curses.color_pair(pair)
            self.window.attron(attr)
            self._put(y, x, text)
            self.window.attroff(attr)
        else:
            self._put(y, x, text)

    # -- drawing -----------------------------------------------------------

    def draw_rectangle(self, top_y: int, bottom_y: int, left_x: int, right_x: int) -> None:
        """Draw a framed box with the given corners."""
        horizontal = _line_char("ACS_HLINE", "─")
        vertical = _line_char("ACS_VLINE", "│")

        self._put_char(top_y, left_x, _line_char("ACS_ULCORNER", "┌"))
        for x in range(left_x + 1, right_x):
            self._put_char(top_y, x, horizontal)
        self._put_char(top_y, max(right_x, left_x + 1), _line_char("ACS_URCORNER", "┐"))

        for y in range(top_y + 1, bottom_y):
            self._put_char(y, left_x, vertical)
            self._put_char(y, right_x, vertical)

        self._put_char(bottom_y, left_x, _line_char("ACS_LLCORNER", "└"))
        for x in range(left_x + 1, right_x):
            self._put_char(bottom_y, x, horizontal)
        self._put_char(bottom_y, max(right_x, left_x + 1), _line_char("ACS_LRCORNER", "┘"))

    def draw_overlay(self) -> None:
        """Draw the static frame, labels and help text."""
        self.draw_rectangle(0, BOARD_N + 1, 0, BOARD_M + 1)
        self.draw_rectangle(0, BOARD_N + 1, BOARD_M + 2, BOARD_M + HUD_WIDTH + 3)

        hud_left = BOARD_M + 3
        hud_right = BOARD_M + HUD_WIDTH + 2
        for top, bottom in ((1, 3), (4, 6), (7, 13), (14, 20)):
            self.draw_rectangle(top, bottom, hud_left, hud_right)

        self._put(2, BOARD_M + 5, "LEVEL: ")
        self._put(5, BOARD_M + 5, "SCORE: ")
        self._put(8, BOARD_M + 5, "NEXT: ")
        for row, text in _HELP_LINES:
            self._put(row, BOARD_M + 5, text)
        self.draw_banner(INTRO_MESSAGE)

    def draw_banner(self, banner: str) -> None:
        """Write a message across the middle of the playing field."""
        self._put(BOARD_N // 2, (BOARD_M - BANNER_LEN) // 2 + 1, banner)

    def draw_stats(self, info: GameInfo) -> None:
        """Write the level and score."""
        self._put(2, BOARD_M + 12, str(info.level))
        self._put(5, BOARD_M + 12, str(info.score))

    def draw_next(self, next_block: Optional[Matrix]) -> None:
        """Draw the preview of the next figure."""
        if not next_block:
            return
        for i, line in enumerate(next_block):
            for j, value in enumerate(line):
                x = j * 2 + BOARD_M + 10
                if value:
                    self._put_colored(i + 9, x, "[]", value)
                else:
                    self._put(i + 9, x, "  ")

    def draw_field(self, field: Optional[Matrix]) -> None:
        """Draw the playing field."""
        if not field:
            return
        for i, line in enumerate(field):
            for j, value in enumerate(line):
                if value:
                    self._put_colored(i + 1, j * 2 + 1, "[]", value)
                else:
                    self._put_colored(i + 1, j * 2 + 1, ".", EMPTY_CELL_PAIR)
                    self._put(i + 1, j * 2 + 2, " ")

    def draw(self, info: GameInfo) -> None:
        """Draw one frame for the given game state."""
        self.draw_stats(info)
        if info.pause == 1:
            self.draw_banner(INTRO_MESSAGE)
        elif info.pause == -1:
            self.draw_banner(YOU_LOSE)
        elif info.pause == -3:
            self.draw_banner(YOU_WON)
        else:
            self.draw_next(info.next)
            self.draw_field(info.field)
        self.window.refresh()
        time.sleep(FRAME_DELAY)

    def read_action(self) -> UserAction:
        """Read one key (or a timeout) and turn it into an action."""
        return key_to_action(self.window.getch())