"""Tetris game logic driven as a finite state machine."""

from __future__ import annotations

import math
import random
import re
import time
from enum import IntEnum
from pathlib import Path
from typing import Callable, Optional, Tuple

from brickgame.objects import GameInfo, Matrix, UserAction

FIELD_COLS = 10
FIELD_ROWS = 20
BLOCK_SIZE = 4

HIGH_SCORE_FILE = "highest_score.txt"

SPEED_START = 3000
LEVEL_MAX = 10
LEVEL_STEP = 600

LINE_COSTS = {1: 100, 2: 300, 3: 700, 4: 1500}

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class State(IntEnum):
    """States of the game's state machine."""

    START = 0
    SPAWN = 1
    ACTION = 2
    SHIFTING = 3
    ATTACHING = 4
    GAMEOVER = 5


class Figure(IntEnum):
    """The seven tetrominoes."""

    J = 0
    L = 1
    O = 2  # noqa: E741
    I = 3  # noqa: E741
    Z = 4
    S = 5
    T = 6


# Cell value (also the colour index) and occupied cells of each figure.
_SHAPES = {
    Figure.L: (1, ((0, 1), (1, 1), (2, 1), (2, 2))),
    Figure.J: (2, ((0, 1), (1, 1), (2, 1), (2, 0))),
    Figure.S: (3, ((1, 1), (1, 2), (2, 1), (2, 0))),
    Figure.Z: (4, ((1, 0), (1, 1), (2, 1), (2, 2))),
    Figure.I: (5, ((1, 0), (1, 1), (1, 2), (1, 3))),
    Figure.T: (6, ((1, 0), (1, 1), (1, 2), (0, 1))),
    Figure.O: (7, ((0, 1), (0, 2), (1, 1), (1, 2))),
}


def create_matrix(rows: int, cols: int) -> Matrix:
    """Return a rows x cols matrix of zeros."""
    return [[0] * cols for _ in range(rows)]


def copy_matrix(src: Matrix) -> Matrix:
    """Return an independent copy of a matrix."""
    return [list(row) for row in src]


def fill_block(block: Matrix, name: int) -> None:
    """Draw the figure called ``name`` into ``block``; unknown names are ignored."""
    shape = _SHAPES.get(name)
    if shape is None:
        return
    value, cells = shape
    for row, col in cells:
        block[row][col] = value


def get_time() -> int:
    """Current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def _c_remainder(value: int, divisor: int) -> int:
    return int(math.fmod(value, divisor))


class Game:
    """A single game of Tetris and its state machine."""

    def __init__(
        self,
        high_score_path: str | Path = HIGH_SCORE_FILE,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.high_score_path = Path(high_score_path)
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock if clock is not None else get_time

        self.status = State.START
        self.pause = 0
        self.field: Optional[Matrix] = None
        self.next_name = 0
        self.next: Optional[Matrix] = None
        self.block_name = 0
        self.block: Optional[Matrix] = None
        self.block_x = 0
        self.block_y = 0
        self.rotate_count = 0
        self.score = 0
        self.high_score = 0
        self.level = 0
        self.speed = 0
        self.start_time = 0

    # -- public interface -------------------------------------------------

    def user_input(self, action: UserAction, hold: int = 0) -> None:
        """Feed one user action (or idle tick) into the state machine."""
        del hold
        control = (UserAction.PAUSE, UserAction.TERMINATE)
        if self.status == State.START and action not in control:
            return
        if self.status == State.GAMEOVER and action != UserAction.TERMINATE:
            return
        if self.pause and action not in control:
            return
        if action == UserAction.TERMINATE:
            self.status = State.GAMEOVER
        if action == UserAction.PAUSE:
            self.pause = _c_remainder(self.pause + 1, 2)

        self.check_time()

        if self.status == State.START:
            self.game_init()
        elif self.status == State.SPAWN:
            self.block_spawn()
        elif self.status == State.ACTION:
            self.block_moving(action)
        elif self.status == State.SHIFTING:
            self.shift_down()
        elif self.status == State.ATTACHING:
            self.block_attaching()
        elif self.status == State.GAMEOVER:
            self.game_end()

    def update_current_state(self) -> GameInfo:
        """Snapshot of what the interface needs to draw."""
        return GameInfo(
            field=self.field,
            next=self.next,
            score=self.score,
            high_score=self.high_score,
            level=self.level,
            speed=self.speed,
            pause=self.pause,
        )

    # -- state transitions ------------------------------------------------

    def game_init(self) -> None:
        """Start a new game and move to SPAWN."""
        self.pause = 0
        self.field = create_matrix(FIELD_ROWS, FIELD_COLS)
        self.next_name = self.rng.randrange(7)
        self.score = 0
        self.load_high_score()
        self.level = 1
        self.speed = SPEED_START
        self.start_time = self.clock()
        self.status = State.SPAWN

    def block_spawn(self) -> None:
        """Bring the next figure onto the field."""
        self.block_name = self.next_name
        self.next_name = self.rng.randrange(7)

        self.next = create_matrix(BLOCK_SIZE, BLOCK_SIZE)
        self.block = create_matrix(BLOCK_SIZE, BLOCK_SIZE)
        fill_block(self.next, self.next_name)
        fill_block(self.block, self.block_name)

        self.block_y = 0
        self.block_x = (FIELD_COLS - BLOCK_SIZE) // 2
        self.rotate_count = 3 if self.block_name in (Figure.S, Figure.Z) else 1

        if self.check_attached():
            self.status = State.GAMEOVER
            self.pause = -1
        else:
            self.pin_block()
            self.status = State.ACTION

    def game_end(self) -> None:
        """Drop the game's matrices and signal that the game is over."""
        self.field = None
        self.next = None
        self.block = None
        self.pause = -2

    def block_attaching(self) -> None:
        """Settle a landed figure: clear rows, score, level, overflow."""
        self.status = State.SPAWN
        count = self.check_row()
        self.update_score(count)
        self.update_level()
        self.check_overflow()

    def check_overflow(self) -> None:
        """End the game if anything remains in the top row."""
        if self.status == State.GAMEOVER:
            return
        self.status = State.SPAWN
        if any(self.field[0]):
            self.status = State.GAMEOVER
            self.pause = -1

    # -- scoring ----------------------------------------------------------

    def update_score(self, count: int) -> None:
        """Add points for ``count`` cleared rows and track the record."""
        self.score += LINE_COSTS.get(count, 0)
        if self.score > self.high_score:
            self.save_high_score()
            self.high_score = self.score

    def update_level(self) -> None:
        """Raise the level from the score; the top level wins the game."""
        old_level = self.level
        self.level = self.score // LEVEL_STEP + 1
        if self.level > old_level:
            self.speed = int(self.speed * 0.7)
        if self.level >= LEVEL_MAX:
            self.level = LEVEL_MAX
            self.status = State.GAMEOVER
            self.pause = -3

    def load_high_score(self) -> None:
        """Read the stored record, leaving it unchanged if unavailable."""
        try:
            text = self.high_score_path.read_text()
        except OSError:
            return
        match = _INT_PREFIX.match(text)
        if match:
            self.high_score = int(match.group(1))

    def save_high_score(self) -> None:
        """Store the current score as the record."""
        try:
            self.high_score_path.write_text(str(self.score))
        except OSError:
            pass

    # -- field handling ---------------------------------------------------

    def check_row(self) -> int:
        """Remove every full row and return how many were removed."""
        kept = [row for row in self.field if not all(row)]
        count = FIELD_ROWS - len(kept)
        self.field[:] = create_matrix(count, FIELD_COLS) + kept
        return count

    def delete_row(self, row: int) -> None:
        """Remove one row, shifting the rows above it down."""
        del self.field[row]
        self.field.insert(0, [0] * FIELD_COLS)

    def _cells(self):
        for i, line in enumerate(self.block):
            y = self.block_y + i
            if y < 0:
                continue
            for j, value in enumerate(line):
                if value:
                    yield y, self.block_x + j, value

    def check_attached(self) -> bool:
        """True if the figure overlaps a wall, the floor or other blocks."""
        for y, x, _ in self._cells():
            if x < 0 or x > FIELD_COLS - 1 or y > FIELD_ROWS - 1 or self.field[y][x]:
                return True
        return False

    def pin_block(self) -> None:
        """Draw the figure onto the field."""
        for y, x, value in self._cells():
            self.field[y][x] = value

    def unpin_block(self) -> None:
        """Erase the figure from the field."""
        for y, x, _ in self._cells():
            self.field[y][x] = 0

    # -- movement ---------------------------------------------------------

    def check_time(self) -> None:
        """Schedule a gravity step once the speed interval has elapsed."""
        if self.status == State.ACTION:
            if self.clock() - self.start_time > self.speed:
                self.start_time = self.clock()
                self.status = State.SHIFTING

    def block_moving(self, action: UserAction) -> None:
        """Apply a movement action to the current figure."""
        if action == UserAction.LEFT:
            self.shift_left()
        elif action == UserAction.RIGHT:
            self.shift_right()
        elif action == UserAction.DOWN:
            self.fall_down()
        elif action == UserAction.ACTION:
            self.rotate()

    def rotate_matrix(self) -> None:
        """Turn the current figure a quarter turn clockwise."""
        size = BLOCK_SIZE if self.block_name == Figure.I else BLOCK_SIZE - 1
        rotated = create_matrix(BLOCK_SIZE, BLOCK_SIZE)
        for i in range(size):
            for j in range(size):
                rotated[j][size - 1 - i] = self.block[i][j]
        self.block = rotated

    def rotation_prepare(self) -> Tuple[bool, bool]:
        """Return (shift_right, shift_left): whether to bounce off a side wall."""
        first_column_used = any(line[0] for line in self.block)
        shift_right = self.block_x < 0 and first_column_used
        shift_left = self.block_x > FIELD_COLS - 1 and first_column_used
        return shift_right, shift_left

    def rotate(self) -> None:
        """Rotate the figure if there is room for it."""
        if self.block_name == Figure.O:
            return

        self.unpin_block()
        previous = self.block
        self.block = copy_matrix(previous)
        for _ in range(self.rotate_count):
            self.rotate_matrix()

        shift_right, shift_left = self.rotation_prepare()
        if shift_right:
            self.block_x += 1
        if shift_left:
            self.block_x -= 1

        if self.check_attached():
            if shift_right:
                self.block_x -= 1
            if shift_left:
                self.block_x += 1
            self.block = previous
        elif self.block_name in (Figure.I, Figure.S, Figure.Z):
            self.rotate_count = 3 if self.rotate_count == 1 else 1
        self.pin_block()
        self.status = State.ACTION

    def _shift_sideways(self, step: int) -> None:
        self.unpin_block()
        self.block_x += step
        if self.check_attached():
            self.block_x -= step
        self.pin_block()
        self.status = State.ACTION

    def shift_left(self) -> None:
        """Move the figure one column left if possible."""
        self._shift_sideways(-1)

    def shift_right(self) -> None:
        """Move the figure one column right if possible."""
        self._shift_sideways(1)

    def shift_down(self) -> None:
        """Move the figure one row down, or mark it as landed."""
        self.unpin_block()
        self.block_y += 1
        if self.check_attached():
            self.block_y -= 1
            self.status = State.ATTACHING
        else:
            self.status = State.ACTION
        self.pin_block()

    def fall_down(self) -> None:
        """Drop the figure until it lands."""
        while self.status != State.ATTACHING:
            self.shift_down()