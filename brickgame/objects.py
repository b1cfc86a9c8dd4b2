"""Data exchanged between the game logic and its user interface."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

Matrix = List[List[int]]


class UserAction(IntEnum):
    """Controls the player can use."""

    START = 0
    PAUSE = 1
    TERMINATE = 2
    LEFT = 3
    RIGHT = 4
    UP = 5
    DOWN = 6
    ACTION = 7


@dataclass
class GameInfo:
    """What the interface needs to draw one frame."""

    field: Optional[Matrix]
    next: Optional[Matrix]
    score: int
    high_score: int
    level: int
    speed: int
    pause: int