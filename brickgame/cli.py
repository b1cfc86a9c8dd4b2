"""Command that runs the game in the terminal."""

from __future__ import annotations

import argparse
import curses
import locale
from typing import Any, List, Optional

from brickgame.frontend import Screen, init_colors
from brickgame.tetris import HIGH_SCORE_FILE, Game

INPUT_TIMEOUT_MS = 10
EXIT_SIGNAL = -2


def game_loop(screen: Any, game: Game) -> None:
    """Draw, read input and advance the game until it asks to exit."""
    while True:
        screen.draw(game.update_current_state())
        game.user_input(screen.read_action(), 0)
        if game.update_current_state().pause == EXIT_SIGNAL:
            break


def _run(stdscr: Any, high_score_path: str) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.keypad(True)
    stdscr.timeout(INPUT_TIMEOUT_MS)

    colors = curses.has_colors()
    if colors:
        init_colors()

    screen = Screen(stdscr, colors)
    screen.draw_overlay()
    game_loop(screen, Game(high_score_path))


def main(argv: Optional[List[str]] = None) -> int:
    """Start the game in the terminal."""
    parser = argparse.ArgumentParser(prog="brickgame", description="Play Tetris in the terminal.")
    parser.add_argument(
        "--high-score-file",
        default=HIGH_SCORE_FILE,
        help="file where the best score is kept (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    locale.setlocale(locale.LC_ALL, "")
    curses.wrapper(_run, args.high_score_file)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())