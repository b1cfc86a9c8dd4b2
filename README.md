# brickgame

A classic falling-blocks puzzle game for the terminal. It is built on a small
game engine that you can also drive from your own code.

The terminal interface uses Python's `curses` module. That module is part of
Python on Linux and macOS.

## Installing

    pip install .

## Playing

    brickgame

Options:

- `--high-score-file PATH` sets the file that keeps the best score. The
  default is `highest_score.txt` in the current directory.

The board is 10 columns wide and 20 rows tall. The next piece is shown beside
the board, along with your level and score.

| Key         | Action                         |
|-------------|--------------------------------|
| Enter       | start the game, pause / resume |
| Left, Right | move the piece                 |
| Down        | drop the piece to the bottom   |
| Space       | rotate the piece               |
| Esc         | quit                           |

Pieces fall one row every 3 seconds at first. Clearing rows earns points:

| Rows at once | Points |
|--------------|--------|
| 1            | 100    |
| 2            | 300    |
| 3            | 700    |
| 4            | 1500   |

Every 600 points raises the level by one. Each new level makes the pieces fall
faster: the fall interval is cut to 70% of its value. Reaching level 10 wins
the game. The game is lost when a new piece has no room to appear, or when a
landed piece leaves blocks in the top row. After a win or a loss, only Esc has
any effect.

Whenever the score beats the stored record, the new record is written to the
high-score file. A missing or unreadable file counts as no record.

## Using the engine

`brickgame.tetris.Game` holds the whole state of one game. It takes three
optional arguments:

- `high_score_path` is the file for the record.
- `rng` is a `random.Random` that picks the pieces.
- `clock` is a callable that returns the time in milliseconds.

The game only moves forward when you call `Game.user_input` with an action from
`brickgame.objects.UserAction`. Use `UserAction.START` to mean "no key
pressed". Each call takes one step of the game's state machine. The step
depends on the current `Game.status`, which is a `brickgame.tetris.State`. So
a game needs one call to leave the start screen and another to bring the first
piece in:

    from brickgame.objects import UserAction
    from brickgame.tetris import Game

    game = Game(high_score_path="scores.txt")
    game.user_input(UserAction.PAUSE)   # start a new game
    game.user_input(UserAction.START)   # the first piece appears
    game.user_input(UserAction.LEFT)    # move it one column left
    info = game.update_current_state()
    print(info.score, info.level, info.speed)

If the fall interval has passed when you make a call, that call moves the piece
down one row instead of applying your action.

`Game.update_current_state` returns a `brickgame.objects.GameInfo`. It holds:

- `field`, the 20×10 board. Empty cells are 0. Each piece type has its own
  value from 1 to 7.
- `next`, a 4×4 preview of the next piece.
- `score`, `high_score`, `level` and `speed`, where `speed` is the fall
  interval in milliseconds.
- `pause`, which is `0` while playing, `1` when paused, `-1` when the game is
  lost, `-3` when it is won and `-2` once it has ended after `UserAction.TERMINATE`.

`brickgame.frontend.Screen` draws a `GameInfo` on a curses window.
`Screen.read_action` reads one key press and turns it into a `UserAction`. The
helper `brickgame.frontend.key_to_action` does the same for a key code alone.
`brickgame.cli.game_loop(screen, game)` runs the draw / read / step loop until
the game ends.

## Running the tests

    pip install .[test]
    pytest