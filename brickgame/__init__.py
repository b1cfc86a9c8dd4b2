"""A terminal falling-blocks puzzle game, its game engine and curses interface."""

__version__ = "1.0.0"
__all__ = ["objects", "tetris", "frontend", "cli"]