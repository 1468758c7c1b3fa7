"""Errors raised by the game core.

All of them are recoverable by whoever drives the game: none is retried and
none should bring the process down.
"""


class GameError(Exception):
    """Base class for game core errors."""


class IllegalMove(GameError, ValueError):
    """Target cell is occupied, out of range, or the mark is not X/O."""


class NoMoveAvailable(GameError, LookupError):
    """The board is full; check ``evaluate`` before asking for a move."""


class NoRelocationTarget(GameError, LookupError):
    """A cheat triggered but no alternate cell exists (cheat aborted)."""


class OutOfTurn(GameError, RuntimeError):
    """A session command was issued in a state that does not accept it."""
