"""
Custom exceptions shared across layers.

Rule violations inside the game engines are returned as values (see `InvalidMove`),
these exceptions are raised at the boundaries (service / API) or when an invariant is broken.
"""

from typing import Any


class GameError(Exception):
    """Base class: catch this one if you do not care which layer complained."""


class GameStateError(GameError):
    """The game is not in a state where the request makes sense."""


class IllegalMoveError(GameError):
    """A move was rejected by the rules. The rejection reason travels along with the exception."""

    def __init__(self, message: str, reason: Any = None) -> None:
        super().__init__(message)
        self.reason = reason


class MissingKingError(GameError):
    """Board without a king for the color being classified. Game.play reports a taken king as checkmate instead."""


class SquareOccupiedError(GameError):
    """Tic-tac-toe: trying to mark a square that already carries a mark."""


class InvalidSquareError(GameError):
    """Coordinates outside of the board."""


class InvalidRequestError(GameError, ValueError):
    """Request data could not be interpreted. (Also a ValueError, so pydantic reports it as a validation error.)"""


class InvalidFENError(InvalidRequestError):
    """Piece placement string that does not describe an 8x8 board."""


class RepositoryError(GameError):
    """Something went wrong while looking up / storing a game."""
