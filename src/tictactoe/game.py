"""Tic-tac-toe game: same history / undo pattern as chess, without any of the interesting rules."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from src.core.exceptions import GameStateError
from src.tictactoe.board import Grid, Mark, empty_board, is_stuck, tick, winner

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class TicTacToeGame:
    boards: list[Grid] = field(default_factory=list)
    turns: list[Mark] = field(default_factory=list)

    @property
    def board(self) -> Grid:
        return self.boards[-1] if self.boards else empty_board()

    @property
    def turn(self) -> Mark:
        """X starts, then marks alternate"""
        if self.turns and self.turns[-1] == Mark.X:
            return Mark.O
        return Mark.X

    @property
    def previous_turn(self) -> Optional[Mark]:
        return self.turns[-1] if self.turns else None

    @property
    def winner(self) -> Optional[Mark]:
        return winner(self.board)

    @property
    def is_over(self) -> bool:
        """Someone got three in a row, or there is no square left"""
        return self.winner is not None or is_stuck(self.board)

    def play(self, row: int, col: int) -> None:
        """Place the mark of the player to move. Raises (and keeps the history as is) if the square is not available or the game is over."""
        if self.is_over:
            raise GameStateError("Game is over, no more marks can be placed.")
        mark = self.turn
        new_board = tick(self.board, row, col, mark)
        self.boards.append(new_board)
        self.turns.append(mark)
        logger.info("%s marked (%s, %s)", mark, row, col)

    def undo(self) -> None:
        if not self.boards:
            return
        self.boards.pop()
        self.turns.pop()

    def apply(self, fn: Callable[[Grid], T]) -> T:
        return fn(self.board)
