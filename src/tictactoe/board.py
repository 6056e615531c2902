"""Tic-tac-toe board: 3x3 immutable grid of marks, and the (simple) rules that come with it."""

from enum import Enum
from typing import Optional

from src.core.exceptions import InvalidSquareError, SquareOccupiedError

BOARD_SIZE = 3


class Mark(Enum):
    X = "X"
    O = "O"

    def __str__(self) -> str:
        return self.value


Cell = Optional[Mark]
Grid = tuple[tuple[Cell, ...], ...]


def empty_board() -> Grid:
    return tuple(tuple(None for _ in range(BOARD_SIZE)) for _ in range(BOARD_SIZE))


def is_valid_position(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_occupied(board: Grid, row: int, col: int) -> bool:
    return board[row][col] is not None


def available(board: Grid) -> list[tuple[int, int]]:
    """Squares without a mark, row by row"""
    return [
        (row, col)
        for row in range(BOARD_SIZE)
        for col in range(BOARD_SIZE)
        if not is_occupied(board, row, col)
    ]


def tick(board: Grid, row: int, col: int, mark: Mark) -> Grid:
    """Return a new board with the mark placed. The given board stays as it is."""
    if not is_valid_position(row, col):
        raise InvalidSquareError(f"Invalid position: ({row}, {col})")
    if is_occupied(board, row, col):
        raise SquareOccupiedError(f"Position ({row}, {col}) already occupied")
    return tuple(
        tuple(mark if (r, c) == (row, col) else cell for c, cell in enumerate(cells))
        for r, cells in enumerate(board)
    )


def _lines(board: Grid) -> list[tuple[Cell, ...]]:
    """All rows, columns and both diagonals"""
    rows = list(board)
    cols = [tuple(board[r][c] for r in range(BOARD_SIZE)) for c in range(BOARD_SIZE)]
    diagonals = [
        tuple(board[i][i] for i in range(BOARD_SIZE)),
        tuple(board[i][BOARD_SIZE - 1 - i] for i in range(BOARD_SIZE)),
    ]
    return rows + cols + diagonals


def has_won(board: Grid, mark: Mark) -> bool:
    winning_line = (mark,) * BOARD_SIZE
    return winning_line in _lines(board)


def winner(board: Grid) -> Optional[Mark]:
    """X is checked first (it can only matter on boards that could not be reached by playing)"""
    for mark in Mark:
        if has_won(board, mark):
            return mark
    return None


def is_stuck(board: Grid) -> bool:
    """No square left to mark"""
    return not available(board)
