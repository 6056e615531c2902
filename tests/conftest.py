"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.config import reset_settings

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * 8)


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Settings are cached globally: make sure every test reads them from its own environment."""
    reset_settings()
    try:
        yield
    finally:
        reset_settings()


@pytest.fixture
def board_with_pieces() -> Callable[[dict[str, str]], Board]:
    """
    Call the inner function with a mapping of algebraic square -> FEN character
    ex. {"e1": "K", "e8": "k"} creates a board with only the two kings.
    """

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.from_fen(EMPTY_FEN)
        for square_name, fen_char in pieces.items():
            board = board.place_piece(
                Square.from_algebraic(square_name), Piece.from_fen(fen_char)
            )
        return board

    return _create_board
