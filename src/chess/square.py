"""
A square on the board + the geometry helpers working on squares and move vectors.

(placed in its own module as multiple other modules need to import it)

Orientation: rank 0 is Black's back rank, rank 7 is White's back rank. Files run 0 (a-file) to 7 (h-file).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from src.chess.pieces import Color, Piece

logger = logging.getLogger(__name__)

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)

# Longest possible straight line on the board, used to cast rays for sliding pieces
MAX_RANGE = BOARD_DIMENSIONS[0] - 1

# (rank delta, file delta)
Vector = tuple[int, int]


class Board(Protocol):
    """Just the parts the path helpers need"""

    def piece(self, square: Square) -> Optional[Piece]: ...


@dataclass(frozen=True)
class Square:
    rank: int
    file: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' is (0, 0) (black's corner), 'h1' is (7, 7) (white's corner)"""
        file = ord(sq[0]) - ord("a")
        rank = BOARD_DIMENSIONS[0] - int(sq[1:])
        return cls(rank, file)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{BOARD_DIMENSIONS[0] - self.rank}"

    def is_within_bounds(self) -> bool:
        return is_valid_square(self.rank, self.file)


def is_valid_square(rank: int, file: int) -> bool:
    return (0 <= rank < BOARD_DIMENSIONS[0]) and (0 <= file < BOARD_DIMENSIONS[1])


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# --- MOVE VECTORS ---
def move_vector(from_square: Square, to_square: Square, color: Color) -> Vector:
    """
    Displacement expressed relative to the mover's forward direction.
    ---

    Black moves down the board (rank increases), White moves up (rank decreases).
    Flipping the sign for White means both colors share the same vector tables:
    a pawn push is always (1, 0), no matter who pushes it.
    """
    forward = color.forward
    return (
        forward * (to_square.rank - from_square.rank),
        forward * (to_square.file - from_square.file),
    )


def normalize_vector(vector: Vector) -> Vector:
    """Unit direction of a vector (sign of each component)"""
    d_rank, d_file = vector
    return (_sign(d_rank), _sign(d_file))


def next_square(square: Square, color: Color, vector: Vector) -> Square:
    """Inverse of `move_vector`: apply a color relative vector to a square."""
    forward = color.forward
    d_rank, d_file = vector
    return Square(square.rank + forward * d_rank, square.file + forward * d_file)


# --- PATHS ---
def create_path(from_square: Square, to_square: Square) -> list[Square]:
    """
    Squares stepping from `from_square` towards `to_square`, as many steps as the longer component of the
    displacement. `from_square` is first. `to_square` is last when both lie on one straight line.

    NOTE: squares are not checked to be on the board (rays are projected off the board on purpose).
    """
    d_rank = to_square.rank - from_square.rank
    d_file = to_square.file - from_square.file
    step = normalize_vector((d_rank, d_file))
    num_steps = max(abs(d_rank), abs(d_file))
    return [
        Square(from_square.rank + i * step[0], from_square.file + i * step[1])
        for i in range(num_steps + 1)
    ]


def is_path_blocked(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    Is any square strictly in between the two squares occupied?

    Only the direction of the displacement is followed, so for a bent displacement (g7 to h4) the walk can run off
    the board before reaching the target rank or file. Off-board squares never block.
    """
    in_between = create_path(from_square, to_square)[1:-1]
    for square in in_between:
        if not square.is_within_bounds():
            break
        logger.debug("Walk over: %s", square)
        if board.piece(square) is not None:
            return True
    return False


def find_path_blocker(
    from_square: Square, color: Color, vector: Vector, board: Board
) -> Optional[tuple[Square, Piece]]:
    """
    Raycasting
    ----

    Walk from `from_square` along the (color relative) direction until we hit a piece or the edge of the board.
    Returns the nearest occupied square + the piece standing there, or None when the ray leaves the board.
    """
    max_range: Vector = (vector[0] * MAX_RANGE, vector[1] * MAX_RANGE)
    ray_end = next_square(from_square, color, max_range)
    for square in create_path(from_square, ray_end)[1:]:
        if not square.is_within_bounds():
            break
        piece = board.piece(square)
        if piece is not None:
            return square, piece
    return None
