"""
Move validation
----

Key idea: Use strategy pattern to define the legality rules per kind of piece (pawn / fixed range / variable range).

Rule violations are not exceptional: they come back as an `InvalidMove` reason inside a `MoveResult`,
and the original board is left untouched.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Self

from src.chess.board import Board
from src.chess.pieces import Color, MoveRange, Piece, PieceType
from src.chess.square import (
    BOARD_DIMENSIONS,
    Square,
    is_path_blocked,
    move_vector,
    normalize_vector,
)

logger = logging.getLogger(__name__)


class InvalidMove(Enum):
    NO_PLAYER_TURN = auto()
    NO_PIECE = auto()
    INVALID_LOCATION = auto()
    ALREADY_OCCUPIED = auto()
    NO_MOVE = auto()
    NO_PAWN_MOVE = auto()
    MOVE_BLOCKED = auto()
    NOT_IMPLEMENTED = auto()


@dataclass(frozen=True)
class MoveResult:
    """Either the board after the move, or the reason the move got rejected. Never both."""

    board: Optional[Board] = None
    reason: Optional[InvalidMove] = None

    def __post_init__(self) -> None:
        if (self.board is None) == (self.reason is None):
            raise ValueError("MoveResult holds exactly one of: board, reason")

    @classmethod
    def accepted(cls, board: Board) -> Self:
        return cls(board=board)

    @classmethod
    def rejected(cls, reason: InvalidMove) -> Self:
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.board is not None


PROMOTION_RANKS = (0, BOARD_DIMENSIONS[0] - 1)


# --- MOVEMENT RULES ---
def pawn_move(
    from_square: Square, to_square: Square, piece: Piece, board: Board
) -> MoveResult:
    """
    A pawn:
    - moves by a single square forward, as long as it does not run into an opponent's piece
    - can move by two from its starting rank, if the square it skips is empty
    - takes diagonally (and only diagonally)

    A straight advance onto the first / last rank promotes the pawn to a queen right away (no choice offered).
    A pawn that takes onto that rank stays a pawn.
    """
    color = piece.color
    mv = move_vector(from_square, to_square, color)
    logger.debug("Pawn vector: %s", mv)
    opponent_on_target = board.is_occupied_by(to_square, color.opponent)

    arriving_piece = piece
    match mv:
        case (1, 0):
            if opponent_on_target:
                return MoveResult.rejected(InvalidMove.MOVE_BLOCKED)
            if to_square.rank in PROMOTION_RANKS:
                arriving_piece = Piece(color, PieceType.QUEEN)
        case (2, 0):
            if from_square.rank != color.pawn_rank:
                return MoveResult.rejected(InvalidMove.NO_PAWN_MOVE)
            if is_path_blocked(from_square, to_square, board):
                return MoveResult.rejected(InvalidMove.MOVE_BLOCKED)
        case (1, -1) | (1, 1):
            if not opponent_on_target:
                return MoveResult.rejected(InvalidMove.NO_PAWN_MOVE)
        case _:
            return MoveResult.rejected(InvalidMove.NO_MOVE)

    return MoveResult.accepted(board.move_piece(from_square, to_square, arriving_piece))


def fixed_range_move(
    from_square: Square, to_square: Square, piece: Piece, board: Board
) -> MoveResult:
    """King and Knight: the displacement must be exactly one of the piece's vectors (Knights jump, so nothing blocks them)"""
    mv = move_vector(from_square, to_square, piece.color)
    logger.debug("Fixed range vector: %s", mv)
    if mv not in piece.rule.vectors:
        return MoveResult.rejected(InvalidMove.NO_MOVE)
    return MoveResult.accepted(board.move_piece(from_square, to_square, piece))


def variable_range_move(
    from_square: Square, to_square: Square, piece: Piece, board: Board
) -> MoveResult:
    """
    Queen, Rook and Bishop slide along their directions, any distance, until something is in the way.

    The target itself may hold an opponent's piece (capture). Squares strictly in between must be empty.
    """
    mv = move_vector(from_square, to_square, piece.color)
    direction = normalize_vector(mv)
    logger.debug("Variable range vector: %s (direction %s)", mv, direction)
    if direction not in piece.rule.vectors:
        return MoveResult.rejected(InvalidMove.NO_MOVE)
    if is_path_blocked(from_square, to_square, board):
        return MoveResult.rejected(InvalidMove.MOVE_BLOCKED)
    return MoveResult.accepted(board.move_piece(from_square, to_square, piece))


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MoveRuleFn = Callable[[Square, Square, Piece, Board], MoveResult]
MOVEMENT_RULES: dict[MoveRange, MoveRuleFn] = {
    MoveRange.FIXED: fixed_range_move,
    MoveRange.VARIABLE: variable_range_move,
}


def movement_rule(piece: Piece) -> MoveRuleFn:
    """Pawns get their own rule, everything else is picked by move range"""
    if piece.type == PieceType.PAWN:
        return pawn_move
    return MOVEMENT_RULES[piece.rule.move_range]


def validate_and_move(
    board: Board, from_square: Square, to_square: Square, color: Color
) -> MoveResult:
    """
    Single entry point for moving a piece
    -----

    1. both squares must be on the board
    2. there must be a piece on the starting square
    3. ... and it must be yours
    4. you cannot move onto your own piece
    5. the piece specific rule decides the rest

    Returns the new board, or the reason the move was rejected. The given board is never modified.
    """
    if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
        return MoveResult.rejected(InvalidMove.INVALID_LOCATION)

    piece = board.piece(from_square)
    if piece is None:
        return MoveResult.rejected(InvalidMove.NO_PIECE)

    if piece.color != color:
        return MoveResult.rejected(InvalidMove.NO_PLAYER_TURN)

    if board.is_occupied_by(to_square, color):
        return MoveResult.rejected(InvalidMove.ALREADY_OCCUPIED)

    logger.debug("Moving %s from %s to %s", piece.code, from_square, to_square)
    rule = movement_rule(piece)
    return rule(from_square, to_square, piece, board)
