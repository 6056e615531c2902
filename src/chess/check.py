"""
Check / checkmate detection
----

Instead of asking "where can every opponent piece go?", we look outwards from the square that is (possibly) under
attack and ask "is there an opponent piece standing where it could take on this square?".
"""

import logging
from enum import Enum, auto
from typing import Callable

from src.chess.board import Board
from src.chess.pieces import (
    ALL_DIRECTIONS,
    KNIGHT_JUMPS,
    PAWN_CAPTURE_VECTORS,
    PIECE_RULES,
    Color,
    MoveRange,
    Piece,
    PieceType,
)
from src.chess.square import Square, Vector, find_path_blocker, next_square
from src.core.exceptions import MissingKingError

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Classification of a position right after a move"""

    NEXT_PLAYER = auto()
    CHECK = auto()
    CHECKMATE = auto()


# --- ATTACKING RULES ---
def single_step_attack(
    square: Square,
    color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: tuple[Vector, ...],
) -> bool:
    """
    Jump from the square by every delta (oriented by the defending `color`) and look for an opponent's piece
    of the specified type. Nothing in between matters.
    """
    attacker = Piece(color.opponent, by_piece_type)
    for delta in deltas:
        target_square = next_square(square, color, delta)
        if not target_square.is_within_bounds():
            continue
        if board.piece(target_square) == attacker:
            logger.debug("%s threat from %s", by_piece_type.name, target_square)
            return True
    return False


def is_attacked_by_knight(square: Square, color: Color, board: Board) -> bool:
    """Knights jump, so blockers are irrelevant"""
    return single_step_attack(square, color, PieceType.KNIGHT, board, KNIGHT_JUMPS)


def is_attacked_by_pawn(square: Square, color: Color, board: Board) -> bool:
    """
    Pawns take diagonally forward.
    ----

    NOTE: Looking from the defender's side, "one rank forward" (defender oriented) is exactly where an opponent's
    pawn has to stand to be able to take on this square (it moves in the opposite direction).
    So the capture vectors can be reused as they are.
    """
    return single_step_attack(
        square, color, PieceType.PAWN, board, PAWN_CAPTURE_VECTORS
    )


def is_attacked_by_slider(square: Square, color: Color, board: Board) -> bool:
    """
    Raycasting for attacks by Queen, Rook and Bishop in one go.
    ----

    Cast a ray in each of the queen's 8 directions and look at the first piece found.
    It is a threat when it is the opponent's and it slides along that same direction.
    (A rook simply has no diagonal directions, a bishop no straight ones.)
    """
    for direction in ALL_DIRECTIONS:
        blocker = find_path_blocker(square, color, direction, board)
        if blocker is None:
            continue
        blocker_square, piece = blocker
        if (
            piece.color == color.opponent
            and piece.rule.move_range == MoveRange.VARIABLE
            and direction in piece.rule.vectors
        ):
            logger.debug(
                "%s threat from %s (direction %s)",
                piece.type.name,
                blocker_square,
                direction,
            )
            return True
    return False


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Color, Board], bool]
ATTACK_RULES: tuple[IsAttackedFn, ...] = (
    is_attacked_by_knight,
    is_attacked_by_pawn,
    is_attacked_by_slider,
)


def is_threatened(square: Square, color: Color, board: Board) -> bool:
    """Could any opponent piece take a piece of `color` standing on this square?"""
    return any(rule(square, color, board) for rule in ATTACK_RULES)


def locate_king(color: Color, board: Board) -> Square:
    kings = board.locate(Piece(color, PieceType.KING))
    if not kings:
        raise MissingKingError(f"No {color.name.lower()} king on the board.")
    return kings[0]


def king_escapes(king_square: Square, color: Color, board: Board) -> list[Square]:
    """
    Squares next to the king that are on the board, empty and not threatened.

    NOTE: The king is not actually moved for this test, only the squares are evaluated.
    """
    escapes: list[Square] = []
    for delta in PIECE_RULES[PieceType.KING].vectors:
        candidate = next_square(king_square, color, delta)
        if not candidate.is_within_bounds() or not board.is_vacant(candidate):
            continue
        if not is_threatened(candidate, color, board):
            escapes.append(candidate)
    return escapes


def classify(color: Color, board: Board) -> Outcome:
    """
    Is the king of `color` in check, checkmate, or fine?
    ---

    Checkmate only looks at king mobility: capturing the attacker or blocking the line is not considered.
    """
    king_square = locate_king(color, board)
    if not is_threatened(king_square, color, board):
        return Outcome.NEXT_PLAYER

    escapes = king_escapes(king_square, color, board)
    logger.debug("King escapes for %s: %s", color.name, escapes)
    return Outcome.CHECK if escapes else Outcome.CHECKMATE
