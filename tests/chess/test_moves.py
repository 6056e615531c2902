"""Unit tests for /src/chess/moves.py"""

from itertools import product
from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.moves import (
    MOVEMENT_RULES,
    InvalidMove,
    MoveResult,
    fixed_range_move,
    movement_rule,
    pawn_move,
    validate_and_move,
    variable_range_move,
)
from src.chess.pieces import Color, MoveRange, Piece, PieceType
from src.chess.square import Square

BoardFactory = Callable[[dict[str, str]], Board]
ALL_SQUARES = [Square(rank, file) for rank in range(8) for file in range(8)]
MID_GAME_FEN = "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1"


def sq(name: str) -> Square:
    """shorthand: algebraic notation reads a lot easier in the tests below"""
    return Square.from_algebraic(name)


def assert_rejected(result: MoveResult, reason: InvalidMove) -> None:
    assert not result.ok
    assert result.board is None
    assert result.reason == reason


# --- RESULT TYPE ---
def test_move_result_holds_one_thing() -> None:
    board = Board.empty()
    assert MoveResult.accepted(board).ok
    assert not MoveResult.rejected(InvalidMove.NO_MOVE).ok
    with pytest.raises(ValueError):
        MoveResult(board=board, reason=InvalidMove.NO_MOVE)
    with pytest.raises(ValueError):
        MoveResult()


# --- STRATEGY PATTERN ---
def test_rule_selection() -> None:
    assert movement_rule(Piece(Color.WHITE, PieceType.PAWN)) is pawn_move
    assert movement_rule(Piece(Color.WHITE, PieceType.KNIGHT)) is fixed_range_move
    assert movement_rule(Piece(Color.BLACK, PieceType.KING)) is fixed_range_move
    for piece_type in [PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP]:
        assert movement_rule(Piece(Color.BLACK, piece_type)) is variable_range_move
    assert set(MOVEMENT_RULES.keys()) == set(MoveRange)


# --- GENERIC CHECKS (in the order they are performed) ---
@pytest.mark.parametrize(
    "from_square, to_square",
    [(Square(8, 0), Square(7, 0)), (Square(6, 4), Square(-1, 4)), (Square(6, 4), Square(6, 8))],
)
def test_invalid_location(from_square: Square, to_square: Square) -> None:
    result = validate_and_move(Board.initial(), from_square, to_square, Color.WHITE)
    assert_rejected(result, InvalidMove.INVALID_LOCATION)


def test_no_piece() -> None:
    result = validate_and_move(Board.initial(), sq("e4"), sq("e5"), Color.WHITE)
    assert_rejected(result, InvalidMove.NO_PIECE)


@pytest.mark.parametrize(
    "from_name, to_name, color",
    [("e7", "e5", Color.WHITE), ("e2", "e4", Color.BLACK), ("g1", "f3", Color.BLACK)],
)
def test_not_your_piece(from_name: str, to_name: str, color: Color) -> None:
    result = validate_and_move(Board.initial(), sq(from_name), sq(to_name), color)
    assert_rejected(result, InvalidMove.NO_PLAYER_TURN)


@pytest.mark.parametrize(
    "from_name, to_name, color",
    [("a1", "a2", Color.WHITE), ("a1", "h1", Color.WHITE), ("d8", "e8", Color.BLACK), ("e1", "e1", Color.WHITE)],
)
def test_cannot_move_onto_own_piece(from_name: str, to_name: str, color: Color) -> None:
    result = validate_and_move(Board.initial(), sq(from_name), sq(to_name), color)
    assert_rejected(result, InvalidMove.ALREADY_OCCUPIED)


# --- PAWNS ---
@pytest.mark.parametrize(
    "pieces, from_name, to_name, color",
    [
        ({"e2": "P"}, "e2", "e3", Color.WHITE),
        ({"e2": "P"}, "e2", "e4", Color.WHITE),
        ({"d7": "p"}, "d7", "d6", Color.BLACK),
        ({"d7": "p"}, "d7", "d5", Color.BLACK),
        ({"e4": "P"}, "e4", "e5", Color.WHITE),
    ],
)
def test_pawn_pushes(
    board_with_pieces: BoardFactory,
    pieces: dict[str, str],
    from_name: str,
    to_name: str,
    color: Color,
) -> None:
    board = board_with_pieces(pieces)
    result = validate_and_move(board, sq(from_name), sq(to_name), color)
    assert result.ok
    assert result.board is not None
    assert result.board.piece(sq(to_name)) == Piece(color, PieceType.PAWN)
    assert result.board.piece(sq(from_name)) is None


def test_pawn_double_push_only_from_pawn_rank(board_with_pieces: BoardFactory) -> None:
    """White pawn on (6, file) may jump to (4, file), the same pawn on (5, file) may not jump to (3, file)"""
    board = board_with_pieces({"c2": "P", "e3": "P"})
    assert validate_and_move(board, Square(6, 2), Square(4, 2), Color.WHITE).ok
    result = validate_and_move(board, Square(5, 4), Square(3, 4), Color.WHITE)
    assert_rejected(result, InvalidMove.NO_PAWN_MOVE)


@pytest.mark.parametrize("blocker", ["N", "n"])
def test_pawn_double_push_blocked(board_with_pieces: BoardFactory, blocker: str) -> None:
    """Any piece right in front of the pawn stops the double push"""
    board = board_with_pieces({"e2": "P", "e3": blocker})
    result = validate_and_move(board, sq("e2"), sq("e4"), Color.WHITE)
    assert_rejected(result, InvalidMove.MOVE_BLOCKED)


def test_pawn_double_push_onto_opponent(board_with_pieces: BoardFactory) -> None:
    """The double push only looks at the skipped square, whatever stands on the target gets taken"""
    board = board_with_pieces({"e2": "P", "e4": "p"})
    result = validate_and_move(board, sq("e2"), sq("e4"), Color.WHITE)
    assert result.board is not None
    assert result.board.piece(sq("e4")) == Piece(Color.WHITE, PieceType.PAWN)
    assert result.board.count_pieces() == 1


def test_pawn_push_into_opponent(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"e4": "P", "e5": "p"})
    assert_rejected(
        validate_and_move(board, sq("e4"), sq("e5"), Color.WHITE), InvalidMove.MOVE_BLOCKED
    )
    assert_rejected(
        validate_and_move(board, sq("e5"), sq("e4"), Color.BLACK), InvalidMove.MOVE_BLOCKED
    )


@pytest.mark.parametrize("target", ["d5", "f5"])
def test_pawn_takes_diagonally(board_with_pieces: BoardFactory, target: str) -> None:
    board = board_with_pieces({"e4": "P", "d5": "p", "f5": "b"})
    result = validate_and_move(board, sq("e4"), sq(target), Color.WHITE)
    assert result.ok
    assert result.board is not None
    assert result.board.piece(sq(target)) == Piece(Color.WHITE, PieceType.PAWN)
    assert result.board.count_pieces() == 2


def test_black_pawn_takes_diagonally(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"e5": "p", "d4": "P"})
    result = validate_and_move(board, sq("e5"), sq("d4"), Color.BLACK)
    assert result.ok


def test_pawn_cannot_move_diagonally_without_capture(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"e4": "P"})
    result = validate_and_move(board, sq("e4"), sq("d5"), Color.WHITE)
    assert_rejected(result, InvalidMove.NO_PAWN_MOVE)


@pytest.mark.parametrize("to_name", ["e3", "d4", "f4", "e7", "c6", "d3"])
def test_pawn_other_moves(board_with_pieces: BoardFactory, to_name: str) -> None:
    """Backwards, sideways, too far, ..."""
    board = board_with_pieces({"e4": "P", "d3": "p"})
    result = validate_and_move(board, sq("e4"), sq(to_name), Color.WHITE)
    assert_rejected(result, InvalidMove.NO_MOVE)


def test_white_pawn_promotes_to_queen(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"a7": "P"})
    result = validate_and_move(board, sq("a7"), sq("a8"), Color.WHITE)
    assert result.board is not None
    assert result.board.piece(sq("a8")) == Piece(Color.WHITE, PieceType.QUEEN)


def test_black_pawn_promotes_to_queen(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"h2": "p"})
    result = validate_and_move(board, sq("h2"), sq("h1"), Color.BLACK)
    assert result.board is not None
    assert result.board.piece(sq("h1")) == Piece(Color.BLACK, PieceType.QUEEN)


def test_pawn_taking_onto_last_rank_stays_pawn(board_with_pieces: BoardFactory) -> None:
    """Only the straight advance promotes"""
    board = board_with_pieces({"a7": "P", "b8": "n"})
    result = validate_and_move(board, sq("a7"), sq("b8"), Color.WHITE)
    assert result.board is not None
    assert result.board.piece(sq("b8")) == Piece(Color.WHITE, PieceType.PAWN)
    assert result.board.count_pieces() == 1


def test_black_pawn_taking_onto_first_rank_stays_pawn(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"g2": "p", "h1": "R"})
    result = validate_and_move(board, sq("g2"), sq("h1"), Color.BLACK)
    assert result.board is not None
    assert result.board.piece(sq("h1")) == Piece(Color.BLACK, PieceType.PAWN)


# --- FIXED RANGE PIECES ---
@pytest.mark.parametrize("to_name", ["a3", "c3"])
def test_knight_jumps_over_pieces(to_name: str) -> None:
    result = validate_and_move(Board.initial(), sq("b1"), sq(to_name), Color.WHITE)
    assert result.ok


@pytest.mark.parametrize("to_name", ["b3", "d4", "b2"])
def test_knight_invalid_jumps(to_name: str) -> None:
    board = Board.from_fen("8/8/8/8/8/8/8/1N6")
    result = validate_and_move(board, sq("b1"), sq(to_name), Color.WHITE)
    assert_rejected(result, InvalidMove.NO_MOVE)


@pytest.mark.parametrize("to_name", ["d5", "e5", "f5", "d4", "f4", "d3", "e3", "f3"])
def test_king_moves_one_square(board_with_pieces: BoardFactory, to_name: str) -> None:
    board = board_with_pieces({"e4": "k"})
    result = validate_and_move(board, sq("e4"), sq(to_name), Color.BLACK)
    assert result.ok


@pytest.mark.parametrize("to_name", ["e6", "c4", "g2", "f6"])
def test_king_cannot_move_further(board_with_pieces: BoardFactory, to_name: str) -> None:
    board = board_with_pieces({"e4": "k"})
    result = validate_and_move(board, sq("e4"), sq(to_name), Color.BLACK)
    assert_rejected(result, InvalidMove.NO_MOVE)


# --- VARIABLE RANGE PIECES ---
def test_rook_blocked_along_first_rank() -> None:
    """With the h1 rook gone, the a1 rook still cannot reach h1: the other back rank pieces are in the way"""
    board = Board.initial().place_piece(sq("h1"), None)
    result = validate_and_move(board, sq("a1"), sq("h1"), Color.WHITE)
    assert_rejected(result, InvalidMove.MOVE_BLOCKED)


def test_rook_along_empty_rank(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"a1": "R", "e8": "k", "a2": "P"})
    result = validate_and_move(board, Square(7, 0), Square(7, 7), Color.WHITE)
    assert result.ok
    assert result.board is not None
    assert result.board.piece(Square(7, 7)) == Piece(Color.WHITE, PieceType.ROOK)


@pytest.mark.parametrize(
    "piece, to_name",
    [("R", "b2"), ("R", "e5"), ("R", "e6"), ("B", "d7"), ("B", "d1"), ("B", "f4")],
)
def test_sliding_pieces_wrong_direction(
    board_with_pieces: BoardFactory, piece: str, to_name: str
) -> None:
    """Rooks do not go diagonal, bishops do not go straight"""
    board = board_with_pieces({"d4": piece})
    result = validate_and_move(board, sq("d4"), sq(to_name), Color.WHITE)
    assert_rejected(result, InvalidMove.NO_MOVE)


@pytest.mark.parametrize(
    "piece, to_name",
    [("R", "d8"), ("R", "a4"), ("B", "h8"), ("B", "a1"), ("Q", "h4"), ("Q", "g1"), ("Q", "d1")],
)
def test_sliding_pieces_on_empty_board(
    board_with_pieces: BoardFactory, piece: str, to_name: str
) -> None:
    board = board_with_pieces({"d4": piece})
    result = validate_and_move(board, sq("d4"), sq(to_name), Color.WHITE)
    assert result.ok


@pytest.mark.parametrize(
    "piece, to_name",
    [("B", "e7"), ("B", "a5"), ("Q", "f5"), ("Q", "b3"), ("Q", "g8")],
)
def test_sliding_pieces_judged_by_direction(
    board_with_pieces: BoardFactory, piece: str, to_name: str
) -> None:
    """Off-line targets are accepted when their direction belongs to the piece and the walked path is clear"""
    board = board_with_pieces({"d4": piece})
    result = validate_and_move(board, sq("d4"), sq(to_name), Color.WHITE)
    assert result.board is not None
    assert result.board.piece(sq(to_name)) == Piece.from_fen(piece)


def test_off_line_slide_blocked_on_walked_path(board_with_pieces: BoardFactory) -> None:
    """d4 towards e7 walks over e5 and f6"""
    board = board_with_pieces({"d4": "B", "f6": "p"})
    result = validate_and_move(board, sq("d4"), sq("e7"), Color.WHITE)
    assert_rejected(result, InvalidMove.MOVE_BLOCKED)


def test_bishop_blocked_in_starting_position() -> None:
    result = validate_and_move(Board.initial(), sq("f1"), sq("c4"), Color.WHITE)
    assert_rejected(result, InvalidMove.MOVE_BLOCKED)


def test_queen_captures_at_end_of_line(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"d1": "q", "d7": "R", "e8": "k"})
    result = validate_and_move(board, sq("d1"), sq("d7"), Color.BLACK)
    assert result.board is not None
    assert result.board.piece(sq("d7")) == Piece(Color.BLACK, PieceType.QUEEN)
    assert result.board.count_pieces() == 2


def test_queen_cannot_capture_behind_blocker(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"d1": "q", "d4": "p", "d7": "R"})
    result = validate_and_move(board, sq("d1"), sq("d7"), Color.BLACK)
    assert_rejected(result, InvalidMove.MOVE_BLOCKED)


# --- PROPERTIES OVER ALL MOVES ---
def test_twenty_moves_in_starting_position() -> None:
    """16 pawn moves + 4 knight moves, everything else is blocked"""
    board = Board.initial()
    accepted = [
        (from_square, to_square)
        for from_square, to_square in product(ALL_SQUARES, ALL_SQUARES)
        if validate_and_move(board, from_square, to_square, Color.WHITE).ok
    ]
    assert len(accepted) == 20


@pytest.mark.parametrize("fen", [Board.initial().to_fen(), MID_GAME_FEN])
@pytest.mark.parametrize("color", [Color.WHITE, Color.BLACK])
def test_accepted_moves_only_touch_two_squares(fen: str, color: Color) -> None:
    """Piece count stays the same (or drops by one for a capture), and only the from/to squares change"""
    board = Board.from_fen(fen)
    for from_square, to_square in product(ALL_SQUARES, ALL_SQUARES):
        result = validate_and_move(board, from_square, to_square, color)
        if result.board is None:
            continue
        assert board.count_pieces() - result.board.count_pieces() in (0, 1)
        assert result.board.piece(from_square) is None
        assert result.board.is_occupied_by(to_square, color)
        for square in ALL_SQUARES:
            if square not in (from_square, to_square):
                assert result.board.piece(square) == board.piece(square)
