"""
Piece catalog: the static tables describing colors, piece types and how every piece type moves.

Vectors are (rank delta, file delta) relative to the mover's forward direction (see `square.move_vector`),
so one table serves both colors.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.chess.square import Vector


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def code(self) -> str:
        return COLOR_RULES[self].code

    @property
    def piece_rank(self) -> int:
        return COLOR_RULES[self].piece_rank

    @property
    def pawn_rank(self) -> int:
        return COLOR_RULES[self].pawn_rank

    @property
    def forward(self) -> int:
        return COLOR_RULES[self].forward

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


@dataclass(frozen=True)
class ColorRule:
    """
    code: used when rendering the board ("1K" is the white king)
    piece_rank / pawn_rank: where the pieces start. The pawn rank also decides if a pawn may move two squares.
    forward: rank direction a pawn of this color moves in.
    """

    code: str
    piece_rank: int
    pawn_rank: int
    forward: int


# White sits at the bottom of the board (rank 7) and moves up, Black at the top (rank 0) and moves down.
COLOR_RULES: dict[Color, ColorRule] = {
    Color.WHITE: ColorRule(code="1", piece_rank=7, pawn_rank=6, forward=-1),
    Color.BLACK: ColorRule(code="2", piece_rank=0, pawn_rank=1, forward=1),
}


class MoveRange(Enum):
    FIXED = auto()  # moves by exactly one of its vectors
    VARIABLE = auto()  # slides any distance along one of its vectors


class PieceType(Enum):
    KING = auto()
    QUEEN = auto()
    ROOK = auto()
    BISHOP = auto()
    KNIGHT = auto()
    PAWN = auto()


@dataclass(frozen=True)
class PieceRule:
    code: str
    move_range: MoveRange
    vectors: tuple[Vector, ...]


STRAIGHTS: tuple[Vector, ...] = ((1, 0), (0, -1), (0, 1), (-1, 0))
DIAGONALS: tuple[Vector, ...] = ((1, -1), (1, 1), (-1, -1), (-1, 1))
ALL_DIRECTIONS: tuple[Vector, ...] = (
    (1, -1),
    (1, 0),
    (1, 1),
    (0, -1),
    (0, 1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)
KNIGHT_JUMPS: tuple[Vector, ...] = (
    (2, -1),
    (2, 1),
    (1, -2),
    (1, 2),
    (-1, -2),
    (-1, 2),
    (-2, -1),
    (-2, 1),
)

PIECE_RULES: dict[PieceType, PieceRule] = {
    PieceType.KING: PieceRule("K", MoveRange.FIXED, ALL_DIRECTIONS),
    PieceType.QUEEN: PieceRule("Q", MoveRange.VARIABLE, ALL_DIRECTIONS),
    PieceType.ROOK: PieceRule("R", MoveRange.VARIABLE, STRAIGHTS),
    PieceType.BISHOP: PieceRule("B", MoveRange.VARIABLE, DIAGONALS),
    PieceType.KNIGHT: PieceRule("N", MoveRange.FIXED, KNIGHT_JUMPS),
    PieceType.PAWN: PieceRule("P", MoveRange.FIXED, ((1, 0),)),
}

# Pawns are the odd ones out: they only take diagonally forward.
PAWN_CAPTURE_VECTORS: tuple[Vector, ...] = ((1, -1), (1, 1))

# Main pieces in the order they appear on the back rank (a-file to h-file)
BACK_RANK_ORDER: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


@dataclass(frozen=True)
class Piece:
    color: Color
    type: PieceType

    @property
    def rule(self) -> PieceRule:
        return PIECE_RULES[self.type]

    @property
    def code(self) -> str:
        """Color code + piece code, ex. '2Q' for the black queen"""
        return f"{self.color.code}{self.rule.code}"

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(color, piece_type)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )


# A square either holds a piece or it does not
Cell = Optional[Piece]
