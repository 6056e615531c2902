"""The Board is an immutable snapshot of the position (in chess: the configuration of pieces on the board)"""

from dataclasses import dataclass
from typing import Self

from src.chess.pieces import BACK_RANK_ORDER, FEN_TO_PIECE, Cell, Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidFENError

Rows = tuple[tuple[Cell, ...], ...]


@dataclass(frozen=True)
class Board:
    """
    8 rows (ranks) of 8 cells (files).
    ---

    Never mutated: every update returns a brand new Board, so boards kept in a game's history can never be changed
    behind its back (and can be shared between readers freely).
    """

    rows: Rows

    @classmethod
    def empty(cls) -> Self:
        num_ranks, num_files = BOARD_DIMENSIONS
        return cls(tuple(tuple(None for _ in range(num_files)) for _ in range(num_ranks)))

    @classmethod
    def initial(cls) -> Self:
        """Standard chess setup: back rank pieces + a rank of pawns for both colors."""
        rows = [list(row) for row in cls.empty().rows]
        for color in Color:
            for file, piece_type in enumerate(BACK_RANK_ORDER):
                rows[color.piece_rank][file] = Piece(color, piece_type)
                rows[color.pawn_rank][file] = Piece(color, PieceType.PAWN)
        return cls(tuple(tuple(row) for row in rows))

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on rank 0 (the top of the board): rook on the a-file, knight on the b-file, etc.
        * black pawns cover rank 1 entirely
        * ranks 2 through 5 have 8 consecutive empty squares
        * rank 6 are the white pawns (capital letters)
        * rank 7 are the white pieces.

        NOTE FEN is read top to bottom, which is exactly our rank order: the i-th group is rank i.

        Raises InvalidFENError unless the string describes exactly 8 ranks of 8 squares.
        """
        num_ranks, num_files = BOARD_DIMENSIONS
        fen_ranks = fen_str.split("/")
        if len(fen_ranks) != num_ranks:
            raise InvalidFENError(
                f"Expected {num_ranks} ranks in piece placement, got {len(fen_ranks)}: {fen_str!r}"
            )

        rows: list[tuple[Cell, ...]] = []
        for fen_one_rank in fen_ranks:
            cells: list[Cell] = []
            for character in fen_one_rank:
                if character.lower() in FEN_TO_PIECE:
                    # a letter directly denotes the piece that should be created
                    cells.append(Piece.from_fen(character))
                elif character in "12345678":
                    # A number denotes the amount of empty squares after each other
                    cells.extend([None] * int(character))
                else:
                    raise InvalidFENError(
                        f"Cannot interpret {character!r} in piece placement: {fen_str!r}"
                    )
            if len(cells) != num_files:
                raise InvalidFENError(
                    f"Rank {fen_one_rank!r} covers {len(cells)} squares instead of {num_files}"
                )
            rows.append(tuple(cells))
        return cls(tuple(rows))

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in self.rows)

    def _rank_to_fen(self, row: tuple[Cell, ...]) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- QUERIES ---
    def piece(self, square: Square) -> Cell:
        return self.rows[square.rank][square.file]

    def is_vacant(self, square: Square) -> bool:
        return self.piece(square) is None

    def is_occupied_by(self, square: Square, color: Color) -> bool:
        piece = self.piece(square)
        return piece is not None and piece.color == color

    def locate(self, piece: Piece) -> list[Square]:
        return [
            Square(rank, file)
            for rank, row in enumerate(self.rows)
            for file, cell in enumerate(row)
            if cell == piece
        ]

    def count_pieces(self) -> int:
        return sum(cell is not None for row in self.rows for cell in row)

    # --- UPDATES (all return a new board) ---
    def move_piece(self, from_square: Square, to_square: Square, piece: Piece) -> Self:
        """
        Unconditional relocation: `from_square` gets cleared, `to_square` holds `piece` (whatever stood there is captured).
        No rules are checked here, that is the job of `moves.validate_and_move`.
        """
        rows = [list(row) for row in self.rows]
        rows[from_square.rank][from_square.file] = None
        rows[to_square.rank][to_square.file] = piece
        return type(self)(tuple(tuple(row) for row in rows))

    def place_piece(self, square: Square, piece: Cell) -> Self:
        """Convenience method to set up positions (put `None` to clear the square)"""
        rows = [list(row) for row in self.rows]
        rows[square.rank][square.file] = piece
        return type(self)(tuple(tuple(row) for row in rows))
