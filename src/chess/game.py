"""
The Game class is the entrypoint into the chess domain layer.
It keeps the history of boards (so moves can be undone), decides whose turn it is, and remembers
how every position was classified (check / checkmate).
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from src.chess.board import Board
from src.chess.check import Outcome, classify
from src.chess.moves import InvalidMove, validate_and_move
from src.chess.pieces import Color
from src.chess.square import Square
from src.core.config import get_settings
from src.core.exceptions import MissingKingError
from src.core.models import GameModel
from src.core.shared_types import ColorName, OutcomeName, OutcomePerspective

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _default_perspective() -> OutcomePerspective:
    return get_settings().rules.outcome_perspective


@dataclass
class Game:
    """
    Undo-able history of a chess game
    ----

    Three stacks that always have the same length (most recent entry last):
    * boards: the board after every move
    * turns: the color that made that move
    * outcomes: how the board got classified after that move

    An empty history means the game sits in the standard starting position with White to move.
    """

    boards: list[Board] = field(default_factory=list)
    turns: list[Color] = field(default_factory=list)
    outcomes: list[Outcome] = field(default_factory=list)
    perspective: OutcomePerspective = field(default_factory=_default_perspective)

    def __len__(self) -> int:
        """Number of moves played (and not undone)"""
        return len(self.boards)

    # --- STATE ---
    @property
    def board(self) -> Board:
        """Most recent board"""
        return self.boards[-1] if self.boards else Board.initial()

    @property
    def turn(self) -> Color:
        """Colors alternate strictly. White starts."""
        if self.turns and self.turns[-1] == Color.WHITE:
            return Color.BLACK
        return Color.WHITE

    @property
    def previous_turn(self) -> Optional[Color]:
        return self.turns[-1] if self.turns else None

    @property
    def last_outcome(self) -> Outcome:
        return self.outcomes[-1] if self.outcomes else Outcome.NEXT_PLAYER

    # --- ACTIONS ---
    def play(
        self, from_rank: int, from_file: int, to_rank: int, to_file: int
    ) -> Optional[InvalidMove]:
        """
        Attempt a move for the player whose turn it is.
        -----

        1. validate the move against the most recent board
        2. classify the resulting board
        3. push board, mover and outcome onto the history (all three or nothing)

        Returns None when the move got played, otherwise the reason it was rejected (history unchanged).
        """
        mover = self.turn
        result = validate_and_move(
            self.board, Square(from_rank, from_file), Square(to_rank, to_file), mover
        )
        if result.board is None:
            logger.info(
                "Rejected move (%s, %s) -> (%s, %s) for %s: %s",
                from_rank,
                from_file,
                to_rank,
                to_file,
                mover.name,
                result.reason.name if result.reason else None,
            )
            return result.reason

        outcome = self._classify(mover, result.board)
        self.boards.append(result.board)
        self.turns.append(mover)
        self.outcomes.append(outcome)
        logger.info(
            "%s played (%s, %s) -> (%s, %s): %s",
            mover.name,
            from_rank,
            from_file,
            to_rank,
            to_file,
            outcome.name,
        )
        return None

    def undo(self) -> None:
        """Take back the most recent move. Nothing to take back is not an error."""
        if not self.boards:
            return
        self.boards.pop()
        self.turns.pop()
        self.outcomes.pop()
        logger.info("Undid move, %s to play", self.turn.name)

    def apply(self, fn: Callable[[Board], T]) -> T:
        """Read-only access for collaborators (rendering, move generators, ...). Boards are immutable anyway."""
        return fn(self.board)

    # --- BOUNDARY ---
    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        previous = self.previous_turn
        return GameModel(
            board_fen=self.board.to_fen(),
            turn=ColorName[self.turn.name],
            previous_turn=ColorName[previous.name] if previous else None,
            last_outcome=OutcomeName[self.last_outcome.name],
            moves_played=len(self),
        )

    # -- PRIVATE HELPERS ---
    def _classify(self, mover: Color, board: Board) -> Outcome:
        """Whose king we look at depends on the configured perspective (see OutcomePerspective)"""
        color = (
            mover.opponent
            if self.perspective == OutcomePerspective.OPPONENT
            else mover
        )
        try:
            return classify(color, board)
        except MissingKingError:
            # moving into check is allowed, so a king can get taken: nothing left to escape with
            logger.warning("No %s king left on the board", color.name)
            return Outcome.CHECKMATE
