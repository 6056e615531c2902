"""Orchestration of communication from API requests to the chess domain layer (and the reverse direction)."""

import logging
from threading import Lock
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    UndoRequest,
)
from src.chess.game import Game
from src.chess.square import Square
from src.core.exceptions import IllegalMoveError, RepositoryError
from src.core.models import GameModel
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a game in the standard starting position."""
        game = (
            Game(perspective=request.outcome_perspective)
            if request.outcome_perspective
            else Game()
        )
        game_id = self.repo.create_game(game)
        return self._create_game_response(game_id, game.to_model())

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game, lock = self._fetch_game(request.game_id)
        with lock:
            model = game.to_model()
        return self._create_game_response(request.game_id, model)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt for the player whose turn it is. Rejected moves raise IllegalMoveError."""
        from_square = Square.from_algebraic(request.from_square)
        to_square = Square.from_algebraic(request.to_square)

        game, lock = self._fetch_game(request.game_id)
        with lock:
            reason = game.play(
                from_square.rank, from_square.file, to_square.rank, to_square.file
            )
            if reason is not None:
                raise IllegalMoveError(
                    f"Move not allowed: {request.from_square}{request.to_square} ({reason.name.lower()})",
                    reason=reason,
                )
            model = game.to_model()
        return self._create_game_response(request.game_id, model)

    def undo_move(self, request: UndoRequest) -> GameResponse:
        """Take back the last move (does nothing when no move was played yet)."""
        game, lock = self._fetch_game(request.game_id)
        with lock:
            game.undo()
            model = game.to_model()
        return self._create_game_response(request.game_id, model)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            board_fen=model.board_fen,
            turn=model.turn,
            previous_turn=model.previous_turn,
            last_outcome=model.last_outcome,
            moves_played=model.moves_played,
        )

    def _fetch_game(self, game_id: UUID) -> tuple[Game, Lock]:
        """Attempt to find the game in the repository and raise error if it fails."""
        entry = self.repo.get_game(game_id)
        if entry is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return entry
