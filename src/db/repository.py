"""Protocol repository (in-memory for now, could be implemented later for some real storage)"""

from threading import Lock
from typing import Protocol
from uuid import UUID

from src.chess.game import Game


class GameRepository(Protocol):
    """Keeps track of the games being played"""

    def get_game(self, game_id: UUID) -> tuple[Game, Lock] | None:
        """Get game (and the lock that serializes access to it) by ID, if it exists."""
        ...

    def create_game(self, game: Game) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game."""
        ...
