"""Implementation of (Game)Repository keeping live Game objects in a dictionary"""

import logging
from threading import Lock
from uuid import UUID, uuid4

from src.chess.game import Game

logger = logging.getLogger(__name__)


class InMemoryGameRepository:
    """
    Games are stored together with their own lock.
    ---

    One game = one serialized stream of play / undo calls. The service holds the game's lock while it works on it.
    The registry lock only protects the dictionary itself.
    """

    def __init__(self) -> None:
        self._games: dict[UUID, tuple[Game, Lock]] = {}
        self._registry_lock = Lock()

    def get_game(self, game_id: UUID) -> tuple[Game, Lock] | None:
        with self._registry_lock:
            return self._games.get(game_id)

    def create_game(self, game: Game) -> UUID:
        new_id = uuid4()
        with self._registry_lock:
            self._games[new_id] = (game, Lock())
        logger.info("Created game %s", new_id)
        return new_id

    def delete_game(self, game_id: UUID) -> Game | None:
        with self._registry_lock:
            entry = self._games.pop(game_id, None)
        if entry is None:
            return None
        logger.info("Deleted game %s", game_id)
        return entry[0]

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._games)
