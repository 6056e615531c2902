"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The API layer (higher) and the domain layer (lower) both speak in terms of these models, so neither has to know
the other's types.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import ColorName, OutcomeName


@dataclass
class GameModel:
    """Transport-safe snapshot of a chess game."""

    board_fen: str
    turn: ColorName
    previous_turn: Optional[ColorName]
    last_outcome: OutcomeName
    moves_played: int
