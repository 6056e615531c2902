"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.square import is_valid_square
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import ColorName, OutcomeName, OutcomePerspective


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    outcome_perspective: Optional[OutcomePerspective] = None


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        def _is_algebraic_notation(value: str) -> bool:
            if len(value) != 2:
                return False

            first_character = value[0]
            second_character = value[1]
            if not (first_character.isalpha() and second_character.isnumeric()):
                return False
            return True

        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        # a1 - h8 only
        rank = 8 - int(value[1])
        file = ord(value[0].lower()) - ord("a")
        if not is_valid_square(rank, file):
            raise InvalidRequestError(f"Square {value!r} is not on the board.")
        return value.lower()


class UndoRequest(BaseModel):
    game_id: UUID


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    board_fen: str
    turn: ColorName
    previous_turn: Optional[ColorName]
    last_outcome: OutcomeName
    moves_played: int
