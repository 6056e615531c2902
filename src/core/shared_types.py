"""
Type definitions used across layers
"""

from enum import StrEnum


class OutcomePerspective(StrEnum):
    """
    Whose king gets classified right after a move is played.

    * OPPONENT: "did I just put my opponent in check (mate)?"
    * MOVER: "did I just leave my own king in check?"
    """

    OPPONENT = "opponent"
    MOVER = "mover"


# --- Names used when talking to the outside world (requests / responses). Domain enums convert into these.
class ColorName(StrEnum):
    WHITE = "white"
    BLACK = "black"


class OutcomeName(StrEnum):
    NEXT_PLAYER = "next player"
    CHECK = "check"
    CHECKMATE = "checkmate"
