"""Core enumerations for the xiangqi domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Side(IntEnum):
    """Side to move, numbered as the rule engine numbers them."""

    RED = 0
    BLACK = 1

    @property
    def opposite(self) -> Side:
        return Side(1 - self.value)

    @property
    def tag(self) -> int:
        """Bit that marks this side's pieces in a piece code."""
        return 8 + (self.value << 3)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Piece types as encoded in the low three bits of a piece code."""

    KING = 0
    ADVISOR = 1
    BISHOP = 2
    KNIGHT = 3
    ROOK = 4
    CANNON = 5
    PAWN = 6


class GameResult(IntEnum):
    """Outcome of a game, seen from the human side."""

    UNKNOWN = 0
    WIN = 1
    DRAW = 2
    LOSS = 3


class MoveClass(StrEnum):
    """Presentation class of a non-terminal ply."""

    CHECK = "check"
    CAPTURE = "capture"
    QUIET = "move"


class AcquisitionMode(StrEnum):
    """How hard the opponent-move cascade works for a move."""

    FAST = "fast"
    DEEP = "deep"
