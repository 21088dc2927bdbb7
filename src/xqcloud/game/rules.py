"""Terminal-condition policy evaluated after every applied ply."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from xqcloud.core.enums import GameResult, MoveClass, PieceType, Side
from xqcloud.core.position import WIN_VALUE
from xqcloud.core.types import Square, playable_squares

if TYPE_CHECKING:
    from xqcloud.core.position import IPosition

_PIECE_TYPE_MASK = 7


class TerminalReason(StrEnum):
    """Why a game ended."""

    CHECKMATE = "checkmate"
    REPETITION_DRAW = "repetition-draw"
    PERPETUAL = "perpetual"  # forced repetition decided against one side
    NO_ATTACKING_MATERIAL = "no-attacking-material"
    MOVE_LIMIT = "move-limit"


@dataclass(slots=True, frozen=True)
class TerminalVerdict:
    """A finished game: result for the human side and the reason."""

    result: GameResult
    reason: TerminalReason
    mated_king: Square | None = None


class Rules:
    """Static terminal-condition checks on an :class:`IPosition`.

    Checked in fixed priority order: checkmate, forced repetition,
    insufficient material after a capture, move limit without capture.
    """

    @staticmethod
    def find_king(position: IPosition, side: Side) -> Square | None:
        king = side.tag + PieceType.KING
        for sq in playable_squares():
            if position.piece_at(sq) == king:
                return sq
        return None

    @staticmethod
    def has_attacking_material(position: IPosition) -> bool:
        """Whether any piece stronger than an advisor or bishop is left."""
        return any(
            position.piece_at(sq) & _PIECE_TYPE_MASK > PieceType.BISHOP
            for sq in playable_squares()
        )

    @staticmethod
    def no_capture_within(position: IPosition, plies: int) -> bool:
        captures = position.captures
        return len(captures) >= plies and not any(captures[-plies:])

    @staticmethod
    def checkmate(position: IPosition, computer_moved: bool) -> TerminalVerdict | None:
        if not position.is_mate():
            return None
        return TerminalVerdict(
            result=GameResult.LOSS if computer_moved else GameResult.WIN,
            reason=TerminalReason.CHECKMATE,
            mated_king=Rules.find_king(position, position.side_to_move),
        )

    @staticmethod
    def forced_repetition(
        position: IPosition,
        computer_moved: bool,
        window: int,
    ) -> TerminalVerdict | None:
        repetition = position.repetition_status(window)
        if repetition <= 0:
            return None
        value = position.repetition_value(repetition)
        if -WIN_VALUE < value < WIN_VALUE:
            return TerminalVerdict(GameResult.DRAW, TerminalReason.REPETITION_DRAW)
        # The value is relative to the side now to move, i.e. the mover's opponent.
        lost = computer_moved == (value < 0)
        return TerminalVerdict(
            GameResult.LOSS if lost else GameResult.WIN,
            TerminalReason.PERPETUAL,
        )

    @staticmethod
    def judge(
        position: IPosition,
        computer_moved: bool,
        *,
        repetition_window: int = 3,
        move_limit: int = 100,
    ) -> TerminalVerdict | None:
        """Return the verdict for the position after a ply, or None to play on."""
        verdict = Rules.checkmate(position, computer_moved)
        if verdict is not None:
            return verdict

        verdict = Rules.forced_repetition(position, computer_moved, repetition_window)
        if verdict is not None:
            return verdict

        if position.captured():
            if not Rules.has_attacking_material(position):
                return TerminalVerdict(GameResult.DRAW, TerminalReason.NO_ATTACKING_MATERIAL)
        elif Rules.no_capture_within(position, move_limit):
            return TerminalVerdict(GameResult.DRAW, TerminalReason.MOVE_LIMIT)

        return None

    @staticmethod
    def move_class(position: IPosition) -> MoveClass:
        if position.in_check():
            return MoveClass.CHECK
        if position.captured():
            return MoveClass.CAPTURE
        return MoveClass.QUIET
