"""Rule engine contract consumed by the orchestrator.

The rule engine (board representation, legality, repetition detection,
notation) lives outside this package; the game layer talks to it only
through :class:`IPosition`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from xqcloud.core.enums import Side
    from xqcloud.core.move import Ply
    from xqcloud.core.types import Square

# Scores at or beyond ±WIN_VALUE are decided results in the engine's scale
# (MATE_VALUE 10000 minus the 200-point ban margin).
MATE_VALUE = 10_000
BAN_VALUE = MATE_VALUE - 100
WIN_VALUE = MATE_VALUE - 200


class IPosition(Protocol):
    """Mutable position with reversible move application."""

    @property
    def side_to_move(self) -> Side: ...

    @property
    def captures(self) -> Sequence[int]:
        """Captured piece code per applied ply, oldest first (0 = none)."""
        ...

    def legal_move(self, ply: Ply) -> bool: ...

    def make_move(self, ply: Ply) -> bool:
        """Apply *ply*; return ``False`` and leave the position unchanged
        when it would leave the mover in check."""
        ...

    def undo_make_move(self) -> None: ...

    def in_check(self) -> bool: ...

    def is_mate(self) -> bool: ...

    def captured(self) -> bool:
        """Whether the last applied ply captured a piece."""
        ...

    def repetition_status(self, window: int) -> int:
        """Repetition id within *window* recurrences, or 0."""
        ...

    def repetition_value(self, repetition: int) -> int:
        """Signed score of a repetition, relative to the side to move."""
        ...

    def to_fen(self) -> str: ...

    def from_fen(self, fen: str) -> None: ...

    def piece_at(self, sq: Square) -> int:
        """Piece code on *sq* (side tag | piece type), 0 when empty."""
        ...

    def describe_move(self, ply: Ply) -> str:
        """Human-readable notation of *ply*, which was just applied."""
        ...
