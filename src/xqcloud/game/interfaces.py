"""Abstract interfaces and state-machine enums for the game layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xqcloud.core.enums import Side
    from xqcloud.core.move import Ply
    from xqcloud.core.types import Square


# ── Lifecycle FSM states ─────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states of one ply cycle."""

    AWAITING_SELECTION = auto()
    AWAITING_DESTINATION = auto()
    APPLYING = auto()
    ANIMATING_PLY = auto()
    CHECKING_TERMINAL = auto()
    AWAITING_OPPONENT = auto()  # oracle / local search in flight
    ROUND_COMPLETE = auto()


class AcquisitionStage(IntEnum):
    """States of the opponent-move cascade."""

    IDLE = auto()
    QUERYING_PRIMARY = auto()
    QUERYING_SECONDARY = auto()
    LOCAL_FALLBACK = auto()
    RESOLVED = auto()


class AcquisitionPurpose(StrEnum):
    """What the caller does with an acquired move."""

    APPLY = "apply"  # opponent move, played on the board
    REPORT = "report"  # hint for the human side, only shown


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game lifecycle orchestrator."""

    @abstractmethod
    def new_game(self, fen: str | None = None, computer_side: Side | None = None) -> None:
        """Load *fen* (initial layout by default) and start a game."""

    @abstractmethod
    def click_square(self, view_square: Square) -> None:
        """Handle a click on a square as the player sees the board."""

    @abstractmethod
    def submit_ply(self, ply: Ply, computer_move: bool = False) -> bool:
        """Attempt *ply*. Returns True if it was applied; always False while busy."""

    @abstractmethod
    def retract(self) -> bool:
        """Take back the last move pair. Returns True on success."""

    @abstractmethod
    def request_hint(self) -> bool:
        """Ask the oracle cascade for a move for the human side."""
