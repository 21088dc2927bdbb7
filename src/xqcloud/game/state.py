"""Game state, observable events and the context threaded through the game layer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from xqcloud.core.enums import GameResult, Side
from xqcloud.game.interfaces import GamePhase

if TYPE_CHECKING:
    from xqcloud.core.move import Ply
    from xqcloud.core.position import IPosition
    from xqcloud.core.types import Square
    from xqcloud.engine.search import ILocalSearch
    from xqcloud.game.rules import TerminalReason, TerminalVerdict
    from xqcloud.settings import AppSettings

# ── Event definitions ────────────────────────────────────────────────────────

MoveAppliedCallback = Callable[["Ply", bool], None]  # ply, computer_move
GameOverCallback = Callable[["TerminalVerdict", str], None]  # verdict, message
PhaseCallback = Callable[[GamePhase], None]
FlagCallback = Callable[[bool], None]
SquareCallback = Callable[[int], None]
TextCallback = Callable[[str], None]
TraceCallback = Callable[[list[str]], None]
HintCallback = Callable[["Ply"], None]
ResetCallback = Callable[[], None]


@dataclass
class GameEvents:
    """Observable callbacks for the presentation layer. Multiple handlers per event."""

    on_move_applied: list[MoveAppliedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_thinking_changed: list[FlagCallback] = field(default_factory=list)
    on_selection_changed: list[SquareCallback] = field(default_factory=list)
    on_sound: list[TextCallback] = field(default_factory=list)
    on_status: list[TextCallback] = field(default_factory=list)
    on_trace: list[TraceCallback] = field(default_factory=list)
    on_hint: list[HintCallback] = field(default_factory=list)
    on_board_reset: list[ResetCallback] = field(default_factory=list)

    def emit_move_applied(self, ply: Ply, computer_move: bool) -> None:
        for cb in self.on_move_applied:
            cb(ply, computer_move)

    def emit_game_over(self, verdict: TerminalVerdict, message: str) -> None:
        for cb in self.on_game_over:
            cb(verdict, message)

    def emit_phase(self, phase: GamePhase) -> None:
        for cb in self.on_phase_changed:
            cb(phase)

    def emit_thinking(self, thinking: bool) -> None:
        for cb in self.on_thinking_changed:
            cb(thinking)

    def emit_selection(self, sq: Square) -> None:
        for cb in self.on_selection_changed:
            cb(sq)

    def emit_sound(self, name: str) -> None:
        for cb in self.on_sound:
            cb(name)

    def emit_status(self, text: str) -> None:
        for cb in self.on_status:
            cb(text)

    def emit_trace(self, moves: list[str]) -> None:
        for cb in self.on_trace:
            cb(list(moves))

    def emit_hint(self, ply: Ply) -> None:
        for cb in self.on_hint:
            cb(ply)

    def emit_board_reset(self) -> None:
        for cb in self.on_board_reset:
            cb()


@dataclass
class GameState:
    """Lifecycle bookkeeping for one game.

    The position itself (side to move, move history) lives in the rule
    engine; this class holds what the orchestrator adds on top of it.
    """

    phase: GamePhase = GamePhase.AWAITING_SELECTION
    result: GameResult = GameResult.UNKNOWN
    end_reason: TerminalReason | None = None
    busy: bool = False
    thinking: bool = False
    selected: int = 0  # 0 = nothing selected
    last_ply: Ply | None = None
    computer_side: Side | None = Side.BLACK

    def reset(self, computer_side: Side | None) -> None:
        """Start over for a new game, load or retraction."""
        self.phase = GamePhase.AWAITING_SELECTION
        self.result = GameResult.UNKNOWN
        self.end_reason = None
        self.busy = False
        self.thinking = False
        self.selected = 0
        self.last_ply = None
        self.computer_side = computer_side

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.UNKNOWN


@dataclass(slots=True)
class GameContext:
    """Everything a ply cycle touches, passed explicitly instead of shared globally."""

    position: IPosition
    settings: AppSettings
    state: GameState = field(default_factory=GameState)
    events: GameEvents = field(default_factory=GameEvents)
    search: ILocalSearch | None = None

    @property
    def computer_to_move(self) -> bool:
        side = self.state.computer_side
        return side is not None and self.position.side_to_move == side

    def play_sound(self, name: str) -> None:
        if self.settings.sound_enabled:
            self.events.emit_sound(name)

    def set_phase(self, phase: GamePhase) -> None:
        if self.state.phase != phase:
            self.state.phase = phase
            self.events.emit_phase(phase)

    def set_thinking(self, thinking: bool) -> None:
        if self.state.thinking != thinking:
            self.state.thinking = thinking
            self.events.emit_thinking(thinking)
