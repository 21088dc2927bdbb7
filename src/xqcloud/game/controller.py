"""GameController — the lifecycle orchestrator of a xiangqi game.

Coordinates: the rule engine (:class:`IPosition`), the move acquisition
pipeline and the terminal-condition policy.  Emits events via
:class:`GameEvents` so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from xqcloud.core.enums import GameResult, Side
from xqcloud.core.move import Ply
from xqcloud.core.notation import STARTING_FEN
from xqcloud.core.types import in_board, square_flip
from xqcloud.game.acquisition import AcquiredMove, MoveAcquisitionPipeline
from xqcloud.game.interfaces import AcquisitionPurpose, GamePhase, IGameController
from xqcloud.game.rules import Rules, TerminalReason, TerminalVerdict
from xqcloud.game.state import GameContext, GameEvents, GameState
from xqcloud.game.timing import Animator, Scheduler, qt_single_shot
from xqcloud.i18n import t
from xqcloud.settings import AppSettings

if TYPE_CHECKING:
    from xqcloud.core.position import IPosition
    from xqcloud.core.types import Square
    from xqcloud.engine.search import ILocalSearch
    from xqcloud.oracle.client import IOracleClient

_LOGGER = logging.getLogger(__name__)

_RESULT_SOUNDS = {
    GameResult.WIN: "win",
    GameResult.LOSS: "loss",
    GameResult.DRAW: "draw",
}


def result_message(verdict: TerminalVerdict) -> str:
    """Human-readable text for a finished game in the active language."""
    s = t()
    if verdict.reason is TerminalReason.CHECKMATE:
        return s.result_loss_checkmate if verdict.result == GameResult.LOSS else s.result_win_checkmate
    if verdict.reason is TerminalReason.PERPETUAL:
        return s.result_loss_perpetual if verdict.result == GameResult.LOSS else s.result_win_perpetual
    if verdict.reason is TerminalReason.NO_ATTACKING_MATERIAL:
        return s.result_draw_no_material
    if verdict.reason is TerminalReason.MOVE_LIMIT:
        return s.result_draw_move_limit
    return s.result_draw_repetition


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Drives one ply cycle at a time: validate, apply, animate, judge,
    then hand the turn to the computer when it is its move.

    Thread-safety: all methods run on the Qt event loop.  ``state.busy``
    is the only mutual exclusion; input that arrives while busy is a no-op.
    """

    __slots__ = ("_ctx", "_pipeline", "_animator")

    def __init__(
        self,
        position: IPosition,
        primary: IOracleClient,
        secondary: IOracleClient,
        *,
        settings: AppSettings | None = None,
        search: ILocalSearch | None = None,
        animator: Animator | None = None,
        schedule: Scheduler = qt_single_shot,
    ) -> None:
        settings = settings if settings is not None else AppSettings()
        self._ctx = GameContext(
            position=position,
            settings=settings,
            state=GameState(computer_side=settings.computer_side),
            events=GameEvents(),
            search=search,
        )
        self._pipeline = MoveAcquisitionPipeline(self._ctx, primary, secondary, schedule=schedule)
        self._animator = animator

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._ctx.state

    @property
    def position(self) -> IPosition:
        return self._ctx.position

    @property
    def events(self) -> GameEvents:
        return self._ctx.events

    @property
    def settings(self) -> AppSettings:
        return self._ctx.settings

    @property
    def pipeline(self) -> MoveAcquisitionPipeline:
        return self._pipeline

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, fen: str | None = None, computer_side: Side | None = None) -> None:
        state = self._ctx.state
        if state.busy:
            return
        self._pipeline.cancel()
        side = computer_side if computer_side is not None else self._ctx.settings.computer_side
        state.reset(side)
        self._ctx.position.from_fen(fen or STARTING_FEN)
        self._ctx.events.emit_board_reset()
        self._ctx.events.emit_phase(state.phase)
        self._ctx.play_sound("newgame")
        self.resume()

    def click_square(self, view_square: Square) -> None:
        state = self._ctx.state
        if state.busy or state.is_game_over:
            return
        sq = square_flip(view_square) if state.computer_side == Side.RED else view_square
        if not in_board(sq):
            return

        position = self._ctx.position
        if position.piece_at(sq) & position.side_to_move.tag:
            state.selected = sq
            self._ctx.events.emit_selection(sq)
            self._ctx.set_phase(GamePhase.AWAITING_DESTINATION)
            self._ctx.play_sound("click")
        elif state.selected:
            self.submit_ply(Ply(state.selected, sq))

    def submit_ply(self, ply: Ply, computer_move: bool = False) -> bool:
        state = self._ctx.state
        if state.is_game_over:
            return False
        if state.busy:
            return False
        return self._apply_ply(ply, computer_move)

    def retract(self) -> bool:
        state = self._ctx.state
        if state.busy:
            return False
        position = self._ctx.position
        if not position.captures:
            return False

        position.undo_make_move()
        if position.captures and self._ctx.computer_to_move:
            position.undo_make_move()

        state.result = GameResult.UNKNOWN
        state.end_reason = None
        state.last_ply = None
        self._clear_selection()
        self._ctx.set_phase(GamePhase.AWAITING_SELECTION)
        self._ctx.events.emit_status(t().status_fen.format(fen=position.to_fen()))
        self._ctx.events.emit_board_reset()
        return True

    def request_hint(self) -> bool:
        state = self._ctx.state
        if state.busy or state.is_game_over or self._ctx.search is None:
            return False
        state.busy = True
        self._ctx.set_phase(GamePhase.AWAITING_OPPONENT)
        self._ctx.set_thinking(True)
        if not self._pipeline.acquire(AcquisitionPurpose.REPORT, self._on_hint_acquired):
            self._ctx.set_thinking(False)
            self._go_idle()
            return False
        return True

    # ── Configuration ────────────────────────────────────────────────────

    def resume(self) -> None:
        """Hand the turn to the computer if it is to move (after a load or retract)."""
        state = self._ctx.state
        if state.busy or state.is_game_over:
            return
        self._respond()

    def set_search(self, search: ILocalSearch | None) -> None:
        self._ctx.search = search
        if search is None and self._pipeline.in_flight:
            self._pipeline.cancel()
            self._ctx.set_thinking(False)
            self._go_idle()

    def set_sound(self, enabled: bool) -> None:
        self._ctx.settings.sound_enabled = enabled

    def set_animated(self, enabled: bool) -> None:
        self._ctx.settings.animate_moves = enabled

    def shutdown(self) -> None:
        """Drop any in-flight acquisition; late oracle replies are ignored."""
        self._pipeline.cancel()
        self._ctx.set_thinking(False)
        self._ctx.state.busy = False

    # ── Internal helpers ─────────────────────────────────────────────────

    def _apply_ply(self, ply: Ply, computer_move: bool) -> bool:
        position = self._ctx.position
        if not position.legal_move(ply) or not position.make_move(ply):
            if computer_move:
                _LOGGER.error("Opponent move %s rejected by the rule engine", ply)
                self._ctx.set_thinking(False)
                self._go_idle()
            else:
                self._ctx.play_sound("illegal")
                self._clear_selection()
                self._ctx.set_phase(GamePhase.AWAITING_SELECTION)
            return False

        self._ctx.state.busy = True
        self._ctx.set_phase(GamePhase.APPLYING)
        if self._animator is not None and self._ctx.settings.animate_moves:
            self._ctx.set_phase(GamePhase.ANIMATING_PLY)
            self._animator(ply, lambda: self._post_apply(ply, computer_move))
        else:
            self._post_apply(ply, computer_move)
        return True

    def _apply_opponent_ply(self, ply: Ply) -> None:
        """Play the acquired move; only reached from the owning acquisition cycle."""
        if self._ctx.state.is_game_over:
            self._go_idle()
            return
        self._apply_ply(ply, computer_move=True)

    def _post_apply(self, ply: Ply, computer_move: bool) -> None:
        ctx = self._ctx
        ctx.state.last_ply = ply
        self._clear_selection()
        ctx.set_phase(GamePhase.CHECKING_TERMINAL)
        ctx.events.emit_move_applied(ply, computer_move)

        settings = ctx.settings
        verdict = Rules.judge(
            ctx.position,
            computer_move,
            repetition_window=settings.repetition_window,
            move_limit=settings.move_limit_plies,
        )
        if verdict is not None:
            self._finish_game(verdict)
            return

        sound = Rules.move_class(ctx.position).value
        ctx.play_sound(sound + "2" if computer_move else sound)
        self._respond()

    def _finish_game(self, verdict: TerminalVerdict) -> None:
        state = self._ctx.state
        state.result = verdict.result
        state.end_reason = verdict.reason
        state.busy = False
        _LOGGER.info("Game over: %s (%s)", verdict.result.name, verdict.reason)
        self._ctx.play_sound(_RESULT_SOUNDS[verdict.result])
        self._ctx.set_phase(GamePhase.ROUND_COMPLETE)
        self._ctx.events.emit_game_over(verdict, result_message(verdict))

    def _respond(self) -> None:
        ctx = self._ctx
        if ctx.search is None or not ctx.computer_to_move:
            self._go_idle()
            return
        ctx.state.busy = True
        ctx.set_phase(GamePhase.AWAITING_OPPONENT)
        ctx.set_thinking(True)
        if not self._pipeline.acquire(AcquisitionPurpose.APPLY, self._on_opponent_acquired):
            _LOGGER.warning("Acquisition already in flight; opponent move not requested")
            ctx.set_thinking(False)
            self._go_idle()

    def _on_opponent_acquired(self, move: AcquiredMove | None) -> None:
        self._ctx.set_thinking(False)
        if move is None:
            _LOGGER.error("No opponent move could be produced")
            self._go_idle()
            return
        self._apply_opponent_ply(move.ply)

    def _on_hint_acquired(self, move: AcquiredMove | None) -> None:
        self._ctx.set_thinking(False)
        if move is not None:
            self._ctx.events.emit_hint(move.ply)
        self._go_idle()

    def _go_idle(self) -> None:
        self._ctx.state.busy = False
        self._ctx.set_phase(GamePhase.AWAITING_SELECTION)

    def _clear_selection(self) -> None:
        if self._ctx.state.selected:
            self._ctx.state.selected = 0
            self._ctx.events.emit_selection(0)
