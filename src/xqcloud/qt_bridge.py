"""Qt signal bridge re-emitting controller events for the presentation layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, pyqtSignal

from xqcloud.i18n import t

if TYPE_CHECKING:
    from xqcloud.core.move import Ply
    from xqcloud.game.controller import GameController
    from xqcloud.game.interfaces import GamePhase
    from xqcloud.game.rules import TerminalVerdict


class GameSignals(QObject):
    """Queued-delivery friendly view of :class:`GameEvents`.

    Plies travel as their packed ``Ply.value``; the trace is joined into
    one text block under the localized header.
    """

    move_applied = pyqtSignal(int, bool)  # ply value, computer move
    game_over = pyqtSignal(int, str, int)  # GameResult, message, mated king (0 = none)
    phase_changed = pyqtSignal(int)
    thinking_changed = pyqtSignal(bool)
    selection_changed = pyqtSignal(int)
    sound_requested = pyqtSignal(str)
    status_changed = pyqtSignal(str)
    trace_ready = pyqtSignal(str)
    hint_ready = pyqtSignal(int)
    board_reset = pyqtSignal()

    def connect_controller(self, controller: GameController) -> None:
        """Subscribe to every event of *controller*."""
        events = controller.events
        events.on_move_applied.append(self._on_move_applied)
        events.on_game_over.append(self._on_game_over)
        events.on_phase_changed.append(self._on_phase_changed)
        events.on_thinking_changed.append(self.thinking_changed.emit)
        events.on_selection_changed.append(self.selection_changed.emit)
        events.on_sound.append(self.sound_requested.emit)
        events.on_status.append(self.status_changed.emit)
        events.on_trace.append(self._on_trace)
        events.on_hint.append(self._on_hint)
        events.on_board_reset.append(self.board_reset.emit)

    def _on_move_applied(self, ply: Ply, computer_move: bool) -> None:
        self.move_applied.emit(ply.value, computer_move)

    def _on_game_over(self, verdict: TerminalVerdict, message: str) -> None:
        self.game_over.emit(int(verdict.result), message, verdict.mated_king or 0)

    def _on_phase_changed(self, phase: GamePhase) -> None:
        self.phase_changed.emit(int(phase))

    def _on_trace(self, moves: list[str]) -> None:
        self.trace_ready.emit("\n".join([t().trace_header, *moves]))

    def _on_hint(self, ply: Ply) -> None:
        self.hint_ready.emit(ply.value)
