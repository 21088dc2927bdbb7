"""Move Acquisition Pipeline — oracle cascade with local-search fallback.

One cycle produces exactly one move for the side to move::

    IDLE -> QUERYING_PRIMARY -> QUERYING_SECONDARY -> LOCAL_FALLBACK -> RESOLVED

Every oracle answer goes through the same gate before it may resolve a
cycle: ICCS decoding, ``legal_move`` and a ``make_move`` / ``undo_make_move``
trial against the current position.  Anything that fails the gate moves the
cycle on to the next stage; nothing is raised to the caller.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from xqcloud.core.enums import AcquisitionMode
from xqcloud.core.notation import PV_STRIDE, MalformedNotation, decode_iccs
from xqcloud.engine.search import HintMode, SearchHint, run_search
from xqcloud.game.interfaces import AcquisitionPurpose, AcquisitionStage
from xqcloud.game.timing import Scheduler, qt_single_shot
from xqcloud.i18n import t
from xqcloud.oracle.models import (
    FailureKind,
    OracleFailure,
    OracleResponse,
    OracleResult,
    OracleSource,
)

if TYPE_CHECKING:
    from xqcloud.core.move import Ply
    from xqcloud.game.state import GameContext
    from xqcloud.oracle.client import IOracleClient

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class AcquiredMove:
    """Outcome of one acquisition cycle.

    ``source`` is the oracle whose move resolved the cycle (directly or as
    the hint of a local search), ``None`` for an unhinted local search.
    """

    ply: Ply
    purpose: AcquisitionPurpose
    source: OracleSource | None = None
    hint: SearchHint = SearchHint()


# Called with the resolved move, or None when no move could be produced.
AcquiredCallback = Callable[[AcquiredMove | None], None]

_IN_FLIGHT = (
    AcquisitionStage.QUERYING_PRIMARY,
    AcquisitionStage.QUERYING_SECONDARY,
    AcquisitionStage.LOCAL_FALLBACK,
)


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def _secondary_depth(response: OracleResponse) -> int:
    """Depth implied by the raw PV string: one ply per 5-character block."""
    if response.candidates:
        raw = response.candidates[0].pv
    else:
        raw = " ".join(response.pv)
    return math.ceil(len(raw) / PV_STRIDE)


class MoveAcquisitionPipeline:
    """Resolves the move for the side to move in the context's position.

    Cycles are identified by a generation counter; a callback belonging to
    an older generation (cancelled, or superseded by a new cycle) is
    dropped on arrival.
    """

    __slots__ = (
        "_ctx",
        "_primary",
        "_secondary",
        "_schedule",
        "_stage",
        "_generation",
        "_purpose",
        "_fen",
        "_on_acquired",
    )

    def __init__(
        self,
        ctx: GameContext,
        primary: IOracleClient,
        secondary: IOracleClient,
        *,
        schedule: Scheduler = qt_single_shot,
    ) -> None:
        self._ctx = ctx
        self._primary = primary
        self._secondary = secondary
        self._schedule = schedule
        self._stage = AcquisitionStage.IDLE
        self._generation = 0
        self._purpose = AcquisitionPurpose.APPLY
        self._fen = ""
        self._on_acquired: AcquiredCallback | None = None

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def stage(self) -> AcquisitionStage:
        return self._stage

    @property
    def in_flight(self) -> bool:
        return self._stage in _IN_FLIGHT

    @property
    def purpose(self) -> AcquisitionPurpose:
        return self._purpose

    # ── Public API ───────────────────────────────────────────────────────

    def acquire(self, purpose: AcquisitionPurpose, on_acquired: AcquiredCallback) -> bool:
        """Start a cycle. Returns False when no search is configured or a
        cycle is already in flight."""
        if self._ctx.search is None or self.in_flight:
            return False

        self._generation += 1
        generation = self._generation
        self._purpose = purpose
        self._on_acquired = on_acquired
        self._fen = self._ctx.position.to_fen()
        mode = self._ctx.settings.acquisition_mode
        _LOGGER.debug("Acquisition #%d (%s, %s) for %s", generation, mode, purpose, self._fen)

        self._stage = AcquisitionStage.QUERYING_PRIMARY
        self._primary.query(
            self._fen,
            self._ctx.settings.oracle_timeout_ms,
            lambda result: self._on_primary(generation, mode, result),
        )
        return True

    def cancel(self) -> None:
        """Invalidate the current cycle; late callbacks for it are dropped."""
        if self.in_flight:
            _LOGGER.debug("Acquisition #%d cancelled at %s", self._generation, self._stage.name)
        self._generation += 1
        self._stage = AcquisitionStage.IDLE
        self._on_acquired = None

    # ── Stage handlers ───────────────────────────────────────────────────

    def _on_primary(self, generation: int, mode: AcquisitionMode, result: OracleResult) -> None:
        if not self._is_current(generation, AcquisitionStage.QUERYING_PRIMARY):
            return
        ply = self._confident_ply(result)

        if mode is AcquisitionMode.FAST:
            if ply is not None and isinstance(result, OracleResponse):
                hint = SearchHint(ply, HintMode.PRIMARY_ORACLE, _to_int(result.depth), _to_int(result.score))
                self._resolve_by_search(hint, result.source)
                return
            self._query_secondary(generation, mode)
            return

        if ply is not None and isinstance(result, OracleResponse):
            self._trace(result.pv or (result.move,))
            whose = t().whose_computer if self._purpose is AcquisitionPurpose.APPLY else t().whose_player
            self._ctx.events.emit_status(
                t().status_cloud_library.format(whose=whose, score=result.score, depth=result.depth)
            )
            self._resolve(AcquiredMove(ply, self._purpose, result.source))
            return

        if self._ctx.position.repetition_status(1) > 0:
            _LOGGER.debug("Position repeats; skipping the engine API")
            self._defer(generation)
            return
        self._query_secondary(generation, mode)

    def _query_secondary(self, generation: int, mode: AcquisitionMode) -> None:
        self._stage = AcquisitionStage.QUERYING_SECONDARY
        self._secondary.query(
            self._fen,
            self._ctx.settings.oracle_timeout_ms,
            lambda result: self._on_secondary(generation, mode, result),
        )

    def _on_secondary(self, generation: int, mode: AcquisitionMode, result: OracleResult) -> None:
        if not self._is_current(generation, AcquisitionStage.QUERYING_SECONDARY):
            return
        ply = self._confident_ply(result)
        if ply is None or not isinstance(result, OracleResponse):
            self._defer(generation)
            return

        if mode is AcquisitionMode.FAST:
            hint = SearchHint(ply, HintMode.SECONDARY_ORACLE, _secondary_depth(result), _to_int(result.score))
            self._resolve_by_search(hint, result.source)
            return

        traced = self._trace(result.pv or (result.move,))
        self._ctx.events.emit_status(t().status_engine_api.format(score=result.score, depth=traced))
        self._resolve(AcquiredMove(ply, self._purpose, result.source))

    def _defer(self, generation: int) -> None:
        self._stage = AcquisitionStage.LOCAL_FALLBACK
        delay = self._ctx.settings.fallback_delay_ms
        _LOGGER.debug("Acquisition #%d deferred to local search in %d ms", generation, delay)
        self._schedule(delay, lambda: self._on_fallback(generation))

    def _on_fallback(self, generation: int) -> None:
        if not self._is_current(generation, AcquisitionStage.LOCAL_FALLBACK):
            return
        if self._position_changed():
            _LOGGER.warning("Position changed before local search of acquisition #%d", generation)
            self._finish(None)
            return
        self._resolve_by_search(SearchHint.none(), None)

    # ── Resolution ───────────────────────────────────────────────────────

    def _resolve_by_search(self, hint: SearchHint, source: OracleSource | None) -> None:
        search = self._ctx.search
        if search is None:
            _LOGGER.warning("Local search removed during acquisition #%d", self._generation)
            self._finish(None)
            return
        settings = self._ctx.settings
        try:
            ply = run_search(
                search,
                hint,
                depth_limit=settings.search_depth_limit,
                time_budget_ms=settings.think_time_ms,
            )
        except Exception:
            _LOGGER.exception("Local search failed")
            self._finish(None)
            return
        self._resolve(AcquiredMove(ply, self._purpose, source, hint))

    def _resolve(self, move: AcquiredMove) -> None:
        if self._position_changed():
            _LOGGER.warning("Dropping %s: position changed during acquisition #%d", move.ply, self._generation)
            self._finish(None)
            return
        _LOGGER.debug("Acquisition #%d resolved: %s (%s)", self._generation, move.ply, move.source)
        self._finish(move)

    def _finish(self, move: AcquiredMove | None) -> None:
        self._stage = AcquisitionStage.RESOLVED if move is not None else AcquisitionStage.IDLE
        on_acquired, self._on_acquired = self._on_acquired, None
        if on_acquired is not None:
            on_acquired(move)

    # ── Validation ───────────────────────────────────────────────────────

    def _is_current(self, generation: int, stage: AcquisitionStage) -> bool:
        if generation != self._generation or self._stage != stage:
            _LOGGER.debug("Dropping callback of stale acquisition #%d", generation)
            return False
        return True

    def _confident_ply(self, result: OracleResult) -> Ply | None:
        """The oracle's move if it passes the gate, else None."""
        if isinstance(result, OracleFailure):
            _LOGGER.debug("%s gave no move: %s %s", result.source, result.kind, result.detail)
            return None

        if self._position_changed():
            self._reject(result.source, FailureKind.NO_CONFIDENT_MOVE, "position changed")
            return None
        try:
            ply = decode_iccs(result.move)
        except MalformedNotation as exc:
            self._reject(result.source, FailureKind.MALFORMED_NOTATION, str(exc))
            return None
        if not self._passes_gate(ply):
            self._reject(result.source, FailureKind.ILLEGAL_MOVE, result.move)
            return None
        return ply

    def _position_changed(self) -> bool:
        return self._ctx.position.to_fen() != self._fen

    def _passes_gate(self, ply: Ply) -> bool:
        position = self._ctx.position
        if not position.legal_move(ply):
            return False
        if not position.make_move(ply):
            return False
        position.undo_make_move()
        return True

    @staticmethod
    def _reject(source: OracleSource, kind: FailureKind, detail: str) -> None:
        _LOGGER.warning("Rejected %s answer (%s): %s", source, kind, detail)

    def _trace(self, line: Sequence[str]) -> int:
        """Replay *line* on the position for the trace, then restore it.

        Undecodable or illegal plies are skipped; the rest of the line is
        still tried.  Returns the number of traced plies.
        """
        position = self._ctx.position
        described: list[str] = []
        for text in line:
            try:
                ply = decode_iccs(text)
            except MalformedNotation:
                continue
            if not position.legal_move(ply) or not position.make_move(ply):
                continue
            described.append(position.describe_move(ply))
        for _ in described:
            position.undo_make_move()
        self._ctx.events.emit_trace(described)
        return len(described)
