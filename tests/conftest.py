"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator, Mapping

import pytest

from xqcloud.core.enums import PieceType, Side
from xqcloud.core.move import Ply
from xqcloud.core.notation import STARTING_FEN, encode_iccs
from xqcloud.core.types import BOARD_OFFSET, BOARD_SQUARES, make_square
from xqcloud.oracle.models import OracleResult, OracleSource
from xqcloud.oracle.transport import HttpMethod, HttpReply

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for Qt-dependent tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture(autouse=True)
def _reset_language() -> Iterator[None]:
    """Reset shared i18n state between tests."""
    from xqcloud.i18n import set_language

    set_language("English")
    yield
    set_language("English")


# ── Scripted rule engine ─────────────────────────────────────────────────────

_PIECE_LETTERS = {
    "k": PieceType.KING,
    "a": PieceType.ADVISOR,
    "b": PieceType.BISHOP,
    "e": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
    "h": PieceType.KNIGHT,
    "r": PieceType.ROOK,
    "c": PieceType.CANNON,
    "p": PieceType.PAWN,
}
_LETTERS = "kabnrcp"


class ScriptedPosition:
    """Tiny stand-in for the rule engine.

    A move is legal when it moves a piece of the side to move onto a square
    not holding one of its own pieces, unless the test lists it in
    ``illegal`` (legal_move false) or ``self_check`` (make_move false).
    Check, mate and repetition answers are scripted per test.
    """

    def __init__(self, fen: str = STARTING_FEN) -> None:
        self.board = [0] * BOARD_SQUARES
        self.side = Side.RED
        self.history: list[tuple[Ply, int]] = []
        self.illegal: set[Ply] = set()
        self.self_check: set[Ply] = set()
        self.check_after: set[Ply] = set()
        self.mate_after: set[Ply] = set()
        self.repetitions: dict[int, int] = {}
        self.rep_value = 0
        self.extra_captures: list[int] = []
        self.from_fen(fen)

    # IPosition

    @property
    def side_to_move(self) -> Side:
        return self.side

    @property
    def captures(self) -> list[int]:
        return self.extra_captures + [captured for _ply, captured in self.history]

    def legal_move(self, ply: Ply) -> bool:
        if ply in self.illegal:
            return False
        own = self.side.tag
        return bool(self.board[ply.src] & own) and not self.board[ply.dst] & own

    def make_move(self, ply: Ply) -> bool:
        if ply in self.self_check:
            return False
        captured = self.board[ply.dst]
        self.board[ply.dst] = self.board[ply.src]
        self.board[ply.src] = 0
        self.history.append((ply, captured))
        self.side = self.side.opposite
        return True

    def undo_make_move(self) -> None:
        ply, captured = self.history.pop()
        self.board[ply.src] = self.board[ply.dst]
        self.board[ply.dst] = captured
        self.side = self.side.opposite

    def _last_in(self, plies: set[Ply]) -> bool:
        return bool(self.history) and self.history[-1][0] in plies

    def in_check(self) -> bool:
        return self._last_in(self.check_after)

    def is_mate(self) -> bool:
        return self._last_in(self.mate_after)

    def captured(self) -> bool:
        return bool(self.history) and self.history[-1][1] != 0

    def repetition_status(self, window: int) -> int:
        return self.repetitions.get(window, 0)

    def repetition_value(self, repetition: int) -> int:
        return self.rep_value

    def to_fen(self) -> str:
        rows = []
        for y in range(BOARD_OFFSET, BOARD_OFFSET + 10):
            row, empty = "", 0
            for x in range(BOARD_OFFSET, BOARD_OFFSET + 9):
                pc = self.board[make_square(x, y)]
                if pc == 0:
                    empty += 1
                    continue
                if empty:
                    row += str(empty)
                    empty = 0
                letter = _LETTERS[pc & 7]
                row += letter.upper() if pc & Side.RED.tag else letter
            if empty:
                row += str(empty)
            rows.append(row)
        return "/".join(rows) + (" w" if self.side == Side.RED else " b")

    def from_fen(self, fen: str) -> None:
        self.board = [0] * BOARD_SQUARES
        self.history = []
        placement, _, rest = fen.partition(" ")
        for i, row in enumerate(placement.split("/")):
            x = BOARD_OFFSET
            for char in row:
                if char.isdigit():
                    x += int(char)
                    continue
                side = Side.RED if char.isupper() else Side.BLACK
                self.board[make_square(x, BOARD_OFFSET + i)] = side.tag + _PIECE_LETTERS[char.lower()]
                x += 1
        self.side = Side.BLACK if rest.startswith("b") else Side.RED

    def piece_at(self, sq: int) -> int:
        return self.board[sq]

    def describe_move(self, ply: Ply) -> str:
        return encode_iccs(ply).upper()


# ── Search, oracles, transport, scheduler ────────────────────────────────────


class FakeSearch:
    """Records every call and answers with ``reply`` (or raises ``error``)."""

    def __init__(self, reply: Ply | None = None) -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.calls: list[tuple[int, int, Ply | None, int, int, int]] = []

    def search_best_move(
        self,
        depth_limit: int,
        time_budget_ms: int,
        hint_move: Ply | None,
        hint_mode: int,
        hint_depth: int,
        hint_score: int,
    ) -> Ply:
        self.calls.append((depth_limit, time_budget_ms, hint_move, hint_mode, hint_depth, hint_score))
        if self.error is not None:
            raise self.error
        assert self.reply is not None
        return self.reply


class ScriptedOracle:
    """Oracle answering from a queue of results.

    With ``hold=True`` callbacks are parked in ``pending`` until the test
    calls :meth:`deliver`, like a reply still on the wire.
    """

    def __init__(self, source: OracleSource, *results: OracleResult, hold: bool = False) -> None:
        self._source = source
        self.results = list(results)
        self.hold = hold
        self.queries: list[tuple[str, int]] = []
        self.pending: list[Callable[[OracleResult], None]] = []

    @property
    def source(self) -> OracleSource:
        return self._source

    def query(self, fen: str, timeout_ms: int, on_result: Callable[[OracleResult], None]) -> None:
        self.queries.append((fen, timeout_ms))
        if self.hold:
            self.pending.append(on_result)
            return
        on_result(self.results.pop(0))

    def deliver(self, result: OracleResult | None = None) -> None:
        on_result = self.pending.pop(0)
        on_result(result if result is not None else self.results.pop(0))


class FakeTransport:
    """Synchronous :class:`IHttpTransport` returning canned replies."""

    def __init__(self, *replies: HttpReply) -> None:
        self.replies = list(replies)
        self.requests: list[tuple[HttpMethod, str, dict[str, str], int]] = []

    def request(
        self,
        method: HttpMethod,
        url: str,
        params: Mapping[str, str],
        timeout_ms: int,
        on_done: Callable[[HttpReply], None],
    ) -> None:
        self.requests.append((method, url, dict(params), timeout_ms))
        on_done(self.replies.pop(0))


class ManualScheduler:
    """Collects deferred calls; the test decides when they run."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, Callable[[], None]]] = []

    def __call__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.calls.append((delay_ms, callback))

    def run_all(self) -> None:
        while self.calls:
            _delay, callback = self.calls.pop(0)
            callback()


@pytest.fixture
def position() -> ScriptedPosition:
    return ScriptedPosition()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def fake_search() -> type[FakeSearch]:
    return FakeSearch


@pytest.fixture
def scripted_oracle() -> type[ScriptedOracle]:
    return ScriptedOracle


@pytest.fixture
def fake_transport() -> type[FakeTransport]:
    return FakeTransport


@pytest.fixture
def scripted_position() -> type[ScriptedPosition]:
    return ScriptedPosition
