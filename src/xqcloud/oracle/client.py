"""Oracle clients: one asynchronous request, one normalized result.

Both clients share the :class:`IOracleClient` contract.  They never raise
across the asynchronous seam; every problem is reported as an
:class:`OracleFailure` through the result callback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from xqcloud.oracle.models import FailureKind, OracleFailure, OracleResult, OracleSource
from xqcloud.oracle.parsing import parse_cloud_library_text, parse_engine_api_text
from xqcloud.oracle.transport import HttpMethod, HttpReply, IHttpTransport

_LOGGER = logging.getLogger(__name__)

CLOUD_LIBRARY_URL = "https://www.chessdb.cn/chessdb.php"
ENGINE_API_URL = "https://engine.xqipu.com/api/engine/getMoves"

ResultCallback = Callable[[OracleResult], None]


class IOracleClient(Protocol):
    """A remote move oracle."""

    @property
    def source(self) -> OracleSource: ...

    def query(self, fen: str, timeout_ms: int, on_result: ResultCallback) -> None:
        """Ask for a move in *fen*; *on_result* is called exactly once."""
        ...


def _transport_failure(source: OracleSource, reply: HttpReply) -> OracleFailure:
    if reply.timed_out:
        return OracleFailure(source, FailureKind.TIMEOUT, reply.error or "")
    detail = reply.error or f"HTTP {reply.status}"
    return OracleFailure(source, FailureKind.TRANSPORT, detail)


class CloudLibraryOracle:
    """Opening/endgame cloud library answering ``querypv`` in plain text."""

    __slots__ = ("_transport", "_url")

    def __init__(self, transport: IHttpTransport, url: str = CLOUD_LIBRARY_URL) -> None:
        self._transport = transport
        self._url = url

    @property
    def source(self) -> OracleSource:
        return OracleSource.CLOUD_LIBRARY

    def query(self, fen: str, timeout_ms: int, on_result: ResultCallback) -> None:
        params = {"action": "querypv", "learn": "1", "board": fen}

        def _done(reply: HttpReply) -> None:
            if not reply.ok:
                on_result(_transport_failure(self.source, reply))
                return
            result = parse_cloud_library_text(reply.body)
            _LOGGER.debug("Cloud library answered %r -> %s", reply.body[:60], result)
            on_result(result)

        self._transport.request(HttpMethod.POST, self._url, params, timeout_ms, _done)


class EngineApiOracle:
    """Hosted engine returning a JSON candidate list."""

    __slots__ = ("_transport", "_url", "_quality")

    def __init__(
        self,
        transport: IHttpTransport,
        url: str = ENGINE_API_URL,
        quality: str = "vip",
    ) -> None:
        self._transport = transport
        self._url = url
        self._quality = quality

    @property
    def source(self) -> OracleSource:
        return OracleSource.ENGINE_API

    def query(self, fen: str, timeout_ms: int, on_result: ResultCallback) -> None:
        params = {"fen": fen, "level": self._quality}

        def _done(reply: HttpReply) -> None:
            if not reply.ok:
                on_result(_transport_failure(self.source, reply))
                return
            on_result(parse_engine_api_text(reply.body))

        self._transport.request(HttpMethod.GET, self._url, params, timeout_ms, _done)
