"""HTTP transport for the oracles, running on the Qt event loop."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from PyQt6.QtCore import QByteArray, QObject, QUrl, QUrlQuery
from PyQt6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

_LOGGER = logging.getLogger(__name__)

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
_JSON_CONTENT_TYPE = "application/json"


class HttpMethod(StrEnum):
    GET = "GET"
    POST = "POST"


@dataclass(slots=True, frozen=True)
class HttpReply:
    """Outcome of one HTTP exchange."""

    status: int | None
    body: str = ""
    error: str | None = None
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.timed_out and self.status == 200


ReplyCallback = Callable[[HttpReply], None]


class IHttpTransport(Protocol):
    """Fire-and-forget HTTP request; *on_done* runs on the event loop."""

    def request(
        self,
        method: HttpMethod,
        url: str,
        params: Mapping[str, str],
        timeout_ms: int,
        on_done: ReplyCallback,
    ) -> None: ...


def build_url(url: str, params: Mapping[str, str]) -> QUrl:
    """Attach *params* to *url* as a percent-encoded query string."""
    qurl = QUrl(url)
    query = QUrlQuery()
    for key, value in params.items():
        query.addQueryItem(key, value)
    qurl.setQuery(query)
    return qurl


class QtHttpTransport:
    """:class:`IHttpTransport` backed by ``QNetworkAccessManager``.

    Requests are never aborted by the caller; a per-request transfer timeout
    turns a hung request into a ``timed_out`` reply.
    """

    __slots__ = ("_manager",)

    def __init__(self, parent: QObject | None = None) -> None:
        self._manager = QNetworkAccessManager(parent)

    def request(
        self,
        method: HttpMethod,
        url: str,
        params: Mapping[str, str],
        timeout_ms: int,
        on_done: ReplyCallback,
    ) -> None:
        request = QNetworkRequest(build_url(url, params))
        request.setTransferTimeout(timeout_ms)
        if method == HttpMethod.POST:
            request.setHeader(
                QNetworkRequest.KnownHeaders.ContentTypeHeader, _FORM_CONTENT_TYPE
            )
            reply = self._manager.post(request, QByteArray())
        else:
            request.setHeader(
                QNetworkRequest.KnownHeaders.ContentTypeHeader, _JSON_CONTENT_TYPE
            )
            reply = self._manager.get(request)
        reply.finished.connect(lambda: self._on_finished(reply, on_done))

    @staticmethod
    def _on_finished(reply: QNetworkReply, on_done: ReplyCallback) -> None:
        status = reply.attribute(QNetworkRequest.Attribute.HttpStatusCodeAttribute)
        body = bytes(reply.readAll().data()).decode("utf-8", errors="replace")
        error = reply.error()
        message = reply.errorString()
        url = reply.url().toString()
        reply.deleteLater()

        if error in (
            QNetworkReply.NetworkError.OperationCanceledError,
            QNetworkReply.NetworkError.TimeoutError,
        ):
            _LOGGER.warning("Oracle request timed out: %s", url)
            on_done(HttpReply(status=None, timed_out=True, error="timeout"))
            return
        if error != QNetworkReply.NetworkError.NoError:
            _LOGGER.warning("Oracle request failed (%s): %s", error.name, url)
            on_done(HttpReply(status=status, body=body, error=message))
            return
        on_done(HttpReply(status=status, body=body))
