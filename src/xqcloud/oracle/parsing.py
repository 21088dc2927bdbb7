"""Response parsers for the two oracle wire formats.

Both parsers are pure: text or JSON in, :class:`OracleResponse` or
:class:`OracleFailure` out.  Nothing here decodes moves into squares; that is
the acquisition pipeline's job, done against the live position.
"""

from __future__ import annotations

import json

from xqcloud.core.notation import ICCS_LENGTH, split_iccs_blocks
from xqcloud.oracle.models import (
    FailureKind,
    OracleCandidate,
    OracleFailure,
    OracleResponse,
    OracleResult,
    OracleSource,
)

# Cloud library ``querypv`` answers look like
#   score:-12,depth:30,pv:h2e2|h9g7|b0c2
# Extraction keeps the client's historical offsets: the score runs from the
# header to one separator before "depth", the depth from its marker to one
# separator before "pv", and the move is the four characters after "pv:".
_REQUIRED_MARKERS = ("pv:", "depth:", "score:")
_SCORE_HEADER = "score"
_DEPTH_HEADER = "depth"
_PV_HEADER = "pv"


def _substr(text: str, start: int, length: int) -> str:
    """``String.prototype.substr`` semantics: a non-positive length is empty."""
    return text[start : start + max(length, 0)]


def parse_cloud_library_text(text: str) -> OracleResult:
    """Parse a cloud-library ``querypv`` body."""
    if not all(marker in text for marker in _REQUIRED_MARKERS):
        return OracleFailure(
            OracleSource.CLOUD_LIBRARY,
            FailureKind.NO_CONFIDENT_MOVE,
            text.strip()[:80],
        )

    score_at = text.index(_SCORE_HEADER)
    depth_at = text.index(_DEPTH_HEADER)
    pv_at = text.index(_PV_HEADER)

    score = _substr(text, score_at + len(_SCORE_HEADER) + 1, depth_at - 7)
    depth = _substr(text, depth_at + len(_DEPTH_HEADER) + 1, pv_at - 7 - depth_at)
    tail = text[pv_at + len(_PV_HEADER) + 1 :]
    move = tail[:ICCS_LENGTH]

    return OracleResponse(
        source=OracleSource.CLOUD_LIBRARY,
        move=move,
        score=score,
        depth=depth,
        pv=tuple(split_iccs_blocks(tail)),
    )


def _candidate(entry: dict[str, object]) -> OracleCandidate:
    score = entry.get("score")
    return OracleCandidate(
        move=str(entry.get("move") or ""),
        pv=str(entry.get("pv") or ""),
        score="" if score is None else str(score),
    )


def parse_engine_api_payload(payload: object) -> OracleResult:
    """Parse a decoded engine-API ``getMoves`` document."""
    moves = payload.get("moves") if isinstance(payload, dict) else None
    if not isinstance(moves, list):
        moves = []

    candidates = tuple(_candidate(entry) for entry in moves if isinstance(entry, dict))
    if not candidates or not candidates[0].move:
        return OracleFailure(OracleSource.ENGINE_API, FailureKind.NO_CANDIDATES)

    first = candidates[0]
    return OracleResponse(
        source=OracleSource.ENGINE_API,
        move=first.move,
        score=first.score,
        pv=tuple(split_iccs_blocks(first.pv)),
        candidates=candidates,
    )


def parse_engine_api_text(text: str) -> OracleResult:
    """Decode and parse an engine-API body; undecodable JSON is a transport error."""
    try:
        payload = json.loads(text)
    except ValueError as exc:
        return OracleFailure(OracleSource.ENGINE_API, FailureKind.TRANSPORT, str(exc))
    return parse_engine_api_payload(payload)
