"""Data models produced by the remote move oracles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias


class OracleSource(StrEnum):
    """Which remote service answered."""

    CLOUD_LIBRARY = "cloud-library"
    ENGINE_API = "engine-api"


class FailureKind(StrEnum):
    """Why an oracle call produced no usable move."""

    NO_CONFIDENT_MOVE = "no-confident-move"
    NO_CANDIDATES = "no-candidates"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    MALFORMED_NOTATION = "malformed-notation"
    ILLEGAL_MOVE = "illegal-move"


@dataclass(slots=True, frozen=True)
class OracleCandidate:
    """One entry of a candidate list: move, its line and its score."""

    move: str
    pv: str = ""
    score: str = ""


@dataclass(slots=True, frozen=True)
class OracleResponse:
    """A confident answer, still in the oracle's own notation."""

    source: OracleSource
    move: str
    score: str = ""
    depth: str = ""
    pv: tuple[str, ...] = ()
    candidates: tuple[OracleCandidate, ...] = ()


@dataclass(slots=True, frozen=True)
class OracleFailure:
    """Typed failure; every kind leads to the next fallback stage."""

    source: OracleSource
    kind: FailureKind
    detail: str = ""


OracleResult: TypeAlias = OracleResponse | OracleFailure
