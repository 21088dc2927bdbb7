"""Local search contract and the hints the oracle cascade feeds into it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from xqcloud.core.move import Ply

LIMIT_DEPTH = 64


class HintMode(IntEnum):
    """Where a seeded hint move came from (the search weighs them differently)."""

    NONE = 0
    PRIMARY_ORACLE = 1
    SECONDARY_ORACLE = 100


@dataclass(slots=True, frozen=True)
class SearchHint:
    """Auxiliary seeding for the local search; never a requirement."""

    move: Ply | None = None
    mode: HintMode = HintMode.NONE
    depth: int = 0
    score: int = 0

    @classmethod
    def none(cls) -> SearchHint:
        return cls()


class ILocalSearch(Protocol):
    """Protocol for the local search engine; always returns a legal ply."""

    def search_best_move(
        self,
        depth_limit: int,
        time_budget_ms: int,
        hint_move: Ply | None,
        hint_mode: int,
        hint_depth: int,
        hint_score: int,
    ) -> Ply: ...


def run_search(
    search: ILocalSearch,
    hint: SearchHint,
    *,
    depth_limit: int,
    time_budget_ms: int,
) -> Ply:
    """Invoke *search* with the fields of *hint* spread out."""
    return search.search_best_move(
        depth_limit,
        time_budget_ms,
        hint.move,
        int(hint.mode),
        hint.depth,
        hint.score,
    )
