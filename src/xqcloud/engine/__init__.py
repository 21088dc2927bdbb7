"""Local search contract: protocol, hints and invocation helper."""

from xqcloud.engine.search import LIMIT_DEPTH, HintMode, ILocalSearch, SearchHint, run_search

__all__ = [
    "LIMIT_DEPTH",
    "HintMode",
    "ILocalSearch",
    "SearchHint",
    "run_search",
]
