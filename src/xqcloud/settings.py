"""Application settings for the move orchestrator."""

from __future__ import annotations

from dataclasses import dataclass

from xqcloud.core.enums import AcquisitionMode, Side
from xqcloud.engine.search import LIMIT_DEPTH
from xqcloud.oracle.client import CLOUD_LIBRARY_URL, ENGINE_API_URL

# Thinking times at or below this use the fast (single-pass) oracle cascade.
FAST_THINK_TIME_MS = 1000


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # General
    language: str = "English"

    # Presentation
    animate_moves: bool = True
    sound_enabled: bool = True

    # Opponent
    computer_side: Side | None = Side.BLACK
    think_time_ms: int = FAST_THINK_TIME_MS
    search_depth_limit: int = LIMIT_DEPTH

    # Oracles
    cloud_library_url: str = CLOUD_LIBRARY_URL
    engine_api_url: str = ENGINE_API_URL
    engine_api_quality: str = "vip"
    oracle_timeout_ms: int = 10_000
    fallback_delay_ms: int = 250  # keeps instant local replies from looking instant

    # Terminal detection
    repetition_window: int = 3
    move_limit_plies: int = 100

    @property
    def acquisition_mode(self) -> AcquisitionMode:
        if self.think_time_ms <= FAST_THINK_TIME_MS:
            return AcquisitionMode.FAST
        return AcquisitionMode.DEEP
