"""Deferred-call seams: scheduling on the Qt event loop and ply animation."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

from PyQt6.QtCore import QTimer

if TYPE_CHECKING:
    from xqcloud.core.move import Ply

# (delay_ms, callback) -> None; the callback runs later on the event loop.
Scheduler: TypeAlias = Callable[[int, Callable[[], None]], None]

# (ply, on_done) -> None; the animator must call on_done exactly once.
Animator: TypeAlias = Callable[["Ply", Callable[[], None]], None]


def qt_single_shot(delay_ms: int, callback: Callable[[], None]) -> None:
    """Run *callback* once after *delay_ms* on the Qt event loop."""
    QTimer.singleShot(delay_ms, callback)
