"""xqcloud — move resolution and game-state orchestration for xiangqi."""

__version__ = "0.1.0"
