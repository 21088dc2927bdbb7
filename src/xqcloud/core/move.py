"""Ply value object."""

from __future__ import annotations

from dataclasses import dataclass

from xqcloud.core.types import Square, in_board


@dataclass(frozen=True, slots=True)
class Ply:
    """Immutable half-move from ``src`` to ``dst``."""

    src: Square
    dst: Square

    def __post_init__(self) -> None:
        if not (in_board(self.src) and in_board(self.dst)):
            raise ValueError(f"Ply squares off the board: {self.src}->{self.dst}")

    @property
    def value(self) -> int:
        """Packed form used by the rule engine: ``src + (dst << 8)``."""
        return self.src + (self.dst << 8)

    @classmethod
    def from_value(cls, value: int) -> Ply:
        return cls(value & 255, value >> 8)

    def __str__(self) -> str:
        from xqcloud.core.notation import encode_iccs

        return encode_iccs(self)
