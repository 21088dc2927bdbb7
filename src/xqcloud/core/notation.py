"""ICCS move notation used by the oracle wire formats.

An ICCS move is four characters: file letter, rank digit, file letter, rank
digit, e.g. ``h2e2``.  Files ``a``–``i`` run left to right from red's side,
ranks ``0``–``9`` run from red's back rank upwards.
"""

from __future__ import annotations

from xqcloud.core.move import Ply
from xqcloud.core.types import BOARD_OFFSET, ROW_STRIDE, Square, file_x, rank_y

STARTING_FEN = "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1"

FILES = "abcdefghi"
RANKS = "0123456789"
ICCS_LENGTH = 4
PV_STRIDE = ICCS_LENGTH + 1  # one separator after every block


class MalformedNotation(ValueError):
    """Raised when text is not a well-formed ICCS move."""


def _square(file_char: str, rank_char: str, text: str) -> Square:
    file = FILES.find(file_char)
    rank = RANKS.find(rank_char)
    if file < 0 or rank < 0:
        raise MalformedNotation(f"Invalid ICCS move: {text!r}")
    return (9 - rank + BOARD_OFFSET) * ROW_STRIDE + (file + BOARD_OFFSET)


def _coords(sq: Square) -> str:
    return FILES[file_x(sq) - BOARD_OFFSET] + RANKS[9 + BOARD_OFFSET - rank_y(sq)]


def decode_iccs(text: str) -> Ply:
    """Parse ICCS text, e.g. ``'h2e2'`` → ``Ply(170, 167)``."""
    if len(text) != ICCS_LENGTH:
        raise MalformedNotation(f"Invalid ICCS move: {text!r}")
    return Ply(_square(text[0], text[1], text), _square(text[2], text[3], text))


def encode_iccs(ply: Ply) -> str:
    """Format a ply as ICCS text."""
    return _coords(ply.src) + _coords(ply.dst)


def split_iccs_blocks(tail: str) -> list[str]:
    """Split a principal-variation tail into its 4-character blocks.

    Blocks sit at a stride of five characters (move plus separator); a
    trailing fragment shorter than a move is dropped.
    """
    blocks = (tail[i : i + ICCS_LENGTH] for i in range(0, len(tail), PV_STRIDE))
    return [block for block in blocks if len(block) == ICCS_LENGTH]
