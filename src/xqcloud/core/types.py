"""Square type alias and coordinate helpers.

Board layout (16x16 mailbox, as used by the rule engine):
    the playable 9x10 grid occupies files 3..11 and ranks 3..12,
    square = rank_y * 16 + file_x.
    Rank 3 is the top (black) edge, rank 12 the bottom (red) edge.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = int  # 0–255

ROW_STRIDE = 16
BOARD_OFFSET = 3
FILE_LEFT = BOARD_OFFSET
FILE_RIGHT = BOARD_OFFSET + 8
RANK_TOP = BOARD_OFFSET
RANK_BOTTOM = BOARD_OFFSET + 9
BOARD_SQUARES = 256


def file_x(sq: Square) -> int:
    """Mailbox column 0–15."""
    return sq & 15


def rank_y(sq: Square) -> int:
    """Mailbox row 0–15."""
    return sq >> 4


def make_square(x: int, y: int) -> Square:
    """Create a square from mailbox column and row."""
    return x + (y << 4)


def in_board(sq: Square) -> bool:
    """Whether *sq* lies on the playable 9x10 grid."""
    if not 0 <= sq < BOARD_SQUARES:
        return False
    x, y = file_x(sq), rank_y(sq)
    return FILE_LEFT <= x <= FILE_RIGHT and RANK_TOP <= y <= RANK_BOTTOM


def square_flip(sq: Square) -> Square:
    """Mirror a square through the board centre (view from the black side)."""
    return 254 - sq


def playable_squares() -> list[Square]:
    """All on-board squares in ascending order."""
    return [sq for sq in range(BOARD_SQUARES) if in_board(sq)]
