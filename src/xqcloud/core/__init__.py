"""Core domain layer — squares, plies, ICCS codec and the rule engine contract.

Quick start::

    from xqcloud.core import decode_iccs, encode_iccs

    ply = decode_iccs("h2e2")
    assert encode_iccs(ply) == "h2e2"
"""

from xqcloud.core.enums import AcquisitionMode, GameResult, MoveClass, PieceType, Side
from xqcloud.core.move import Ply
from xqcloud.core.notation import (
    STARTING_FEN,
    MalformedNotation,
    decode_iccs,
    encode_iccs,
    split_iccs_blocks,
)
from xqcloud.core.position import WIN_VALUE, IPosition
from xqcloud.core.types import (
    Square,
    file_x,
    in_board,
    make_square,
    playable_squares,
    rank_y,
    square_flip,
)

__all__ = [
    # Enums
    "AcquisitionMode",
    "GameResult",
    "MoveClass",
    "PieceType",
    "Side",
    # Types / helpers
    "Square",
    "file_x",
    "in_board",
    "make_square",
    "playable_squares",
    "rank_y",
    "square_flip",
    # Notation
    "STARTING_FEN",
    "MalformedNotation",
    "decode_iccs",
    "encode_iccs",
    "split_iccs_blocks",
    # Domain objects
    "IPosition",
    "Ply",
    "WIN_VALUE",
]
