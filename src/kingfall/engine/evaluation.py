"""Static evaluation: signed material sum, white positive."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kingfall.core.enums import Color, PieceType

if TYPE_CHECKING:
    from kingfall.core.board import Board

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20_000,
}


def piece_value(color: Color, piece_type: PieceType) -> int:
    value = PIECE_VALUES[piece_type]
    return value if color == Color.WHITE else -value


def evaluate(board: Board) -> int:
    """Material balance in centipawns; the starting position scores 0.

    No positional, mobility or king-safety terms.  The king's large value
    makes a missing king dominate every other imbalance.
    """
    return sum(piece_value(piece.color, piece.piece_type) for _, piece in board)
