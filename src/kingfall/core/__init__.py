"""Core domain layer - board, pieces and pseudo-legal move generation.

Quick start::

    from kingfall.core import Board, MoveGenerator, Color

    board = Board.initial()
    gen = MoveGenerator(board)
    for move in gen.pseudo_legal_moves(Color.WHITE):
        print(move)
"""

from kingfall.core.board import Board
from kingfall.core.enums import Color, MoveFlag, PieceType
from kingfall.core.move import Move
from kingfall.core.move_generator import MoveGenerator
from kingfall.core.notation import (
    STARTING_FEN,
    FenRecord,
    move_text,
    parse_fen,
    to_fen,
)
from kingfall.core.piece import Piece
from kingfall.core.rules import PROMOTION_TYPES, Rules
from kingfall.core.types import Position, parse_square, square_name

__all__ = [
    # Enums / flags
    "Color",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Position",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "PROMOTION_TYPES",
    "Rules",
    # Notation
    "STARTING_FEN",
    "FenRecord",
    "move_text",
    "parse_fen",
    "to_fen",
]
