"""Rule helpers shared by move generation and the game state machine."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kingfall.core.enums import Color, MoveFlag, PieceType
from kingfall.core.types import Position

if TYPE_CHECKING:
    from kingfall.core.board import Board

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_PROMOTION_LETTERS: dict[str, PieceType] = {
    "Q": PieceType.QUEEN,
    "R": PieceType.ROOK,
    "B": PieceType.BISHOP,
    "N": PieceType.KNIGHT,
}


class Rules:
    """Static rule-checker operating on a :class:`Board`.

    Orientation: white starts on rows 6-7 and moves toward row 0.
    """

    @staticmethod
    def forward(color: Color) -> int:
        """Row delta of a pawn step for *color*."""
        return -1 if color == Color.WHITE else 1

    @staticmethod
    def home_row(color: Color) -> int:
        return 7 if color == Color.WHITE else 0

    @staticmethod
    def pawn_start_row(color: Color) -> int:
        return 6 if color == Color.WHITE else 1

    @staticmethod
    def promotion_row(color: Color) -> int:
        return 0 if color == Color.WHITE else 7

    @staticmethod
    def is_promotion(board: Board, from_pos: Position, to_pos: Position) -> bool:
        """A pawn moving *from_pos* -> *to_pos* lands on its far row."""
        piece = board[from_pos]
        if piece is None or piece.piece_type != PieceType.PAWN:
            return False
        return to_pos.row == Rules.promotion_row(piece.color)

    @staticmethod
    def promotion_type(choice: PieceType | str | None) -> PieceType:
        """Normalise a promotion choice; anything unrecognised becomes a queen."""
        if isinstance(choice, PieceType):
            return choice if choice in PROMOTION_TYPES else PieceType.QUEEN
        if isinstance(choice, str) and choice:
            return _PROMOTION_LETTERS.get(choice[0].upper(), PieceType.QUEEN)
        return PieceType.QUEEN

    @staticmethod
    def castle_rook_squares(
        king_from: Position, king_to: Position
    ) -> tuple[Position, Position]:
        """(rook origin, rook destination) for a king moving two columns."""
        row = king_from.row
        if king_to.col > king_from.col:
            return Position(row, 7), Position(row, king_to.col - 1)
        return Position(row, 0), Position(row, king_to.col + 1)

    @staticmethod
    def classify(
        board: Board,
        from_pos: Position,
        to_pos: Position,
        en_passant: Position | None,
    ) -> MoveFlag:
        """Which branch of move application *from_pos* -> *to_pos* takes."""
        piece = board[from_pos]
        if piece is None:
            return MoveFlag.NORMAL

        if piece.piece_type == PieceType.KING and abs(to_pos.col - from_pos.col) == 2:
            if to_pos.col > from_pos.col:
                return MoveFlag.CASTLE_KINGSIDE
            return MoveFlag.CASTLE_QUEENSIDE

        if piece.piece_type != PieceType.PAWN:
            return MoveFlag.NORMAL

        if (
            from_pos.col != to_pos.col
            and board.is_empty(to_pos)
            and to_pos == en_passant
        ):
            return MoveFlag.EN_PASSANT
        if to_pos.row == Rules.promotion_row(piece.color):
            return MoveFlag.PROMOTION
        if abs(to_pos.row - from_pos.row) == 2:
            return MoveFlag.DOUBLE_PAWN
        return MoveFlag.NORMAL
