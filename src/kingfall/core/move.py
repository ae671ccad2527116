"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, field

from kingfall.core.enums import MoveFlag, PieceType
from kingfall.core.piece import Piece
from kingfall.core.types import Position, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record describing one ply.

    ``piece`` and ``captured`` reference the pieces on the board the move was
    generated from; they are informational and excluded from equality.
    """

    from_pos: Position
    to_pos: Position
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    piece: Piece | None = field(default=None, compare=False, repr=False)
    captured: Piece | None = field(default=None, compare=False, repr=False)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    @property
    def is_promotion(self) -> bool:
        return self.flag == MoveFlag.PROMOTION

    def __str__(self) -> str:
        return f"{square_name(self.from_pos)}{square_name(self.to_pos)}"
