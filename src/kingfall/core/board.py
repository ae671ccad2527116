"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from kingfall.core.enums import Color, PieceType
from kingfall.core.piece import Piece
from kingfall.core.types import ALL_POSITIONS, Position

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid owning its :class:`Piece` instances.

    Owns no rules: it only answers occupancy queries.  At most one piece
    occupies a square; placing a piece updates its ``position``.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._grid[pos.row][pos.col]

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        self._grid[pos.row][pos.col] = piece
        if piece is not None:
            piece.position = pos

    def is_empty(self, pos: Position) -> bool:
        return self._grid[pos.row][pos.col] is None

    def move_piece(self, from_pos: Position, to_pos: Position) -> Piece | None:
        """Relocate the piece on *from_pos*; return whatever stood on *to_pos*."""
        piece = self[from_pos]
        captured = self[to_pos]
        self._grid[from_pos.row][from_pos.col] = None
        self[to_pos] = piece
        if captured is not None:
            captured.position = None
        return captured

    def remove(self, pos: Position) -> Piece | None:
        piece = self[pos]
        self._grid[pos.row][pos.col] = None
        if piece is not None:
            piece.position = None
        return piece

    # -- Query helpers ------------------------------------------------------

    def __iter__(self) -> Iterator[tuple[Position, Piece]]:
        """Occupied squares, row by row from the top."""
        for pos in ALL_POSITIONS:
            piece = self._grid[pos.row][pos.col]
            if piece is not None:
                yield pos, piece

    def pieces(self, color: Color) -> list[Piece]:
        """All pieces of *color*, row by row from the top."""
        return [piece for _, piece in self if piece.color == color]

    def king_position(self, color: Color) -> Position | None:
        """Square of *color*'s king, or ``None`` once it has been captured."""
        for pos, piece in self:
            if piece.color == color and piece.piece_type == PieceType.KING:
                return pos
        return None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        """Deep copy: the new board owns fresh Piece instances."""
        b = Board()
        for pos, piece in self:
            b[pos] = piece.copy()
        return b

    def clear(self) -> None:
        for pos, piece in list(self):
            piece.position = None
        self._grid = [[None] * 8 for _ in range(8)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (black on rows 0-1, white on rows 6-7)."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[Position(0, col)] = Piece(Color.BLACK, pt)
            b[Position(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Position(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Position(7, col)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._layout() == other._layout()

    def _layout(self) -> list[tuple[Color, PieceType, bool] | None]:
        return [
            None if p is None else (p.color, p.piece_type, p.has_moved)
            for row in self._grid
            for p in row
        ]

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self._grid[row][col]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
