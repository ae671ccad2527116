"""Board coordinates.

Board layout (row 0 at the top, as the board is drawn for white)::

    row 0 -> rank 8   a8 b8 ... h8
    row 1 -> rank 7
    ...
    row 7 -> rank 1   a1 b1 ... h1

Column 0 is the a-file.  White pawns advance toward row 0.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable (row, col) coordinate on the 8x8 board."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < 8 and 0 <= self.col < 8):
            raise ValueError(f"Position off the board: ({self.row}, {self.col})")

    def offset(self, d_row: int, d_col: int) -> Position | None:
        """Neighbouring position, or ``None`` if it falls off the board."""
        row = self.row + d_row
        col = self.col + d_col
        if 0 <= row < 8 and 0 <= col < 8:
            return Position(row, col)
        return None

    def __str__(self) -> str:
        return square_name(self)


def square_name(pos: Position) -> str:
    """Human-readable name, e.g. Position(6, 4) -> 'e2'."""
    return chr(ord("a") + pos.col) + str(8 - pos.row)


def parse_square(name: str) -> Position:
    """Parse square name, e.g. 'e4' -> Position(4, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(8 - int(name[1]), ord(name[0]) - ord("a"))


ALL_POSITIONS: tuple[Position, ...] = tuple(
    Position(row, col) for row in range(8) for col in range(8)
)
