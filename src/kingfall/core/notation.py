"""Coordinate move text and FEN parsing / serialisation."""

from __future__ import annotations

from dataclasses import dataclass

from kingfall.core.board import Board
from kingfall.core.enums import Color, MoveFlag, PieceType
from kingfall.core.piece import Piece
from kingfall.core.rules import Rules
from kingfall.core.types import Position, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

CASTLE_KINGSIDE_TEXT = "O-O"
CASTLE_QUEENSIDE_TEXT = "O-O-O"
EN_PASSANT_SUFFIX = " e.p."


# ── Move history text ────────────────────────────────────────────────────────


def move_text(from_pos: Position, to_pos: Position, capture: bool = False) -> str:
    """'e2e4' for quiet moves, 'e2xe4' for captures."""
    sep = "x" if capture else ""
    return f"{square_name(from_pos)}{sep}{square_name(to_pos)}"


def castle_text(flag: MoveFlag) -> str:
    if flag == MoveFlag.CASTLE_KINGSIDE:
        return CASTLE_KINGSIDE_TEXT
    if flag == MoveFlag.CASTLE_QUEENSIDE:
        return CASTLE_QUEENSIDE_TEXT
    raise ValueError(f"Not a castling flag: {flag!r}")


def en_passant_text(from_pos: Position, to_pos: Position) -> str:
    """'e5xd6 e.p.'"""
    return move_text(from_pos, to_pos, capture=True) + EN_PASSANT_SUFFIX


# ── FEN ──────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class FenRecord:
    """The parts of a FEN string this engine tracks."""

    board: Board
    side_to_move: Color
    en_passant: Position | None


_CASTLE_CORNERS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, 7),
    "Q": (Color.WHITE, 0),
    "k": (Color.BLACK, 7),
    "q": (Color.BLACK, 0),
}


def parse_fen(fen: str) -> FenRecord:
    """Parse a FEN string.

    Castling availability is translated into ``has_moved`` flags: a rook on
    its corner counts as unmoved only if the matching right is listed, and a
    king counts as unmoved only on its home square with at least one right.
    Pawns off their starting row are marked as moved.  Clock fields are
    accepted and ignored.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement (first rank listed is row 0)
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[Position(row, col)] = Piece.from_char(ch)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling -> has_moved flags
    if castling_part != "-" and any(ch not in _CASTLE_CORNERS for ch in castling_part):
        raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
    rights = set() if castling_part == "-" else set(castling_part)
    _apply_moved_flags(board, rights)

    # 4. En passant
    en_passant = None if ep_part == "-" else parse_square(ep_part)

    return FenRecord(board=board, side_to_move=side, en_passant=en_passant)


def _apply_moved_flags(board: Board, rights: set[str]) -> None:
    unmoved_rooks = set()
    for ch in rights:
        color, col = _CASTLE_CORNERS[ch]
        unmoved_rooks.add(Position(Rules.home_row(color), col))

    for pos, piece in board:
        match piece.piece_type:
            case PieceType.PAWN:
                piece.has_moved = pos.row != Rules.pawn_start_row(piece.color)
            case PieceType.ROOK:
                piece.has_moved = pos not in unmoved_rooks
            case PieceType.KING:
                home = Position(Rules.home_row(piece.color), 4)
                own_rights = {
                    ch for ch in rights if _CASTLE_CORNERS[ch][0] == piece.color
                }
                piece.has_moved = pos != home or not own_rights
            case _:
                piece.has_moved = False


def to_fen(board: Board, side_to_move: Color, en_passant: Position | None) -> str:
    """Serialise a position; clocks are always written as '0 1'."""
    ranks: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[Position(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        ranks.append(text)

    castling = ""
    for ch in "KQkq":
        color, col = _CASTLE_CORNERS[ch]
        row = Rules.home_row(color)
        king = board[Position(row, 4)]
        rook = board[Position(row, col)]
        if (
            king is not None
            and king.kind == (color, PieceType.KING)
            and not king.has_moved
            and rook is not None
            and rook.kind == (color, PieceType.ROOK)
            and not rook.has_moved
        ):
            castling += ch

    side = "w" if side_to_move == Color.WHITE else "b"
    ep = square_name(en_passant) if en_passant is not None else "-"
    return f"{'/'.join(ranks)} {side} {castling or '-'} {ep} 0 1"
