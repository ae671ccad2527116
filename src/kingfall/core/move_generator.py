"""Pseudo-legal move generation.

Moves are legal by movement pattern and occupancy only; nothing here checks
whether the mover's own king is left en prise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kingfall.core.enums import Color, MoveFlag, PieceType
from kingfall.core.move import Move
from kingfall.core.rules import Rules
from kingfall.core.types import ALL_POSITIONS, Position

if TYPE_CHECKING:
    from kingfall.core.board import Board
    from kingfall.core.piece import Piece


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[Position, ...]]:
    targets: dict[Position, tuple[Position, ...]] = {}
    for pos in ALL_POSITIONS:
        moves = [pos.offset(dr, dc) for dr, dc in offsets]
        targets[pos] = tuple(m for m in moves if m is not None)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[tuple[Position, ...], ...]]:
    rays_per_square: dict[Position, tuple[tuple[Position, ...], ...]] = {}
    for pos in ALL_POSITIONS:
        square_rays: list[tuple[Position, ...]] = []
        for dr, dc in directions:
            ray: list[Position] = []
            step = pos.offset(dr, dc)
            while step is not None:
                ray.append(step)
                step = step.offset(dr, dc)
            square_rays.append(tuple(ray))
        rays_per_square[pos] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


class MoveGenerator:
    """Generates pseudo-legal moves against a :class:`Board` snapshot.

    *en_passant* is the square a pawn skipped on the previous ply, if any;
    enemy pawns may move diagonally onto it even though it is empty.
    """

    __slots__ = ("_board", "_en_passant")

    def __init__(self, board: Board, en_passant: Position | None = None) -> None:
        self._board = board
        self._en_passant = en_passant

    # -- Public API ---------------------------------------------------------

    def destinations(self, pos: Position) -> list[Position]:
        """Pseudo-legal destinations for the piece on *pos* (empty if none)."""
        piece = self._board[pos]
        if piece is None:
            return []

        match piece.piece_type:
            case PieceType.PAWN:
                return self._gen_pawn(pos, piece)
            case PieceType.KNIGHT:
                return self._gen_stepping(pos, piece.color, _KNIGHT_TARGETS[pos])
            case PieceType.BISHOP:
                return self._gen_sliding(pos, piece.color, _BISHOP_RAYS[pos])
            case PieceType.ROOK:
                return self._gen_sliding(pos, piece.color, _ROOK_RAYS[pos])
            case PieceType.QUEEN:
                return self._gen_sliding(pos, piece.color, _QUEEN_RAYS[pos])
            case PieceType.KING:
                return self._gen_king(pos, piece)
        return []

    def pseudo_legal_moves(self, color: Color) -> list[Move]:
        """Every (piece, destination) pair available to *color*."""
        board = self._board
        moves: list[Move] = []
        for piece in board.pieces(color):
            from_pos = piece.position
            assert from_pos is not None
            for to_pos in self.destinations(from_pos):
                moves.append(self.make_move(from_pos, to_pos))
        return moves

    def make_move(self, from_pos: Position, to_pos: Position) -> Move:
        """Classify *from_pos* -> *to_pos* into a :class:`Move` record.

        Promotions are recorded as queen promotions.
        """
        board = self._board
        flag = Rules.classify(board, from_pos, to_pos, self._en_passant)
        piece = board[from_pos]

        captured = board[to_pos]
        if flag == MoveFlag.EN_PASSANT and piece is not None:
            behind = to_pos.offset(-Rules.forward(piece.color), 0)
            captured = board[behind] if behind is not None else None

        promotion = PieceType.QUEEN if flag == MoveFlag.PROMOTION else None
        return Move(from_pos, to_pos, flag, promotion, piece=piece, captured=captured)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, pos: Position, piece: Piece) -> list[Position]:
        board = self._board
        color = piece.color
        forward = Rules.forward(color)
        moves: list[Position] = []

        one_step = pos.offset(forward, 0)
        if one_step is not None and board.is_empty(one_step):
            moves.append(one_step)
            if not piece.has_moved and pos.row == Rules.pawn_start_row(color):
                two_step = one_step.offset(forward, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(two_step)

        for side in (-1, 1):
            cap = pos.offset(forward, side)
            if cap is None:
                continue
            target = board[cap]
            if target is not None:
                if target.color != color:
                    moves.append(cap)
            elif cap == self._en_passant:
                moves.append(cap)
        return moves

    def _gen_stepping(
        self,
        pos: Position,
        color: Color,
        targets: tuple[Position, ...],
    ) -> list[Position]:
        board = self._board
        moves: list[Position] = []
        for to_pos in targets:
            target = board[to_pos]
            if target is None or target.color != color:
                moves.append(to_pos)
        return moves

    def _gen_sliding(
        self,
        pos: Position,
        color: Color,
        rays: tuple[tuple[Position, ...], ...],
    ) -> list[Position]:
        board = self._board
        moves: list[Position] = []
        for ray in rays:
            for to_pos in ray:
                target = board[to_pos]
                if target is None:
                    moves.append(to_pos)
                    continue
                if target.color != color:
                    moves.append(to_pos)
                break
        return moves

    def _gen_king(self, pos: Position, piece: Piece) -> list[Position]:
        moves = self._gen_stepping(pos, piece.color, _KING_TARGETS[pos])
        if not piece.has_moved:
            moves.extend(self._gen_castling(pos, piece.color))
        return moves

    def _gen_castling(self, king_pos: Position, color: Color) -> list[Position]:
        # Only the has-moved flags and empty squares between king and rook
        # matter; attacked squares are not considered.
        board = self._board
        row = king_pos.row
        moves: list[Position] = []

        for rook_col, step in ((7, 1), (0, -1)):
            dest = king_pos.offset(0, 2 * step)
            if dest is None:
                continue
            rook = board[Position(row, rook_col)]
            if (
                rook is None
                or rook.color != color
                or rook.piece_type != PieceType.ROOK
                or rook.has_moved
            ):
                continue
            lo, hi = sorted((king_pos.col, rook_col))
            if not lo < dest.col < hi:
                continue
            if all(board.is_empty(Position(row, col)) for col in range(lo + 1, hi)):
                moves.append(dest)
        return moves
