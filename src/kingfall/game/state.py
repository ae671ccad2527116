"""Game state machine - applies moves and decides termination."""

from __future__ import annotations

import logging

from kingfall.core.board import Board
from kingfall.core.enums import Color, MoveFlag, PieceType
from kingfall.core.move import Move
from kingfall.core.move_generator import MoveGenerator
from kingfall.core.notation import (
    castle_text,
    en_passant_text,
    move_text,
    parse_fen,
    to_fen,
)
from kingfall.core.piece import Piece
from kingfall.core.rules import Rules
from kingfall.core.types import Position

_LOGGER = logging.getLogger(__name__)


class Game:
    """One game: board, side to move, en-passant target, result, history.

    States are ``InProgress(side_to_move)`` and ``Terminated(winner)``; the
    only way into the latter is capturing a king.  Invalid input never
    raises: :meth:`apply_move` silently ignores moves from empty squares,
    moves by the side not on turn, and anything after the game ended.

    Moves are not checked against :meth:`legal_moves_from`; callers that
    take human input are expected to validate destinations first.
    """

    __slots__ = (
        "_board",
        "_side_to_move",
        "_en_passant",
        "_game_over",
        "_winner",
        "_history",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        en_passant: Position | None = None,
    ) -> None:
        self._board = board if board is not None else Board.initial()
        self._side_to_move = side_to_move
        self._en_passant = en_passant
        self._game_over = False
        self._winner: Color | None = None
        self._history: list[str] = []

    @classmethod
    def from_fen(cls, fen: str) -> Game:
        record = parse_fen(fen)
        return cls(record.board, record.side_to_move, record.en_passant)

    def to_fen(self) -> str:
        return to_fen(self._board, self._side_to_move, self._en_passant)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def side_to_move(self) -> Color:
        return self._side_to_move

    @property
    def white_to_move(self) -> bool:
        return self._side_to_move == Color.WHITE

    @property
    def en_passant(self) -> Position | None:
        """Square skipped by the last double pawn step, valid for one ply."""
        return self._en_passant

    @property
    def is_game_over(self) -> bool:
        return self._game_over

    @property
    def winner(self) -> Color | None:
        return self._winner

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    @property
    def ply_count(self) -> int:
        return len(self._history)

    def pieces(self, color: Color) -> list[Piece]:
        """Pieces of *color* with their positions and display symbols."""
        return self._board.pieces(color)

    def legal_moves_from(self, pos: Position) -> list[Position]:
        """Pseudo-legal destinations for the piece on *pos*.

        Empty when the square is empty, holds a piece of the side not on
        turn, or the game is over.
        """
        if self._game_over:
            return []
        piece = self._board[pos]
        if piece is None or piece.color != self._side_to_move:
            return []
        return MoveGenerator(self._board, self._en_passant).destinations(pos)

    def legal_moves(self) -> list[Move]:
        """All pseudo-legal moves for the side to move."""
        if self._game_over:
            return []
        gen = MoveGenerator(self._board, self._en_passant)
        return gen.pseudo_legal_moves(self._side_to_move)

    def is_promotion(self, from_pos: Position, to_pos: Position) -> bool:
        return Rules.is_promotion(self._board, from_pos, to_pos)

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType | str | None = None,
    ) -> None:
        """Play *from_pos* -> *to_pos* for the side to move.

        *promotion* picks the piece a pawn becomes on its far row; anything
        absent or unrecognised promotes to a queen.
        """
        if self._game_over or from_pos == to_pos:
            return
        piece = self._board[from_pos]
        if piece is None or piece.color != self._side_to_move:
            return

        flag = Rules.classify(self._board, from_pos, to_pos, self._en_passant)
        if flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE):
            self._apply_castle(piece, from_pos, to_pos, flag)
        elif flag == MoveFlag.EN_PASSANT:
            self._apply_en_passant(piece, from_pos, to_pos)
        else:
            self._apply_normal(piece, from_pos, to_pos, flag, promotion)

    def play(self, move: Move) -> None:
        """Apply a :class:`Move` record (as produced by the search)."""
        self.apply_move(move.from_pos, move.to_pos, move.promotion)

    def snapshot(self) -> Game:
        """Independent deep copy sharing no mutable state with this game."""
        g = Game(self._board.copy(), self._side_to_move, self._en_passant)
        g._game_over = self._game_over
        g._winner = self._winner
        g._history = self._history.copy()
        return g

    # ── Internal ─────────────────────────────────────────────────────────

    def _apply_castle(
        self,
        king: Piece,
        from_pos: Position,
        to_pos: Position,
        flag: MoveFlag,
    ) -> None:
        board = self._board
        board.move_piece(from_pos, to_pos)
        king.has_moved = True

        rook_from, rook_to = Rules.castle_rook_squares(from_pos, to_pos)
        rook = board[rook_from]
        if rook is not None:
            board.move_piece(rook_from, rook_to)
            rook.has_moved = True

        self._en_passant = None
        self._record(castle_text(flag))
        self._pass_turn()

    def _apply_en_passant(
        self,
        pawn: Piece,
        from_pos: Position,
        to_pos: Position,
    ) -> None:
        board = self._board
        board.move_piece(from_pos, to_pos)
        behind = to_pos.offset(-Rules.forward(pawn.color), 0)
        if behind is not None:
            victim = board[behind]
            if victim is not None and victim.color != pawn.color:
                board.remove(behind)
        pawn.has_moved = True

        self._en_passant = None
        self._record(en_passant_text(from_pos, to_pos))
        self._pass_turn()

    def _apply_normal(
        self,
        piece: Piece,
        from_pos: Position,
        to_pos: Position,
        flag: MoveFlag,
        promotion: PieceType | str | None,
    ) -> None:
        board = self._board
        captured = board.move_piece(from_pos, to_pos)
        piece.has_moved = True

        if flag == MoveFlag.DOUBLE_PAWN:
            self._en_passant = Position((from_pos.row + to_pos.row) // 2, from_pos.col)
        else:
            self._en_passant = None

        if flag == MoveFlag.PROMOTION:
            promoted = Piece(
                piece.color, Rules.promotion_type(promotion), has_moved=True
            )
            board[to_pos] = promoted
            piece.position = None

        self._record(move_text(from_pos, to_pos, capture=captured is not None))

        if captured is not None and captured.piece_type == PieceType.KING:
            self._game_over = True
            self._winner = piece.color
            _LOGGER.debug("King captured on %s; %s wins", to_pos, piece.color)
            return

        self._pass_turn()

    def _record(self, text: str) -> None:
        self._history.append(text)
        _LOGGER.debug("ply %d: %s", len(self._history), text)

    def _pass_turn(self) -> None:
        self._side_to_move = self._side_to_move.opposite

    def __repr__(self) -> str:
        state = (
            f"terminated, winner={self._winner}"
            if self._game_over
            else f"{self._side_to_move} to move"
        )
        return f"<Game {state}, ply {self.ply_count}>\n{self._board!r}"


def new_game() -> Game:
    """Standard starting position, white to move."""
    return Game()
