"""Tests for material evaluation."""

import pytest

from kingfall.core.board import Board
from kingfall.core.enums import Color, PieceType
from kingfall.core.notation import parse_fen
from kingfall.engine.evaluation import PIECE_VALUES, evaluate, piece_value


def _mirror(fen: str) -> str:
    """Flip the board top to bottom and swap the colours of every piece."""
    placement = fen.split()[0]
    return "/".join(reversed(placement.split("/"))).swapcase() + " w - - 0 1"


class TestPieceValues:
    def test_table(self) -> None:
        assert PIECE_VALUES == {
            PieceType.PAWN: 100,
            PieceType.KNIGHT: 320,
            PieceType.BISHOP: 330,
            PieceType.ROOK: 500,
            PieceType.QUEEN: 900,
            PieceType.KING: 20_000,
        }

    def test_sign_follows_colour(self) -> None:
        assert piece_value(Color.WHITE, PieceType.ROOK) == 500
        assert piece_value(Color.BLACK, PieceType.ROOK) == -500


class TestEvaluate:
    def test_starting_position_is_balanced(self) -> None:
        assert evaluate(Board.initial()) == 0

    def test_empty_board(self) -> None:
        assert evaluate(Board()) == 0

    def test_extra_white_queen(self) -> None:
        board = parse_fen("3qk3/8/8/8/8/8/8/2QQK3 w - - 0 1").board
        assert evaluate(board) == 900

    def test_missing_king_dominates(self) -> None:
        board = parse_fen("qqqq4/8/8/8/8/8/8/4K3 w - - 0 1").board
        assert evaluate(board) == 20_000 - 4 * 900

    @pytest.mark.parametrize(
        "fen",
        [
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1",
            "8/8/8/8/8/8/8/4K3 w - - 0 1",
        ],
    )
    def test_colour_mirror_negates(self, fen: str) -> None:
        original = evaluate(parse_fen(fen).board)
        mirrored = evaluate(parse_fen(_mirror(fen)).board)
        assert mirrored == -original
