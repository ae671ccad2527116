"""Tests for the Game state machine."""

from kingfall.core.enums import Color, PieceType
from kingfall.core.types import Position, parse_square
from kingfall.engine.evaluation import evaluate
from kingfall.game.state import Game, new_game


def sq(name: str) -> Position:
    return parse_square(name)


def _play(game: Game, *moves: str) -> None:
    for text in moves:
        game.apply_move(sq(text[:2]), sq(text[2:4]))


def _fingerprint(game: Game) -> tuple:
    return (game.to_fen(), game.side_to_move, game.history, repr(game.board))


class TestNewGame:
    def test_starting_state(self) -> None:
        game = new_game()
        assert game.side_to_move == Color.WHITE
        assert game.white_to_move
        assert not game.is_game_over
        assert game.winner is None
        assert game.history == ()
        assert game.en_passant is None
        assert evaluate(game.board) == 0

    def test_sixteen_pieces_each(self) -> None:
        game = new_game()
        assert len(game.pieces(Color.WHITE)) == 16
        assert len(game.pieces(Color.BLACK)) == 16

    def test_pieces_expose_symbols(self) -> None:
        game = new_game()
        symbols = {p.symbol for p in game.pieces(Color.BLACK)}
        assert symbols == {"♜", "♞", "♝", "♛", "♚", "♟"}


class TestLegalMovesFrom:
    def test_own_piece(self, game: Game) -> None:
        assert set(game.legal_moves_from(sq("e2"))) == {sq("e3"), sq("e4")}

    def test_opponent_piece_is_empty(self, game: Game) -> None:
        assert game.legal_moves_from(sq("e7")) == []

    def test_empty_square_is_empty(self, game: Game) -> None:
        assert game.legal_moves_from(sq("e4")) == []

    def test_legal_moves_lists_side_to_move(self, game: Game) -> None:
        moves = game.legal_moves()
        assert len(moves) == 20
        assert all(m.piece is not None and m.piece.color == Color.WHITE for m in moves)


class TestTurnsAndHistory:
    def test_quiet_move(self, game: Game) -> None:
        _play(game, "e2e4")
        assert game.history == ("e2e4",)
        assert game.side_to_move == Color.BLACK
        pawn = game.board[sq("e4")]
        assert pawn is not None and pawn.has_moved
        assert game.board.is_empty(sq("e2"))

    def test_turn_alternates(self, game: Game) -> None:
        _play(game, "e2e4", "e7e5", "g1f3", "b8c6")
        assert game.side_to_move == Color.WHITE
        assert game.ply_count == 4

    def test_capture_notation(self, game: Game) -> None:
        _play(game, "e2e4", "d7d5", "e4d5")
        assert game.history[-1] == "e4xd5"
        captured_count = len(game.pieces(Color.BLACK))
        assert captured_count == 15

    def test_history_is_read_only_copy(self, game: Game) -> None:
        _play(game, "e2e4")
        history = game.history
        assert isinstance(history, tuple)
        _play(game, "e7e5")
        assert history == ("e2e4",)


class TestRejectedMoves:
    def test_from_empty_square(self, game: Game) -> None:
        before = _fingerprint(game)
        game.apply_move(sq("e4"), sq("e5"))
        assert _fingerprint(game) == before

    def test_wrong_side(self, game: Game) -> None:
        before = _fingerprint(game)
        game.apply_move(sq("e7"), sq("e5"))
        assert _fingerprint(game) == before

    def test_same_square(self, game: Game) -> None:
        before = _fingerprint(game)
        game.apply_move(sq("e2"), sq("e2"))
        assert _fingerprint(game) == before

    def test_after_game_over(self) -> None:
        game = Game.from_fen("4k3/8/8/8/8/8/8/4R2K w - - 0 1")
        game.apply_move(sq("e1"), sq("e8"))
        assert game.is_game_over
        before = _fingerprint(game)
        game.apply_move(sq("h1"), sq("h2"))
        assert _fingerprint(game) == before


class TestEnPassant:
    FEN = "4k3/8/8/8/3p4/8/4P3/4K3 w - - 0 1"

    def test_double_step_sets_target(self) -> None:
        game = Game.from_fen(self.FEN)
        _play(game, "e2e4")
        assert game.en_passant == sq("e3")

    def test_black_double_step_sets_target(self, game: Game) -> None:
        _play(game, "g1f3", "d7d5")
        assert game.en_passant == sq("d6")

    def test_single_step_clears_target(self, game: Game) -> None:
        _play(game, "e2e4", "e7e6")
        assert game.en_passant is None

    def test_capture_on_next_ply(self) -> None:
        game = Game.from_fen(self.FEN)
        _play(game, "e2e4")
        assert sq("e3") in game.legal_moves_from(sq("d4"))

        _play(game, "d4e3")

        assert game.history[-1] == "d4xe3 e.p."
        assert game.board.is_empty(sq("e4"))
        pawn = game.board[sq("e3")]
        assert pawn is not None and pawn.color == Color.BLACK
        assert game.en_passant is None
        assert game.side_to_move == Color.WHITE
        assert len(game.pieces(Color.WHITE)) == 1

    def test_capture_expires_after_one_ply(self) -> None:
        game = Game.from_fen(self.FEN)
        _play(game, "e2e4", "e8e7")
        assert game.en_passant is None
        _play(game, "e1d1")
        assert set(game.legal_moves_from(sq("d4"))) == {sq("d3")}

    def test_white_en_passant(self) -> None:
        game = Game.from_fen("4k3/3p4/8/4P3/8/8/8/4K3 b - - 0 1")
        _play(game, "d7d5")
        assert game.en_passant == sq("d6")
        _play(game, "e5d6")
        assert game.history[-1] == "e5xd6 e.p."
        assert game.board.is_empty(sq("d5"))
        assert len(game.pieces(Color.BLACK)) == 1


class TestCastling:
    FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_kingside(self) -> None:
        game = Game.from_fen(self.FEN)
        _play(game, "e1g1")

        king = game.board[sq("g1")]
        rook = game.board[sq("f1")]
        assert king is not None and king.piece_type == PieceType.KING
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert king.has_moved and rook.has_moved
        assert game.board.is_empty(sq("e1"))
        assert game.board.is_empty(sq("h1"))
        assert game.history == ("O-O",)
        assert game.side_to_move == Color.BLACK

    def test_queenside(self) -> None:
        game = Game.from_fen(self.FEN)
        _play(game, "e1g1", "e8c8")

        king = game.board[sq("c8")]
        rook = game.board[sq("d8")]
        assert king is not None and king.piece_type == PieceType.KING
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert game.board.is_empty(sq("a8"))
        assert game.history == ("O-O", "O-O-O")
        assert game.side_to_move == Color.WHITE

    def test_clears_en_passant(self) -> None:
        game = Game.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq e6 0 1")
        _play(game, "e1c1")
        assert game.en_passant is None

    def test_no_castling_once_king_has_moved(self) -> None:
        game = Game.from_fen(self.FEN)
        _play(game, "e1f1", "e8f8", "f1e1", "f8e8")
        assert sq("g1") not in game.legal_moves_from(sq("e1"))


class TestPromotion:
    FEN = "1n2k3/P7/8/8/8/8/8/4K3 w - - 0 1"

    def test_is_promotion(self) -> None:
        game = Game.from_fen(self.FEN)
        assert game.is_promotion(sq("a7"), sq("a8"))
        assert not game.is_promotion(sq("e1"), sq("e2"))

    def test_requested_piece(self) -> None:
        game = Game.from_fen(self.FEN)
        game.apply_move(sq("a7"), sq("a8"), PieceType.KNIGHT)
        piece = game.board[sq("a8")]
        assert piece is not None
        assert piece.kind == (Color.WHITE, PieceType.KNIGHT)
        assert piece.has_moved
        assert game.history == ("a7a8",)

    def test_letter_choice(self) -> None:
        game = Game.from_fen(self.FEN)
        game.apply_move(sq("a7"), sq("b8"), "r")
        piece = game.board[sq("b8")]
        assert piece is not None and piece.piece_type == PieceType.ROOK
        assert game.history == ("a7xb8",)

    def test_defaults_to_queen(self) -> None:
        for choice in (None, "x", PieceType.KING):
            game = Game.from_fen(self.FEN)
            game.apply_move(sq("a7"), sq("a8"), choice)
            piece = game.board[sq("a8")]
            assert piece is not None and piece.piece_type == PieceType.QUEEN

    def test_black_promotes_on_first_rank(self) -> None:
        game = Game.from_fen("4k3/8/8/8/8/8/p7/4K3 b - - 0 1")
        game.apply_move(sq("a2"), sq("a1"), PieceType.ROOK)
        piece = game.board[sq("a1")]
        assert piece is not None and piece.kind == (Color.BLACK, PieceType.ROOK)
        assert game.side_to_move == Color.WHITE


class TestKingCapture:
    def test_white_wins(self) -> None:
        game = Game.from_fen("4k3/8/8/8/8/8/8/4R2K w - - 0 1")
        assert sq("e8") in game.legal_moves_from(sq("e1"))

        game.apply_move(sq("e1"), sq("e8"))

        assert game.is_game_over
        assert game.winner == Color.WHITE
        assert game.side_to_move == Color.WHITE
        assert game.history[-1] == "e1xe8"
        assert game.board.king_position(Color.BLACK) is None

    def test_black_wins(self) -> None:
        game = Game.from_fen("4k3/8/8/8/8/8/8/4K2q b - - 0 1")
        game.apply_move(sq("h1"), sq("e1"))
        assert game.is_game_over
        assert game.winner == Color.BLACK
        assert game.side_to_move == Color.BLACK

    def test_no_moves_after_termination(self) -> None:
        game = Game.from_fen("4k3/8/8/8/8/8/8/4R2K w - - 0 1")
        game.apply_move(sq("e1"), sq("e8"))
        assert game.legal_moves_from(sq("h1")) == []
        assert game.legal_moves() == []


class TestSnapshot:
    def test_snapshot_matches_source(self, game: Game) -> None:
        _play(game, "e2e4")
        clone = game.snapshot()
        assert _fingerprint(clone) == _fingerprint(game)
        assert clone.en_passant == game.en_passant
        assert clone.board[sq("e4")] is not game.board[sq("e4")]

    def test_moves_on_snapshot_leave_source_untouched(self, game: Game) -> None:
        _play(game, "e2e4", "e7e5")
        before = _fingerprint(game)

        clone = game.snapshot()
        _play(clone, "g1f3", "b8c6", "f1c4", "g8f6", "e1g1")

        assert clone.history[-1] == "O-O"
        assert _fingerprint(game) == before
        king = game.board[sq("e1")]
        assert king is not None and not king.has_moved

    def test_snapshot_of_finished_game(self) -> None:
        game = Game.from_fen("4k3/8/8/8/8/8/8/4R2K w - - 0 1")
        game.apply_move(sq("e1"), sq("e8"))
        clone = game.snapshot()
        assert clone.is_game_over
        assert clone.winner == Color.WHITE


class TestFen:
    def test_round_trip(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        assert Game.from_fen(fen).to_fen() == fen

    def test_after_moves(self, game: Game) -> None:
        _play(game, "e2e4")
        assert game.to_fen() == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
