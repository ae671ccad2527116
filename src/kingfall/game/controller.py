"""GameController - the orchestrator around a live :class:`Game`.

Coordinates: Players, Game, search hand-off.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from kingfall.core.enums import Color, PieceType
from kingfall.core.move import Move
from kingfall.core.types import Position
from kingfall.game.interfaces import GamePhase, IGameController, IPlayer
from kingfall.game.state import Game

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[str, Game], None]  # history text, game
GameOverCallback = Callable[[Color], None]  # winner
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns the only reference to the live game and serialises input.

    While an AI player is thinking the phase is ``THINKING`` and human
    ``submit_move`` calls are refused; the search result is accepted only
    through ``deliver_engine_move``.  Players are handed snapshots, never
    the live game.

    Every search request carries a fresh ``request_id``; an answer tagged
    with any older id belongs to a position that has since been undone or
    replaced and is refused.

    Thread-safety: call from a single thread (the main/UI thread).  Engine
    results arrive from the worker thread via a queued signal/slot hop.
    """

    __slots__ = (
        "_game",
        "_phase",
        "_players",
        "_request_id",
        "_undo_stack",
        "events",
    )

    def __init__(self) -> None:
        self._game = Game()
        self._phase = GamePhase.NOT_STARTED
        self._players: dict[Color, IPlayer] = {}
        self._undo_stack: list[Game] = []
        self._request_id = 0
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> Game:
        return self._game

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._game.side_to_move)

    @property
    def input_enabled(self) -> bool:
        """Whether the UI should accept human moves right now."""
        cp = self.current_player
        return self._phase == GamePhase.AWAITING_MOVE and cp is not None and cp.is_human

    @property
    def request_id(self) -> int:
        """Id of the most recent search request handed to an AI player."""
        return self._request_id

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, white: IPlayer, black: IPlayer, fen: str | None = None) -> None:
        self._cancel_thinking()
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._game = Game.from_fen(fen) if fen else Game()
        self._undo_stack = []
        self._prompt_current_player()

    def submit_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType | str | None = None,
    ) -> bool:
        if not self.input_enabled:
            return False
        return self._play(from_pos, to_pos, promotion)

    def deliver_engine_move(self, move: Move | None, request_id: int) -> bool:
        if self._phase != GamePhase.THINKING:
            _LOGGER.warning("Engine move %s arrived while not thinking", move)
            return False
        if request_id != self._request_id:
            _LOGGER.warning(
                "Dropping engine move %s for search %d (current search %d)",
                move,
                request_id,
                self._request_id,
            )
            return False
        if move is None:
            _LOGGER.info("Engine found no move for %s", self._game.side_to_move)
            return False
        return self._play(move.from_pos, move.to_pos, move.promotion)

    def undo_move(self) -> bool:
        if self._game.is_game_over or not self._undo_stack:
            return False

        self._cancel_thinking()
        self._game = self._undo_stack.pop()
        self._prompt_current_player()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _play(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType | str | None,
    ) -> bool:
        game = self._game
        if to_pos not in game.legal_moves_from(from_pos):
            return False

        self._undo_stack.append(game.snapshot())
        game.apply_move(from_pos, to_pos, promotion)
        self._emit_move(game.history[-1])

        if game.is_game_over:
            winner = game.winner
            assert winner is not None
            self._set_phase(GamePhase.GAME_OVER)
            for cb in self.events.on_game_over:
                cb(winner)
            return True

        self._prompt_current_player()
        return True

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._set_phase(GamePhase.AWAITING_MOVE)
        else:
            self._request_id += 1
            self._set_phase(GamePhase.THINKING)
            cp.request_move(self._game.snapshot(), self._request_id)

    def _cancel_thinking(self) -> None:
        if self._phase != GamePhase.THINKING:
            return
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

    def _emit_move(self, text: str) -> None:
        for cb in self.events.on_move:
            cb(text, self._game)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
