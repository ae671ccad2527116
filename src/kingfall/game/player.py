"""Concrete player implementations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from kingfall.core.enums import Color
from kingfall.game.interfaces import IPlayer

if TYPE_CHECKING:
    from kingfall.core.move import Move
    from kingfall.game.state import Game

_LOGGER = logging.getLogger(__name__)

SearchStarter = Callable[["Game", int], None]  # snapshot, request id
MoveSink = Callable[["Move | None", int], bool]  # move (or None), request id


class HumanPlayer(IPlayer):
    """Moves come from the front end through ``GameController.submit_move``."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, game: Game, request_id: int) -> None:
        pass

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """Engine-backed player that filters search answers by request id.

    ``request_move`` remembers the id it was handed and starts a search via
    *on_request_move*.  Engine answers come back through
    :meth:`on_best_move` / :meth:`on_no_move`, whose signatures match the
    ``EngineWorker.best_move_ready`` and ``search_no_move`` signals.  An
    answer for any id other than the pending one (a search that was
    cancelled or superseded) is dropped; the pending answer is forwarded to
    *on_move_ready*, normally ``GameController.deliver_engine_move``.
    """

    __slots__ = (
        "_color",
        "_name",
        "_on_request_move",
        "_on_cancel",
        "_on_move_ready",
        "_pending",
    )

    def __init__(
        self,
        color: Color,
        name: str = "Engine",
        on_request_move: SearchStarter | None = None,
        on_cancel: Callable[[], None] | None = None,
        on_move_ready: MoveSink | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel
        self._on_move_ready = on_move_ready
        self._pending: int | None = None

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def pending_request(self) -> int | None:
        """Id of the search whose answer this player is waiting for."""
        return self._pending

    def request_move(self, game: Game, request_id: int) -> None:
        self._pending = request_id
        if self._on_request_move is not None:
            self._on_request_move(game, request_id)

    def cancel(self) -> None:
        if self._pending is None:
            return
        _LOGGER.debug("%s cancels search %d", self._name, self._pending)
        self._pending = None
        if self._on_cancel is not None:
            self._on_cancel()

    def on_best_move(
        self,
        request_id: int,
        move: Move,
        score_cp: int = 0,
        nodes: int = 0,
    ) -> bool:
        """Accept the engine's answer to *request_id* if it is still wanted."""
        if not self._claim(request_id):
            return False
        _LOGGER.debug(
            "%s search %d: %s (score=%d nodes=%d)",
            self._name,
            request_id,
            move,
            score_cp,
            nodes,
        )
        return self._forward(move, request_id)

    def on_no_move(self, request_id: int, score_cp: int = 0, nodes: int = 0) -> bool:
        if not self._claim(request_id):
            return False
        _LOGGER.info(
            "%s found no move (score=%d nodes=%d)", self._name, score_cp, nodes
        )
        return self._forward(None, request_id)

    def _claim(self, request_id: int) -> bool:
        if request_id != self._pending:
            _LOGGER.info(
                "%s drops stale search %d (pending %s)",
                self._name,
                request_id,
                self._pending,
            )
            return False
        self._pending = None
        return True

    def _forward(self, move: Move | None, request_id: int) -> bool:
        if self._on_move_ready is None:
            return False
        return self._on_move_ready(move, request_id)
