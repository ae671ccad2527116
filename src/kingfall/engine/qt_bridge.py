"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from kingfall.engine.python_search import MinimaxSearchEngine
from kingfall.engine.search import DEFAULT_DEPTH, IEngine, SearchLimits
from kingfall.game.state import Game

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and connect ``request_move`` through a queued
    connection; results come back as signals tagged with the request id so
    the front end can drop answers to requests it has since abandoned.
    """

    best_move_ready = pyqtSignal(int, object, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, int, int)
    search_error = pyqtSignal(int, str)

    def __init__(
        self,
        *,
        max_depth: int = DEFAULT_DEPTH,
        node_limit: int | None = None,
        time_limit_ms: int | None = None,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._engine: IEngine = engine if engine is not None else MinimaxSearchEngine()
        self._limits = SearchLimits(
            max_depth=max_depth,
            node_limit=node_limit,
            time_limit_ms=time_limit_ms,
        )
        self._cancel_event = threading.Event()

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_move(self, game_obj: object, request_id: int) -> None:
        """Search for the best move in *game_obj* and emit the result."""
        if not isinstance(game_obj, Game):
            self.search_error.emit(request_id, "Engine received invalid game")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                game_obj.snapshot(),
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.warning("Engine search %d failed: %s", request_id, exc)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id, result.score_cp, result.nodes)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score_cp,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_depth(self, max_depth: int) -> None:
        """Change the search depth (takes effect on the next search)."""
        self.set_limits(max_depth, self._limits.node_limit, self._limits.time_limit_ms)

    def set_limits(
        self,
        max_depth: int,
        node_limit: int | None = None,
        time_limit_ms: int | None = None,
    ) -> None:
        """Update search limits (takes effect on the next search)."""
        self._limits = SearchLimits(
            max_depth=max_depth,
            node_limit=node_limit,
            time_limit_ms=time_limit_ms,
        )
