"""Pure-Python game-tree search (minimax + alpha-beta over game snapshots)."""

from __future__ import annotations

import logging
from time import perf_counter

from kingfall.core.enums import Color
from kingfall.core.move import Move
from kingfall.engine.evaluation import evaluate
from kingfall.engine.search import (
    DEFAULT_DEPTH,
    CancelCheck,
    IEngine,
    SearchLimits,
    SearchResult,
)
from kingfall.game.state import Game

_LOGGER = logging.getLogger(__name__)

# Larger than any reachable material sum.
_INF_SCORE = 1_000_000


def _never_cancelled() -> bool:
    return False


class MinimaxSearchEngine(IEngine):
    """Fixed-depth minimax with alpha-beta pruning.

    Every node works on its own :meth:`Game.snapshot`, so sibling branches
    never share mutable state and the caller's game is never touched.
    White maximises the material score, black minimises it; the side to
    move at the root decides which.
    """

    __slots__ = (
        "_cancel_check",
        "_deadline",
        "_node_limit",
        "_nodes",
        "_stopped",
    )

    def __init__(self) -> None:
        self._nodes = 0
        self._node_limit: int | None = None
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled
        self._stopped = False

    @property
    def nodes(self) -> int:
        """Nodes visited by the last search."""
        return self._nodes

    def search(
        self,
        game: Game,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._stopped = False
        self._node_limit = limits.node_limit
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            ms = max(limits.time_limit_ms, 1)
            self._deadline = perf_counter() + (ms / 1000.0)

        root = game.snapshot()
        root_moves = root.legal_moves()
        if not root_moves:
            return SearchResult(None, evaluate(root.board), 0, self._nodes)

        score, move = self._search_root(root, root_moves, limits.max_depth)
        result = SearchResult(
            move,
            score,
            limits.max_depth,
            self._nodes,
            completed=not self._stopped,
        )
        _LOGGER.debug(
            "search depth=%d best=%s score=%d nodes=%d completed=%s",
            result.depth,
            result.best_move,
            result.score_cp,
            result.nodes,
            result.completed,
        )
        return result

    def _search_root(
        self,
        root: Game,
        root_moves: list[Move],
        depth: int,
    ) -> tuple[int, Move | None]:
        maximizing = root.side_to_move == Color.WHITE
        best_score = -_INF_SCORE if maximizing else _INF_SCORE
        best_move: Move | None = None
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in root_moves:
            child = root.snapshot()
            child.play(move)
            score = self._minimax(child, depth - 1, alpha, beta, not maximizing)

            # A branch cut short by a limit is only trusted if nothing else is.
            if self._stopped and best_move is not None:
                break

            if maximizing:
                if best_move is None or score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
            else:
                if best_move is None or score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)

            if self._stopped:
                break

        return best_score, best_move

    def _minimax(
        self,
        game: Game,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
    ) -> int:
        self._nodes += 1
        if self._should_stop() or depth <= 0 or game.is_game_over:
            return evaluate(game.board)

        moves = game.legal_moves()
        if not moves:
            return evaluate(game.board)

        if maximizing:
            max_eval = -_INF_SCORE
            for move in moves:
                child = game.snapshot()
                child.play(move)
                score = self._minimax(child, depth - 1, alpha, beta, False)
                max_eval = max(max_eval, score)
                alpha = max(alpha, score)
                if beta <= alpha or self._stopped:
                    break
            return max_eval

        min_eval = _INF_SCORE
        for move in moves:
            child = game.snapshot()
            child.play(move)
            score = self._minimax(child, depth - 1, alpha, beta, True)
            min_eval = min(min_eval, score)
            beta = min(beta, score)
            if beta <= alpha or self._stopped:
                break
        return min_eval

    def _should_stop(self) -> bool:
        if self._stopped:
            return True
        if (
            (self._node_limit is not None and self._nodes > self._node_limit)
            or self._cancel_check()
            or (self._deadline is not None and perf_counter() >= self._deadline)
        ):
            self._stopped = True
        return self._stopped


def find_best_move(game: Game, depth: int = DEFAULT_DEPTH) -> Move | None:
    """Best move for the side to move, or ``None`` if it has no moves."""
    engine = MinimaxSearchEngine()
    return engine.search(game, SearchLimits(max_depth=depth)).best_move
