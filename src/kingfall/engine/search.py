"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from kingfall.core.move import Move
    from kingfall.game.state import Game

CancelCheck = Callable[[], bool]

DEFAULT_DEPTH = 3


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``node_limit`` and ``time_limit_ms`` are optional caps; ``None`` lets the
    search run to ``max_depth`` unconditionally.
    """

    max_depth: int = DEFAULT_DEPTH
    node_limit: int | None = None
    time_limit_ms: int | None = None


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score_cp: int
    depth: int
    nodes: int
    completed: bool = True


class IEngine(Protocol):
    """Protocol for engines used by the game layer."""

    def search(
        self,
        game: Game,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
