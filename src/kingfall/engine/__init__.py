"""Engine package: material evaluation, minimax search and Qt worker bridge."""

from kingfall.engine.evaluation import PIECE_VALUES, evaluate
from kingfall.engine.python_search import MinimaxSearchEngine, find_best_move
from kingfall.engine.qt_bridge import EngineWorker
from kingfall.engine.search import (
    DEFAULT_DEPTH,
    CancelCheck,
    IEngine,
    SearchLimits,
    SearchResult,
)

__all__ = [
    "DEFAULT_DEPTH",
    "PIECE_VALUES",
    "CancelCheck",
    "EngineWorker",
    "IEngine",
    "MinimaxSearchEngine",
    "SearchLimits",
    "SearchResult",
    "evaluate",
    "find_best_move",
]
