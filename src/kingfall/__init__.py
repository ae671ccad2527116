"""kingfall - chess rule engine with king-capture termination and minimax AI."""

from kingfall.engine import find_best_move
from kingfall.game import Game, new_game

__all__ = ["Game", "find_best_move", "new_game"]
