"""Game management layer - state machine, controller and players.

Quick start::

    from kingfall.core import Color
    from kingfall.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=HumanPlayer(Color.BLACK, "Bob"),
    )
"""

from kingfall.game.controller import GameController, GameEvents
from kingfall.game.interfaces import GamePhase, IGameController, IPlayer
from kingfall.game.player import AIPlayer, HumanPlayer
from kingfall.game.state import Game, new_game

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "Game",
    "GameController",
    "GameEvents",
    "HumanPlayer",
    "new_game",
]
