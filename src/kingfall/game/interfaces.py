"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete Player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from kingfall.core.enums import Color, PieceType

if TYPE_CHECKING:
    from kingfall.core.move import Move
    from kingfall.core.types import Position
    from kingfall.game.state import Game


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Orchestration states around a :class:`Game`."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # AI is computing; human input is suspended
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, game: Game, request_id: int) -> None:
        """Begin choosing a move for *game*.

        *request_id* identifies this request; an answer is only accepted by
        the controller when it carries the id of the latest request.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (AI only, no-op for human)."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, white: IPlayer, black: IPlayer, fen: str | None = None) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType | str | None = None,
    ) -> bool:
        """Submit a human move. Returns True if it was accepted and applied."""

    @abstractmethod
    def deliver_engine_move(self, move: Move | None, request_id: int) -> bool:
        """Hand over the answer to search *request_id*. Returns True if applied."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Undo the last move. Returns True on success."""
