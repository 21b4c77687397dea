"""Base class for agents that play the player's side of an encounter.

All play agents must subclass ``PlayAgent`` and implement
``choose_card_to_play``.  The combat simulator calls it at every decision
point during ``PLAYER_ACTIVE``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spirit_duel.sim.engine import CombatEngine


class PlayAgent(ABC):
    """Base class for AI agents that play the game."""

    @abstractmethod
    def choose_card_to_play(
        self,
        engine: CombatEngine,
        playable: list[int],
    ) -> int | None:
        """Choose a card to play.

        Parameters
        ----------
        engine:
            The running engine, giving the agent full observability of
            ``engine.state``.
        playable:
            Hand positions the engine would currently accept.

        Returns
        -------
        int | None
            The hand position to play, or ``None`` to end the turn.
        """
