"""Random action agent -- picks playable cards uniformly at random.

The baseline for batch simulation: it verifies the combat loop works
end-to-end and gives a lower bound for how winnable an encounter is.

Behaviour:
    - Each decision has a 10 % chance of ending the turn early.
    - Otherwise it plays a random card from the playable set.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spirit_duel.sim.core.rng import GameRNG
from spirit_duel.sim.play_agents.base import PlayAgent

if TYPE_CHECKING:
    from spirit_duel.sim.engine import CombatEngine


class RandomAgent(PlayAgent):
    """Agent that plays random playable cards each turn.

    Parameters
    ----------
    rng:
        Seeded RNG.  If ``None``, ``GameRNG(seed=0)`` is used.
    end_turn_chance:
        Probability of voluntarily ending the turn instead of playing.
    """

    def __init__(
        self,
        rng: GameRNG | None = None,
        end_turn_chance: float = 0.10,
    ) -> None:
        self._rng = rng or GameRNG(seed=0)
        self._end_turn_chance = end_turn_chance

    def choose_card_to_play(
        self,
        engine: CombatEngine,
        playable: list[int],
    ) -> int | None:
        if not playable:
            return None
        if self._rng.roll(self._end_turn_chance):
            return None
        return self._rng.pick(playable)
