"""Enemy AI -- plans the enemy's actions for one turn.

Planning and resolution are separate phases.  The plan is built against a
snapshot of the enemy's freshly refilled resources: each pick deducts its
cost from the snapshot only, so the plan as a whole is always affordable.
The turn controller then resolves the planned cards in order against live
state without re-checking them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spirit_duel.sim.mechanics.resources import can_afford

if TYPE_CHECKING:
    from spirit_duel.ir.cards import CardDefinition
    from spirit_duel.sim.core.entities import Enemy
    from spirit_duel.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)


class EnemyAI:
    """Greedy random planner over a fixed action pool.

    Parameters
    ----------
    rng:
        Stream used for the uniform pick among affordable cards.
    max_actions:
        Upper bound on actions per turn.
    """

    def __init__(self, rng: GameRNG, max_actions: int = 2) -> None:
        self._rng = rng
        self.max_actions = max_actions

    def plan_turn(self, enemy: Enemy, pool: list[CardDefinition]) -> list[CardDefinition]:
        """Pick up to ``max_actions`` cards the enemy can afford in sequence.

        Returns an empty list if nothing is affordable; the caller then
        falls back to a basic attack.
        """
        spirit = enemy.spirit
        elements = dict(enemy.elements)
        plan: list[CardDefinition] = []

        for _ in range(self.max_actions):
            eligible = [
                card for card in pool if can_afford(spirit, elements, card)
            ]
            if not eligible:
                break
            card = self._rng.pick(eligible)
            spirit -= card.cost
            if card.element_cost > 0:
                elements[card.element] = elements.get(card.element, 0) - card.element_cost
            plan.append(card)

        logger.debug(
            "%s plans %s (spirit left %d)",
            enemy.name, [c.id for c in plan], spirit,
        )
        return plan
