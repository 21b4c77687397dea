"""Outcome evaluation and reward rolling.

Reward rules:
- Experience and currency come straight from the enemy template.
- Bonus drop: 30% chance (``rules.bonus_drop_chance``) of one item, chosen
  uniformly among items whose ``req_level`` the player meets, or among all
  items if none qualify.
- A loss yields nothing.  The caller applies its own penalty, usually
  restoring the player to :func:`recovery_hp`.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from spirit_duel.ir.results import CombatResult, Outcome, Rewards, TalismanDelta
from spirit_duel.sim.core.game_state import Phase

if TYPE_CHECKING:
    from spirit_duel.ir.cards import Element
    from spirit_duel.ir.items import BonusItem
    from spirit_duel.ir.loadouts import EnemyTemplate
    from spirit_duel.ir.rules import CombatRules
    from spirit_duel.sim.core.game_state import CombatState
    from spirit_duel.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)


def roll_rewards(
    template: EnemyTemplate,
    player_level: int,
    bonus_items: list[BonusItem],
    rules: CombatRules,
    rng: GameRNG,
) -> Rewards:
    """Roll the rewards for beating *template*."""
    drops: list[BonusItem] = []
    if bonus_items and rng.roll(rules.bonus_drop_chance):
        eligible = [i for i in bonus_items if i.req_level <= player_level]
        if not eligible:
            eligible = list(bonus_items)
        drops.append(rng.pick(eligible))
    return Rewards(
        experience=template.drop_exp,
        currency=template.drop_gold,
        drops=drops,
    )


def recovery_hp(max_hp: int, rules: CombatRules) -> int:
    """HP a defeated player is restored to: ``floor(max_hp * fraction)``."""
    return math.floor(max_hp * rules.loss_recovery_fraction)


class OutcomeEvaluator:
    """Detects terminal conditions and builds the encounter result.

    Termination is idempotent: once ``state.result`` is set, further checks
    return ``None`` and change nothing.

    Parameters
    ----------
    template:
        The enemy template, for reward yields.
    player_level:
        Used to filter bonus drops.
    bonus_items:
        Pool of items a victory may drop.
    initial_talismans:
        Durability per binding id at encounter start.
    initial_caps:
        Player element caps at encounter start.
    rng:
        Reward stream.
    """

    def __init__(
        self,
        template: EnemyTemplate,
        player_level: int,
        bonus_items: list[BonusItem],
        initial_talismans: dict[str, int],
        initial_caps: dict[Element, int],
        rng: GameRNG,
    ) -> None:
        self._template = template
        self._player_level = player_level
        self._bonus_items = list(bonus_items)
        self._initial_talismans = dict(initial_talismans)
        self._initial_caps = dict(initial_caps)
        self._rng = rng

    def evaluate(self, state: CombatState) -> CombatResult | None:
        """Return a newly reached result, or ``None`` if combat goes on or
        was already concluded."""
        if state.result is not None or state.phase == Phase.ABANDONED:
            return None
        if state.enemy.is_dead:
            return self.conclude(state, Outcome.WIN)
        if state.player.is_dead:
            return self.conclude(state, Outcome.LOSS)
        return None

    def conclude(self, state: CombatState, outcome: Outcome) -> CombatResult | None:
        """Record *outcome* exactly once and move the state to ENDED."""
        if state.result is not None or state.phase == Phase.ABANDONED:
            return None

        rewards = None
        if outcome == Outcome.WIN:
            rewards = roll_rewards(
                self._template,
                self._player_level,
                self._bonus_items,
                state.rules,
                self._rng,
            )

        result = CombatResult(
            outcome=outcome,
            rewards=rewards,
            talisman_durability=self._talisman_deltas(state),
            element_growth=self._element_growth(state),
            turns=state.turn,
            player_hp=state.player.hp,
        )
        state.result = result
        state.phase = Phase.ENDED

        if outcome == Outcome.WIN:
            state.log.append(f"{state.enemy.name} falls. Victory!")
        else:
            state.log.append(f"{state.player.name} collapses...")
        logger.info(
            "encounter vs %s ended: %s after %d turns",
            state.enemy.template_id, outcome.value, state.turn,
        )
        return result

    # -- internal helpers ----------------------------------------------------

    def _talisman_deltas(self, state: CombatState) -> list[TalismanDelta]:
        return [
            TalismanDelta(id=tid, remaining_uses=uses)
            for tid, uses in state.talisman_uses.items()
            if uses != self._initial_talismans.get(tid)
        ]

    def _element_growth(self, state: CombatState) -> dict[Element, int]:
        growth: dict[Element, int] = {}
        for element, cap in state.player.element_caps.items():
            gained = cap - self._initial_caps.get(element, 0)
            if gained > 0:
                growth[element] = gained
        return growth
