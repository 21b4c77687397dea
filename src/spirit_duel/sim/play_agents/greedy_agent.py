"""Greedy agent that uses simple game knowledge to pick cards.

Priority waterfall, evaluated before every play:

1. Lethal: an attack that kills the enemy through its shield.
2. Survival: heal when below 40% health, if it restores anything.
3. Spirit: a BUFF that costs nothing when spirit is not full.
4. Growth: always worth it, it costs no spirit in the catalog.
5. Damage: the attack with the best damage-per-spirit ratio.
6. Shield: the biggest shield card.
7. Otherwise end the turn.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spirit_duel.ir.cards import CardKind
from spirit_duel.sim.mechanics.damage import calculate_damage
from spirit_duel.sim.play_agents.base import PlayAgent

if TYPE_CHECKING:
    from spirit_duel.ir.cards import CardDefinition
    from spirit_duel.sim.engine import CombatEngine

_LOW_HP_FRACTION = 0.4


class GreedyAgent(PlayAgent):
    """Deterministic priority-based agent."""

    def choose_card_to_play(
        self,
        engine: CombatEngine,
        playable: list[int],
    ) -> int | None:
        if not playable:
            return None

        state = engine.state
        player, enemy = state.player, state.enemy
        hand = engine.hand
        options = [(i, hand[i]) for i in playable]

        def damage_of(card: CardDefinition) -> int:
            raw = calculate_damage(card.value, player)
            return raw if card.pierces else max(0, raw - enemy.shield)

        attacks = [(i, c) for i, c in options if c.kind == CardKind.ATTACK]

        for i, card in attacks:
            if damage_of(card) >= enemy.hp:
                return i

        if player.hp < player.max_hp * _LOW_HP_FRACTION:
            heals = [(i, c) for i, c in options if c.kind == CardKind.HEAL]
            if heals:
                return max(heals, key=lambda ic: ic[1].value)[0]

        if player.spirit < player.max_spirit:
            for i, card in options:
                if card.kind == CardKind.BUFF and card.cost == 0:
                    return i

        for i, card in options:
            if card.kind == CardKind.GROWTH:
                return i

        if attacks:
            return max(attacks, key=lambda ic: damage_of(ic[1]) / max(1, ic[1].cost))[0]

        shields = [(i, c) for i, c in options if c.kind == CardKind.DEFEND]
        if shields:
            return max(shields, key=lambda ic: ic[1].value)[0]

        return None
