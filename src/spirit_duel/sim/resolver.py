"""Effect resolver -- turns a played card into a state change and a log line.

Resolution is split in two steps:

- :func:`compute_effect` is pure with respect to the card and the state.
  It reads the caster's stats and, for BURN-tagged attacks, consumes a
  single random roll, and returns an :class:`EffectDelta`.
- :func:`apply_effect` applies a delta to the live combatants, clamping
  health and shield at zero.

:class:`EffectResolver` ties the two together for the turn controller:
it emits the presentation cue *before* the numeric result, and appends
exactly one line to the combat log per resolution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from spirit_duel.ir.cards import CardDefinition, CardKind, Element
from spirit_duel.sim.core.events import CombatEvent, EventKind, Side
from spirit_duel.sim.mechanics.damage import calculate_damage, deal_damage
from spirit_duel.sim.mechanics.resources import grow_element, restore_spirit
from spirit_duel.sim.mechanics.shield import gain_shield
from spirit_duel.sim.mechanics.status_effects import BURN, apply_status

if TYPE_CHECKING:
    from spirit_duel.ir.rules import CombatRules
    from spirit_duel.sim.core.entities import Combatant
    from spirit_duel.sim.core.game_state import CombatState
    from spirit_duel.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

# Enemy fallback when nothing in its pool is affordable: base attack only.
BASIC_ATTACK = CardDefinition(
    id="basic_attack",
    name="Basic Attack",
    kind=CardKind.ATTACK,
    cost=0,
    value=0,
    description="Strike with bare attack power.",
)

# Effect kinds that produce a presentation cue.
_CUE_KINDS = frozenset({CardKind.ATTACK, CardKind.DEFEND, CardKind.HEAL, CardKind.BUFF})


# ---------------------------------------------------------------------------
# Delta
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EffectDelta:
    """The state change a card will make, computed before it is applied."""

    card_id: str
    card_name: str
    kind: CardKind
    caster: Side

    raw_damage: int = 0
    pierce: bool = False
    burn_stacks: int = 0
    shield_gain: int = 0
    heal: int = 0
    spirit_restore: int = 0
    growth_element: Element | None = None
    growth: int = 0

    @property
    def target(self) -> Side:
        """Side the effect lands on: the opponent for attacks, else the caster."""
        return self.caster.opponent if self.kind == CardKind.ATTACK else self.caster


@dataclass(frozen=True)
class AppliedEffect:
    """What actually happened when a delta was applied (after clamping)."""

    hp_lost: int = 0
    absorbed: int = 0
    shield_gained: int = 0
    healed: int = 0
    spirit_restored: int = 0
    burn_applied: int = 0


# ---------------------------------------------------------------------------
# Pure computation
# ---------------------------------------------------------------------------

def compute_effect(
    card: CardDefinition,
    caster_side: Side,
    caster: Combatant,
    rules: CombatRules,
    rng: GameRNG,
) -> EffectDelta:
    """Compute the delta *card* produces when *caster* plays it."""
    base = dict(card_id=card.id, card_name=card.name, kind=card.kind, caster=caster_side)

    if card.kind == CardKind.ATTACK:
        burn = 0
        if card.burns and rng.roll(rules.burn_chance):
            burn = 1
        return EffectDelta(
            **base,
            raw_damage=calculate_damage(card.value, caster),
            pierce=card.pierces,
            burn_stacks=burn,
        )

    if card.kind == CardKind.DEFEND:
        return EffectDelta(**base, shield_gain=max(0, card.value))

    if card.kind == CardKind.HEAL:
        return EffectDelta(**base, heal=max(0, card.value))

    if card.kind == CardKind.BUFF:
        return EffectDelta(**base, spirit_restore=max(0, card.value))

    if card.kind == CardKind.GROWTH:
        return EffectDelta(**base, growth_element=card.element, growth=max(0, card.value))

    raise ValueError(f"Unknown card kind: {card.kind!r}")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

def apply_effect(delta: EffectDelta, caster: Combatant, target: Combatant) -> AppliedEffect:
    """Apply *delta*.  *target* is the opponent; only attacks touch it."""
    if delta.kind == CardKind.ATTACK:
        hp_lost, absorbed = deal_damage(target, delta.raw_damage, pierce=delta.pierce)
        if delta.burn_stacks:
            apply_status(target, BURN, delta.burn_stacks)
        return AppliedEffect(hp_lost=hp_lost, absorbed=absorbed, burn_applied=delta.burn_stacks)

    if delta.kind == CardKind.DEFEND:
        return AppliedEffect(shield_gained=gain_shield(caster, delta.shield_gain))

    if delta.kind == CardKind.HEAL:
        return AppliedEffect(healed=caster.heal(delta.heal))

    if delta.kind == CardKind.BUFF:
        return AppliedEffect(spirit_restored=restore_spirit(caster, delta.spirit_restore))

    if delta.growth_element is not None:
        grow_element(caster, delta.growth_element, delta.growth)
    return AppliedEffect()


def describe(delta: EffectDelta, applied: AppliedEffect, caster_name: str) -> str:
    """One human-readable log line for a resolution."""
    head = f"{caster_name} uses {delta.card_name}"
    if delta.kind == CardKind.ATTACK:
        line = f"{head}, dealing {applied.hp_lost} damage"
        if delta.pierce:
            line += " (pierces shield)"
        elif applied.absorbed:
            line += f" ({applied.absorbed} blocked)"
        if applied.burn_applied:
            line += " and sets the target ablaze"
        return line
    if delta.kind == CardKind.DEFEND:
        return f"{head}, gaining {applied.shield_gained} shield"
    if delta.kind == CardKind.HEAL:
        return f"{head}, restoring {applied.healed} health"
    if delta.kind == CardKind.BUFF:
        return f"{head}, recovering {applied.spirit_restored} spirit"
    element = delta.growth_element.value if delta.growth_element else "?"
    return f"{head}, growing {element} by {delta.growth}"


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class EffectResolver:
    """Resolves cards against a live ``CombatState``.

    Parameters
    ----------
    rng:
        Stream used for probabilistic tags (burn rolls).
    """

    def __init__(self, rng: GameRNG) -> None:
        self._rng = rng

    def resolve(
        self,
        card: CardDefinition,
        caster_side: Side,
        state: CombatState,
    ) -> list[CombatEvent]:
        """Resolve *card* for *caster_side*.  Costs must already be paid.

        Returns ``[CUE, RESOLVED]`` (or just ``[RESOLVED]`` for GROWTH).
        """
        caster, target = _sides(state, caster_side)
        delta = compute_effect(card, caster_side, caster, state.rules, self._rng)

        events: list[CombatEvent] = []
        if delta.kind in _CUE_KINDS:
            events.append(CombatEvent(
                kind=EventKind.CUE,
                side=delta.target,
                card_id=card.id,
                detail=delta.kind.value,
            ))

        applied = apply_effect(delta, caster, target)
        line = describe(delta, applied, caster.name)
        state.log.append(line)
        logger.debug("resolved %s for %s: %s", card.id, caster_side.value, applied)

        events.append(CombatEvent(
            kind=EventKind.RESOLVED,
            side=caster_side,
            message=line,
            card_id=card.id,
            amount=_headline_amount(delta, applied),
            detail=delta.kind.value,
        ))
        return events


def _sides(state: CombatState, caster_side: Side) -> tuple[Combatant, Combatant]:
    if caster_side is Side.PLAYER:
        return state.player, state.enemy
    return state.enemy, state.player


def _headline_amount(delta: EffectDelta, applied: AppliedEffect) -> int:
    if delta.kind == CardKind.ATTACK:
        return applied.hp_lost
    if delta.kind == CardKind.DEFEND:
        return applied.shield_gained
    if delta.kind == CardKind.HEAL:
        return applied.healed
    if delta.kind == CardKind.BUFF:
        return applied.spirit_restored
    return delta.growth
