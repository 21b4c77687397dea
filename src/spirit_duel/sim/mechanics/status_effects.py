"""Status effect lifecycle -- apply, remove, query, and upkeep ticks.

Manages the ``status_effects`` dict on combatants.  The only status the
engine defines is ``burn``: at the afflicted side's upkeep it deals damage
equal to its stack count straight to HP, and it does not decay on its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spirit_duel.sim.core.entities import Combatant

BURN = "burn"

# Statuses that deal their stack count as HP loss at the owner's upkeep.
_UPKEEP_DAMAGE_STATUSES = (BURN,)


def apply_status(entity: Combatant, status_id: str, stacks: int) -> None:
    """Add *stacks* of a status.  Totals that fall to 0 or below are removed."""
    new_total = entity.status_effects.get(status_id, 0) + stacks
    if new_total <= 0:
        entity.status_effects.pop(status_id, None)
    else:
        entity.status_effects[status_id] = new_total


def remove_status(entity: Combatant, status_id: str) -> None:
    entity.status_effects.pop(status_id, None)


def get_status_stacks(entity: Combatant, status_id: str) -> int:
    return entity.status_effects.get(status_id, 0)


def has_status(entity: Combatant, status_id: str) -> bool:
    return get_status_stacks(entity, status_id) > 0


def tick_upkeep_statuses(entity: Combatant) -> list[tuple[str, int]]:
    """Apply upkeep damage from every damaging status on *entity*.

    Returns ``(status_id, hp_lost)`` for each status that ticked.  Stacks are
    left unchanged.  Stops early once the entity is dead.
    """
    ticks: list[tuple[str, int]] = []
    for status_id in _UPKEEP_DAMAGE_STATUSES:
        stacks = get_status_stacks(entity, status_id)
        if stacks <= 0:
            continue
        ticks.append((status_id, entity.lose_hp(stacks)))
        if entity.is_dead:
            break
    return ticks
