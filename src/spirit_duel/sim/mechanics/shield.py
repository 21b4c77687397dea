"""Shield mechanics -- gain and reset."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spirit_duel.sim.core.entities import Combatant


def gain_shield(entity: Combatant, amount: int) -> int:
    """Add shield.  Additive and uncapped within a turn.  Returns the gain."""
    before = entity.shield
    entity.gain_shield(amount)
    return entity.shield - before


def clear_shield(entity: Combatant) -> None:
    """Reset shield at the start of the owner's own turn."""
    entity.clear_shield()
