"""Damage calculation and application.

Pipeline:
    card value + caster attack -> floor(0)

Then applied to the target: shield absorbs first unless the attack
pierces, remainder hits HP.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spirit_duel.sim.core.entities import Combatant


def calculate_damage(base: int, source: Combatant) -> int:
    """Raw damage before shield: ``max(0, base + source.attack)``."""
    return max(0, base + source.attack)


def deal_damage(target: Combatant, raw_damage: int, pierce: bool = False) -> tuple[int, int]:
    """Apply *raw_damage* to *target*.

    Returns ``(hp_lost, absorbed_by_shield)``.  A piercing hit never touches
    the shield.
    """
    return target.take_damage(raw_damage, pierce=pierce)
