"""Resource system -- spirit (primary) and elemental (secondary) pools.

Rules:
    - Spirit refills to max at the start of the owner's turn.
    - Each elemental pool refills its current amount to its session cap.
    - A cost is paid only if every required resource is available;
      otherwise nothing is deducted.
    - GROWTH raises an element's cap and current amount together for the
      rest of the encounter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spirit_duel.ir.cards import CardDefinition, Element
    from spirit_duel.sim.core.entities import Combatant


def refill_resources(entity: Combatant) -> None:
    """Refill spirit to max and every element's current amount to its cap."""
    entity.spirit = entity.max_spirit
    entity.elements = dict(entity.element_caps)


def can_afford(
    spirit: int,
    elements: dict[Element, int],
    card: CardDefinition,
) -> bool:
    """Whether a pool of *spirit* and *elements* covers *card*'s costs.

    Works on plain values so the enemy AI can check a planning snapshot.
    """
    if spirit < card.cost:
        return False
    if card.element_cost > 0 and elements.get(card.element, 0) < card.element_cost:
        return False
    return True


def pay_cost(entity: Combatant, card: CardDefinition) -> bool:
    """Deduct *card*'s costs from *entity*.  Returns False (and deducts
    nothing) if any required resource is short."""
    if not can_afford(entity.spirit, entity.elements, card):
        return False
    entity.spirit -= card.cost
    if card.element_cost > 0:
        entity.elements[card.element] = entity.elements.get(card.element, 0) - card.element_cost
    return True


def restore_spirit(entity: Combatant, amount: int) -> int:
    """Restore spirit, capped at max.  Returns the amount actually gained."""
    if amount <= 0:
        return 0
    before = entity.spirit
    entity.spirit = min(entity.max_spirit, entity.spirit + amount)
    return entity.spirit - before


def grow_element(entity: Combatant, element: Element, amount: int) -> None:
    """Raise both the session cap and the current amount of *element*."""
    if amount <= 0:
        return
    entity.element_caps[element] = entity.element_caps.get(element, 0) + amount
    entity.elements[element] = entity.elements.get(element, 0) + amount
