"""Core combat mechanics.

Re-exports the primary functions from each mechanics module for convenience.

Usage::

    from spirit_duel.sim.mechanics import (
        calculate_damage, deal_damage,
        gain_shield, clear_shield,
        refill_resources, can_afford, pay_cost, restore_spirit, grow_element,
        draw_cards, discard_card, remove_card, discard_hand, shuffle_deck,
        apply_status, remove_status, get_status_stacks, has_status,
        tick_upkeep_statuses,
    )
"""

# -- damage ------------------------------------------------------------------
from .damage import calculate_damage, deal_damage

# -- shield ------------------------------------------------------------------
from .shield import clear_shield, gain_shield

# -- resources ---------------------------------------------------------------
from .resources import (
    can_afford,
    grow_element,
    pay_cost,
    refill_resources,
    restore_spirit,
)

# -- card piles --------------------------------------------------------------
from .card_piles import (
    discard_card,
    discard_hand,
    draw_cards,
    remove_card,
    shuffle_deck,
)

# -- status effects ----------------------------------------------------------
from .status_effects import (
    BURN,
    apply_status,
    get_status_stacks,
    has_status,
    remove_status,
    tick_upkeep_statuses,
)

__all__ = [
    # damage
    "calculate_damage",
    "deal_damage",
    # shield
    "gain_shield",
    "clear_shield",
    # resources
    "refill_resources",
    "can_afford",
    "pay_cost",
    "restore_spirit",
    "grow_element",
    # card piles
    "draw_cards",
    "discard_card",
    "remove_card",
    "discard_hand",
    "shuffle_deck",
    # status effects
    "BURN",
    "apply_status",
    "remove_status",
    "get_status_stacks",
    "has_status",
    "tick_upkeep_statuses",
]
