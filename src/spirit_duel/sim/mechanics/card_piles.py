"""Card pile helpers.

Wrap ``CombatState.card_piles`` so the turn controller reads in terms of
the encounter: draw with the encounter's hand limit and RNG, discard the
hand at end of turn, take spent talismans out of play.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spirit_duel.sim.core.game_state import CardInstance, CombatState, DrawResult


def draw_cards(state: CombatState, n: int) -> DrawResult:
    """Draw *n* cards respecting ``rules.max_hand_size``."""
    return state.card_piles.draw_cards(n, state.rng, state.rules.max_hand_size)


def discard_card(state: CombatState, card: CardInstance) -> None:
    state.card_piles.move_to_discard(card)


def remove_card(state: CombatState, card: CardInstance) -> None:
    """Permanently remove *card* from this encounter."""
    state.card_piles.move_to_removed(card)


def discard_hand(state: CombatState) -> list[CardInstance]:
    return state.card_piles.discard_hand()


def shuffle_deck(state: CombatState) -> None:
    state.card_piles.shuffle_deck(state.rng)
