"""Encounter state: card instances, the player's card piles, and the
single authoritative ``CombatState`` the turn controller mutates.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from spirit_duel.ir.results import CombatResult
from spirit_duel.ir.rules import CombatRules
from spirit_duel.sim.core.entities import Enemy, Player
from spirit_duel.sim.core.events import CombatLog
from spirit_duel.sim.core.rng import GameRNG


# ---------------------------------------------------------------------------
# CardInstance
# ---------------------------------------------------------------------------

class CardInstance(BaseModel):
    """A single physical card residing in a pile.

    Each copy has its own ``id`` so it can be tracked across piles even
    when several copies of the same ``card_id`` exist.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    card_id: str
    """References the card definition in the catalog."""

    talisman_id: str | None = None
    """Set when the card was injected by a talisman binding.  Such a card
    costs nothing and is bound to the binding's durability."""

    @property
    def is_talisman(self) -> bool:
        return self.talisman_id is not None


# ---------------------------------------------------------------------------
# CardPiles
# ---------------------------------------------------------------------------

@dataclass
class DrawResult:
    """What a single ``draw_cards`` call did."""

    drawn: list[CardInstance] = field(default_factory=list)
    overflowed: list[CardInstance] = field(default_factory=list)
    """Cards drawn while the hand was full; they went to discard."""

    reshuffles: int = 0


class CardPiles(BaseModel):
    """The player's deck, hand, discard and removed piles.

    A card instance lives in exactly one pile at a time.  ``removed`` holds
    talisman cards whose durability ran out; they never return to play.
    """

    deck: list[CardInstance] = Field(default_factory=list)
    hand: list[CardInstance] = Field(default_factory=list)
    discard: list[CardInstance] = Field(default_factory=list)
    removed: list[CardInstance] = Field(default_factory=list)

    # -- queries -------------------------------------------------------------

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    @property
    def total_cards(self) -> int:
        return len(self.deck) + len(self.hand) + len(self.discard) + len(self.removed)

    # -- drawing -------------------------------------------------------------

    def draw_cards(self, n: int, rng: GameRNG, max_hand_size: int) -> DrawResult:
        """Draw up to *n* cards from the top of the deck.

        When the deck runs out mid-draw, the discard pile is shuffled into
        a new deck and drawing continues.  If both are empty the draw stops
        early.  A card drawn while the hand already holds *max_hand_size*
        cards is moved straight to discard instead.
        """
        result = DrawResult()
        for _ in range(n):
            if not self.deck:
                if not self.discard:
                    break  # nothing left to draw
                self._reshuffle_discard_into_deck(rng)
                result.reshuffles += 1
            card = self.deck.pop(0)
            if len(self.hand) < max_hand_size:
                self.hand.append(card)
                result.drawn.append(card)
            else:
                self.discard.append(card)
                result.overflowed.append(card)
        return result

    def _reshuffle_discard_into_deck(self, rng: GameRNG) -> None:
        self.deck.extend(self.discard)
        self.discard.clear()
        rng.shuffle(self.deck)

    # -- pile movement -------------------------------------------------------

    def discard_hand(self) -> list[CardInstance]:
        """Move every card in the hand to the discard pile."""
        moved = list(self.hand)
        self.discard.extend(moved)
        self.hand.clear()
        return moved

    def move_to_discard(self, card: CardInstance) -> None:
        self._remove_from_hand(card)
        self.discard.append(card)

    def move_to_removed(self, card: CardInstance) -> None:
        """Take *card* out of play for the rest of the encounter."""
        self._remove_from_hand(card)
        self.removed.append(card)

    def shuffle_deck(self, rng: GameRNG) -> None:
        rng.shuffle(self.deck)

    # -- internal helpers ----------------------------------------------------

    def _remove_from_hand(self, card: CardInstance) -> None:
        for i, c in enumerate(self.hand):
            if c.id == card.id:
                self.hand.pop(i)
                return
        raise ValueError(f"Card {card.id!r} ({card.card_id}) not found in hand")


# ---------------------------------------------------------------------------
# Phase
# ---------------------------------------------------------------------------

class Phase(str, Enum):
    """Turn controller states."""

    NOT_STARTED = "NOT_STARTED"
    PLAYER_UPKEEP = "PLAYER_UPKEEP"
    PLAYER_ACTIVE = "PLAYER_ACTIVE"
    ENEMY_UPKEEP = "ENEMY_UPKEEP"
    ENEMY_ACTIVE = "ENEMY_ACTIVE"
    ENDED = "ENDED"
    ABANDONED = "ABANDONED"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.ENDED, Phase.ABANDONED)


# ---------------------------------------------------------------------------
# CombatState
# ---------------------------------------------------------------------------

class CombatState(BaseModel):
    """Full mutable state of a single encounter.

    Owned exclusively by one ``CombatEngine``; never shared between
    encounters.
    """

    model_config = {"arbitrary_types_allowed": True}

    player: Player
    enemy: Enemy
    card_piles: CardPiles = Field(default_factory=CardPiles)

    rules: CombatRules = Field(default_factory=CombatRules)
    rng: Any = Field(default=None, exclude=True)
    """Deck-shuffle RNG.  Excluded from serialization."""

    phase: Phase = Phase.NOT_STARTED
    turn: int = 0
    """Number of player upkeeps run so far."""

    talisman_uses: dict[str, int] = Field(default_factory=dict)
    """Remaining durability per talisman binding id."""

    log: CombatLog = Field(default_factory=CombatLog)
    result: CombatResult | None = None

    # -- queries -------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.phase.is_terminal
