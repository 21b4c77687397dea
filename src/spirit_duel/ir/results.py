"""Encounter results -- the only thing the engine hands back to its caller."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .cards import Element
from .items import BonusItem


class Outcome(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"


class Rewards(BaseModel):
    """What a victory yields.  Applied to persistent state by the caller."""

    model_config = ConfigDict(frozen=True)

    experience: int = 0
    currency: int = 0
    drops: list[BonusItem] = Field(default_factory=list)


class TalismanDelta(BaseModel):
    """Post-combat durability of one talisman binding."""

    model_config = ConfigDict(frozen=True)

    id: str
    remaining_uses: int


class CombatResult(BaseModel):
    """Terminal summary of an encounter.

    ``rewards`` is ``None`` on a loss.  ``talisman_durability`` lists only
    bindings whose durability changed.  ``element_growth`` reports the
    per-element cap growth from GROWTH cards; nothing persists unless the
    caller applies it.
    """

    model_config = ConfigDict(frozen=True)

    outcome: Outcome
    rewards: Rewards | None = None
    talisman_durability: list[TalismanDelta] = Field(default_factory=list)
    element_growth: dict[Element, int] = Field(default_factory=dict)
    turns: int = 0
    player_hp: int = 0

    @property
    def won(self) -> bool:
        return self.outcome == Outcome.WIN
