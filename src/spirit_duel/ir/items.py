"""Bonus item definitions -- what a victory can drop besides exp and gold."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .cards import CardRarity


class BonusItem(BaseModel):
    """An inventory item the encounter may award.  Opaque to combat."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    rarity: CardRarity = CardRarity.COMMON
    req_level: int = Field(default=1, ge=1)
    """Items above the player's level are not eligible as drops."""

    description: str = ""
