"""Loadout snapshots handed to the engine by its external owners.

A loadout is read once when an encounter starts and never aliased during
combat.  The player's inventory, equipment and progression live outside the
engine; only the numbers that matter to combat are captured here.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .cards import Element


class Stats(BaseModel):
    """Combat stat block shared by players and enemy templates."""

    model_config = ConfigDict(frozen=True)

    max_hp: int = Field(ge=1)
    hp: int = 0
    """Health at encounter start.  Omitted means full health; always clamped
    into ``[0, max_hp]``."""

    max_spirit: int = Field(default=0, ge=0)
    attack: int = 0
    defense: int = 0
    speed: int = 0
    element_caps: dict[Element, int] = Field(default_factory=dict)
    """Per-element session cap for the secondary resource."""

    @model_validator(mode="before")
    @classmethod
    def _default_and_clamp_hp(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "max_hp" not in data:
            return data
        data = dict(data)
        max_hp = data["max_hp"]
        hp = data.get("hp")
        if hp is None:
            data["hp"] = max_hp
        else:
            data["hp"] = max(0, min(hp, max_hp))
        return data

    @model_validator(mode="after")
    def _caps_non_negative(self) -> Stats:
        for element, cap in self.element_caps.items():
            if cap < 0:
                raise ValueError(f"element cap for {element.value} must be >= 0, got {cap}")
        return self


class TalismanBinding(BaseModel):
    """A consumable that injects a zero-cost copy of ``card_id`` into the deck."""

    model_config = ConfigDict(frozen=True)

    id: str
    card_id: str
    remaining_uses: int = Field(ge=0)


class PlayerLoadout(BaseModel):
    """Everything the engine needs to know about the player at encounter start."""

    model_config = ConfigDict(frozen=True)

    name: str = "Player"
    level: int = Field(default=1, ge=1)
    stats: Stats
    deck: list[str] = Field(default_factory=list)
    """Ordered card-id multiset.  Shuffled by the engine before the first draw."""

    talismans: list[TalismanBinding] = Field(default_factory=list)


class EnemyTemplate(BaseModel):
    """An enemy as the catalog describes it, optionally scaled to a level."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    level: int = Field(default=1, ge=1)
    stats: Stats
    card_ids: list[str] = Field(default_factory=list)
    """Fixed action pool.  Enemies never draw or discard."""

    drop_exp: int = Field(default=0, ge=0)
    drop_gold: int = Field(default=0, ge=0)
    min_player_level: int = Field(default=1, ge=1)
