"""Card definitions -- the catalog entries both combatants play from."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CardKind(str, Enum):
    """The five effect kinds the resolver knows how to apply."""

    ATTACK = "ATTACK"
    DEFEND = "DEFEND"
    HEAL = "HEAL"
    BUFF = "BUFF"
    GROWTH = "GROWTH"


class Element(str, Enum):
    """Closed set of elemental affinities used for the secondary resource."""

    METAL = "METAL"
    WOOD = "WOOD"
    WATER = "WATER"
    FIRE = "FIRE"
    EARTH = "EARTH"
    LIGHT = "LIGHT"
    DARK = "DARK"
    WIND = "WIND"
    THUNDER = "THUNDER"
    ICE = "ICE"
    SWORD = "SWORD"


class CardTag(str, Enum):
    """Modifiers that change how an attack resolves."""

    PIERCE = "PIERCE"
    """Damage ignores the target's shield entirely."""

    BURN = "BURN"
    """On hit, a fixed-probability roll adds one burn stack to the target."""


class CardRarity(str, Enum):
    COMMON = "COMMON"
    RARE = "RARE"
    EPIC = "EPIC"


class CardDefinition(BaseModel):
    """Complete, immutable definition of a single card in the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    """Unique identifier used for cross-references (e.g. ``"c_strike"``)."""

    name: str
    """Display name shown on the card."""

    kind: CardKind
    """Which resolver rule applies when the card is played."""

    cost: int = Field(default=0, ge=0)
    """Primary resource (spirit) cost."""

    element: Element | None = None
    """Element of the secondary resource cost, and the pool a GROWTH card grows."""

    element_cost: int = Field(default=0, ge=0)
    """Amount of ``element`` resource consumed on play."""

    value: int = 0
    """Damage, shield, heal, restore, or growth amount depending on ``kind``."""

    tags: frozenset[CardTag] = frozenset()

    req_level: int = Field(default=1, ge=1)
    """Minimum caster level required to play the card."""

    rarity: CardRarity = CardRarity.COMMON
    description: str = ""

    @model_validator(mode="after")
    def _element_required_for_cost(self) -> CardDefinition:
        if self.element_cost > 0 and self.element is None:
            raise ValueError(
                f"card {self.id!r} has element_cost={self.element_cost} but no element"
            )
        if self.kind == CardKind.GROWTH and self.element is None:
            raise ValueError(f"GROWTH card {self.id!r} must name an element")
        return self

    # -- queries -------------------------------------------------------------

    @property
    def pierces(self) -> bool:
        return CardTag.PIERCE in self.tags

    @property
    def burns(self) -> bool:
        return CardTag.BURN in self.tags
