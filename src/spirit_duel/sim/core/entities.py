"""Runtime combatant state for a single encounter.

All data classes use Pydantic v2 BaseModel for validation and
serialization.  A combatant is built once from a loadout snapshot and
thrown away when the encounter ends.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from spirit_duel.ir.cards import Element
from spirit_duel.ir.loadouts import Stats


# ---------------------------------------------------------------------------
# Combatant base
# ---------------------------------------------------------------------------

class Combatant(BaseModel):
    """Common base for both sides: health, shield, resources, statuses."""

    name: str
    level: int = 1
    max_hp: int
    hp: int
    shield: int = 0

    spirit: int = 0
    max_spirit: int = 0
    """Primary resource.  Refilled to ``max_spirit`` at own upkeep."""

    attack: int = 0
    defense: int = 0
    speed: int = 0

    elements: dict[Element, int] = Field(default_factory=dict)
    """Current secondary resource per element."""

    element_caps: dict[Element, int] = Field(default_factory=dict)
    """Session cap per element.  GROWTH cards raise it mid-combat."""

    status_effects: dict[str, int] = Field(default_factory=dict)
    """Maps a status identifier (e.g. ``"burn"``) to its stack count."""

    @classmethod
    def from_stats(cls, name: str, level: int, stats: Stats, **extra) -> Combatant:
        caps = dict(stats.element_caps)
        return cls(
            name=name,
            level=level,
            max_hp=stats.max_hp,
            hp=stats.hp,
            spirit=stats.max_spirit,
            max_spirit=stats.max_spirit,
            attack=stats.attack,
            defense=stats.defense,
            speed=stats.speed,
            elements=dict(caps),
            element_caps=caps,
            **extra,
        )

    # -- HP queries ----------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    # -- shield --------------------------------------------------------------

    def gain_shield(self, amount: int) -> None:
        """Add *amount* shield.  Uncapped; negative amounts are ignored."""
        if amount > 0:
            self.shield += amount

    def clear_shield(self) -> None:
        self.shield = 0

    # -- damage / heal -------------------------------------------------------

    def take_damage(self, amount: int, pierce: bool = False) -> tuple[int, int]:
        """Apply *amount* damage, shield first unless *pierce*.

        Returns ``(hp_lost, absorbed)``.  Neither health nor shield can go
        below zero.
        """
        if amount <= 0:
            return 0, 0

        absorbed = 0
        if not pierce:
            absorbed = min(self.shield, amount)
            self.shield -= absorbed

        return self.lose_hp(amount - absorbed), absorbed

    def lose_hp(self, amount: int) -> int:
        """Lose HP directly, bypassing shield.  Returns HP actually lost."""
        if amount <= 0:
            return 0
        lost = min(self.hp, amount)
        self.hp -= lost
        return lost

    def heal(self, amount: int) -> int:
        """Heal up to ``max_hp``.  Returns HP actually restored."""
        if amount <= 0:
            return 0
        before = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return self.hp - before

    # -- resources -----------------------------------------------------------

    def element_amount(self, element: Element | None) -> int:
        if element is None:
            return 0
        return self.elements.get(element, 0)


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

class Player(Combatant):
    """The player's side of an encounter."""


# ---------------------------------------------------------------------------
# Enemy
# ---------------------------------------------------------------------------

class Enemy(Combatant):
    """The enemy's side.  Acts from a fixed action pool, never draws."""

    template_id: str
    """Identifier that ties this instance back to its template."""

    intent: str | None = None
    """Name of the action currently being displayed, if any."""
