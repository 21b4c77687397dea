"""Intermediate Representation (IR) for combat content and encounter I/O.

Catalog content (cards, bonus items), the loadout snapshots the engine is
constructed from, the tunable rules, and the result handed back at the end
are all Pydantic models that serialise cleanly to/from JSON.
"""

from .cards import CardDefinition, CardKind, CardRarity, CardTag, Element
from .items import BonusItem
from .loadouts import EnemyTemplate, PlayerLoadout, Stats, TalismanBinding
from .results import CombatResult, Outcome, Rewards, TalismanDelta
from .rules import CombatRules

__all__ = [
    # cards
    "CardDefinition",
    "CardKind",
    "CardRarity",
    "CardTag",
    "Element",
    # items
    "BonusItem",
    # loadouts
    "EnemyTemplate",
    "PlayerLoadout",
    "Stats",
    "TalismanBinding",
    # results
    "CombatResult",
    "Outcome",
    "Rewards",
    "TalismanDelta",
    # rules
    "CombatRules",
]
