"""Content registry -- loads and serves the read-only combat catalog.

Cards, enemy templates, bonus items, and the starter player are loaded
from JSON files in ``spirit_duel/data/``.  The registry also builds the
snapshots the engine is constructed from: a starter :class:`PlayerLoadout`
and level-scaled :class:`EnemyTemplate` instances.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

from spirit_duel.ir.cards import CardDefinition, CardKind
from spirit_duel.ir.items import BonusItem
from spirit_duel.ir.loadouts import EnemyTemplate, PlayerLoadout, Stats, TalismanBinding
from spirit_duel.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

# Default paths inside the installed package.
_DATA_DIR = Path(__file__).resolve().parents[2] / "data"  # sim/content -> spirit_duel
_DEFAULT_CARDS_PATH = _DATA_DIR / "cards.json"
_DEFAULT_ENEMIES_PATH = _DATA_DIR / "enemies.json"
_DEFAULT_ITEMS_PATH = _DATA_DIR / "items.json"
_DEFAULT_PLAYER_PATH = _DATA_DIR / "player.json"

# Enemy scaling: stats grow 20% per player level; yields are flat per level.
_DIFFICULTY_PER_LEVEL = 0.2
_EXP_PER_LEVEL = 20
_GOLD_PER_LEVEL = 10
_FALLBACK_POOL_SIZE = 2


def _read_json(path: str | Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class ContentRegistry:
    """Loads and serves card definitions, enemy templates and bonus items.

    Usage::

        registry = ContentRegistry()
        registry.load_all()

        card = registry.get_card("c_strike")
        player = registry.build_player()
        enemy = registry.roll_enemy(player.level, GameRNG(7))
    """

    def __init__(self) -> None:
        self.cards: dict[str, CardDefinition] = {}
        self.enemies: dict[str, EnemyTemplate] = {}
        self.items: dict[str, BonusItem] = {}
        self.player_template: dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_all(self) -> None:
        """Load every bundled catalog file."""
        self.load_cards()
        self.load_enemies()
        self.load_items()
        self.load_player_template()

    def load_cards(self, path: str | Path | None = None) -> None:
        """Load card definitions from a JSON list.  Later ids override earlier ones."""
        for raw in _read_json(path or _DEFAULT_CARDS_PATH):
            card = CardDefinition.model_validate(raw)
            self.cards[card.id] = card

    def load_enemies(self, path: str | Path | None = None) -> None:
        """Load enemy templates from a JSON list.

        Templates referencing cards the registry does not know are kept;
        the unknown ids are dropped with a warning when the enemy is built.
        """
        for raw in _read_json(path or _DEFAULT_ENEMIES_PATH):
            template = EnemyTemplate.model_validate(raw)
            self.enemies[template.id] = template

    def load_items(self, path: str | Path | None = None) -> None:
        for raw in _read_json(path or _DEFAULT_ITEMS_PATH):
            item = BonusItem.model_validate(raw)
            self.items[item.id] = item

    def load_player_template(self, path: str | Path | None = None) -> None:
        """Load the starter player (stats and deck ids)."""
        self.player_template = _read_json(path or _DEFAULT_PLAYER_PATH)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_card(self, card_id: str) -> CardDefinition | None:
        return self.cards.get(card_id)

    def get_enemy_template(self, template_id: str) -> EnemyTemplate | None:
        return self.enemies.get(template_id)

    def list_card_ids(self) -> list[str]:
        return sorted(self.cards)

    def list_enemy_ids(self) -> list[str]:
        return sorted(self.enemies)

    def get_cards_by_kind(self, kind: CardKind) -> list[CardDefinition]:
        return [c for c in self.cards.values() if c.kind == kind]

    # ------------------------------------------------------------------
    # Loadout builders
    # ------------------------------------------------------------------

    def build_player(
        self,
        level: int | None = None,
        talismans: list[TalismanBinding] | None = None,
    ) -> PlayerLoadout:
        """Build the starter loadout.  Deck ids missing from the catalog are
        dropped; if none remain, the first catalog card is used."""
        if not self.player_template:
            raise KeyError("player template not loaded")
        raw = self.player_template
        deck = [cid for cid in raw.get("deck", []) if cid in self.cards]
        if not deck and self.cards:
            deck = [next(iter(self.cards))]
        return PlayerLoadout(
            name=raw.get("name", "Player"),
            level=level if level is not None else raw.get("level", 1),
            stats=Stats.model_validate(raw["stats"]),
            deck=deck,
            talismans=talismans or [],
        )

    def build_enemy(
        self,
        template_id: str,
        player_level: int,
        rng: GameRNG | None = None,
    ) -> EnemyTemplate:
        """Scale template *template_id* to *player_level*.

        HP, attack, defense and speed are multiplied by
        ``1 + 0.2 * player_level`` (floored); spirit and element caps are
        not scaled.  Yields become ``20 * level`` exp and ``10 * level``
        gold.  An enemy left with no known cards gets two random cards the
        player's level could use.

        Raises
        ------
        KeyError
            If *template_id* is unknown.
        """
        template = self.enemies[template_id]
        multiplier = 1 + player_level * _DIFFICULTY_PER_LEVEL
        base = template.stats

        max_hp = math.floor(base.max_hp * multiplier)
        stats = Stats(
            max_hp=max_hp,
            hp=max_hp,
            max_spirit=base.max_spirit,
            attack=math.floor(base.attack * multiplier),
            defense=math.floor(base.defense * multiplier),
            speed=math.floor(base.speed * multiplier),
            element_caps=dict(base.element_caps),
        )

        card_ids = [cid for cid in template.card_ids if cid in self.cards]
        if len(card_ids) < len(template.card_ids):
            logger.warning(
                "enemy %s references unknown cards: %s",
                template_id,
                sorted(set(template.card_ids) - set(self.cards)),
            )
        if not card_ids:
            card_ids = self._fallback_pool(player_level, rng or GameRNG())

        return template.model_copy(update={
            "level": player_level,
            "stats": stats,
            "card_ids": card_ids,
            "drop_exp": _EXP_PER_LEVEL * player_level,
            "drop_gold": _GOLD_PER_LEVEL * player_level,
        })

    def roll_enemy(self, player_level: int, rng: GameRNG) -> EnemyTemplate:
        """Pick a template the player's level qualifies for, then scale it.

        Falls back to the lowest-level template when none qualify.
        """
        if not self.enemies:
            raise KeyError("no enemy templates loaded")
        eligible = [t for t in self.enemies.values() if t.min_player_level <= player_level]
        if not eligible:
            eligible = [min(self.enemies.values(), key=lambda t: t.min_player_level)]
        template = rng.pick(eligible)
        return self.build_enemy(template.id, player_level, rng)

    def _fallback_pool(self, player_level: int, rng: GameRNG) -> list[str]:
        if not self.cards:
            return []
        usable = [c.id for c in self.cards.values() if c.req_level <= player_level]
        if not usable:
            return [next(iter(self.cards))]
        return [rng.pick(usable) for _ in range(_FALLBACK_POOL_SIZE)]

    def __repr__(self) -> str:
        return (
            f"ContentRegistry(cards={len(self.cards)}, "
            f"enemies={len(self.enemies)}, items={len(self.items)})"
        )
