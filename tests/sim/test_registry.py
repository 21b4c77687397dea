"""Tests for ContentRegistry loading, queries and loadout builders."""

import json
import logging

import pytest

from spirit_duel.ir.cards import CardKind, Element
from spirit_duel.sim.content.registry import ContentRegistry
from spirit_duel.sim.core.game_state import Phase
from spirit_duel.sim.core.rng import GameRNG
from spirit_duel.sim.engine import CombatEngine


# ---------------------------------------------------------------------------
# Bundled catalog
# ---------------------------------------------------------------------------

class TestBundledCatalog:
    def test_counts(self, registry):
        assert len(registry.cards) == 13
        assert len(registry.enemies) == 5
        assert len(registry.items) == 4

    def test_card_lookup(self, registry):
        strike = registry.get_card("c_strike")
        assert strike.kind == CardKind.ATTACK
        assert strike.cost == 1
        assert strike.value == 8
        assert registry.get_card("missing") is None

    def test_enemy_cards_exist(self, registry):
        for template in registry.enemies.values():
            for card_id in template.card_ids:
                assert card_id in registry.cards, f"{template.id} -> {card_id}"

    def test_starter_deck_exists(self, registry):
        for card_id in registry.player_template["deck"]:
            assert card_id in registry.cards

    def test_list_ids_sorted(self, registry):
        assert registry.list_enemy_ids() == sorted(registry.enemies)
        assert registry.list_card_ids()[0] == min(registry.cards)

    def test_cards_by_kind(self, registry):
        growth = registry.get_cards_by_kind(CardKind.GROWTH)
        assert [c.id for c in growth] == ["c_sprout"]
        assert growth[0].element == Element.WOOD

    def test_repr(self, registry):
        assert repr(registry) == "ContentRegistry(cards=13, enemies=5, items=4)"


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

class TestBuildPlayer:
    def test_starter(self, registry):
        player = registry.build_player()
        assert player.name == "Guo Guo"
        assert player.level == 1
        assert player.stats.max_hp == 100
        assert player.stats.hp == 100
        assert player.stats.max_spirit == 5
        assert len(player.deck) == 8

    def test_level_override(self, registry):
        assert registry.build_player(level=4).level == 4

    def test_missing_template(self):
        with pytest.raises(KeyError):
            ContentRegistry().build_player()


class TestBuildEnemy:
    def test_scaling(self, registry):
        enemy = registry.build_enemy("wild_boar", player_level=5)
        assert enemy.level == 5
        assert enemy.stats.max_hp == 120
        assert enemy.stats.hp == 120
        assert enemy.stats.attack == 12
        assert enemy.stats.speed == 16
        assert enemy.stats.max_spirit == 10
        assert enemy.drop_exp == 100
        assert enemy.drop_gold == 50

    def test_level_one(self, registry):
        enemy = registry.build_enemy("green_serpent", player_level=1)
        assert enemy.stats.max_hp == 60
        assert enemy.stats.attack == 9

    def test_element_caps_not_scaled(self, registry):
        enemy = registry.build_enemy("demonic_cultivator", player_level=5)
        assert enemy.stats.element_caps == {Element.FIRE: 2}

    def test_template_untouched(self, registry):
        registry.build_enemy("wild_boar", player_level=9)
        assert registry.get_enemy_template("wild_boar").stats.max_hp == 60

    def test_unknown_template(self, registry):
        with pytest.raises(KeyError):
            registry.build_enemy("dragon", player_level=1)

    def test_fallback_pool(self, tmp_path, caplog):
        enemies = [{"id": "ghost", "name": "Ghost", "stats": {"max_hp": 10}, "card_ids": ["missing"]}]
        path = tmp_path / "enemies.json"
        path.write_text(json.dumps(enemies))
        reg = ContentRegistry()
        reg.load_cards()
        reg.load_enemies(path)

        with caplog.at_level(logging.WARNING):
            enemy = reg.build_enemy("ghost", player_level=1, rng=GameRNG(3))

        assert "unknown cards" in caplog.text
        assert len(enemy.card_ids) == 2
        assert all(reg.cards[cid].req_level <= 1 for cid in enemy.card_ids)

    def test_roll_enemy_respects_min_level(self, registry):
        rng = GameRNG(11)
        for _ in range(40):
            enemy = registry.roll_enemy(1, rng)
            assert enemy.id in {"wild_boar", "green_serpent"}

    def test_built_loadouts_start_an_engine(self, registry):
        engine = CombatEngine(
            registry.build_player(),
            registry.build_enemy("demonic_cultivator", player_level=3),
            registry.cards,
            rng=GameRNG(1),
        )
        engine.start()
        engine.run_until_input()
        assert engine.phase in (Phase.PLAYER_ACTIVE, Phase.ENDED)
