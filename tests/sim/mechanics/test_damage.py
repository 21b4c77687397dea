"""Tests for damage calculation and application."""

from spirit_duel.sim.core.entities import Enemy, Player
from spirit_duel.sim.mechanics.damage import calculate_damage, deal_damage


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_player(**kwargs) -> Player:
    defaults = dict(name="Guo Guo", max_hp=100, hp=100, attack=5)
    defaults.update(kwargs)
    return Player(**defaults)


def _make_enemy(**kwargs) -> Enemy:
    defaults = dict(name="Wild Boar", template_id="wild_boar", max_hp=60, hp=60)
    defaults.update(kwargs)
    return Enemy(**defaults)


# ---------------------------------------------------------------------------
# calculate_damage
# ---------------------------------------------------------------------------

class TestCalculateDamage:
    def test_adds_attack(self):
        assert calculate_damage(8, _make_player()) == 13

    def test_zero_attack(self):
        assert calculate_damage(8, _make_player(attack=0)) == 8

    def test_basic_attack_is_attack_stat(self):
        assert calculate_damage(0, _make_player(attack=6)) == 6

    def test_floors_at_zero(self):
        assert calculate_damage(2, _make_player(attack=-10)) == 0


# ---------------------------------------------------------------------------
# deal_damage
# ---------------------------------------------------------------------------

class TestDealDamage:
    def test_unshielded(self):
        enemy = _make_enemy()
        assert deal_damage(enemy, 13) == (13, 0)
        assert enemy.hp == 47

    def test_partially_shielded(self):
        enemy = _make_enemy(shield=10)
        assert deal_damage(enemy, 13) == (3, 10)
        assert enemy.hp == 57
        assert enemy.shield == 0

    def test_pierce_keeps_shield(self):
        enemy = _make_enemy(shield=10)
        assert deal_damage(enemy, 13, pierce=True) == (13, 0)
        assert enemy.shield == 10

    def test_overkill(self):
        enemy = _make_enemy(hp=4)
        assert deal_damage(enemy, 13) == (4, 0)
        assert enemy.hp == 0
