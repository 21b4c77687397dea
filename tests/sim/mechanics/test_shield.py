"""Tests for shield gain and reset."""

from spirit_duel.sim.core.entities import Player
from spirit_duel.sim.mechanics.shield import clear_shield, gain_shield


def _make_player(**kwargs) -> Player:
    defaults = dict(name="Guo Guo", max_hp=100, hp=100)
    defaults.update(kwargs)
    return Player(**defaults)


class TestGainShield:
    def test_returns_gain(self):
        player = _make_player()
        assert gain_shield(player, 5) == 5
        assert player.shield == 5

    def test_stacks_within_turn(self):
        player = _make_player(shield=5)
        gain_shield(player, 5)
        assert player.shield == 10

    def test_uncapped(self):
        player = _make_player(shield=990)
        assert gain_shield(player, 40) == 40
        assert player.shield == 1030

    def test_negative_is_noop(self):
        player = _make_player(shield=3)
        assert gain_shield(player, -2) == 0
        assert player.shield == 3


class TestClearShield:
    def test_resets_to_zero(self):
        player = _make_player(shield=12)
        clear_shield(player)
        assert player.shield == 0
