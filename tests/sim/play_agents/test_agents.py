"""Tests for the headless play agents."""

from __future__ import annotations

from spirit_duel.ir.cards import CardDefinition, CardKind, CardTag
from spirit_duel.ir.loadouts import EnemyTemplate, PlayerLoadout, Stats
from spirit_duel.sim.core.rng import GameRNG
from spirit_duel.sim.engine import CombatEngine
from spirit_duel.sim.play_agents import GreedyAgent, PlayAgent, RandomAgent


# ======================================================================
# Helpers
# ======================================================================

CARDS = {
    c.id: c
    for c in [
        CardDefinition(id="strike", name="Strike", kind=CardKind.ATTACK, cost=1, value=8),
        CardDefinition(id="smash", name="Smash", kind=CardKind.ATTACK, cost=3, value=15),
        CardDefinition(id="needle", name="Needle", kind=CardKind.ATTACK, cost=2, value=1,
                       tags=frozenset({CardTag.PIERCE})),
        CardDefinition(id="defend", name="Defend", kind=CardKind.DEFEND, cost=1, value=5),
        CardDefinition(id="wall", name="Wall", kind=CardKind.DEFEND, cost=2, value=12),
        CardDefinition(id="heal", name="Heal", kind=CardKind.HEAL, cost=2, value=10),
        CardDefinition(id="meditate", name="Meditate", kind=CardKind.BUFF, cost=0, value=2),
    ]
}


def _make_engine(hand: list[str], player: dict | None = None, enemy: dict | None = None) -> CombatEngine:
    """Engine in PLAYER_ACTIVE holding exactly the cards in *hand*, in shuffled order."""
    player_stats = dict(max_hp=100, max_spirit=5, attack=5, speed=10)
    player_stats.update(player or {})
    enemy_stats = dict(max_hp=60, speed=1)
    enemy_stats.update(enemy or {})
    engine = CombatEngine(
        PlayerLoadout(name="Guo Guo", stats=Stats(**player_stats), deck=hand),
        EnemyTemplate(id="dummy", name="Dummy", stats=Stats(**enemy_stats)),
        CARDS,
        rules=None,
        rng=GameRNG(0),
    )
    engine.start()
    engine.run_until_input()
    return engine


def _chosen(agent: PlayAgent, engine: CombatEngine) -> str | None:
    index = agent.choose_card_to_play(engine, engine.playable_indices())
    return None if index is None else engine.hand[index].id


# ======================================================================
# RandomAgent
# ======================================================================

class TestRandomAgent:
    def test_only_playable(self):
        engine = _make_engine(["strike", "smash", "defend"], player=dict(max_spirit=1))
        agent = RandomAgent(rng=GameRNG(1), end_turn_chance=0.0)
        for _ in range(20):
            assert _chosen(agent, engine) in {"strike", "defend"}

    def test_empty_playable_ends_turn(self):
        engine = _make_engine(["smash"], player=dict(max_spirit=0))
        assert RandomAgent(rng=GameRNG(1)).choose_card_to_play(engine, []) is None

    def test_always_end_turn(self):
        engine = _make_engine(["strike"])
        agent = RandomAgent(rng=GameRNG(1), end_turn_chance=1.0)
        assert agent.choose_card_to_play(engine, engine.playable_indices()) is None

    def test_default_rng_is_seeded(self):
        engine = _make_engine(["strike", "defend", "meditate"])
        picks_a = [RandomAgent().choose_card_to_play(engine, [0, 1, 2]) for _ in range(5)]
        picks_b = [RandomAgent().choose_card_to_play(engine, [0, 1, 2]) for _ in range(5)]
        assert picks_a == picks_b


# ======================================================================
# GreedyAgent
# ======================================================================

class TestGreedyAgent:
    def test_takes_lethal(self):
        engine = _make_engine(["defend", "strike", "meditate"], enemy=dict(max_hp=13))
        assert _chosen(GreedyAgent(), engine) == "strike"

    def test_pierce_lethal_through_shield(self):
        engine = _make_engine(["strike", "needle"], enemy=dict(max_hp=6))
        engine.state.enemy.shield = 50
        assert _chosen(GreedyAgent(), engine) == "needle"

    def test_heals_when_low(self):
        engine = _make_engine(["strike", "heal"], player=dict(hp=30))
        assert _chosen(GreedyAgent(), engine) == "heal"

    def test_no_heal_when_healthy(self):
        engine = _make_engine(["strike", "heal"])
        assert _chosen(GreedyAgent(), engine) == "strike"

    def test_meditate_when_spirit_spent(self):
        engine = _make_engine(["strike", "meditate", "strike"])
        engine.play_card([c.id for c in engine.hand].index("strike"))
        assert _chosen(GreedyAgent(), engine) == "meditate"

    def test_best_damage_per_cost(self):
        engine = _make_engine(["smash", "strike"])
        assert _chosen(GreedyAgent(), engine) == "strike"

    def test_biggest_shield_when_no_attack(self):
        engine = _make_engine(["defend", "wall"])
        assert _chosen(GreedyAgent(), engine) == "wall"

    def test_nothing_playable(self):
        engine = _make_engine(["smash"], player=dict(max_spirit=0))
        assert _chosen(GreedyAgent(), engine) is None
