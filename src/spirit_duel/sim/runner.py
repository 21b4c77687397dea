"""Simulation runner -- drives the engine headless with a play agent.

Provides two key classes:

- **CombatSimulator**: Runs a single encounter to completion, collecting
  telemetry from the engine's event stream.
- **BatchRunner**: Orchestrates many seeded encounters (optionally in
  parallel) for balance checks.
"""

from __future__ import annotations

import logging
import multiprocessing
from typing import TYPE_CHECKING, Iterable

from spirit_duel.ir.cards import CardKind
from spirit_duel.ir.rules import CombatRules
from spirit_duel.sim.core.events import CombatEvent, EventKind, Side
from spirit_duel.sim.core.game_state import Phase
from spirit_duel.sim.core.rng import GameRNG, Stream
from spirit_duel.sim.engine import CombatEngine
from spirit_duel.sim.play_agents.base import PlayAgent
from spirit_duel.sim.play_agents.random_agent import RandomAgent
from spirit_duel.sim.telemetry import BattleTelemetry

if TYPE_CHECKING:
    from spirit_duel.sim.content.registry import ContentRegistry

logger = logging.getLogger(__name__)


# =====================================================================
# CombatSimulator
# =====================================================================

class CombatSimulator:
    """Runs a single encounter to completion with *agent* playing."""

    def __init__(self, agent: PlayAgent) -> None:
        self.agent = agent

    def run_combat(self, engine: CombatEngine, seed: int = 0) -> BattleTelemetry:
        """Play *engine* out and return telemetry.

        An encounter still running after ``rules.max_turns`` player turns is
        abandoned and reported as ``"timeout"``.
        """
        telemetry = BattleTelemetry(
            seed=seed,
            enemy_id=engine.state.enemy.template_id,
            result="timeout",
            turns=0,
            player_hp_start=engine.state.player.hp,
            player_hp_end=engine.state.player.hp,
        )

        self._record(telemetry, engine.start())
        self._record(telemetry, engine.advance())

        while not engine.is_over:
            if engine.state.turn >= engine.rules.max_turns:
                logger.warning(
                    "encounter vs %s hit the %d turn cap (seed %d)",
                    telemetry.enemy_id, engine.rules.max_turns, seed,
                )
                engine.abandon()
                break

            while engine.phase == Phase.PLAYER_ACTIVE:
                choice = self.agent.choose_card_to_play(engine, engine.playable_indices())
                if choice is None:
                    break
                events = engine.play_card(choice)
                self._record(telemetry, events)
                if any(e.kind == EventKind.REJECTED for e in events):
                    break

            if engine.is_over:
                break
            self._record(telemetry, engine.end_turn())
            self._record(telemetry, engine.advance())

        if engine.result is not None:
            telemetry.result = "win" if engine.result.won else "loss"
        telemetry.turns = engine.state.turn
        telemetry.player_hp_end = engine.state.player.hp
        return telemetry

    @staticmethod
    def _record(telemetry: BattleTelemetry, events: Iterable[CombatEvent]) -> None:
        for event in events:
            if event.kind == EventKind.PHASE and event.detail == Phase.ENEMY_ACTIVE.value:
                telemetry.enemy_moves_per_turn.append([])

            elif event.kind == EventKind.STATUS_TICK:
                if event.side is Side.PLAYER:
                    telemetry.damage_taken += event.amount or 0
                else:
                    telemetry.damage_dealt += event.amount or 0

            elif event.kind == EventKind.REJECTED and event.side is Side.PLAYER:
                telemetry.rejected_plays += 1

            elif event.kind == EventKind.RESOLVED:
                amount = event.amount or 0
                if event.side is Side.PLAYER:
                    telemetry.cards_played += 1
                    telemetry.cards_played_by_id[event.card_id] = (
                        telemetry.cards_played_by_id.get(event.card_id, 0) + 1
                    )
                    if event.detail == CardKind.ATTACK.value:
                        telemetry.damage_dealt += amount
                    elif event.detail == CardKind.DEFEND.value:
                        telemetry.shield_gained += amount
                else:
                    if telemetry.enemy_moves_per_turn:
                        telemetry.enemy_moves_per_turn[-1].append(event.card_id)
                    if event.detail == CardKind.ATTACK.value:
                        telemetry.damage_taken += amount


# =====================================================================
# BatchRunner
# =====================================================================

def _run_single_encounter(
    registry: ContentRegistry,
    agent: PlayAgent,
    seed: int,
    enemy_id: str,
    player_level: int,
    rules: CombatRules,
) -> BattleTelemetry:
    """Build loadouts from the registry and run one seeded encounter."""
    master_rng = GameRNG(seed)
    player = registry.build_player(level=player_level)
    enemy = registry.build_enemy(enemy_id, player_level, master_rng.split(Stream.ENEMY))
    engine = CombatEngine(
        player,
        enemy,
        registry.cards,
        rules=rules,
        rng=master_rng.split(Stream.COMBAT),
        bonus_items=registry.items.values(),
    )
    return CombatSimulator(agent).run_combat(engine, seed=seed)


def _worker_run_single(args: tuple) -> BattleTelemetry:
    """Top-level worker function for multiprocessing (must be picklable)."""
    seed, enemy_id, player_level, rules_json = args

    from spirit_duel.sim.content.registry import ContentRegistry

    registry = ContentRegistry()
    registry.load_all()
    agent = RandomAgent(rng=GameRNG(seed).split(Stream.AGENT))
    rules = CombatRules.model_validate_json(rules_json)
    return _run_single_encounter(registry, agent, seed, enemy_id, player_level, rules)


class BatchRunner:
    """Runs many seeded encounters against one enemy template."""

    def __init__(
        self,
        registry: ContentRegistry,
        agent_class: type[PlayAgent] = RandomAgent,
        rules: CombatRules | None = None,
    ) -> None:
        self.registry = registry
        self.agent_class = agent_class
        self.rules = rules or CombatRules()

    def run_batch(
        self,
        n_runs: int,
        enemy_id: str,
        player_level: int = 1,
        base_seed: int = 42,
        parallel: bool = False,
    ) -> list[BattleTelemetry]:
        seeds = [base_seed + i for i in range(n_runs)]

        if parallel and n_runs > 1 and self.agent_class is RandomAgent:
            return self._run_parallel(seeds, enemy_id, player_level)
        return self._run_sequential(seeds, enemy_id, player_level)

    def _run_sequential(
        self,
        seeds: list[int],
        enemy_id: str,
        player_level: int,
    ) -> list[BattleTelemetry]:
        results: list[BattleTelemetry] = []
        for seed in seeds:
            agent_rng = GameRNG(seed).split(Stream.AGENT)
            try:
                agent = self.agent_class(rng=agent_rng)  # type: ignore[call-arg]
            except TypeError:
                agent = self.agent_class()  # type: ignore[call-arg]
            results.append(_run_single_encounter(
                self.registry, agent, seed, enemy_id, player_level, self.rules,
            ))
        return results

    def _run_parallel(
        self,
        seeds: list[int],
        enemy_id: str,
        player_level: int,
    ) -> list[BattleTelemetry]:
        """Run encounters in worker processes.

        Workers reload the bundled catalog instead of receiving a pickled
        registry, so custom content only works sequentially.
        """
        rules_json = self.rules.model_dump_json()
        work_items = [(seed, enemy_id, player_level, rules_json) for seed in seeds]
        n_workers = min(len(seeds), multiprocessing.cpu_count() or 1)

        with multiprocessing.Pool(processes=n_workers) as pool:
            return pool.map(_worker_run_single, work_items)
