"""Run a batch of headless encounters and print summary statistics.

Usage:
    python scripts/simulate_encounters.py [--runs N] [--enemy ID] [--level L]
        [--agent random|greedy] [--parallel] [--log-level LEVEL]
"""

from __future__ import annotations

import argparse
import logging
import time

import numpy as np

from spirit_duel.sim.content.registry import ContentRegistry
from spirit_duel.sim.play_agents import GreedyAgent, RandomAgent
from spirit_duel.sim.runner import BatchRunner

AGENTS = {"random": RandomAgent, "greedy": GreedyAgent}


def run_simulation(
    n_runs: int,
    enemy_ids: list[str],
    player_level: int,
    agent_name: str,
    parallel: bool,
) -> None:
    registry = ContentRegistry()
    registry.load_all()

    runner = BatchRunner(registry, agent_class=AGENTS[agent_name])
    for enemy_id in enemy_ids:
        print(f"\n{enemy_id} (player level {player_level}, {agent_name} agent)")
        t0 = time.time()
        telemetry = runner.run_batch(
            n_runs, enemy_id, player_level=player_level, parallel=parallel,
        )
        elapsed = time.time() - t0

        wins = sum(1 for t in telemetry if t.won)
        timeouts = sum(1 for t in telemetry if t.result == "timeout")
        turns = np.array([t.turns for t in telemetry])
        hp_end = np.array([t.player_hp_end for t in telemetry])
        dealt = np.array([t.damage_dealt for t in telemetry])
        taken = np.array([t.damage_taken for t in telemetry])

        print(f"  Time: {elapsed:.1f}s ({elapsed / n_runs * 1000:.0f}ms/run)")
        print(f"  Win rate: {wins}/{n_runs} ({wins / n_runs * 100:.1f}%)")
        if timeouts:
            print(f"  Timeouts: {timeouts}")
        print(f"  Turns: mean {turns.mean():.1f}, median {np.median(turns):.0f}, max {turns.max()}")
        print(f"  Player HP at end: mean {hp_end.mean():.1f}")
        print(f"  Damage dealt/taken: {dealt.mean():.1f} / {taken.mean():.1f}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate encounters headlessly")
    parser.add_argument("--runs", type=int, default=200, help="Encounters per enemy")
    parser.add_argument(
        "--enemy", action="append", default=None,
        help="Enemy template id (repeatable; default: every template)",
    )
    parser.add_argument("--level", type=int, default=1, help="Player level")
    parser.add_argument("--agent", choices=sorted(AGENTS), default="random")
    parser.add_argument("--parallel", action="store_true", help="Use worker processes")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    enemies = args.enemy
    if not enemies:
        reg = ContentRegistry()
        reg.load_enemies()
        enemies = reg.list_enemy_ids()

    run_simulation(args.runs, enemies, args.level, args.agent, args.parallel)
