"""Core state primitives for the combat engine."""

from spirit_duel.sim.core.entities import Combatant, Enemy, Player
from spirit_duel.sim.core.events import CombatEvent, CombatLog, EventKind, Side
from spirit_duel.sim.core.game_state import (
    CardInstance,
    CardPiles,
    CombatState,
    DrawResult,
    Phase,
)
from spirit_duel.sim.core.rng import GameRNG

__all__ = [
    # rng
    "GameRNG",
    # entities
    "Combatant",
    "Player",
    "Enemy",
    # events
    "CombatEvent",
    "CombatLog",
    "EventKind",
    "Side",
    # game_state
    "CardInstance",
    "CardPiles",
    "CombatState",
    "DrawResult",
    "Phase",
]
