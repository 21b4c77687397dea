"""Telemetry for headless simulation runs.

A lightweight dataclass captures what is needed to judge encounter
balance without storing the whole state history.  Plain ``dataclass``
(not Pydantic) to keep collection cheap during batch runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BattleTelemetry:
    """Stats from a single encounter.

    Attributes
    ----------
    seed:
        Master RNG seed of the encounter.
    enemy_id:
        Template id of the enemy.
    result:
        ``"win"``, ``"loss"``, or ``"timeout"`` if the turn cap was hit.
    turns:
        Number of player turns started.
    player_hp_start / player_hp_end:
        Player health before and after.
    damage_dealt:
        Total HP damage dealt to the enemy.
    damage_taken:
        Total HP the player lost (attacks and burn).
    shield_gained:
        Total shield the player gained.
    cards_played:
        Total number of cards the player played.
    cards_played_by_id:
        ``card_id -> play count``.
    rejected_plays:
        Plays the engine refused.
    enemy_moves_per_turn:
        Card ids the enemy resolved, grouped per enemy turn.
    """

    seed: int
    enemy_id: str
    result: str
    turns: int
    player_hp_start: int
    player_hp_end: int
    damage_dealt: int = 0
    damage_taken: int = 0
    shield_gained: int = 0
    cards_played: int = 0
    cards_played_by_id: dict[str, int] = field(default_factory=dict)
    rejected_plays: int = 0
    enemy_moves_per_turn: list[list[str]] = field(default_factory=list)

    @property
    def won(self) -> bool:
        return self.result == "win"
