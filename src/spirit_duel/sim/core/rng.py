"""Seeded randomness for encounters.

One root seed drives a whole encounter.  It is split into named
:class:`Stream` s so a deck shuffle never shifts a burn roll, an enemy
plan or a loot roll.  Replaying the same seed replays the encounter.
"""

from __future__ import annotations

import hashlib
import random
from enum import Enum
from typing import NamedTuple, Sequence, TypeVar

T = TypeVar("T")


class Stream(str, Enum):
    """Named sub-streams split off an encounter seed."""

    # Inside one CombatEngine
    DECK = "deck"
    EFFECTS = "effects"
    ENEMY_AI = "enemy_ai"
    REWARDS = "rewards"

    # Around it, in the batch runner
    ENEMY = "enemy"
    COMBAT = "combat"
    AGENT = "agent"


class EncounterStreams(NamedTuple):
    """The four streams one ``CombatEngine`` consumes."""

    deck: GameRNG
    effects: GameRNG
    enemy_ai: GameRNG
    rewards: GameRNG


class GameRNG:
    """Reproducible dice for one encounter (or one stream of it).

    *seed* may be ``None``, in which case one is drawn from system entropy
    and kept on :attr:`seed` so the encounter can still be replayed.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = random.SystemRandom().getrandbits(63)
        self._seed = seed
        self._dice = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def roll(self, probability: float) -> bool:
        """Succeed with *probability*; 0 never succeeds, 1 always does."""
        return self._dice.random() < probability

    def pick(self, options: Sequence[T]) -> T:
        """One of *options*, uniformly.  *options* must not be empty."""
        return self._dice.choice(options)

    def shuffle(self, cards: list[T]) -> None:
        self._dice.shuffle(cards)

    def split(self, stream: Stream | str) -> GameRNG:
        """Derive the child generator for *stream*.

        The child depends only on this seed and the stream name, never on
        how much of this generator has been consumed.
        """
        label = stream.value if isinstance(stream, Stream) else stream
        digest = hashlib.blake2b(
            label.encode(), digest_size=8, key=str(self._seed).encode()[:64],
        ).digest()
        return GameRNG(int.from_bytes(digest, "big"))

    def encounter_streams(self) -> EncounterStreams:
        return EncounterStreams(
            deck=self.split(Stream.DECK),
            effects=self.split(Stream.EFFECTS),
            enemy_ai=self.split(Stream.ENEMY_AI),
            rewards=self.split(Stream.REWARDS),
        )

    def __repr__(self) -> str:
        return f"GameRNG(seed={self._seed})"
