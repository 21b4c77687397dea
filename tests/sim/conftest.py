"""Shared fixtures for combat tests."""

from __future__ import annotations

import pytest

from spirit_duel.sim.content.registry import ContentRegistry


@pytest.fixture(scope="module")
def registry() -> ContentRegistry:
    """Module-scoped registry with the bundled catalog loaded once."""
    reg = ContentRegistry()
    reg.load_all()
    return reg


class ScriptedRNG:
    """Stand-in for ``GameRNG`` whose ``roll`` answers come from a script.

    Everything else is deterministic: picks take the first option and
    shuffles keep order.
    """

    def __init__(self, rolls: list[bool] | None = None) -> None:
        self._rolls = list(rolls or [])
        self.roll_calls: list[float] = []

    def roll(self, probability: float) -> bool:
        self.roll_calls.append(probability)
        return self._rolls.pop(0) if self._rolls else False

    def pick(self, options):
        return options[0]

    def shuffle(self, cards) -> None:
        pass

    def split(self, stream) -> ScriptedRNG:
        return self


@pytest.fixture
def scripted_rng():
    """Factory fixture: ``scripted_rng([True, False])``."""
    return ScriptedRNG
