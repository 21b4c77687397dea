"""Tunable combat constants.

Every fixed number the engine uses lives here so a caller can override it
from a JSON file without touching code.  Defaults match the shipped game.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

_DEFAULT_RULES_PATH = Path(__file__).resolve().parents[1] / "data" / "rules.json"


class CombatRules(BaseModel):
    """Design constants for a single encounter."""

    model_config = ConfigDict(frozen=True)

    max_hand_size: int = Field(default=10, ge=1)
    """Cards drawn beyond this go straight to the discard pile."""

    draw_per_turn: int = Field(default=5, ge=0)
    enemy_max_actions: int = Field(default=2, ge=1)

    burn_chance: float = Field(default=0.5, ge=0.0, le=1.0)
    """Probability that a BURN-tagged attack adds a burn stack."""

    bonus_drop_chance: float = Field(default=0.3, ge=0.0, le=1.0)
    """Probability that a victory drops one bonus item."""

    log_window: int = Field(default=5, ge=1)
    """How many recent combat-log lines a display should show."""

    loss_recovery_fraction: float = Field(default=0.1, ge=0.0, le=1.0)
    """Fraction of max HP a defeated player is restored to by the caller."""

    enemy_action_delay: float = Field(default=1.0, ge=0.0)
    turn_delay: float = Field(default=1.0, ge=0.0)
    """Presentation pacing, in seconds.  Outcomes never depend on these."""

    max_turns: int = Field(default=200, ge=1)
    """Safety cap for headless simulation runs."""

    @classmethod
    def from_json_file(cls, path: str | Path | None = None) -> CombatRules:
        """Load rules from *path*, or from the bundled defaults."""
        path = Path(path) if path is not None else _DEFAULT_RULES_PATH
        return cls.model_validate_json(path.read_text(encoding="utf-8"))
