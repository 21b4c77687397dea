"""Turn events and the human-readable combat log.

Events are the engine's only outward signal during an encounter.  A
presentation layer consumes them in order and may pace PAUSE events however
it likes; the engine's results never depend on wall-clock time.

Both classes are plain ``dataclass`` instances (not Pydantic models) to
keep event emission cheap during batch simulation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Side(str, Enum):
    PLAYER = "PLAYER"
    ENEMY = "ENEMY"

    @property
    def opponent(self) -> Side:
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


class EventKind(str, Enum):
    PHASE = "PHASE"
    """The turn controller entered a new phase."""

    STATUS_TICK = "STATUS_TICK"
    DRAW = "DRAW"
    RESHUFFLE = "RESHUFFLE"
    OVERFLOW = "OVERFLOW"
    """A drawn card went straight to discard because the hand was full."""

    DISCARD = "DISCARD"
    INTENT = "INTENT"
    """The enemy is showing the action it is about to resolve."""

    CUE = "CUE"
    """Presentation cue keyed by effect kind and target side."""

    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"
    TALISMAN_SPENT = "TALISMAN_SPENT"
    PAUSE = "PAUSE"
    ENDED = "ENDED"


@dataclass(frozen=True)
class CombatEvent:
    """A single step of the encounter, in emission order.

    Attributes
    ----------
    kind:
        What happened.
    side:
        The side the event concerns (actor for INTENT/RESOLVED, target for
        CUE), or ``None`` for phase-level events.
    message:
        Human-readable text.  Diagnostic only, not part of the contract.
    card_id:
        Card involved, if any.
    amount:
        Numeric payload (damage, cards drawn, stacks ...), if any.
    delay:
        Suggested pause in seconds for PAUSE events.
    detail:
        Kind-specific extras (e.g. the effect kind for a CUE).
    """

    kind: EventKind
    side: Side | None = None
    message: str = ""
    card_id: str | None = None
    amount: int | None = None
    delay: float = 0.0
    detail: str | None = None


@dataclass
class CombatLog:
    """Append-only log of combat lines with a bounded display window."""

    window: int = 5
    entries: list[str] = field(default_factory=list)

    def append(self, line: str) -> None:
        self.entries.append(line)

    def recent(self, n: int | None = None) -> list[str]:
        """Return the last *n* lines (default: the display window)."""
        n = self.window if n is None else n
        if n <= 0:
            return []
        return self.entries[-n:]

    def __len__(self) -> int:
        return len(self.entries)
