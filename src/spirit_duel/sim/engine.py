"""Combat engine -- the turn controller for a single player-vs-enemy encounter.

The engine owns one :class:`CombatState` and mutates it synchronously.  It
moves through the phases::

    PLAYER_UPKEEP -> PLAYER_ACTIVE -> ENEMY_UPKEEP -> ENEMY_ACTIVE -> ...

with ``ENDED`` reachable from any of them once either side's health hits
zero, and ``ABANDONED`` when the caller walks away.

The caller drives it with four calls:

- :meth:`CombatEngine.start` rolls initiative.
- :meth:`CombatEngine.advance` is a generator that runs the automatic
  phases (upkeeps, the whole enemy turn) until player input is needed or
  combat ends, yielding :class:`CombatEvent` objects in order.  PAUSE
  events mark where a presentation layer may wait; skipping them changes
  nothing.
- :meth:`CombatEngine.play_card` and :meth:`CombatEngine.end_turn` are the
  player's commands, accepted only in ``PLAYER_ACTIVE``.

Usage::

    engine = CombatEngine(loadout, template, registry.cards)
    engine.start()
    list(engine.advance())
    while not engine.is_over:
        engine.play_card(0)
        engine.end_turn()
        list(engine.advance())
    print(engine.result)
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Mapping

from spirit_duel.ir.cards import CardDefinition
from spirit_duel.ir.items import BonusItem
from spirit_duel.ir.loadouts import EnemyTemplate, PlayerLoadout
from spirit_duel.ir.results import CombatResult
from spirit_duel.ir.rules import CombatRules
from spirit_duel.sim.core.entities import Combatant, Enemy, Player
from spirit_duel.sim.core.events import CombatEvent, CombatLog, EventKind, Side
from spirit_duel.sim.core.game_state import CardInstance, CardPiles, CombatState, Phase
from spirit_duel.sim.core.rng import GameRNG
from spirit_duel.sim.enemy_ai import EnemyAI
from spirit_duel.sim.mechanics.card_piles import (
    discard_card,
    discard_hand,
    draw_cards,
    remove_card,
    shuffle_deck,
)
from spirit_duel.sim.mechanics.resources import pay_cost, refill_resources
from spirit_duel.sim.mechanics.shield import clear_shield
from spirit_duel.sim.mechanics.status_effects import tick_upkeep_statuses
from spirit_duel.sim.outcome import OutcomeEvaluator
from spirit_duel.sim.resolver import BASIC_ATTACK, EffectResolver

logger = logging.getLogger(__name__)


class LoadoutError(ValueError):
    """A loadout or template cannot start an encounter."""


class CombatEngine:
    """Runs one encounter from initiative to a terminal result.

    Parameters
    ----------
    player:
        Player loadout snapshot.  Copied in; never mutated.
    enemy:
        Enemy template (already scaled, if scaling applies).
    cards:
        Read-only catalog mapping card id to definition.
    rules:
        Tunable constants.  Defaults to :class:`CombatRules`.
    rng:
        Master RNG; independent streams are forked from it.
    bonus_items:
        Pool a victory may drop an item from.

    Raises
    ------
    LoadoutError
        If the loadout cannot start a valid encounter (empty deck, unknown
        card ids, a side with no health).
    """

    def __init__(
        self,
        player: PlayerLoadout,
        enemy: EnemyTemplate,
        cards: Mapping[str, CardDefinition],
        rules: CombatRules | None = None,
        rng: GameRNG | None = None,
        bonus_items: Iterable[BonusItem] = (),
    ) -> None:
        self.rules = rules or CombatRules()
        self._cards = cards
        master = rng or GameRNG()
        self.rng = master

        _validate(player, enemy, cards)

        deck = [CardInstance(card_id=cid) for cid in player.deck]
        talisman_uses: dict[str, int] = {}
        for binding in player.talismans:
            talisman_uses[binding.id] = binding.remaining_uses
            if binding.remaining_uses > 0:
                deck.append(CardInstance(card_id=binding.card_id, talisman_id=binding.id))
        if not deck:
            raise LoadoutError(f"{player.name} has no playable cards")

        self._enemy_pool = [cards[cid] for cid in enemy.card_ids]
        streams = master.encounter_streams()

        self.state = CombatState(
            player=Player.from_stats(player.name, player.level, player.stats),
            enemy=Enemy.from_stats(enemy.name, enemy.level, enemy.stats, template_id=enemy.id),
            card_piles=CardPiles(deck=deck),
            rules=self.rules,
            rng=streams.deck,
            talisman_uses=talisman_uses,
            log=CombatLog(window=self.rules.log_window),
        )
        self._resolver = EffectResolver(streams.effects)
        self._ai = EnemyAI(streams.enemy_ai, max_actions=self.rules.enemy_max_actions)
        self._evaluator = OutcomeEvaluator(
            template=enemy,
            player_level=player.level,
            bonus_items=list(bonus_items),
            initial_talismans=talisman_uses,
            initial_caps=dict(player.stats.element_caps),
            rng=streams.rewards,
        )
        self._plan: list[CardDefinition] = []
        self.state.log.append("Combat begins!")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def result(self) -> CombatResult | None:
        return self.state.result

    @property
    def hand(self) -> list[CardDefinition]:
        return [self._cards[c.card_id] for c in self.state.card_piles.hand]

    @property
    def planned_actions(self) -> list[CardDefinition]:
        """Enemy actions still to resolve this turn."""
        return list(self._plan)

    def recent_log(self) -> list[str]:
        return self.state.log.recent()

    def card(self, card_id: str) -> CardDefinition:
        return self._cards[card_id]

    def playable_indices(self) -> list[int]:
        """Hand positions that :meth:`play_card` would currently accept."""
        if self.state.phase != Phase.PLAYER_ACTIVE:
            return []
        return [
            i for i, inst in enumerate(self.state.card_piles.hand)
            if self._rejection(inst) is None
        ]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> list[CombatEvent]:
        """Shuffle the deck and roll initiative.  Follow with :meth:`advance`."""
        if self.state.phase != Phase.NOT_STARTED:
            return []
        shuffle_deck(self.state)

        player, enemy = self.state.player, self.state.enemy
        if player.speed >= enemy.speed:
            self.state.log.append(
                f"{player.name} is faster ({player.speed} vs {enemy.speed}) and moves first!"
            )
            first = Phase.PLAYER_UPKEEP
        else:
            self.state.log.append(
                f"{enemy.name} is faster ({enemy.speed} vs {player.speed}) and moves first!"
            )
            first = Phase.ENEMY_UPKEEP
        return [self._enter(first)]

    def advance(self) -> Iterator[CombatEvent]:
        """Run automatic phases until player input is needed or combat ends."""
        while not self.state.is_over:
            phase = self.state.phase
            if phase == Phase.PLAYER_UPKEEP:
                events = self._upkeep(Side.PLAYER)
            elif phase == Phase.ENEMY_UPKEEP:
                events = self._upkeep(Side.ENEMY)
            elif phase == Phase.ENEMY_ACTIVE:
                if not self._plan:
                    events = self._finish_enemy_turn()
                else:
                    card = self._plan[0]
                    self.state.enemy.intent = card.name
                    yield CombatEvent(
                        kind=EventKind.INTENT,
                        side=Side.ENEMY,
                        message=f"{self.state.enemy.name} prepares {card.name}",
                        card_id=card.id,
                    )
                    yield CombatEvent(kind=EventKind.PAUSE, delay=self.rules.enemy_action_delay)
                    if self.state.phase != Phase.ENEMY_ACTIVE:
                        return
                    events = self._enemy_action(card)
            else:
                return
            yield from events

    def run_until_input(self) -> list[CombatEvent]:
        """Drain :meth:`advance` without pacing."""
        return list(self.advance())

    def abandon(self) -> None:
        """Discard the encounter.  No result is produced and nothing persists."""
        if self.state.is_over:
            return
        self.state.phase = Phase.ABANDONED
        self._plan.clear()
        logger.info("encounter vs %s abandoned", self.state.enemy.template_id)

    # ------------------------------------------------------------------
    # Player commands
    # ------------------------------------------------------------------

    def play_card(self, hand_index: int) -> list[CombatEvent]:
        """Play the card at *hand_index*.

        Invalid plays (under-levelled, unaffordable, depleted talisman, bad
        index) change nothing and return a single REJECTED event.  Outside
        ``PLAYER_ACTIVE`` the call is ignored.
        """
        state = self.state
        if state.phase != Phase.PLAYER_ACTIVE:
            return []

        hand = state.card_piles.hand
        if not 0 <= hand_index < len(hand):
            return [self._reject(f"No card at hand position {hand_index}")]

        instance = hand[hand_index]
        reason = self._rejection(instance)
        if reason is not None:
            return [self._reject(reason, instance.card_id)]

        card = self._cards[instance.card_id]
        events: list[CombatEvent] = []

        if instance.is_talisman:
            remaining = state.talisman_uses[instance.talisman_id] - 1
            state.talisman_uses[instance.talisman_id] = remaining
            events.append(CombatEvent(
                kind=EventKind.TALISMAN_SPENT,
                side=Side.PLAYER,
                card_id=card.id,
                amount=remaining,
                detail=instance.talisman_id,
            ))
            if remaining <= 0:
                remove_card(state, instance)
            else:
                discard_card(state, instance)
        else:
            pay_cost(state.player, card)
            discard_card(state, instance)

        events.extend(self._resolver.resolve(card, Side.PLAYER, state))
        events.extend(self._check_outcome())
        return events

    def end_turn(self) -> list[CombatEvent]:
        """Discard the hand and hand control to the enemy.  Follow with
        :meth:`advance` to run the enemy turn."""
        if self.state.phase != Phase.PLAYER_ACTIVE:
            return []
        discarded = discard_hand(self.state)
        return [
            CombatEvent(kind=EventKind.DISCARD, side=Side.PLAYER, amount=len(discarded)),
            self._enter(Phase.ENEMY_UPKEEP),
        ]

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _upkeep(self, side: Side) -> list[CombatEvent]:
        """Status damage, then refill and shield reset, then draw or plan."""
        state = self.state
        combatant = self._combatant(side)
        events: list[CombatEvent] = []
        if side is Side.PLAYER:
            state.turn += 1

        for status_id, hp_lost in tick_upkeep_statuses(combatant):
            line = f"{combatant.name} suffers {hp_lost} {status_id} damage"
            state.log.append(line)
            events.append(CombatEvent(
                kind=EventKind.STATUS_TICK,
                side=side,
                message=line,
                amount=hp_lost,
                detail=status_id,
            ))

        ended = self._check_outcome()
        if ended:
            return events + ended

        refill_resources(combatant)
        clear_shield(combatant)

        if side is Side.PLAYER:
            events.extend(self._draw(state.rules.draw_per_turn))
            events.append(self._enter(Phase.PLAYER_ACTIVE))
        else:
            self._plan = self._ai.plan_turn(state.enemy, self._enemy_pool)
            if not self._plan:
                self._plan = [BASIC_ATTACK]
            events.append(self._enter(Phase.ENEMY_ACTIVE))
        return events

    def _draw(self, n: int) -> list[CombatEvent]:
        state = self.state
        result = draw_cards(state, n)
        events: list[CombatEvent] = []
        for _ in range(result.reshuffles):
            state.log.append("Shuffling the discard pile into the deck...")
            events.append(CombatEvent(kind=EventKind.RESHUFFLE, side=Side.PLAYER))
        for card in result.overflowed:
            line = f"Hand is full; {self._cards[card.card_id].name} is discarded"
            state.log.append(line)
            logger.debug(line)
            events.append(CombatEvent(
                kind=EventKind.OVERFLOW,
                side=Side.PLAYER,
                message=line,
                card_id=card.card_id,
            ))
        events.append(CombatEvent(
            kind=EventKind.DRAW,
            side=Side.PLAYER,
            amount=len(result.drawn),
        ))
        return events

    def _enemy_action(self, card: CardDefinition) -> list[CombatEvent]:
        state = self.state
        enemy = state.enemy
        self._plan.pop(0)
        enemy.intent = None

        if card is not BASIC_ATTACK and not pay_cost(enemy, card):
            return [self._reject(f"{enemy.name} cannot afford {card.name}", card.id, Side.ENEMY)]

        events = self._resolver.resolve(card, Side.ENEMY, state)
        events.extend(self._check_outcome())
        return events

    def _finish_enemy_turn(self) -> list[CombatEvent]:
        return [
            CombatEvent(kind=EventKind.PAUSE, delay=self.rules.turn_delay),
            self._enter(Phase.PLAYER_UPKEEP),
        ]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_outcome(self) -> list[CombatEvent]:
        result = self._evaluator.evaluate(self.state)
        if result is None:
            return []
        self._plan.clear()
        return [CombatEvent(
            kind=EventKind.ENDED,
            side=Side.PLAYER if result.won else Side.ENEMY,
            message=self.state.log.entries[-1],
            detail=result.outcome.value,
        )]

    def _rejection(self, instance: CardInstance) -> str | None:
        """Why *instance* cannot be played right now, or ``None``."""
        card = self._cards[instance.card_id]
        player = self.state.player
        if player.level < card.req_level:
            return f"Level {card.req_level} required to use {card.name}"
        if instance.is_talisman:
            if self.state.talisman_uses.get(instance.talisman_id, 0) <= 0:
                return f"{card.name} talisman is exhausted"
            return None
        if player.spirit < card.cost:
            return f"Not enough spirit for {card.name}"
        if card.element_cost > 0 and player.element_amount(card.element) < card.element_cost:
            return f"Not enough {card.element.value} for {card.name}"
        return None

    def _reject(self, reason: str, card_id: str | None = None, side: Side = Side.PLAYER) -> CombatEvent:
        self.state.log.append(reason)
        logger.debug("rejected: %s", reason)
        return CombatEvent(kind=EventKind.REJECTED, side=side, message=reason, card_id=card_id)

    def _enter(self, phase: Phase) -> CombatEvent:
        self.state.phase = phase
        return CombatEvent(kind=EventKind.PHASE, detail=phase.value)

    def _combatant(self, side: Side) -> Combatant:
        return self.state.player if side is Side.PLAYER else self.state.enemy


def _validate(
    player: PlayerLoadout,
    enemy: EnemyTemplate,
    cards: Mapping[str, CardDefinition],
) -> None:
    if player.stats.hp <= 0:
        raise LoadoutError(f"{player.name} starts with no health")
    if enemy.stats.hp <= 0:
        raise LoadoutError(f"{enemy.name} starts with no health")

    unknown = [cid for cid in player.deck if cid not in cards]
    unknown += [t.card_id for t in player.talismans if t.card_id not in cards]
    if unknown:
        raise LoadoutError(f"{player.name} references unknown cards: {sorted(set(unknown))}")

    unknown = [cid for cid in enemy.card_ids if cid not in cards]
    if unknown:
        raise LoadoutError(f"{enemy.name} references unknown cards: {sorted(set(unknown))}")

    ids = [t.id for t in player.talismans]
    if len(ids) != len(set(ids)):
        raise LoadoutError(f"{player.name} has duplicate talisman ids")
