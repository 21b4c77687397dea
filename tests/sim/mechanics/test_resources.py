"""Tests for spirit and elemental resources."""

from spirit_duel.ir.cards import CardDefinition, CardKind, Element
from spirit_duel.sim.core.entities import Player
from spirit_duel.sim.mechanics.resources import (
    can_afford,
    grow_element,
    pay_cost,
    refill_resources,
    restore_spirit,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_player(**kwargs) -> Player:
    defaults = dict(name="Guo Guo", max_hp=100, hp=100, max_spirit=5, spirit=5)
    defaults.update(kwargs)
    return Player(**defaults)


def _make_card(cost: int = 1, element: Element | None = None, element_cost: int = 0) -> CardDefinition:
    return CardDefinition(
        id="c", name="Card", kind=CardKind.ATTACK, cost=cost,
        element=element, element_cost=element_cost, value=1,
    )


# ---------------------------------------------------------------------------
# refill
# ---------------------------------------------------------------------------

class TestRefill:
    def test_spirit_to_max(self):
        player = _make_player(spirit=1)
        refill_resources(player)
        assert player.spirit == 5

    def test_elements_to_caps(self):
        player = _make_player(
            elements={Element.FIRE: 0},
            element_caps={Element.FIRE: 2, Element.METAL: 1},
        )
        refill_resources(player)
        assert player.elements == {Element.FIRE: 2, Element.METAL: 1}


# ---------------------------------------------------------------------------
# affordability and payment
# ---------------------------------------------------------------------------

class TestCanAfford:
    def test_spirit_only(self):
        assert can_afford(1, {}, _make_card(cost=1))
        assert not can_afford(0, {}, _make_card(cost=1))

    def test_element_required(self):
        card = _make_card(cost=1, element=Element.FIRE, element_cost=2)
        assert can_afford(1, {Element.FIRE: 2}, card)
        assert not can_afford(1, {Element.FIRE: 1}, card)
        assert not can_afford(1, {}, card)

    def test_free_card(self):
        assert can_afford(0, {}, _make_card(cost=0))


class TestPayCost:
    def test_deducts_both_pools(self):
        player = _make_player(elements={Element.FIRE: 2})
        card = _make_card(cost=2, element=Element.FIRE, element_cost=1)
        assert pay_cost(player, card)
        assert player.spirit == 3
        assert player.elements[Element.FIRE] == 1

    def test_atomic_when_element_short(self):
        player = _make_player(elements={Element.FIRE: 0})
        card = _make_card(cost=2, element=Element.FIRE, element_cost=1)
        assert not pay_cost(player, card)
        assert player.spirit == 5
        assert player.elements[Element.FIRE] == 0

    def test_atomic_when_spirit_short(self):
        player = _make_player(spirit=0, elements={Element.FIRE: 3})
        card = _make_card(cost=1, element=Element.FIRE, element_cost=1)
        assert not pay_cost(player, card)
        assert player.elements[Element.FIRE] == 3


# ---------------------------------------------------------------------------
# restore / grow
# ---------------------------------------------------------------------------

class TestRestoreSpirit:
    def test_capped_at_max(self):
        player = _make_player(spirit=4)
        assert restore_spirit(player, 2) == 1
        assert player.spirit == 5

    def test_from_empty(self):
        player = _make_player(spirit=0)
        assert restore_spirit(player, 2) == 2


class TestGrowElement:
    def test_raises_cap_and_current(self):
        player = _make_player(elements={Element.WOOD: 0}, element_caps={Element.WOOD: 1})
        grow_element(player, Element.WOOD, 1)
        assert player.element_caps[Element.WOOD] == 2
        assert player.elements[Element.WOOD] == 1

    def test_new_element(self):
        player = _make_player()
        grow_element(player, Element.WOOD, 2)
        assert player.element_caps == {Element.WOOD: 2}
        assert player.elements == {Element.WOOD: 2}

    def test_growth_survives_refill(self):
        player = _make_player()
        grow_element(player, Element.WOOD, 1)
        player.elements[Element.WOOD] = 0
        refill_resources(player)
        assert player.elements[Element.WOOD] == 1
