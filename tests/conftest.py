"""Pytest fixtures for blackjack table tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from engine.cards import Card, Rank, Suit
from engine.counting import HiLoSystem
from engine.game import RoundEngine, Session
from engine.hand import Hand
from engine.rules import TableRules
from engine.shoe import Shoe


def make_hand(*card_ids: str, wager: int = 0) -> Hand:
    """Build a hand from card ids."""
    return Hand(cards=[Card.from_id(c) for c in card_ids], wager=wager)


def stack(shoe: Shoe, card_ids: list[str]) -> None:
    """Move the given live cards to the top of the shoe, first id drawn first."""
    cards = [Card.from_id(c) for c in card_ids]
    live = shoe._live
    for card in cards:
        live.remove(card)
    live.extend(reversed(cards))


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A freshly shuffled single-deck shoe."""
    return Shoe(rng=rng)


@pytest.fixture
def stack_shoe():
    """Stack cards on top of a shoe: stack_shoe(shoe, ["A-H", "K-S", ...])."""
    return stack


@pytest.fixture
def session(rng):
    """A new session with default rules and 100,000 chips."""
    return Session.create(rng=rng)


@pytest.fixture
def table(session):
    """A round engine waiting for a bet."""
    return RoundEngine(session)


@pytest.fixture
def deferred_table(rng):
    """A round engine that waits for a separate wager after a split."""
    return RoundEngine(Session.create(rules=TableRules.deferred_split(), rng=rng))


@pytest.fixture
def strict_table(rng):
    """A round engine that raises on illegal actions."""
    return RoundEngine(Session.create(rules=TableRules(strict_actions=True), rng=rng))


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return make_hand("A-S", "K-H")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return make_hand("A-S", "6-H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return make_hand("10-S", "6-H")


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return make_hand("8-S", "8-H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand("10-S", "6-H", "K-C")


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)
