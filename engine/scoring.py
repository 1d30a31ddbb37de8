"""Blackjack hand scoring."""

from typing import Iterable

from engine.cards import Card
from engine.constants import BLACKJACK


def score(cards: Iterable[Card]) -> int:
    """
    Calculate the best blackjack score for a sequence of cards.

    Aces start at 11 and drop to 1, one at a time, while the total is over
    21. Returns 0 for an empty sequence.
    """
    total = 0
    soft_aces = 0

    for card in cards:
        if card.is_ace:
            soft_aces += 1
        total += card.value

    while total > BLACKJACK and soft_aces > 0:
        total -= 10
        soft_aces -= 1

    return total


def is_soft(cards: Iterable[Card]) -> bool:
    """Check if an ace is still counted as 11 in the best score."""
    cards = list(cards)
    if not any(card.is_ace for card in cards):
        return False

    hard_total = sum(1 if card.is_ace else card.value for card in cards)
    return hard_total + 10 <= BLACKJACK


def is_bust(cards: Iterable[Card]) -> bool:
    return score(cards) > BLACKJACK


def is_natural(cards: Iterable[Card]) -> bool:
    """Check for a two-card 21."""
    cards = list(cards)
    return len(cards) == 2 and score(cards) == BLACKJACK
