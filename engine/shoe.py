"""Single-deck shoe with a discard pile and Hi-Lo instrumentation."""

import logging
from dataclasses import dataclass
from random import Random
from typing import Iterator

from engine.cards import Card, full_deck
from engine.constants import DECK_SIZE, DECK_SHUFFLE_THRESHOLD
from engine.counting import CountingSystem, HiLoSystem
from engine.errors import ShoeExhausted

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShoeCount:
    """Count statistics for display."""

    running: int
    true: float
    cards_dealt: int
    remaining_cards: int


class Shoe:
    """
    A single 52-card shoe.

    Every card is either live (undealt) or in the discard pile. A dealt card
    goes straight to the discard pile, so the two always add up to a full
    deck. Reshuffling becomes due once the live cards drop to the threshold,
    but only happens when the table calls `reshuffle_if_needed` between
    rounds.
    """

    def __init__(
        self,
        threshold: float = DECK_SHUFFLE_THRESHOLD,
        rng: Random | None = None,
        counter: CountingSystem | None = None,
    ) -> None:
        """
        Initialize and shuffle the shoe.

        Args:
            threshold: Fraction of the deck dealt before a reshuffle is due
            rng: Random number generator for shuffling
            counter: Counting system fed with every dealt card (Hi-Lo)
        """
        if not 0.0 < threshold <= 1.0:
            raise ValueError("Threshold must be between 0 and 1")

        self._threshold = threshold
        self._rng = rng or Random()
        self._counter = counter or HiLoSystem()
        self._live: list[Card] = []
        self._discard: list[Card] = []
        self._dealt: list[Card] = []
        self._needs_shuffle = False
        self.initialize()

    def initialize(self) -> None:
        """Rebuild the full deck, shuffle it and reset the count."""
        self._live = full_deck()
        self._discard = []
        self._shuffle()
        self._needs_shuffle = False
        self._reset_count()

    def _shuffle(self) -> None:
        # Fisher-Yates; Random.shuffle picks each index with getrandbits
        self._rng.shuffle(self._live)

    def _reset_count(self) -> None:
        self._counter.reset()
        self._dealt = []

    def _check_for_shuffle(self) -> None:
        if len(self._live) <= self.reshuffle_point:
            self._needs_shuffle = True

    def draw(self) -> Card:
        """
        Deal the next card.

        The card is counted and moved to the discard pile. An empty shoe is
        refilled from the discard pile on the spot.

        Raises:
            ShoeExhausted: if there is nothing to refill from
        """
        if not self._live:
            logger.warning(
                "Shoe ran dry with %d cards in discard, forcing a reshuffle",
                len(self._discard),
            )
            self._needs_shuffle = True
            self.reshuffle_if_needed()
            if not self._live:
                raise ShoeExhausted("Cannot draw from an empty shoe")

        card = self._live.pop()
        self._discard.append(card)
        self._dealt.append(card)
        self._counter.count_card(card)
        self._check_for_shuffle()
        return card

    def reshuffle_if_needed(self) -> bool:
        """
        Fold the discard pile back in and shuffle, if a reshuffle is due.

        Must only be called between rounds.

        Returns:
            True if the shoe was reshuffled
        """
        if not self._needs_shuffle:
            return False

        self._live.extend(self._discard)
        self._discard = []
        self._shuffle()
        self._needs_shuffle = False
        self._reset_count()
        logger.info("Shoe reshuffled, %d cards live", len(self._live))
        return True

    def count(self) -> ShoeCount:
        """Return running count, true count, cards dealt and cards left."""
        remaining = len(self._live)
        return ShoeCount(
            running=self._counter.running_count,
            true=self._counter.true_count(remaining),
            cards_dealt=len(self._dealt),
            remaining_cards=remaining,
        )

    @property
    def needs_shuffle(self) -> bool:
        """Check if the reshuffle point has been reached."""
        return self._needs_shuffle

    @property
    def reshuffle_point(self) -> float:
        """Live card count at or below which a reshuffle is due."""
        return DECK_SIZE * (1 - self._threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def running_count(self) -> int:
        return self._counter.running_count

    @property
    def cards_remaining(self) -> int:
        return len(self._live)

    @property
    def cards_used(self) -> int:
        """Return the size of the discard pile."""
        return len(self._discard)

    @property
    def dealt_since_shuffle(self) -> int:
        return len(self._dealt)

    @property
    def dealt_cards(self) -> list[Card]:
        """Return the cards dealt since the last shuffle, in order."""
        return self._dealt.copy()

    @property
    def live(self) -> list[Card]:
        return self._live.copy()

    @property
    def discard(self) -> list[Card]:
        return self._discard.copy()

    def __len__(self) -> int:
        return len(self._live)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._live)
