"""Abstract base class for card counting systems."""

import math
from abc import ABC, abstractmethod
from typing import Mapping

from engine.cards import Card, Rank
from engine.constants import DECK_SIZE


class CountingSystem(ABC):
    """
    Abstract base class for card counting systems.

    Tracks a running count over every card seen since the last reset and
    derives a true count from the cards left in the shoe.
    """

    def __init__(self) -> None:
        self._running_count: int = 0
        self._cards_seen: int = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the counting system."""
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """Map each Rank to its count value."""
        ...

    @property
    def full_deck_sum(self) -> int:
        """Sum of tag values over a complete 52-card deck."""
        return sum(self.tag_values[rank] * 4 for rank in Rank)

    @property
    def is_balanced(self) -> bool:
        """A balanced system counts a full deck back to zero."""
        return self.full_deck_sum == 0

    def count_card(self, card: Card) -> int:
        """
        Count a single card and update the running count.

        Returns:
            The tag value of the card
        """
        tag_value = self.tag_values[card.rank]
        self._running_count += tag_value
        self._cards_seen += 1
        return tag_value

    @property
    def running_count(self) -> int:
        return self._running_count

    @property
    def cards_seen(self) -> int:
        return self._cards_seen

    def true_count(self, cards_remaining: int) -> float:
        """
        Calculate the true count, rounded to one decimal place.

        Args:
            cards_remaining: Undealt cards left in the shoe

        Returns:
            Running count divided by decks remaining, or 0.0 once the shoe
            is empty
        """
        if cards_remaining <= 0:
            return 0.0
        # running / (remaining / 52), with halves rounded up (3.25 -> 3.3)
        true_count = self._running_count * DECK_SIZE / cards_remaining
        return math.floor(true_count * 10 + 0.5) / 10

    def reset(self) -> None:
        """Reset the count to zero."""
        self._running_count = 0
        self._cards_seen = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(running_count={self._running_count})"
