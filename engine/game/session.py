"""Game session: the shoe and the chip balance shared by every round."""

from collections import deque
from dataclasses import dataclass, field
from random import Random

from engine.constants import CHIP_HISTORY_LIMIT
from engine.rules import TableRules
from engine.shoe import Shoe


@dataclass
class Session:
    """
    State that outlives a single round.

    One session is created per game; the round engine mutates its chips and
    draws from its shoe.
    """

    rules: TableRules
    shoe: Shoe
    chips: int
    rounds_played: int = 0
    net_result: int = 0
    # Chip balance after each recent round, oldest first
    history: deque[int] = field(default_factory=lambda: deque(maxlen=CHIP_HISTORY_LIMIT))

    @classmethod
    def create(
        cls,
        rules: TableRules | None = None,
        chips: int | None = None,
        rng: Random | None = None,
    ) -> "Session":
        """
        Start a new session with a freshly shuffled shoe.

        Args:
            rules: Table rules (defaults if not provided)
            chips: Starting balance (defaults to rules.starting_chips)
            rng: Random number generator for reproducible shoes
        """
        rules = rules or TableRules()
        if chips is None:
            chips = rules.starting_chips
        if chips < 0:
            raise ValueError("chips cannot be negative")
        shoe = Shoe(threshold=rules.reshuffle_threshold, rng=rng)
        return cls(rules=rules, shoe=shoe, chips=chips)

    def record_round(self, net: int) -> None:
        """Record a settled round's net chip change."""
        self.rounds_played += 1
        self.net_result += net
        self.history.append(self.chips)
