"""Table rules and wager validation."""

from dataclasses import dataclass
from random import Random
from typing import TYPE_CHECKING, Literal

from engine.constants import (
    DEFAULT_BET,
    DECK_SHUFFLE_THRESHOLD,
    MIN_BET,
    STARTING_CHIPS,
)

if TYPE_CHECKING:
    from config import GameConfig

SplitWagerMode = Literal["immediate", "deferred"]


@dataclass(frozen=True)
class TableRules:
    """
    Table configuration.

    The payout schedule is fixed (even money, 3:2 on naturals) and the
    dealer stands on every 17; what varies is the money and the shoe.
    """

    starting_chips: int = STARTING_CHIPS
    min_bet: int = MIN_BET
    default_bet: int = DEFAULT_BET

    # Fraction of the deck dealt before a reshuffle is due
    reshuffle_threshold: float = DECK_SHUFFLE_THRESHOLD

    # "immediate" charges the second split wager at split time,
    # "deferred" waits for commit_split_wager()
    split_wager_mode: SplitWagerMode = "immediate"

    # Raise IllegalAction instead of ignoring illegal commands
    strict_actions: bool = False

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.min_bet < 1:
            raise ValueError("min_bet must be at least 1")
        if self.default_bet < self.min_bet:
            raise ValueError("default_bet must be at least min_bet")
        if self.starting_chips < 0:
            raise ValueError("starting_chips cannot be negative")
        if not 0.0 < self.reshuffle_threshold <= 1.0:
            raise ValueError("reshuffle_threshold must be between 0 and 1")
        if self.split_wager_mode not in ("immediate", "deferred"):
            raise ValueError(f"Unknown split_wager_mode: {self.split_wager_mode}")

    def validate_wager(self, wager: int, chips: int) -> str | None:
        """
        Check a wager against the table minimum and the player's chips.

        Returns:
            An error message, or None if the wager is acceptable
        """
        if wager < self.min_bet:
            return f"Minimum bet is {self.min_bet:,} chips"
        if wager > chips:
            return f"Maximum bet is {chips:,} chips"
        return None

    def clamp_wager(self, wager: int, chips: int) -> int:
        """Pull a wager into the [min_bet, chips] range."""
        return max(self.min_bet, min(wager, chips))

    def default_wager(self, chips: int) -> int:
        return min(self.default_bet, chips)

    def all_in_wager(self, chips: int) -> int:
        return chips

    def random_wager(self, chips: int, rng: Random | None = None) -> int:
        """Pick a uniformly random legal wager (chips must cover min_bet)."""
        if chips < self.min_bet:
            raise ValueError(f"Need at least {self.min_bet:,} chips to bet")
        return (rng or Random()).randint(self.min_bet, chips)

    @classmethod
    def from_config(cls, game: "GameConfig") -> "TableRules":
        """Build rules from the application's game configuration."""
        return cls(
            starting_chips=game.starting_chips,
            min_bet=game.min_bet,
            default_bet=game.default_bet,
            reshuffle_threshold=game.reshuffle_threshold,
            split_wager_mode=game.split_wager_mode,
            strict_actions=game.strict_actions,
        )

    @classmethod
    def deferred_split(cls) -> "TableRules":
        """Rules where the second split hand is wagered separately."""
        return cls(split_wager_mode="deferred")
