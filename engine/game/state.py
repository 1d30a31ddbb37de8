"""Round phase enumeration."""

from enum import Enum, auto


class GamePhase(Enum):
    """
    Round state machine phases.

    Flow: BETTING → DEALING → PLAYER_TURN → (SPLITTING_WAGER → PLAYER_TURN)
    → DEALER_TURN → SETTLEMENT → BETTING
    """

    # Waiting for a wager
    BETTING = auto()

    # Initial cards being dealt
    DEALING = auto()

    # Player acts on the active hand
    PLAYER_TURN = auto()

    # Split requested, second hand's wager not yet committed
    SPLITTING_WAGER = auto()

    # Dealer plays out its hand
    DEALER_TURN = auto()

    # Wagers being paid out
    SETTLEMENT = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

