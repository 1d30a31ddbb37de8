"""Engine error types."""


class GameError(Exception):
    """Base class for game validation errors."""


class InvalidWager(GameError):
    """Wager below the table minimum or above the available chips."""

    def __init__(self, message: str, wager: int | None = None) -> None:
        super().__init__(message)
        self.wager = wager


class IllegalAction(GameError):
    """Action invoked outside its phase or on an ineligible hand."""

    def __init__(self, action: str, reason: str) -> None:
        super().__init__(f"Cannot {action}: {reason}")
        self.action = action
        self.reason = reason


class ShoeExhausted(GameError, RuntimeError):
    """
    A draw was requested with no cards left to deal.

    The reshuffle policy keeps the shoe stocked, so this signals a logic
    defect rather than a game condition.
    """
