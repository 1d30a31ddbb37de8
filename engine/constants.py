"""Table constants shared by the engine and the presentation layer."""

STARTING_CHIPS = 100_000
MIN_BET = 1_000
DEFAULT_BET = 5_000
DECK_SIZE = 52

# Fraction of the deck dealt before a reshuffle becomes due
DECK_SHUFFLE_THRESHOLD = 0.8

BLACKJACK = 21
DEALER_STAND_SCORE = 17

# Events kept per table and chip balances kept per session
EVENT_HISTORY_LIMIT = 1_000
CHIP_HISTORY_LIMIT = 100

# Face-down card id
HIDDEN_CARD = "BACK"
