"""Single-deck blackjack engine - 100% UI-agnostic."""

from engine.cards import Card, Rank, Suit
from engine.errors import GameError, IllegalAction, InvalidWager, ShoeExhausted
from engine.hand import Hand, Outcome
from engine.rules import TableRules
from engine.scoring import score
from engine.shoe import Shoe, ShoeCount

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "GameError",
    "IllegalAction",
    "InvalidWager",
    "ShoeExhausted",
    "Hand",
    "Outcome",
    "TableRules",
    "score",
    "Shoe",
    "ShoeCount",
]
