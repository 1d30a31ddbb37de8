"""Card ranks, suits and immutable card values."""

from dataclasses import dataclass
from enum import Enum

from engine.constants import HIDDEN_CARD


class Suit(Enum):
    """Card suits, valued by their single-letter id."""

    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"

    def __str__(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        """Return the suit glyph."""
        return {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }[self]


class Rank(Enum):
    """Card ranks with blackjack values."""

    ACE = 14
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @classmethod
    def from_id(cls, rank_id: str) -> "Rank":
        """Look up a rank by its id ('A', '2'..'10', 'J', 'Q', 'K')."""
        for rank in cls:
            if str(rank) == rank_id:
                return rank
        raise ValueError(f"Invalid rank: {rank_id}")

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        return self == Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    Two cards are equal when both rank and suit match, so each of the 52
    cards in a deck is distinct. Pair detection compares ranks only; see
    `same_rank`.
    """

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def id(self) -> str:
        """Return the boundary identifier, e.g. '10-H'."""
        return f"{self.rank}-{self.suit}"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    def same_rank(self, other: "Card") -> bool:
        """Check whether two cards pair up, ignoring suit."""
        return self.rank == other.rank

    @classmethod
    def from_id(cls, card_id: str) -> "Card":
        """Create a card from an id like '10-H', 'A-S' or 'q-d'."""
        card_id = card_id.strip().upper()
        if card_id == HIDDEN_CARD:
            raise ValueError("The face-down sentinel is not a card")

        rank_str, sep, suit_str = card_id.partition("-")
        if not sep or not rank_str or not suit_str:
            raise ValueError(f"Invalid card id: {card_id}")

        try:
            suit = Suit(suit_str)
        except ValueError:
            raise ValueError(f"Invalid suit: {suit_str}") from None

        return cls(Rank.from_id(rank_str), suit)


def full_deck() -> list[Card]:
    """Return the 52 cards of a standard deck in rank-major order."""
    return [Card(rank, suit) for rank in Rank for suit in Suit]


def is_hidden_card(card_id: str) -> bool:
    """Check if a card id is a face-down placeholder."""
    return card_id == HIDDEN_CARD


def parse_cards(card_ids: list[str]) -> list[Card]:
    """Parse a list of card ids."""
    return [Card.from_id(card_id) for card_id in card_ids]
