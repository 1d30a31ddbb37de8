"""Player and dealer hands, outcome comparison and payouts."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from engine.cards import Card
from engine.constants import BLACKJACK
from engine.scoring import is_natural, is_soft, score


class Outcome(Enum):
    """Result of one player hand against the dealer."""

    WIN = "win"
    LOSE = "lose"
    PUSH = "push"


@dataclass
class Hand:
    """A blackjack hand with its wager."""

    cards: list[Card] = field(default_factory=list)
    wager: int = 0
    is_doubled: bool = False
    is_resolved: bool = False
    is_split_hand: bool = False

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def clear(self) -> None:
        """Remove all cards and reset the hand flags."""
        self.cards.clear()
        self.wager = 0
        self.is_doubled = False
        self.is_resolved = False
        self.is_split_hand = False

    @property
    def value(self) -> int:
        """Return the best score of the hand."""
        return score(self.cards)

    @property
    def is_soft(self) -> bool:
        return is_soft(self.cards)

    @property
    def is_natural(self) -> bool:
        """
        Check for a natural (two cards totalling 21).

        Split hands count too; a natural on either half of a split earns the
        blackjack bonus.
        """
        return is_natural(self.cards)

    @property
    def is_busted(self) -> bool:
        return self.value > BLACKJACK

    @property
    def is_pair(self) -> bool:
        """Check if the hand is two cards of the same rank."""
        return len(self.cards) == 2 and self.cards[0].same_rank(self.cards[1])

    @property
    def can_double(self) -> bool:
        """Check if the hand itself allows doubling (chips aside)."""
        return len(self.cards) == 2 and not self.is_doubled and not self.is_resolved

    @property
    def card_ids(self) -> list[str]:
        return [card.id for card in self.cards]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(card.id for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_natural:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.card_ids!r}, value={self.value}, wager={self.wager})"


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """Compare a player hand against the dealer's final hand."""
    player_value = player_hand.value
    dealer_value = dealer_hand.value

    # Player busts always loses, even if the dealer busts too
    if player_value > BLACKJACK:
        return Outcome.LOSE
    if dealer_value > BLACKJACK:
        return Outcome.WIN

    if player_value > dealer_value:
        return Outcome.WIN
    if dealer_value > player_value:
        return Outcome.LOSE
    return Outcome.PUSH


def payout(hand: Hand, outcome: Outcome) -> int:
    """
    Chips returned to the player for a settled hand.

    The wager was taken when it was committed, so a win returns it twice
    (2.5 times, rounded down, for a natural), a push returns it once and a
    loss returns nothing.
    """
    if outcome == Outcome.WIN:
        if hand.is_natural:
            return hand.wager * 5 // 2
        return hand.wager * 2
    if outcome == Outcome.PUSH:
        return hand.wager
    return 0
