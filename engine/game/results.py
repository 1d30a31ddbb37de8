"""Settlement results and read-only table snapshots."""

from dataclasses import dataclass

from engine.cards import Card
from engine.game.state import GamePhase
from engine.hand import Hand, Outcome
from engine.shoe import ShoeCount


@dataclass(frozen=True)
class HandResult:
    """Settlement of one player hand."""

    cards: tuple[Card, ...]
    score: int
    wager: int
    outcome: Outcome
    is_natural: bool
    is_doubled: bool
    payout: int
    message: str

    @property
    def net(self) -> int:
        return self.payout - self.wager


@dataclass(frozen=True)
class RoundResult:
    """Settlement of a whole round."""

    hands: tuple[HandResult, ...]
    dealer_cards: tuple[Card, ...]
    dealer_score: int
    dealer_played: bool
    chips_after: int
    message: str

    @property
    def total_wagered(self) -> int:
        return sum(h.wager for h in self.hands)

    @property
    def total_payout(self) -> int:
        return sum(h.payout for h in self.hands)

    @property
    def net(self) -> int:
        return self.total_payout - self.total_wagered


@dataclass(frozen=True)
class HandView:
    """Read-only view of a hand."""

    cards: tuple[Card, ...]
    score: int
    wager: int
    is_soft: bool
    is_natural: bool
    is_busted: bool
    is_doubled: bool
    is_resolved: bool

    @classmethod
    def of(cls, hand: Hand) -> "HandView":
        return cls(
            cards=tuple(hand.cards),
            score=hand.value,
            wager=hand.wager,
            is_soft=hand.is_soft,
            is_natural=hand.is_natural,
            is_busted=hand.is_busted,
            is_doubled=hand.is_doubled,
            is_resolved=hand.is_resolved,
        )


@dataclass(frozen=True)
class TableSnapshot:
    """Everything a UI needs to draw the table after a command."""

    phase: GamePhase
    chips: int
    wager: int
    player_hands: tuple[HandView, ...]
    dealer_hand: HandView
    active_hand_index: int
    result_message: str
    shoe_count: ShoeCount
    can_hit: bool
    can_stand: bool
    can_double: bool
    can_split: bool
    last_result: RoundResult | None
