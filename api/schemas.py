"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class BetRequest(BaseModel):
    """Request to place a wager and deal."""

    amount: int = Field(..., ge=1, description="Wager in chips")


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand", "double", "split"]
    hand_index: int | None = Field(default=None, ge=0, le=1)


class SplitWagerRequest(BaseModel):
    """Wager for the second hand of a deferred split."""

    amount: int = Field(..., ge=1)


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    rank: str
    suit: str
    value: int


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int
    wager: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool
    is_doubled: bool
    is_resolved: bool


class ShoeCountResponse(BaseModel):
    """Card counting statistics."""

    running: int
    true: float
    cards_dealt: int
    remaining_cards: int


class HandResultResponse(BaseModel):
    """Settlement of one hand."""

    cards: list[CardResponse]
    value: int
    wager: int
    outcome: Literal["win", "lose", "push"]
    is_blackjack: bool
    payout: int
    message: str


class RoundResultResponse(BaseModel):
    """Settlement of the last round."""

    hands: list[HandResultResponse]
    dealer_cards: list[CardResponse]
    dealer_value: int
    dealer_played: bool
    total_wagered: int
    total_payout: int
    net: int
    chips_after: int
    message: str


class GameStateResponse(BaseModel):
    """Current table state."""

    state: str
    chips: int
    wager: int
    player_hands: list[HandResponse]
    current_hand_index: int
    dealer_hand: HandResponse
    dealer_showing: CardResponse | None
    result_message: str
    shoe_count: ShoeCountResponse
    can_hit: bool
    can_stand: bool
    can_double: bool
    can_split: bool
    last_result: RoundResultResponse | None = None


class EventResponse(BaseModel):
    """One entry of the reveal queue."""

    index: int
    event_type: str
    data: dict[str, Any]
    timestamp: datetime


class EventsResponse(BaseModel):
    """Events recorded after a cursor, plus the cursor to use next."""

    events: list[EventResponse]
    next_index: int


class ConstantsResponse(BaseModel):
    """Table constants for the UI."""

    min_bet: int
    starting_chips: int
    default_bet: int
    deck_size: int
    reshuffle_threshold: float
    split_wager_mode: Literal["immediate", "deferred"]
    hidden_card: str


class SessionResponse(BaseModel):
    """A newly created session."""

    session_id: str
