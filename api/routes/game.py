"""Game API endpoints."""

from fastapi import APIRouter, Header, HTTPException, Query
from typing import Annotated

from api.schemas import (
    ActionRequest,
    BetRequest,
    CardResponse,
    ConstantsResponse,
    EventResponse,
    EventsResponse,
    GameStateResponse,
    HandResponse,
    HandResultResponse,
    RoundResultResponse,
    SessionResponse,
    ShoeCountResponse,
    SplitWagerRequest,
)
from api.session import create_session, get_table, reset_table
from config import config
from engine.cards import Card
from engine.constants import DECK_SIZE, HIDDEN_CARD
from engine.errors import IllegalAction, InvalidWager
from engine.game import GamePhase, RoundEngine, RoundResult
from engine.hand import Hand
from engine.scoring import score
from engine.shoe import ShoeCount

router = APIRouter()

SessionHeader = Annotated[str, Header(alias="X-Session-ID")]

_HIDDEN_PHASES = (GamePhase.DEALING, GamePhase.PLAYER_TURN, GamePhase.SPLITTING_WAGER)


def _card_to_response(card: Card) -> CardResponse:
    return CardResponse(id=card.id, rank=str(card.rank), suit=str(card.suit), value=card.value)


def _hidden_card_response() -> CardResponse:
    return CardResponse(id=HIDDEN_CARD, rank=HIDDEN_CARD, suit=HIDDEN_CARD, value=0)


def _hand_to_response(hand: Hand, hide_hole_card: bool = False) -> HandResponse:
    """Convert a Hand to HandResponse, optionally face-down after the first card."""
    if hide_hole_card and len(hand.cards) > 1:
        shown = hand.cards[:1]
        return HandResponse(
            cards=[_card_to_response(shown[0])]
            + [_hidden_card_response() for _ in hand.cards[1:]],
            value=score(shown),
            wager=hand.wager,
            is_soft=False,
            is_blackjack=False,
            is_busted=False,
            is_doubled=False,
            is_resolved=False,
        )

    return HandResponse(
        cards=[_card_to_response(c) for c in hand.cards],
        value=hand.value,
        wager=hand.wager,
        is_soft=hand.is_soft,
        is_blackjack=hand.is_natural,
        is_busted=hand.is_busted,
        is_doubled=hand.is_doubled,
        is_resolved=hand.is_resolved,
    )


def _count_to_response(count: ShoeCount) -> ShoeCountResponse:
    return ShoeCountResponse(
        running=count.running,
        true=count.true,
        cards_dealt=count.cards_dealt,
        remaining_cards=count.remaining_cards,
    )


def _result_to_response(result: RoundResult) -> RoundResultResponse:
    return RoundResultResponse(
        hands=[
            HandResultResponse(
                cards=[_card_to_response(c) for c in r.cards],
                value=r.score,
                wager=r.wager,
                outcome=r.outcome.value,
                is_blackjack=r.is_natural,
                payout=r.payout,
                message=r.message,
            )
            for r in result.hands
        ],
        dealer_cards=[_card_to_response(c) for c in result.dealer_cards],
        dealer_value=result.dealer_score,
        dealer_played=result.dealer_played,
        total_wagered=result.total_wagered,
        total_payout=result.total_payout,
        net=result.net,
        chips_after=result.chips_after,
        message=result.message,
    )


def _game_state_response(table: RoundEngine) -> GameStateResponse:
    """Convert table state to response."""
    dealer_showing = None
    if table.dealer_hand.cards:
        dealer_showing = _card_to_response(table.dealer_hand.cards[0])

    last_result = None
    if table.last_result is not None:
        last_result = _result_to_response(table.last_result)

    return GameStateResponse(
        state=table.phase.name,
        chips=table.chips,
        wager=table.wager,
        player_hands=[_hand_to_response(h) for h in table.player_hands],
        current_hand_index=table.active_hand_index,
        dealer_hand=_hand_to_response(
            table.dealer_hand, hide_hole_card=table.phase in _HIDDEN_PHASES
        ),
        dealer_showing=dealer_showing,
        result_message=table.result_message,
        shoe_count=_count_to_response(table.shoe_count),
        can_hit=table.can_hit,
        can_stand=table.can_stand,
        can_double=table.can_double,
        can_split=table.can_split,
        last_result=last_result,
    )


async def _get_table(session_id: str) -> RoundEngine:
    table = await get_table(session_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return table


@router.get("/constants")
async def get_constants() -> ConstantsResponse:
    """Table constants for the UI."""
    game = config.game
    return ConstantsResponse(
        min_bet=game.min_bet,
        starting_chips=game.starting_chips,
        default_bet=game.default_bet,
        deck_size=DECK_SIZE,
        reshuffle_threshold=game.reshuffle_threshold,
        split_wager_mode=game.split_wager_mode,
        hidden_card=HIDDEN_CARD,
    )


@router.post("/new")
async def new_game(
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> SessionResponse:
    """Create a new game session, or reset the table of an existing one."""
    if session_id is not None and await reset_table(session_id) is not None:
        return SessionResponse(session_id=session_id)

    return SessionResponse(session_id=await create_session())


@router.get("/state")
async def get_state(session_id: SessionHeader) -> GameStateResponse:
    """Get current table state."""
    table = await _get_table(session_id)
    return _game_state_response(table)


@router.get("/count")
async def get_count(session_id: SessionHeader) -> ShoeCountResponse:
    """Get the shoe's card counting statistics."""
    table = await _get_table(session_id)
    return _count_to_response(table.shoe_count)


@router.post("/bet")
async def place_bet(request: BetRequest, session_id: SessionHeader) -> GameStateResponse:
    """Place a wager and deal cards."""
    table = await _get_table(session_id)

    try:
        accepted = table.start_round(request.amount)
    except (InvalidWager, IllegalAction) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if not accepted:
        raise HTTPException(status_code=400, detail="Cannot bet now")
    return _game_state_response(table)


@router.post("/action")
async def player_action(request: ActionRequest, session_id: SessionHeader) -> GameStateResponse:
    """Execute a player action."""
    table = await _get_table(session_id)

    try:
        if request.action == "split":
            accepted = table.split(request.hand_index or 0)
        else:
            actions = {
                "hit": table.hit,
                "stand": table.stand,
                "double": table.double,
            }
            accepted = actions[request.action](request.hand_index)
    except IllegalAction as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if not accepted:
        raise HTTPException(status_code=400, detail=f"Cannot {request.action} now")
    return _game_state_response(table)


@router.post("/split-wager")
async def commit_split_wager(
    request: SplitWagerRequest, session_id: SessionHeader
) -> GameStateResponse:
    """Commit the second hand's wager after a deferred split."""
    table = await _get_table(session_id)

    try:
        accepted = table.commit_split_wager(request.amount)
    except (InvalidWager, IllegalAction) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if not accepted:
        raise HTTPException(status_code=400, detail="No split wager is pending")
    return _game_state_response(table)


@router.get("/events")
async def get_events(
    session_id: SessionHeader,
    since: Annotated[int, Query(ge=0)] = 0,
) -> EventsResponse:
    """Events recorded after `since`, in the order a UI should reveal them."""
    table = await _get_table(session_id)
    start = max(since, table.events.first_index)
    events = table.events.since(start)
    return EventsResponse(
        events=[
            EventResponse(
                index=start + offset,
                event_type=event.event_type.name,
                data=event.data,
                timestamp=event.timestamp,
            )
            for offset, event in enumerate(events)
        ],
        next_index=start + len(events),
    )
