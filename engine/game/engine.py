"""Blackjack round engine with state machine."""

import logging
from typing import Callable

from transitions import Machine

from engine.cards import Card
from engine.constants import BLACKJACK, DEALER_STAND_SCORE, HIDDEN_CARD
from engine.errors import IllegalAction, InvalidWager
from engine.game.events import EventEmitter, EventType, GameEvent
from engine.game.results import HandResult, HandView, RoundResult, TableSnapshot
from engine.game.session import Session
from engine.game.state import GamePhase
from engine.hand import Hand, Outcome, evaluate_hands, payout
from engine.rules import TableRules
from engine.shoe import Shoe, ShoeCount

logger = logging.getLogger(__name__)


class RoundEngine:
    """
    Blackjack round engine using a state machine.

    Owns the round state (hands, wagers, turn pointer, phase) and mutates
    the session's chips and shoe. Commands return True when applied and
    False when ignored as illegal; every command runs to completion,
    including the dealer's play and settlement, before it returns.
    """

    STATES = [p.name.lower() for p in GamePhase]

    TRANSITIONS = [
        {"trigger": "place_bet", "source": "betting", "dest": "dealing"},
        {"trigger": "deal_cards", "source": "dealing", "dest": "player_turn"},
        {"trigger": "natural_dealt", "source": "dealing", "dest": "dealer_turn"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "request_split_wager", "source": "player_turn", "dest": "splitting_wager"},
        {"trigger": "split_wager_committed", "source": "splitting_wager", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_plays", "source": "dealer_turn", "dest": "settlement"},
        {"trigger": "new_round", "source": "settlement", "dest": "betting"},
    ]

    def __init__(self, session: Session | None = None) -> None:
        """
        Initialize a round engine.

        Args:
            session: Game session holding the shoe and chips (a new default
                session if not provided)
        """
        self.session = session or Session.create()
        self.player_hands: list[Hand] = []
        self.dealer_hand = Hand()
        self.active_hand_index = 0
        self.wager = 0
        self.result_message = ""
        self.last_result: RoundResult | None = None
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="betting",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def phase(self) -> GamePhase:
        """Get current phase as enum."""
        return GamePhase[self._machine_state.upper()]  # type: ignore

    @property
    def rules(self) -> TableRules:
        return self.session.rules

    @property
    def shoe(self) -> Shoe:
        return self.session.shoe

    @property
    def chips(self) -> int:
        return self.session.chips

    @property
    def shoe_count(self) -> ShoeCount:
        return self.shoe.count()

    @property
    def active_hand(self) -> Hand | None:
        if 0 <= self.active_hand_index < len(self.player_hands):
            return self.player_hands[self.active_hand_index]
        return None

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def _reject(self, action: str, reason: str) -> bool:
        """Ignore an illegal command, or raise in strict mode."""
        logger.debug("Rejected %s: %s", action, reason)
        self.events.emit_new(EventType.INVALID_ACTION, action=action, message=reason)
        if self.rules.strict_actions:
            raise IllegalAction(action, reason)
        return False

    def start_round(self, wager: int) -> bool:
        """
        Place a wager and deal the opening cards.

        Args:
            wager: Chips to bet on the hand

        Returns:
            True if the round started, False if a round is already running

        Raises:
            InvalidWager: if the wager is under the minimum or over the chips
        """
        if self.phase != GamePhase.BETTING:
            return self._reject("bet", f"a round is already in {self.phase}")

        problem = self.rules.validate_wager(wager, self.chips)
        if problem is not None:
            self.events.emit_new(EventType.INVALID_WAGER, wager=wager, message=problem)
            raise InvalidWager(problem, wager=wager)

        self.session.chips -= wager
        self.wager = wager
        self.player_hands = [Hand(wager=wager)]
        self.dealer_hand = Hand()
        self.active_hand_index = 0
        self.result_message = ""
        self.last_result = None

        logger.info("Round started: wager=%d chips=%d", wager, self.chips)
        self.events.emit_new(EventType.BET_PLACED, amount=wager, chips=self.chips)
        self.place_bet()

        return self._deal_initial_cards()

    def _deal_initial_cards(self) -> bool:
        if self.shoe.reshuffle_if_needed():
            self.events.emit_new(EventType.SHOE_SHUFFLED)

        player_hand = self.player_hands[0]

        # Deal: player, dealer, player, dealer (face down)
        self._deal_card_to_hand(player_hand)
        self._deal_card_to_hand(self.dealer_hand)
        self._deal_card_to_hand(player_hand)
        self._deal_card_to_hand(self.dealer_hand, face_up=False)

        self.events.emit_new(EventType.ROUND_STARTED)

        if player_hand.is_natural:
            player_hand.is_resolved = True
            self.events.emit_new(EventType.PLAYER_BLACKJACK, hand_index=0)
            self.natural_dealt()
            return self._play_dealer()

        self.deal_cards()
        return True

    def _deal_card_to_hand(self, hand: Hand, face_up: bool = True) -> Card:
        card = self.shoe.draw()
        hand.add_card(card)
        is_dealer = hand is self.dealer_hand
        hand_index = None
        if not is_dealer:
            hand_index = next(i for i, h in enumerate(self.player_hands) if h is hand)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=card.id if face_up else HIDDEN_CARD,
            face_up=face_up,
            hand="dealer" if is_dealer else "player",
            hand_index=hand_index,
            hand_value=hand.value if face_up else None,
            running_count=self.shoe.running_count,
        )
        return card

    def _addressed_hand(self, action: str, hand_index: int | None) -> tuple[int, Hand] | None:
        """Find the hand a player command targets, or reject the command."""
        if self.phase != GamePhase.PLAYER_TURN:
            self._reject(action, f"not allowed during {self.phase}")
            return None

        index = self.active_hand_index if hand_index is None else hand_index
        if not 0 <= index < len(self.player_hands):
            self._reject(action, f"no hand at index {index}")
            return None

        hand = self.player_hands[index]
        if hand.is_resolved:
            self._reject(action, f"hand {index + 1} is finished")
            return None
        return index, hand

    def hit(self, hand_index: int | None = None) -> bool:
        """Draw one card into a hand."""
        target = self._addressed_hand("hit", hand_index)
        if target is None:
            return False
        index, hand = target

        self._deal_card_to_hand(hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_index=index, hand_value=hand.value)

        if hand.value >= BLACKJACK:
            hand.is_resolved = True
            if hand.is_busted:
                self.events.emit_new(EventType.PLAYER_BUSTS, hand_index=index)
            return self._advance()

        self.player_action()
        return True

    def stand(self, hand_index: int | None = None) -> bool:
        """Finish a hand without drawing."""
        target = self._addressed_hand("stand", hand_index)
        if target is None:
            return False
        index, hand = target

        hand.is_resolved = True
        self.events.emit_new(EventType.PLAYER_STAND, hand_index=index, hand_value=hand.value)
        return self._advance()

    def _double_problem(self, hand: Hand) -> str | None:
        if not hand.can_double:
            return "can only double on the first two cards"
        if hand.wager > self.chips:
            return "insufficient chips"
        return None

    def double(self, hand_index: int | None = None) -> bool:
        """Double the wager, take exactly one card and finish the hand."""
        target = self._addressed_hand("double", hand_index)
        if target is None:
            return False
        index, hand = target

        problem = self._double_problem(hand)
        if problem is not None:
            return self._reject("double", problem)

        self.session.chips -= hand.wager
        hand.wager *= 2
        hand.is_doubled = True

        self._deal_card_to_hand(hand)
        hand.is_resolved = True
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            hand_index=index,
            hand_value=hand.value,
            new_wager=hand.wager,
        )
        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_index=index)

        return self._advance()

    def _split_problem(self, hand_index: int) -> str | None:
        if len(self.player_hands) != 1:
            return "hand has already been split"
        if hand_index != 0:
            return f"no hand at index {hand_index}"
        hand = self.player_hands[0]
        if hand.is_resolved:
            return "hand is finished"
        if not hand.is_pair:
            return "can only split two cards of the same rank"
        if hand.wager > self.chips:
            return "insufficient chips"
        return None

    def split(self, hand_index: int = 0) -> bool:
        """
        Split a pair into two hands.

        With immediate split wagers the second wager is charged and both
        hands get their second card right away. With deferred split wagers
        the round waits in SPLITTING_WAGER for `commit_split_wager`.
        """
        if self.phase != GamePhase.PLAYER_TURN:
            return self._reject("split", f"not allowed during {self.phase}")

        problem = self._split_problem(hand_index)
        if problem is not None:
            return self._reject("split", problem)

        hand = self.player_hands[0]
        first, second = hand.cards
        deferred = self.rules.split_wager_mode == "deferred"

        first_hand = Hand(cards=[first], wager=hand.wager, is_split_hand=True)
        second_hand = Hand(
            cards=[second],
            wager=0 if deferred else hand.wager,
            is_split_hand=True,
        )
        self.player_hands = [first_hand, second_hand]
        self.active_hand_index = 0

        if deferred:
            self.events.emit_new(EventType.SPLIT_WAGER_REQUESTED, chips=self.chips)
            self.request_split_wager()
            return True

        self.session.chips -= second_hand.wager
        return self._deal_split_hands()

    def commit_split_wager(self, wager: int) -> bool:
        """
        Commit the second hand's wager after a deferred split.

        Raises:
            InvalidWager: if the wager is under the minimum or over the chips
        """
        if self.phase != GamePhase.SPLITTING_WAGER:
            return self._reject("commit split wager", f"not allowed during {self.phase}")

        problem = self.rules.validate_wager(wager, self.chips)
        if problem is not None:
            self.events.emit_new(EventType.INVALID_WAGER, wager=wager, message=problem)
            raise InvalidWager(problem, wager=wager)

        self.session.chips -= wager
        self.player_hands[1].wager = wager
        self.events.emit_new(EventType.SPLIT_WAGER_COMMITTED, amount=wager, chips=self.chips)
        self.split_wager_committed()
        return self._deal_split_hands()

    def _deal_split_hands(self) -> bool:
        first_hand, second_hand = self.player_hands
        self._deal_card_to_hand(first_hand)
        self._deal_card_to_hand(second_hand)

        self.events.emit_new(
            EventType.PLAYER_SPLIT,
            hand1_value=first_hand.value,
            hand2_value=second_hand.value,
            wagers=[first_hand.wager, second_hand.wager],
        )

        for index, hand in enumerate(self.player_hands):
            if hand.value == BLACKJACK:
                hand.is_resolved = True
                self.events.emit_new(EventType.PLAYER_BLACKJACK, hand_index=index)

        return self._advance()

    def _advance(self) -> bool:
        """Move to the next unresolved hand or hand over to the dealer."""
        for index, hand in enumerate(self.player_hands):
            if not hand.is_resolved:
                self.active_hand_index = index
                self.player_action()
                return True

        self.player_done()
        return self._play_dealer()

    def _dealer_must_play(self) -> bool:
        """
        Check whether the dealer needs to draw at all.

        Not when every player hand is bust, and not against an unsplit
        natural, which only a dealer natural can tie.
        """
        if all(hand.is_busted for hand in self.player_hands):
            return False
        if len(self.player_hands) == 1 and self.player_hands[0].is_natural:
            return False
        return True

    def _play_dealer(self) -> bool:
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=self.dealer_hand.cards[1].id,
            hand_value=self.dealer_hand.value,
        )

        dealer_played = self._dealer_must_play()
        if dealer_played:
            while self.dealer_hand.value < DEALER_STAND_SCORE:
                self._deal_card_to_hand(self.dealer_hand)
                self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer_hand.value)

            if self.dealer_hand.is_busted:
                self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
            else:
                self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)

        self.dealer_plays()
        return self._settle(dealer_played)

    def _hand_message(self, hand: Hand, outcome: Outcome) -> str:
        player_value = hand.value
        dealer_value = self.dealer_hand.value

        if outcome == Outcome.WIN:
            if hand.is_natural:
                return "Blackjack! You Win!"
            if dealer_value > BLACKJACK:
                return f"You Win! Dealer Busts! ({dealer_value})"
            return f"You Win! ({player_value} vs {dealer_value})"
        if outcome == Outcome.LOSE:
            if player_value > BLACKJACK:
                return "Dealer Wins - Player Bust!"
            return f"Dealer Wins ({dealer_value} vs {player_value})"
        return "Push - It's a Tie!"

    def _settle(self, dealer_played: bool) -> bool:
        """Pay out every hand, publish the result and reset for betting."""
        split_round = len(self.player_hands) > 1
        hand_results = []

        for index, hand in enumerate(self.player_hands):
            outcome = evaluate_hands(hand, self.dealer_hand)
            returned = payout(hand, outcome)
            message = self._hand_message(hand, outcome)
            if split_round:
                message = f"Hand {index + 1}: {message}"

            hand_results.append(
                HandResult(
                    cards=tuple(hand.cards),
                    score=hand.value,
                    wager=hand.wager,
                    outcome=outcome,
                    is_natural=hand.is_natural,
                    is_doubled=hand.is_doubled,
                    payout=returned,
                    message=message,
                )
            )

            event_type = {
                Outcome.WIN: EventType.PLAYER_WINS,
                Outcome.LOSE: EventType.PLAYER_LOSES,
                Outcome.PUSH: EventType.PUSH,
            }[outcome]
            self.events.emit_new(event_type, hand_index=index, payout=returned)

        total_payout = sum(r.payout for r in hand_results)
        net = total_payout - sum(r.wager for r in hand_results)
        self.session.chips += total_payout

        if net > 0:
            chip_message = f"Won {net:,} chips"
        elif net < 0:
            chip_message = f"Lost {-net:,} chips"
        else:
            chip_message = "Chips returned"
        message = "\n".join([r.message for r in hand_results] + [chip_message])

        result = RoundResult(
            hands=tuple(hand_results),
            dealer_cards=tuple(self.dealer_hand.cards),
            dealer_score=self.dealer_hand.value,
            dealer_played=dealer_played,
            chips_after=self.chips,
            message=message,
        )
        self.last_result = result
        self.result_message = message
        self.session.record_round(net)

        logger.info("Round settled: net=%d chips=%d", net, self.chips)
        self.events.emit_new(
            EventType.ROUND_ENDED,
            net=net,
            payout=total_payout,
            chips=self.chips,
            message=message,
        )

        self.player_hands = []
        self.dealer_hand = Hand()
        self.active_hand_index = 0
        self.wager = 0
        self.new_round()
        return True

    @property
    def can_hit(self) -> bool:
        """Check if the active hand can take a card."""
        if self.phase != GamePhase.PLAYER_TURN:
            return False
        hand = self.active_hand
        return hand is not None and not hand.is_resolved

    @property
    def can_stand(self) -> bool:
        return self.can_hit

    @property
    def can_double(self) -> bool:
        """Check if the active hand has two cards and the chips to match its wager."""
        if not self.can_hit:
            return False
        return self._double_problem(self.active_hand) is None  # type: ignore[arg-type]

    @property
    def can_split(self) -> bool:
        """Check if the unsplit hand is a pair and the chips cover a second wager."""
        if self.phase != GamePhase.PLAYER_TURN:
            return False
        return self._split_problem(0) is None

    def snapshot(self) -> TableSnapshot:
        """Return a read-only copy of the table."""
        return TableSnapshot(
            phase=self.phase,
            chips=self.chips,
            wager=self.wager,
            player_hands=tuple(HandView.of(h) for h in self.player_hands),
            dealer_hand=HandView.of(self.dealer_hand),
            active_hand_index=self.active_hand_index,
            result_message=self.result_message,
            shoe_count=self.shoe_count,
            can_hit=self.can_hit,
            can_stand=self.can_stand,
            can_double=self.can_double,
            can_split=self.can_split,
            last_result=self.last_result,
        )
