"""Game events for the event system."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from itertools import islice
from typing import Any, Callable

from engine.constants import EVENT_HISTORY_LIMIT


class EventType(Enum):
    """Types of game events."""

    # Round flow events
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Betting events
    BET_PLACED = auto()
    SPLIT_WAGER_REQUESTED = auto()
    SPLIT_WAGER_COMMITTED = auto()

    # Card events
    CARD_DEALT = auto()
    SHOE_SHUFFLED = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_SPLIT = auto()

    # Dealer events
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Outcome events
    PLAYER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()

    # Error events
    INVALID_ACTION = auto()
    INVALID_WAGER = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable game event.

    The event log is the order in which a UI should reveal what the engine
    has already decided.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Simple event emitter for game events.

    Allows subscribing to specific event types or all events, and keeps a
    bounded history for replay. Event indexes are absolute: they keep
    counting when the oldest events are dropped.
    """

    def __init__(self, max_history: int = EVENT_HISTORY_LIMIT) -> None:
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: deque[GameEvent] = deque(maxlen=max_history)
        self._emitted = 0

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Unsubscribe a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        """Record an event and notify subscribers."""
        self._event_history.append(event)
        self._emitted += 1

        for handler in self._handlers.get(event.event_type, []):
            handler(event)

        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(
        self,
        event_type: EventType,
        **data: Any,
    ) -> GameEvent:
        """Create and emit a new event."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        return list(self._event_history)

    @property
    def first_index(self) -> int:
        """Absolute index of the oldest event still kept."""
        return self._emitted - len(self._event_history)

    def since(self, index: int) -> list[GameEvent]:
        """Return the kept events whose absolute index is at least `index`."""
        skip = max(index - self.first_index, 0)
        return list(islice(self._event_history, skip, None))

    def __len__(self) -> int:
        """Number of events emitted so far, dropped ones included."""
        return self._emitted

    def clear_history(self) -> None:
        self._event_history.clear()
