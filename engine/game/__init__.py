"""Round engine and state management."""

from engine.game.events import GameEvent, EventType
from engine.game.state import GamePhase
from engine.game.session import Session
from engine.game.results import HandResult, RoundResult, TableSnapshot
from engine.game.engine import RoundEngine

__all__ = [
    "GameEvent",
    "EventType",
    "GamePhase",
    "Session",
    "HandResult",
    "RoundResult",
    "TableSnapshot",
    "RoundEngine",
]
