"""
Event system for the Crazy Eights engine.

Transitions publish what happened to a game on the process-wide bus; the
engine forwards those events to its adapter and API callers can follow them
too. The events of the game flow have typed payloads. Subscribers always
receive a plain dict, so adapters never need to import the payload classes.
"""

from collections import defaultdict
from dataclasses import asdict, dataclass, is_dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union
import logging
import threading

logger = logging.getLogger("crazyeights.events")


class EngineEventType(Enum):
    """
    Event types published during a game of Crazy Eights.

    Adapters and API callers subscribe to these to follow the game.
    """

    # Engine lifecycle
    ENGINE_INIT = "engine_init"
    ENGINE_SHUTDOWN = "engine_shutdown"

    # Game lifecycle
    GAME_STARTED = "game_started"
    GAME_ENDED = "game_ended"
    GAME_RESTARTED = "game_restarted"

    # Moves
    CARD_DRAWN = "card_drawn"
    CARD_PLAYED = "card_played"
    SUIT_DECLARED = "suit_declared"
    TURN_PASSED = "turn_passed"
    ACTION_REJECTED = "action_rejected"

    # Opponent scheduling
    OPPONENT_THINKING = "opponent_thinking"
    OPPONENT_MOVE_CANCELLED = "opponent_move_cancelled"

    # Winners
    PLAYER_WON = "player_won"
    OPPONENT_WON = "opponent_won"


@dataclass(frozen=True)
class GameStarted:
    game_id: str
    starter_card: str
    draw_pile_size: int
    timestamp: float


@dataclass(frozen=True)
class CardDrawn:
    """A card moved from the draw pile to a hand; `card_id` only, never its face."""

    game_id: str
    side: str
    card_id: str
    draw_pile_size: int
    timestamp: float


@dataclass(frozen=True)
class TurnPassed:
    game_id: str
    side: str
    reason: str
    timestamp: float


@dataclass(frozen=True)
class CardPlayed:
    game_id: str
    side: str
    card: str
    card_id: str
    wild: bool
    cards_left: int
    timestamp: float


@dataclass(frozen=True)
class SuitDeclared:
    game_id: str
    side: str
    suit: str
    timestamp: float


@dataclass(frozen=True)
class GameWon:
    """Payload of both PLAYER_WON and OPPONENT_WON."""

    game_id: str
    winner: str
    timestamp: float


@dataclass(frozen=True)
class GameEnded:
    game_id: str
    phase: str
    timestamp: float


@dataclass(frozen=True)
class ActionRejected:
    game_id: str
    side: str
    action: str
    reason: str


# Which payload class each game-flow event must carry
PAYLOAD_TYPES = {
    EngineEventType.GAME_STARTED: GameStarted,
    EngineEventType.CARD_DRAWN: CardDrawn,
    EngineEventType.TURN_PASSED: TurnPassed,
    EngineEventType.CARD_PLAYED: CardPlayed,
    EngineEventType.SUIT_DECLARED: SuitDeclared,
    EngineEventType.PLAYER_WON: GameWon,
    EngineEventType.OPPONENT_WON: GameWon,
    EngineEventType.GAME_ENDED: GameEnded,
    EngineEventType.ACTION_REJECTED: ActionRejected,
}


def _event_name(event_type: Union[str, EngineEventType]) -> str:
    return event_type.name if isinstance(event_type, Enum) else event_type


def _payload_dict(event_type: Union[str, EngineEventType], payload) -> Dict[str, Any]:
    expected = PAYLOAD_TYPES.get(event_type) if isinstance(event_type, Enum) else None
    if expected is not None and not isinstance(payload, expected):
        raise TypeError(
            f"{event_type.name} carries {expected.__name__}, "
            f"got {type(payload).__name__}"
        )
    if is_dataclass(payload):
        return asdict(payload)
    return payload


class EventEmitter:
    """
    Publish/subscribe hub for game events.

    Handlers for one event type get the payload dict. Handlers registered
    with `on_any` get an `(event_name, payload)` tuple; the engine uses one
    to forward everything to its adapter. A handler that raises is logged
    and skipped.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Callable]] = defaultdict(list)
        self._any_handlers: List[Callable] = []
        self._lock = threading.RLock()

    def on(self, event_type: Union[str, EngineEventType], callback: Callable) -> Callable:
        """
        Subscribe to one event type.

        Returns:
            Function that removes the subscription
        """
        name = _event_name(event_type)
        with self._lock:
            self._handlers[name].append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._handlers[name]:
                    self._handlers[name].remove(callback)

        return unsubscribe

    def on_any(self, callback: Callable) -> Callable:
        """
        Subscribe to every event.

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._any_handlers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._any_handlers:
                    self._any_handlers.remove(callback)

        return unsubscribe

    def emit(
        self,
        event_type: Union[str, EngineEventType],
        payload: Optional[Union[Dict[str, Any], Any]] = None,
    ) -> None:
        """
        Publish an event.

        Args:
            event_type: Event being published
            payload: The typed payload listed in PAYLOAD_TYPES for game-flow
                     events, a dict otherwise

        Raises:
            TypeError: A game-flow event was given the wrong payload class
        """
        data = _payload_dict(event_type, payload if payload is not None else {})
        name = _event_name(event_type)

        with self._lock:
            calls = [(callback, data) for callback in self._handlers.get(name, ())]
            calls += [(callback, (name, data)) for callback in self._any_handlers]

        # Handlers run outside the lock so they may subscribe or emit themselves
        for callback, argument in calls:
            try:
                callback(argument)
            except Exception:
                logger.exception("Handler for %s failed", name)


class EventBus:
    """Holder of the process-wide EventEmitter."""

    _instance: Optional[EventEmitter] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance
