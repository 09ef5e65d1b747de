"""
Dummy adapter for the Crazy Eights engine, used for testing and simulation.

This module provides a non-interactive adapter that can be used for automated
testing, simulations, and benchmarks where no user interaction is needed.
"""

from typing import List, Dict, Any, Optional, Union, Callable
from enum import Enum

from crazyeights.adapters.base import PlatformAdapter


class DummyAdapter(PlatformAdapter):
    """
    Dummy adapter for testing and simulation.

    This adapter doesn't interact with any real platform. It records what the
    engine shows it and answers action requests from a script, a strategy
    function or a simple default.
    """

    def __init__(
        self,
        auto_actions: Optional[List[Dict[str, Any]]] = None,
        strategy_function: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
        verbose: bool = False,
    ):
        """
        Initialize the dummy adapter.

        Args:
            auto_actions: Optional list of intents to return in sequence
            strategy_function: Optional function that takes the valid actions
                              and returns an intent
            verbose: Whether to print events to stdout (useful for debugging)
        """
        self.auto_actions = list(auto_actions or [])
        self.strategy_function = strategy_function
        self.verbose = verbose

        # Track events for later inspection
        self.events = []

        # Track rendered states for testing
        self.rendered_states = []

        # Track celebrations triggered by human wins
        self.celebrations = []

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Store the game state for later inspection.

        Args:
            state: The current game state
        """
        self.rendered_states.append(state)

        if self.verbose:
            print(
                f"[{state.get('phase')}] {state.get('turn')} to move, "
                f"top {state.get('top_discard')}: {state.get('last_event')}"
            )

    async def request_player_action(
        self, valid_actions: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Return a scripted intent or one picked by the strategy function.

        Without either, the first playable card is played, a suit is
        declared as hearts, or a card is drawn.

        Args:
            valid_actions: The actions currently open to the human player

        Returns:
            A selected intent
        """
        if self.auto_actions:
            return self.auto_actions.pop(0)

        if self.strategy_function:
            return self.strategy_function(valid_actions)

        if valid_actions.get("declare_suit"):
            return {"action": "declare_suit", "suit": "hearts"}
        if valid_actions.get("play"):
            return {"action": "play", "card_id": valid_actions["play"][0]}
        if valid_actions.get("draw"):
            return {"action": "draw"}
        return None

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Store the event for later inspection.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type

        self.events.append((event_type_str, data))

        if self.verbose:
            print(f"Event: {event_type_str}")
            for key, value in data.items():
                print(f"  {key}: {value}")

    async def celebrate(self, data: Dict[str, Any]) -> None:
        self.celebrations.append(data)

    def get_events_by_type(self, event_type: Union[str, Enum]) -> List[Dict[str, Any]]:
        """
        Get all events of a specific type.

        Args:
            event_type: The type of events to retrieve

        Returns:
            A list of event data dictionaries
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        return [data for typ, data in self.events if typ == event_type_str]

    def clear(self) -> None:
        """Clear all stored events and states."""
        self.events.clear()
        self.rendered_states.clear()
        self.celebrations.clear()
