"""
Base adapter interface for the Crazy Eights engine.

This module defines the interface that platform-specific adapters must implement
to interact with the Crazy Eights engine.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Union
from enum import Enum


class PlatformAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    An adapter renders snapshots of the game, collects the human's intents
    and reacts to game events. It never changes the game state itself; it
    only hands intents back to the engine.
    """

    @abstractmethod
    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current game state to the platform.

        Args:
            state: Snapshot produced by GameState.to_adapter_format()
        """
        pass

    @abstractmethod
    async def request_player_action(
        self, valid_actions: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Ask the human player for an intent.

        Args:
            valid_actions: Result of CrazyEightsEngine.get_valid_actions()

        Returns:
            An intent such as {"action": "play", "card_id": ...},
            {"action": "draw"} or {"action": "declare_suit", "suit": ...};
            None when the player quits
        """
        pass

    @abstractmethod
    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a game event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    # The following methods have default implementations but can be overridden

    async def celebrate(self, data: Dict[str, Any]) -> None:
        """
        Play a celebratory effect after the human player wins.

        Args:
            data: Data of the win event
        """
        pass

    async def initialize(self) -> None:
        """
        Initialize the adapter.

        This method is called when the adapter is first connected to the engine.
        """
        pass

    async def shutdown(self) -> None:
        """
        Shutdown the adapter.

        This method is called when the engine is shutting down.
        """
        pass
