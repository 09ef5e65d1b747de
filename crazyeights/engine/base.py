"""
Base engine class for the Crazy Eights package.

This module provides the abstract base class for game engines. An engine
sits between a platform adapter and the pure state transitions: it owns the
current state, forwards intents and tells the adapter what to show.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any

from crazyeights.adapters import PlatformAdapter
from crazyeights.events import EventBus


class GameEngine(ABC):
    """
    Abstract base class for all game engines.

    This class defines the common interface that all game engines must implement,
    providing methods for starting games, handling player actions, and managing
    the game state.
    """

    def __init__(self, adapter: PlatformAdapter, config: Dict[str, Any] = None):
        """
        Initialize the engine.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the game
        """
        self.adapter = adapter
        self.config = config or {}
        self.event_bus = EventBus.get_instance()
        self.state = None

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the engine and prepare for a game.
        """
        await self.adapter.initialize()

    @abstractmethod
    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        await self.adapter.shutdown()

    @abstractmethod
    async def start_game(self) -> None:
        """
        Start a new game.
        """
        pass

    @abstractmethod
    async def execute_player_action(self, action: str, **kwargs) -> bool:
        """
        Execute an action of the human player.

        Args:
            action: Action to perform
            **kwargs: Action-specific parameters

        Returns:
            True if the game state changed
        """
        pass

    @abstractmethod
    async def render_state(self) -> None:
        """
        Render the current game state.
        """
        pass
