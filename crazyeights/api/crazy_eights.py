"""
Crazy Eights API module.

This module provides a high-level, platform-agnostic API for the Crazy Eights
engine, supporting both synchronous and asynchronous operation.
"""

from typing import Dict, Any, Optional, Union

from crazyeights.adapters import PlatformAdapter
from crazyeights.api.base import CardGame
from crazyeights.common.card import Suit
from crazyeights.engine.crazy_eights import CrazyEightsEngine
from crazyeights.crazy_eights.state import GameState


class CrazyEightsGame(CardGame):
    """
    High-level, platform-agnostic API for Crazy Eights.

    Example:
        ```python
        # Async usage
        game = CrazyEightsGame(adapter=DummyAdapter())
        await game.initialize()
        state = await game.start_new_game()
        await game.request_play(state.player_hand[0].id)
        await game.wait_for_opponent()
        await game.shutdown()

        # Sync usage; the opponent answers before each call returns
        game = CrazyEightsGame(adapter=DummyAdapter())
        game.initialize_sync()
        game.start_new_game_sync()
        game.request_draw_sync()
        game.shutdown_sync()
        ```
    """

    def __init__(
        self,
        adapter: Optional[PlatformAdapter] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize a new Crazy Eights game.

        Args:
            adapter: Platform adapter to use for rendering and input.
                    If None, a CLI adapter will be used.
            config: Configuration options for the engine
        """
        super().__init__(adapter, config)
        self.engine = CrazyEightsEngine(self.adapter, self.config)

    async def initialize(self) -> None:
        """
        Initialize the engine and adapter.
        """
        await self.engine.initialize()

    async def shutdown(self) -> None:
        """
        Shut down the game and clean up resources.
        """
        self.remove_event_handlers()
        await self.engine.shutdown()

    async def start_new_game(self) -> GameState:
        """
        Deal a new game. Any game in progress is discarded.

        Returns:
            The new game state
        """
        return await self.engine.start_new_game()

    async def get_state(self) -> GameState:
        """
        Get the current game state.

        Returns:
            Current GameState object
        """
        return self.engine.state

    async def get_valid_actions(self) -> Dict[str, Any]:
        return self.engine.get_valid_actions()

    async def request_draw(self) -> bool:
        return await self.engine.request_draw()

    async def request_play(self, card_id: str) -> bool:
        return await self.engine.request_play(card_id)

    async def request_declare_suit(self, suit: Union[Suit, str]) -> bool:
        return await self.engine.request_declare_suit(suit)

    async def wait_for_opponent(self) -> None:
        await self.engine.wait_for_opponent()

    async def is_game_over(self) -> bool:
        return self.engine.is_game_over()

    # Synchronous API wrappers

    def request_draw_sync(self) -> bool:
        """
        Synchronous wrapper for request_draw; waits for the opponent's reply.
        """
        return self._run_async(self._then_wait(self.request_draw()))

    def request_play_sync(self, card_id: str) -> bool:
        """
        Synchronous wrapper for request_play; waits for the opponent's reply.
        """
        return self._run_async(self._then_wait(self.request_play(card_id)))

    def request_declare_suit_sync(self, suit: Union[Suit, str]) -> bool:
        """
        Synchronous wrapper for request_declare_suit; waits for the
        opponent's reply.
        """
        return self._run_async(self._then_wait(self.request_declare_suit(suit)))

    def get_valid_actions_sync(self) -> Dict[str, Any]:
        return self._run_async(self.get_valid_actions())

    async def _then_wait(self, coro):
        # The private loop only runs during a sync call, so the scheduled
        # opponent move must finish inside it.
        result = await coro
        await self.engine.wait_for_opponent()
        return result
