"""
Base API module for the Crazy Eights package.

`CardGame` is the facade a program embeds: it owns an adapter and an
engine, lets callers follow the game through bus subscriptions and offers
`*_sync` twins of its coroutines for code that has no event loop of its own.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Union
import threading

from crazyeights.adapters import PlatformAdapter, CLIAdapter
from crazyeights.events import EventBus, EngineEventType


class CardGame(ABC):
    """
    Abstract facade over a game engine.

    Attributes:
        adapter: The platform adapter the engine renders to
        engine: The game engine, created by subclasses
        config: Engine configuration
        event_bus: The process-wide event bus
    """

    def __init__(
        self,
        adapter: Optional[PlatformAdapter] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            adapter: Platform adapter to use; a console adapter when None
            config: Configuration options for the engine
        """
        self.adapter = adapter or CLIAdapter()
        self.config = config or {}
        self.event_bus = EventBus.get_instance()
        self.engine = None
        self._subscriptions: List[Callable] = []
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loop_lock = threading.Lock()

    @abstractmethod
    async def initialize(self) -> None:
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        pass

    @abstractmethod
    async def start_new_game(self):
        """Deal a new game, discarding any game in progress."""

    @abstractmethod
    async def get_state(self):
        pass

    def on(
        self, event_type: Union[str, EngineEventType], handler: Callable
    ) -> Callable:
        """
        Call a handler with the payload of every event of one type.

        Event types may be given as members of EngineEventType or by value,
        e.g. ``"card_played"``. Subscriptions end at shutdown.

        Returns:
            Function that ends the subscription early
        """
        unsubscribe = self.event_bus.on(self._resolve_event_type(event_type), handler)
        self._subscriptions.append(unsubscribe)
        return unsubscribe

    def remove_event_handlers(self) -> None:
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()

    @staticmethod
    def _resolve_event_type(event_type):
        if isinstance(event_type, str):
            try:
                return EngineEventType(event_type.lower())
            except ValueError:
                return event_type
        return event_type

    # Synchronous API wrappers

    def initialize_sync(self) -> None:
        return self._run_async(self.initialize())

    def shutdown_sync(self) -> None:
        return self._run_async(self.shutdown())

    def start_new_game_sync(self):
        return self._run_async(self.start_new_game())

    def get_state_sync(self):
        return self._run_async(self.get_state())

    def _run_async(self, coro):
        """
        Run a coroutine to completion on the facade's private event loop.

        The loop only turns while a sync call is in progress, so tasks the
        engine schedules must finish inside the same call.

        Raises:
            RuntimeError: Called from inside a running event loop
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            coro.close()
            raise RuntimeError(
                "Synchronous methods cannot be used inside a running event loop; "
                "await the coroutine version instead."
            )

        with self._loop_lock:
            if self._loop is None or self._loop.is_closed():
                self._loop = asyncio.new_event_loop()
            return self._loop.run_until_complete(coro)

    def close_loop(self) -> None:
        """Close the private event loop used by the synchronous wrappers."""
        with self._loop_lock:
            if self._loop is not None and not self._loop.is_closed():
                self._loop.close()
            self._loop = None
