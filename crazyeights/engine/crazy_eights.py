"""
Crazy Eights game engine implementation.

This module provides the CrazyEightsEngine class, which implements the
GameEngine interface for Crazy Eights. It applies the human's intents, runs
the computer opponent after a turn-yield delay and cancels that pending move
when the game is restarted.
"""

from typing import Dict, Any, Callable, List, Optional, Tuple, Union
import asyncio
import logging
import random
import time

from crazyeights.adapters import PlatformAdapter
from crazyeights.common.card import Suit
from crazyeights.engine.base import GameEngine
from crazyeights.events import EngineEventType
from crazyeights.crazy_eights.policy import take_opponent_turn
from crazyeights.crazy_eights.rules import playable_cards
from crazyeights.crazy_eights.state import GameState, Phase, Side
from crazyeights.crazy_eights.transitions import StateTransitionEngine

logger = logging.getLogger(__name__)


class CrazyEightsEngine(GameEngine):
    """
    Engine implementation for the Crazy Eights card game.

    The engine is the only writer of ``state``. Every intent is turned into
    one pure transition; the resulting snapshot replaces the old one and is
    rendered through the adapter.
    """

    def __init__(self, adapter: PlatformAdapter, config: Dict[str, Any] = None):
        """
        Initialize the Crazy Eights engine.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the game
        """
        super().__init__(adapter, config)

        # Apply default configuration
        default_config = {
            "opponent_delay": 1.5,  # Seconds before the opponent moves
            "seed": None,  # Seed for reproducible deals
            "auto_play_opponent": True,
        }

        # Merge with provided config
        if config:
            default_config.update(config)

        self.config = default_config
        self.rng = random.Random(self.config["seed"])

        self.state: Optional[GameState] = None

        self._opponent_task: Optional[asyncio.Task] = None
        # Bumped on every deal so a superseded opponent move can be recognised
        self._generation = 0
        self._pending_events: List[Tuple[str, Dict[str, Any]]] = []
        self._unsubscribe: Optional[Callable] = None

    async def initialize(self) -> None:
        """
        Initialize the engine and start forwarding events to the adapter.
        """
        await super().initialize()

        if self._unsubscribe is None:
            self._unsubscribe = self.event_bus.on_any(self._collect_event)

        # Emit initialization event
        self.event_bus.emit(
            EngineEventType.ENGINE_INIT,
            {
                "engine_type": "crazy_eights",
                "config": self.config,
                "timestamp": time.time(),
            },
        )

    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        await self._cancel_opponent_move()

        # Emit shutdown event
        self.event_bus.emit(EngineEventType.ENGINE_SHUTDOWN, {"timestamp": time.time()})

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._pending_events.clear()

        await super().shutdown()

    async def start_game(self) -> None:
        """
        Start a new game of Crazy Eights.
        """
        await self.start_new_game()

    async def start_new_game(self) -> GameState:
        """
        Deal a fresh game, discarding the current one.

        Any opponent move still waiting out its delay is cancelled first.

        Returns:
            The new game state
        """
        previous = self.state
        await self._cancel_opponent_move()
        self._generation += 1

        self.state = StateTransitionEngine.deal_new_game(rng=self.rng)

        if previous is not None:
            logger.info("Restarted: game %s replaces %s", self.state.id, previous.id)
            self.event_bus.emit(
                EngineEventType.GAME_RESTARTED,
                {
                    "game_id": self.state.id,
                    "previous_game_id": previous.id,
                    "timestamp": time.time(),
                },
            )

        await self._after_transition(None)
        return self.state

    async def request_draw(self) -> bool:
        """
        Draw a card for the human player.

        Returns:
            True if the draw was accepted
        """
        return await self._apply(
            lambda state: StateTransitionEngine.draw(state, Side.PLAYER)
        )

    async def request_play(self, card_id: str) -> bool:
        """
        Play a card from the human player's hand.

        Args:
            card_id: Id of the card to play

        Returns:
            True if the play was accepted
        """
        return await self._apply(
            lambda state: StateTransitionEngine.play_card(state, Side.PLAYER, card_id)
        )

    async def request_declare_suit(self, suit: Union[Suit, str]) -> bool:
        """
        Name the suit after the human player's wild card.

        Args:
            suit: Suit, or a suit name, initial or symbol

        Returns:
            True if the declaration was accepted; an unknown suit is
            rejected like any other invalid intent
        """
        return await self._apply(
            lambda state: StateTransitionEngine.declare_suit(state, suit, Side.PLAYER)
        )

    async def play_opponent_turn(self) -> bool:
        """
        Let the opponent move now.

        Used by the scheduled task, and directly by collaborators that turn
        off ``auto_play_opponent`` and manage their own timing.

        Returns:
            True if the opponent moved
        """
        return await self._apply(take_opponent_turn)

    async def execute_player_action(self, action: str, **kwargs) -> bool:
        """
        Execute a human player action.

        Args:
            action: Action to perform (draw, play, declare_suit)
            **kwargs: Action-specific parameters (card_id, suit)

        Returns:
            True if the game state changed
        """
        action = action.lower()
        if action == "draw":
            return await self.request_draw()
        elif action == "play":
            card_id = kwargs.get("card_id")
            if card_id is None:
                raise ValueError("Missing card_id for play")
            return await self.request_play(card_id)
        elif action == "declare_suit":
            suit = kwargs.get("suit")
            if suit is None:
                raise ValueError("Missing suit for declare_suit")
            return await self.request_declare_suit(suit)
        else:
            raise ValueError(f"Unknown action: {action}")

    async def wait_for_opponent(self) -> None:
        """
        Wait until a scheduled opponent move has been made or cancelled.
        """
        task = self._opponent_task
        if task is None or task.done():
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    @property
    def opponent_move_pending(self) -> bool:
        return self._opponent_task is not None and not self._opponent_task.done()

    async def render_state(self) -> None:
        """
        Render the current game state.
        """
        if self.state is None:
            return

        adapter_state = self.state.to_adapter_format()
        await self.adapter.render_game_state(adapter_state)

    def get_valid_actions(self) -> Dict[str, Any]:
        """
        Get the actions currently open to the human player.

        Returns:
            Dictionary with the playable card ids, whether drawing is allowed
            and the suits that may be declared
        """
        actions = {"play": [], "draw": False, "declare_suit": []}
        state = self.state
        if state is None or state.turn is not Side.PLAYER:
            return actions

        if state.phase == Phase.IN_PROGRESS:
            actions["play"] = [
                card.id
                for card in playable_cards(
                    state.player_hand, state.active_suit, state.active_rank
                )
            ]
            actions["draw"] = True
        elif state.phase == Phase.AWAITING_SUIT_DECLARATION:
            actions["declare_suit"] = [suit.value for suit in Suit]

        return actions

    def is_game_over(self) -> bool:
        """
        Check if the game is over.

        Returns:
            True if the game is over, False otherwise
        """
        return self.state is not None and self.state.game_ended

    def get_winner(self) -> Optional[str]:
        """
        Get the side that won the game.

        Returns:
            "player" or "opponent", or None if the game is not over
        """
        if self.state is None or self.state.winner is None:
            return None
        return self.state.winner.value

    async def _apply(self, transition: Callable[[GameState], GameState]) -> bool:
        if self.state is None:
            return False

        previous = self.state
        self.state = transition(previous)

        await self._after_transition(previous)
        return self.state is not previous

    async def _after_transition(self, previous: Optional[GameState]) -> None:
        changed = previous is not self.state

        if changed:
            await self.render_state()

        self._schedule_opponent_move()
        await self._flush_events()

        human_just_won = self.state.phase == Phase.PLAYER_WON and (
            previous is None or previous.phase != Phase.PLAYER_WON
        )
        if changed and human_just_won:
            await self.adapter.celebrate(
                {"game_id": self.state.id, "timestamp": time.time()}
            )

    def _schedule_opponent_move(self) -> None:
        state = self.state
        if not self.config["auto_play_opponent"]:
            return
        if state.turn is not Side.OPPONENT or state.phase != Phase.IN_PROGRESS:
            return
        if self.opponent_move_pending:
            return

        delay = self.config["opponent_delay"]
        logger.debug("Opponent moves in %.2fs", delay)
        self.event_bus.emit(
            EngineEventType.OPPONENT_THINKING,
            {"game_id": state.id, "delay": delay, "timestamp": time.time()},
        )
        self._opponent_task = asyncio.create_task(
            self._run_opponent_move(self._generation)
        )

    async def _run_opponent_move(self, generation: int) -> None:
        await asyncio.sleep(self.config["opponent_delay"])
        if generation != self._generation:
            logger.debug("Dropping opponent move for a replaced game")
            return
        await self.play_opponent_turn()

    async def _cancel_opponent_move(self) -> None:
        task = self._opponent_task
        self._opponent_task = None
        if task is None or task.done():
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        logger.debug("Cancelled pending opponent move")
        self.event_bus.emit(
            EngineEventType.OPPONENT_MOVE_CANCELLED,
            {
                "game_id": self.state.id if self.state else None,
                "timestamp": time.time(),
            },
        )

    def _collect_event(self, event: Tuple[str, Dict[str, Any]]) -> None:
        self._pending_events.append(event)

    async def _flush_events(self) -> None:
        events, self._pending_events = self._pending_events, []
        current_id = self.state.id if self.state else None
        for event_type, data in events:
            game_id = data.get("game_id")
            if game_id is not None and game_id != current_id:
                continue
            await self.adapter.notify_game_event(event_type, data)
