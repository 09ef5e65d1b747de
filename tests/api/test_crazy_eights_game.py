"""
Tests for the CrazyEightsGame API implementation.

This module tests that the CrazyEightsGame API drives the CrazyEightsEngine in
both async and sync mode and that event handlers are properly registered and
cleaned up.
"""

import pytest

from crazyeights.api import CrazyEightsGame
from crazyeights.adapters import CLIAdapter, DummyAdapter
from crazyeights.crazy_eights.state import GameState, Side
from crazyeights.events import EngineEventType


@pytest.fixture
def sync_game():
    game = CrazyEightsGame(
        adapter=DummyAdapter(),
        config={"opponent_delay": 0, "seed": 3},
    )
    yield game
    game.close_loop()


def test_default_adapter_is_cli():
    game = CrazyEightsGame()
    assert isinstance(game.adapter, CLIAdapter)
    assert game.engine.adapter is game.adapter


@pytest.mark.asyncio
async def test_async_lifecycle():
    adapter = DummyAdapter()
    game = CrazyEightsGame(adapter=adapter, config={"opponent_delay": 0, "seed": 8})
    received = []
    game.on(EngineEventType.CARD_DRAWN, received.append)

    await game.initialize()
    state = await game.start_new_game()
    assert isinstance(state, GameState)
    assert await game.get_state() is state

    actions = await game.get_valid_actions()
    assert actions["draw"] is True

    assert await game.request_draw() is True
    await game.wait_for_opponent()

    assert received[0]["side"] == "player"
    assert (await game.get_state()).turn is Side.PLAYER or await game.is_game_over()

    await game.shutdown()
    # Subscriptions made through the game end with it
    game.event_bus.emit("CARD_DRAWN", {"side": "player"})
    assert len(received) == 1


@pytest.mark.asyncio
async def test_sync_call_inside_event_loop_raises():
    game = CrazyEightsGame(adapter=DummyAdapter())
    with pytest.raises(RuntimeError):
        game.start_new_game_sync()


def test_sync_draw_waits_for_opponent(sync_game):
    sync_game.initialize_sync()
    state = sync_game.start_new_game_sync()
    assert state.turn is Side.PLAYER

    assert sync_game.request_draw_sync() is True

    after = sync_game.get_state_sync()
    # The opponent has already answered
    assert after.turn is Side.PLAYER or after.game_ended
    assert len(after.player_hand) == 9
    assert not sync_game.engine.opponent_move_pending
    sync_game.shutdown_sync()


def test_sync_play_and_declare(sync_game):
    sync_game.initialize_sync()
    sync_game.start_new_game_sync()

    for _ in range(200):
        state = sync_game.get_state_sync()
        if state.game_ended or state.is_stalemate:
            break
        actions = sync_game.get_valid_actions_sync()
        if actions["declare_suit"]:
            assert sync_game.request_declare_suit_sync("spades") is True
        elif actions["play"]:
            assert sync_game.request_play_sync(actions["play"][0]) is True
        else:
            assert sync_game.request_draw_sync() is True

    state = sync_game.get_state_sync()
    assert state.game_ended or state.is_stalemate
    assert len(state.all_cards()) == 52
    sync_game.shutdown_sync()


def test_sync_rejected_play(sync_game):
    sync_game.initialize_sync()
    sync_game.start_new_game_sync()
    before = sync_game.get_state_sync()

    assert sync_game.request_play_sync("not-a-card") is False
    assert sync_game.get_state_sync() is before
    sync_game.shutdown_sync()


def test_restart_replaces_game(sync_game):
    restarted = []
    sync_game.on("game_restarted", restarted.append)
    sync_game.initialize_sync()
    first = sync_game.start_new_game_sync()
    second = sync_game.start_new_game_sync()

    assert first.id != second.id
    assert restarted[0]["previous_game_id"] == first.id
    sync_game.shutdown_sync()


def test_unsubscribe_early(sync_game):
    seen = []
    unsubscribe = sync_game.on("GAME_STARTED", seen.append)
    sync_game.start_new_game_sync()
    unsubscribe()
    sync_game.start_new_game_sync()

    assert len(seen) == 1
    # Ending the subscription again at shutdown is harmless
    sync_game.shutdown_sync()


def test_sync_declare_without_wild_is_rejected(sync_game):
    sync_game.initialize_sync()
    sync_game.start_new_game_sync()

    assert sync_game.request_declare_suit_sync("purple") is False
    sync_game.shutdown_sync()


def test_resolve_event_type():
    assert CrazyEightsGame._resolve_event_type("card_played") is EngineEventType.CARD_PLAYED
    assert CrazyEightsGame._resolve_event_type("CARD_PLAYED") is EngineEventType.CARD_PLAYED
    assert CrazyEightsGame._resolve_event_type("custom") == "custom"
    assert (
        CrazyEightsGame._resolve_event_type(EngineEventType.GAME_ENDED)
        is EngineEventType.GAME_ENDED
    )
