"""
Tests for the console adapter.
"""

import pytest

from crazyeights.adapters import CLIAdapter
from crazyeights.adapters.cli import RULES
from crazyeights.common.card import Card, Rank, Suit
from crazyeights.common.io_interface import TestIOInterface
from crazyeights.crazy_eights.state import GameState, Phase, Side
from crazyeights.events import EngineEventType


@pytest.fixture
def io():
    return TestIOInterface()


@pytest.fixture
def adapter(io):
    return CLIAdapter(io)


@pytest.fixture
def snapshot():
    state = GameState(
        draw_pile=(Card(Suit.CLUBS, Rank.TWO),) * 3,
        player_hand=(
            Card(Suit.HEARTS, Rank.SEVEN, card_id="seven"),
            Card(Suit.SPADES, Rank.KING, card_id="king"),
        ),
        opponent_hand=(Card(Suit.CLUBS, Rank.QUEEN),),
        discard_pile=(Card(Suit.HEARTS, Rank.FIVE),),
        active_suit=Suit.HEARTS,
        active_rank=Rank.FIVE,
        last_event="Opponent drew a card",
    )
    return state.to_adapter_format()


@pytest.mark.asyncio
async def test_render_game_state(adapter, io, snapshot):
    await adapter.render_game_state(snapshot)

    output = io.sent_messages
    assert "\n=== Crazy Eights ===" in output
    assert "Opponent: 1 cards" in output
    assert "Draw pile: 3   Discard: 5♥" in output
    assert "Your hand:" in output
    assert " * 1: 7♥" in output
    assert "   2: K♠" in output
    assert "> Opponent drew a card" in output
    assert "No playable card, draw ('d')." not in output


@pytest.mark.asyncio
async def test_render_shows_declared_suit(adapter, io):
    state = GameState(
        discard_pile=(Card(Suit.SPADES, Rank.EIGHT),),
        active_suit=Suit.DIAMONDS,
        active_rank=Rank.EIGHT,
    )
    await adapter.render_game_state(state.to_adapter_format())
    assert "Draw pile: 0   Discard: 8♠   Suit: ♦" in io.sent_messages


@pytest.mark.asyncio
async def test_render_prompts_draw_without_playable_card(adapter, io):
    state = GameState(
        draw_pile=(Card(Suit.CLUBS, Rank.TWO),),
        player_hand=(Card(Suit.SPADES, Rank.KING),),
        opponent_hand=(Card(Suit.CLUBS, Rank.QUEEN),),
        discard_pile=(Card(Suit.HEARTS, Rank.FIVE),),
        active_suit=Suit.HEARTS,
        active_rank=Rank.FIVE,
    )
    await adapter.render_game_state(state.to_adapter_format())

    output = io.sent_messages
    hint = output.index("No playable card, draw ('d').")
    assert output.index("   1: K♠") < hint


@pytest.mark.asyncio
@pytest.mark.parametrize("response", ["?", "help"])
async def test_help_prints_rules(adapter, io, snapshot, response):
    await adapter.render_game_state(snapshot)
    io.sent_messages.clear()
    io.add_input(response)
    io.add_input("d")

    intent = await adapter.request_player_action({"play": ["seven"], "draw": True})

    assert intent == {"action": "draw"}
    assert io.sent_messages == list(RULES)
    assert len(io.prompts) == 2
    assert "'?' for rules" in io.prompts[0]


@pytest.mark.asyncio
async def test_help_while_declaring(adapter, io):
    io.add_input("?")
    io.add_input("h")

    intent = await adapter.request_player_action(
        {"play": [], "draw": False, "declare_suit": [s.value for s in Suit]}
    )

    assert intent == {"action": "declare_suit", "suit": "hearts"}
    assert RULES[0] in io.sent_messages
    assert "Unknown suit. Please try again." not in io.sent_messages


@pytest.mark.asyncio
async def test_unknown_suit_rejection_is_explained(adapter, io):
    await adapter.notify_game_event(
        EngineEventType.ACTION_REJECTED.name,
        {"side": "player", "action": "declare_suit", "reason": "invalid_suit"},
    )
    assert io.sent_messages == ["That is not a suit."]


@pytest.mark.asyncio
async def test_play_by_number(adapter, io, snapshot):
    await adapter.render_game_state(snapshot)
    io.add_input("1")

    intent = await adapter.request_player_action({"play": ["seven"], "draw": True})

    assert intent == {"action": "play", "card_id": "seven"}


@pytest.mark.asyncio
async def test_unplayable_number_is_still_sent(adapter, io, snapshot):
    # Legality is the engine's call; the adapter only maps numbers to cards
    await adapter.render_game_state(snapshot)
    io.add_input("2")

    intent = await adapter.request_player_action({"play": ["seven"], "draw": True})

    assert intent == {"action": "play", "card_id": "king"}


@pytest.mark.asyncio
async def test_invalid_input_reprompts(adapter, io, snapshot):
    await adapter.render_game_state(snapshot)
    for response in ["9", "hello", "D"]:
        io.add_input(response)

    intent = await adapter.request_player_action({"play": ["seven"], "draw": True})

    assert intent == {"action": "draw"}
    assert io.sent_messages.count("Invalid choice. Please try again.") == 2
    assert len(io.prompts) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("response", ["q", "quit"])
async def test_quit(adapter, io, response):
    io.add_input(response)
    assert await adapter.request_player_action({"draw": True}) is None


@pytest.mark.asyncio
async def test_end_of_input_quits(adapter):
    assert await adapter.request_player_action({"draw": True}) is None


@pytest.mark.asyncio
async def test_declare_suit(adapter, io):
    for response in ["x", "♣"]:
        io.add_input(response)

    intent = await adapter.request_player_action(
        {"play": [], "draw": False, "declare_suit": [s.value for s in Suit]}
    )

    assert intent == {"action": "declare_suit", "suit": "clubs"}
    assert "Unknown suit. Please try again." in io.sent_messages
    assert io.prompts[0].startswith("Choose a suit")


@pytest.mark.asyncio
async def test_player_rejection_is_explained(adapter, io):
    await adapter.notify_game_event(
        EngineEventType.ACTION_REJECTED.name,
        {"side": "player", "action": "play", "reason": "illegal_card"},
    )
    assert io.sent_messages == ["That card doesn't match the suit or rank."]


@pytest.mark.asyncio
async def test_opponent_rejection_is_silent(adapter, io):
    await adapter.notify_game_event(
        EngineEventType.ACTION_REJECTED,
        {"side": "opponent", "action": "draw", "reason": "not_your_turn"},
    )
    assert io.sent_messages == []


@pytest.mark.asyncio
async def test_opponent_events(adapter, io):
    await adapter.notify_game_event(EngineEventType.OPPONENT_THINKING, {"delay": 1.5})
    await adapter.notify_game_event(EngineEventType.OPPONENT_WON, {"winner": "opponent"})
    await adapter.notify_game_event(EngineEventType.CARD_DRAWN, {"side": "player"})

    assert io.sent_messages == [
        "Opponent is thinking...",
        "The opponent emptied its hand. Better luck next time.",
    ]


@pytest.mark.asyncio
async def test_celebrate(adapter, io):
    await adapter.celebrate({"game_id": "g"})

    banner = io.sent_messages[0]
    assert banner == io.sent_messages[-1]
    assert banner.count("♥") == 3
    assert "YOU WIN" in io.sent_messages[1]


def test_phase_and_side_values_match_snapshot(snapshot):
    assert snapshot["phase"] == Phase.IN_PROGRESS.value
    assert snapshot["turn"] == Side.PLAYER.value
