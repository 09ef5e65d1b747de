import dataclasses

import pytest

from crazyeights.common.card import Rank, Suit
from crazyeights.crazy_eights import GameState, Phase, Side


@pytest.fixture
def state(card):
    return GameState(
        draw_pile=(card("2C"), card("3C")),
        player_hand=(card("7H"), card("KS"), card("8D")),
        opponent_hand=(card("QS"), card("JS")),
        discard_pile=(card("5H"), card("9H")),
        active_suit=Suit.HEARTS,
        active_rank=Rank.FIVE,
        last_event="You drew 8♦",
    )


def test_state_is_frozen(state):
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.turn = Side.OPPONENT


def test_defaults():
    fresh = GameState()
    assert fresh.id
    assert fresh.turn is Side.PLAYER
    assert fresh.phase == Phase.IN_PROGRESS
    assert fresh.top_discard is None
    assert fresh.winner is None
    assert GameState().id != fresh.id


def test_top_discard_is_first(state):
    assert str(state.top_discard) == "5♥"


def test_hand_for(state):
    assert state.hand_for(Side.PLAYER) is state.player_hand
    assert state.hand_for(Side.OPPONENT) is state.opponent_hand


def test_side_other():
    assert Side.PLAYER.other is Side.OPPONENT
    assert Side.OPPONENT.other is Side.PLAYER


def test_phase_helpers():
    assert Phase.won_by(Side.PLAYER) is Phase.PLAYER_WON
    assert Phase.won_by(Side.OPPONENT) is Phase.OPPONENT_WON
    assert Phase.PLAYER_WON.is_terminal
    assert not Phase.AWAITING_SUIT_DECLARATION.is_terminal


def test_winner(state):
    assert dataclasses.replace(state, phase=Phase.OPPONENT_WON).winner is Side.OPPONENT
    assert dataclasses.replace(state, phase=Phase.PLAYER_WON).game_ended


def test_all_cards(state):
    assert len(state.all_cards()) == 9


def test_stalemate_needs_empty_draw_pile(state, card):
    stuck = dataclasses.replace(
        state,
        player_hand=(card("KS"),),
        opponent_hand=(card("QC"),),
    )
    assert not stuck.is_stalemate
    assert dataclasses.replace(stuck, draw_pile=()).is_stalemate


def test_no_stalemate_with_playable_card(state):
    assert not dataclasses.replace(state, draw_pile=()).is_stalemate


def test_to_dict(state):
    data = state.to_dict()
    assert data["phase"] == "in_progress"
    assert data["turn"] == "player"
    assert data["active_suit"] == "hearts"
    assert data["active_rank"] == "5"
    assert data["player_hand"][0] == {
        "id": state.player_hand[0].id,
        "suit": "hearts",
        "rank": "7",
    }
    assert len(data["opponent_hand"]) == 2


def test_adapter_format_hides_opponent_hand(state):
    data = state.to_adapter_format()

    assert data["game_id"] == state.id
    assert data["opponent_card_count"] == 2
    assert "opponent_hand" not in data
    assert data["draw_pile_size"] == 2
    assert data["top_discard"] == "5♥"
    assert data["active_suit_symbol"] == "♥"
    assert data["suit_declared"] is False
    assert data["last_event"] == "You drew 8♦"
    assert [(c["card"], c["playable"]) for c in data["player_hand"]] == [
        ("7♥", True),
        ("K♠", False),
        ("8♦", True),
    ]


def test_adapter_format_nothing_playable_off_turn(state):
    data = dataclasses.replace(state, turn=Side.OPPONENT).to_adapter_format()
    assert not any(c["playable"] for c in data["player_hand"])


def test_adapter_format_declared_suit(state):
    data = dataclasses.replace(
        state, active_suit=Suit.CLUBS, active_rank=Rank.EIGHT
    ).to_adapter_format()
    assert data["suit_declared"] is True
    assert data["active_suit"] == "clubs"


def test_adapter_format_must_draw(state, card):
    assert state.to_adapter_format()["must_draw"] is False

    stuck = dataclasses.replace(state, player_hand=(card("KS"), card("2C")))
    assert stuck.to_adapter_format()["must_draw"] is True


def test_adapter_format_must_draw_only_on_players_move(state, card):
    stuck = dataclasses.replace(state, player_hand=(card("KS"),))
    assert not dataclasses.replace(stuck, turn=Side.OPPONENT).to_adapter_format()[
        "must_draw"
    ]
    assert not dataclasses.replace(
        stuck, phase=Phase.AWAITING_SUIT_DECLARATION
    ).to_adapter_format()["must_draw"]
    assert not dataclasses.replace(stuck, phase=Phase.OPPONENT_WON).to_adapter_format()[
        "must_draw"
    ]
